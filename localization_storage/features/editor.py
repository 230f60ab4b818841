"""Key/value editing of a single language's catalog file."""

from pathlib import Path
from typing import List, Optional

from ..core.catalog import TranslationCatalog, TranslationEntry
from ..core.scanner import scan_languages
from ..core.storage import DEFAULT_LANGUAGE, catalog_path
from ..utils.logging import get_logger
from ..utils.validators import is_valid_key_name

logger = get_logger('editor')


class CatalogEditor:
    """
    Edit the entries of one catalog.

    Adding and removing entries writes the file immediately; value changes
    made with :meth:`set_value` stay in memory until :meth:`save`.

    Usage:
        editor = CatalogEditor(storage_dir, 'English')
        editor.load()
        editor.add_entry('menu.play', 'Play')
        editor.set_value('menu.quit', 'Exit')
        editor.save()
    """

    def __init__(self, storage_dir: Path, language: str = DEFAULT_LANGUAGE):
        self.storage_dir = Path(storage_dir)
        self.language = language
        self.catalog: Optional[TranslationCatalog] = None

    def languages(self) -> List[str]:
        """Languages that can be opened."""
        return scan_languages(self.storage_dir)

    @property
    def path(self) -> Path:
        return catalog_path(self.storage_dir, self.language)

    def load(self, language: Optional[str] = None) -> TranslationCatalog:
        """
        Open a catalog. A missing file gives an empty catalog.

        Raises:
            json.JSONDecodeError, CatalogFormatError: if the file is malformed
        """
        if language is not None:
            self.language = language

        if self.path.is_file():
            self.catalog = TranslationCatalog.read(self.path, language=self.language)
        else:
            logger.warning(f"JSON not found: {self.path}")
            self.catalog = TranslationCatalog(language=self.language)

        return self.catalog

    def _ensure_loaded(self) -> TranslationCatalog:
        if self.catalog is None or self.catalog.language != self.language:
            return self.load()
        return self.catalog

    def search(self, query: str = '') -> List[TranslationEntry]:
        """Entries whose key or value contains ``query``, ignoring case."""
        catalog = self._ensure_loaded()
        if not query:
            return list(catalog.entries)

        needle = query.casefold()
        return [
            entry for entry in catalog.entries
            if needle in entry.key.casefold() or needle in entry.value.casefold()
        ]

    def add_entry(self, key: str, value: str = '') -> bool:
        """
        Append a new entry and save.

        Returns:
            False if the key is empty, padded with whitespace or already present
        """
        catalog = self._ensure_loaded()

        if not key:
            logger.warning("Key cannot be empty!")
            return False

        if not is_valid_key_name(key):
            logger.warning(f"Key '{key}' has leading or trailing whitespace!")
            return False

        if catalog.find(key) is not None:
            logger.warning(f"Key '{key}' already exists!")
            return False

        catalog.entries.append(TranslationEntry(key=key, value=value))
        self.save()
        return True

    def set_value(self, key: str, value: str) -> bool:
        """Change the value of an existing entry (not saved)."""
        entry = self._ensure_loaded().find(key)
        if entry is None:
            logger.warning(f"Key '{key}' not found in {self.language}")
            return False

        entry.value = value
        return True

    def remove_entry(self, key: str) -> bool:
        """Delete every entry with ``key`` and save."""
        catalog = self._ensure_loaded()
        remaining = [entry for entry in catalog.entries if entry.key != key]

        if len(remaining) == len(catalog.entries):
            logger.warning(f"Key '{key}' not found in {self.language}")
            return False

        catalog.entries = remaining
        self.save()
        return True

    def save(self, language: Optional[str] = None) -> Path:
        """
        Write the open catalog.

        Args:
            language: Save under another language name (the editor switches to it)
        """
        catalog = self._ensure_loaded()
        if language is not None and language != self.language:
            self.language = language
            catalog.language = language

        path = catalog.write(self.path)
        logger.debug(f"Saved {len(catalog)} entries to {path}")
        return path
