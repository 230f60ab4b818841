"""Discovery of the languages present in a storage directory."""

from pathlib import Path
from typing import Iterator, List, Tuple

from ..utils.logging import get_logger
from .storage import CATALOG_EXTENSION

logger = get_logger('scanner')


def scan_languages(storage_dir: Path) -> List[str]:
    """
    List language identifiers from the catalog files in ``storage_dir``.

    Every regular ``*.json`` file counts as one language; its name without the
    extension is the identifier. The result is sorted by name so repeated
    scans of an unchanged directory compare equal.

    A missing directory is not an error: a warning is logged and an empty
    list is returned.

    Args:
        storage_dir: Directory holding ``<language>.json`` files

    Returns:
        Sorted list of language identifiers
    """
    storage_dir = Path(storage_dir)

    if not storage_dir.is_dir():
        logger.warning(f"Localization folder not found: {storage_dir}")
        return []

    languages = sorted(
        path.stem
        for path in storage_dir.glob(f'*{CATALOG_EXTENSION}')
        if path.is_file()
    )

    logger.debug(f"Available languages: {', '.join(languages) or '(none)'}")
    return languages


class LanguageDirectory:
    """
    The most recent scan of a storage directory.

    The list is only recomputed when :meth:`refresh` is called.
    """

    def __init__(self, storage_dir: Path):
        self.storage_dir = Path(storage_dir)
        self._languages: Tuple[str, ...] = ()

    def refresh(self) -> Tuple[str, ...]:
        """Rescan the storage directory and return the new result."""
        self._languages = tuple(scan_languages(self.storage_dir))
        return self._languages

    @property
    def languages(self) -> Tuple[str, ...]:
        return self._languages

    def __contains__(self, language: object) -> bool:
        return language in self._languages

    def __len__(self) -> int:
        return len(self._languages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._languages)
