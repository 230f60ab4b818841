"""Runtime catalog store: active language and key lookup."""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..utils.logging import get_logger
from .catalog import CatalogFormatError, TranslationCatalog
from .scanner import LanguageDirectory
from .storage import DEFAULT_LANGUAGE, catalog_path

logger = get_logger('store')

MISSING_KEY_PREFIX = '#'


class LoadStatus(Enum):
    """Outcome of CatalogStore.load."""
    LOADED = "loaded"
    NOT_FOUND = "not_found"      # catalog file missing
    UNREADABLE = "unreadable"    # I/O or encoding error
    PARSE_ERROR = "parse_error"  # invalid JSON or wrong structure


@dataclass
class LoadResult:
    """What a call to CatalogStore.load did."""
    requested_language: str
    language: str
    status: LoadStatus
    key_count: int = 0
    used_fallback: bool = False
    duplicate_keys: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.LOADED


class CatalogStore:
    """
    Holds the active language's index and answers lookups.

    Create one store per application and pass it to whoever needs lookups.
    ``load`` and ``get`` are meant to be called from a single thread; the
    index is replaced with one attribute assignment but no lock guards a
    load running alongside lookups from other threads.

    Usage:
        store = CatalogStore(Path('Assets/LocalizationStorage'))
        store.load('German')
        title = store.get('menu.title')
    """

    def __init__(self, storage_dir: Path, default_language: str = DEFAULT_LANGUAGE):
        """
        Args:
            storage_dir: Directory holding ``<language>.json`` catalogs
            default_language: Language used when the requested one is missing
        """
        self.storage_dir = Path(storage_dir)
        self.default_language = default_language
        self._directory = LanguageDirectory(self.storage_dir)
        self._index: Dict[str, str] = {}
        self._current_language = default_language

    @classmethod
    def from_config(cls, config) -> 'CatalogStore':
        """Build a store from a :class:`~localization_storage.utils.config.Config`."""
        return cls(config.storage_dir, default_language=config.languages.default)

    @property
    def current_language(self) -> str:
        """Last resolved language, also set when loading it failed."""
        return self._current_language

    @property
    def available_languages(self) -> Tuple[str, ...]:
        """Languages found by the most recent directory scan."""
        return self._directory.languages

    @property
    def key_count(self) -> int:
        return len(self._index)

    def get_languages_count(self) -> int:
        """Rescan the storage directory and return how many languages it holds."""
        return len(self._directory.refresh())

    def load(self, language: str) -> LoadResult:
        """
        Make ``language`` the active language.

        Unknown languages fall back to the default language. Missing,
        unreadable or malformed catalog files leave the store with an empty
        index; the failure is logged and described by the returned result,
        never raised.

        Args:
            language: Language identifier, e.g. 'English'

        Returns:
            LoadResult describing the outcome
        """
        self._directory.refresh()

        resolved = language
        used_fallback = False
        if language not in self._directory:
            logger.info(
                f"Language '{language}' not found. Using {self.default_language} as default."
            )
            resolved = self.default_language
            used_fallback = True

        self._current_language = resolved
        path = catalog_path(self.storage_dir, resolved)

        try:
            catalog = TranslationCatalog.read(path, language=resolved)
        except FileNotFoundError as e:
            return self._fail(language, resolved, used_fallback, LoadStatus.NOT_FOUND,
                              f"Catalog file not found: {path}", e)
        except (json.JSONDecodeError, CatalogFormatError) as e:
            return self._fail(language, resolved, used_fallback, LoadStatus.PARSE_ERROR,
                              f"Error reading JSON from {path}: {e}", e)
        except (OSError, UnicodeDecodeError) as e:
            return self._fail(language, resolved, used_fallback, LoadStatus.UNREADABLE,
                              f"Cannot read {path}: {e}", e)

        self._index = catalog.to_index()
        duplicates = catalog.duplicate_keys()
        if duplicates:
            logger.debug(f"Duplicate keys in {resolved}, last value kept: {', '.join(duplicates)}")

        logger.info(f"Loaded language '{resolved}', keys: {len(self._index)}")

        return LoadResult(
            requested_language=language,
            language=resolved,
            status=LoadStatus.LOADED,
            key_count=len(self._index),
            used_fallback=used_fallback,
            duplicate_keys=duplicates,
        )

    def _fail(
        self,
        requested: str,
        resolved: str,
        used_fallback: bool,
        status: LoadStatus,
        message: str,
        exc: Exception
    ) -> LoadResult:
        logger.error(message)
        logger.debug("Load failure details", exc_info=exc)
        self._index = {}
        return LoadResult(
            requested_language=requested,
            language=resolved,
            status=status,
            used_fallback=used_fallback,
            error=message,
        )

    def get(self, key: str) -> str:
        """Return the translation for ``key``, or ``'#' + key`` when it is missing."""
        try:
            return self._index[key]
        except (KeyError, TypeError):
            return f"{MISSING_KEY_PREFIX}{key}"

    def has_key(self, key: str) -> bool:
        return key in self._index
