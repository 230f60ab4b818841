"""Core modules: catalog model, storage layout, scanner and runtime store."""

from .catalog import CatalogFormatError, TranslationCatalog, TranslationEntry
from .storage import (
    CATALOG_EXTENSION,
    DEFAULT_LANGUAGE,
    STORAGE_DIR_NAME,
    catalog_path,
    ensure_storage_dir,
    resolve_storage_dir,
)
from .scanner import LanguageDirectory, scan_languages
from .store import CatalogStore, LoadResult, LoadStatus

__all__ = [
    'CatalogFormatError',
    'TranslationCatalog',
    'TranslationEntry',
    'CATALOG_EXTENSION',
    'DEFAULT_LANGUAGE',
    'STORAGE_DIR_NAME',
    'catalog_path',
    'ensure_storage_dir',
    'resolve_storage_dir',
    'LanguageDirectory',
    'scan_languages',
    'CatalogStore',
    'LoadResult',
    'LoadStatus',
]
