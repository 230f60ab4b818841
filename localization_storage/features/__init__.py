"""Feature modules."""

from .locale_detector import (
    DEFAULT_LANGUAGE_MAP,
    LocaleDetector,
    auto_detect_language,
    detect_device_locale,
)
from .importer import (
    CatalogImporter,
    CatalogImportError,
    parse_csv,
    to_csv_export_url,
)
from .editor import CatalogEditor

__all__ = [
    'DEFAULT_LANGUAGE_MAP',
    'LocaleDetector',
    'auto_detect_language',
    'detect_device_locale',
    'CatalogImporter',
    'CatalogImportError',
    'parse_csv',
    'to_csv_export_url',
    'CatalogEditor',
]
