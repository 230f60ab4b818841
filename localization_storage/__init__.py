"""
Localization Storage
====================

Per-language JSON string tables with a runtime lookup store, device locale
detection, CSV / Google Sheets import and a key/value editor.

Usage:
    from localization_storage import CatalogStore, LocaleDetector

    store = CatalogStore(Path('Assets/LocalizationStorage'))
    LocaleDetector(store).initialize()
    print(store.get('menu.play'))   # "Play", or "#menu.play" if missing

CLI:
    localization-storage import --url https://docs.google.com/spreadsheets/d/<id>/edit
    localization-storage get menu.play --lang German
    localization-storage add menu.quit Quit --lang English
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.catalog import TranslationCatalog, TranslationEntry, CatalogFormatError
from .core.scanner import LanguageDirectory, scan_languages
from .core.store import CatalogStore, LoadResult, LoadStatus

# Features
from .features.locale_detector import LocaleDetector, auto_detect_language
from .features.importer import CatalogImporter, CatalogImportError
from .features.editor import CatalogEditor

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'TranslationCatalog',
    'TranslationEntry',
    'CatalogFormatError',
    'LanguageDirectory',
    'scan_languages',
    'CatalogStore',
    'LoadResult',
    'LoadStatus',
    'LocaleDetector',
    'auto_detect_language',
    'CatalogImporter',
    'CatalogImportError',
    'CatalogEditor',
]
