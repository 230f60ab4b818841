"""Pick the startup language from the device locale."""

import locale
import os
from typing import Dict, Optional

from ..core.store import CatalogStore, LoadResult
from ..utils.logging import get_logger
from ..utils.validators import normalize_locale_code

# Two-letter device locale code -> language identifier (catalog file stem)
DEFAULT_LANGUAGE_MAP: Dict[str, str] = {
    'en': 'English',
    'ru': 'Russian',
    'de': 'German',
    'fr': 'French',
    'es': 'Spanish',
}

_LOCALE_ENV_VARS = ('LC_ALL', 'LC_MESSAGES', 'LANG')

logger = get_logger('locale')


def detect_device_locale() -> str:
    """
    Return the two-letter language code of the current system locale.

    Checks ``locale.getlocale()`` first, then the LC_ALL, LC_MESSAGES and
    LANG environment variables. Returns an empty string when no usable code
    is found (for example under the ``C`` or ``POSIX`` locale).
    """
    try:
        code = normalize_locale_code(locale.getlocale()[0] or '')
    except ValueError:
        code = ''

    if code:
        return code

    for var in _LOCALE_ENV_VARS:
        code = normalize_locale_code(os.environ.get(var, ''))
        if code:
            return code

    return ''


class LocaleDetector:
    """
    Loads the language matching the device locale into a store, once.

    Lookup in the language map is exact: only the two-letter code is used,
    region variants are ignored and unknown codes load the default language.
    """

    def __init__(
        self,
        store: CatalogStore,
        language_map: Optional[Dict[str, str]] = None,
        default_language: Optional[str] = None
    ):
        """
        Args:
            store: Store that receives the detected language
            language_map: Locale code -> language name (default: DEFAULT_LANGUAGE_MAP)
            default_language: Language for unmapped codes (default: the store's default)
        """
        self.store = store
        self.language_map = dict(DEFAULT_LANGUAGE_MAP if language_map is None else language_map)
        self.default_language = default_language or store.default_language
        self._result: Optional[LoadResult] = None

    @classmethod
    def from_config(cls, store: CatalogStore, config) -> 'LocaleDetector':
        return cls(
            store,
            language_map=config.languages.locale_map,
            default_language=config.languages.default,
        )

    @property
    def initialized(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[LoadResult]:
        """Outcome of the startup load, None before :meth:`initialize`."""
        return self._result

    def resolve_language(self, code: str) -> str:
        """Map a locale code to a language name, falling back to the default."""
        return self.language_map.get(normalize_locale_code(code), self.default_language)

    def initialize(self, code: Optional[str] = None) -> LoadResult:
        """
        Detect the device language and load it into the store.

        Only the first call loads anything; later calls return the first
        result unchanged.

        Args:
            code: Locale code to use instead of the detected one

        Returns:
            LoadResult of the startup load
        """
        if self._result is not None:
            return self._result

        if code is None:
            code = detect_device_locale()
        logger.info(f"Device language code: {code or '(unknown)'}")

        self._result = self.store.load(self.resolve_language(code))
        return self._result


def auto_detect_language(store: CatalogStore, code: Optional[str] = None) -> LoadResult:
    """Detect the device language and load it into ``store`` with the default map."""
    return LocaleDetector(store).initialize(code)
