"""Validation utilities."""

import re

# Characters that cannot appear in a file name on at least one major platform
_FORBIDDEN_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')

_RESERVED_NAMES = {'.', '..'}


def is_valid_language_code(code: str) -> bool:
    """
    Validate a two-letter ISO 639-1 locale code as used by the locale map.

    Examples: en, ru, de. Region variants (en-US) are not accepted.
    """
    if not code or not isinstance(code, str):
        return False
    return bool(re.match(r'^[a-z]{2}$', code))


def is_valid_language_identifier(name: str) -> bool:
    """
    Validate a language identifier, i.e. a catalog file stem.

    Valid examples: English, Russian, pt-BR, Chinese (Simplified)
    """
    if not name or not isinstance(name, str):
        return False

    if name != name.strip():
        return False

    if name in _RESERVED_NAMES:
        return False

    return not _FORBIDDEN_FILENAME_CHARS.search(name)


def is_valid_key_name(key: str) -> bool:
    """
    Validate a catalog key.

    Keys only need to be non-empty; surrounding whitespace is rejected because
    the importer trims keys and such a key could never be reproduced.
    """
    if not key or not isinstance(key, str):
        return False
    return key == key.strip()


def normalize_locale_code(value: str) -> str:
    """
    Reduce a locale string to its lowercase two-letter language part.

    Examples:
        'en_US.UTF-8' -> 'en'
        'pt-BR' -> 'pt'
        'C' -> ''
    """
    if not value:
        return ''

    base = re.split(r'[_.@-]', value.strip(), maxsplit=1)[0].lower()
    if not is_valid_language_code(base):
        return ''
    return base
