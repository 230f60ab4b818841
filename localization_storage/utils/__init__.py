"""Utility modules.

``config`` and ``backup`` depend on the core package and are imported from
their modules directly.
"""

from .colors import Colors
from .logging import get_logger, configure_logging, reset_logger
from .validators import (
    is_valid_language_code,
    is_valid_language_identifier,
    is_valid_key_name,
    normalize_locale_code,
)

__all__ = [
    'Colors',
    'get_logger',
    'configure_logging',
    'reset_logger',
    'is_valid_language_code',
    'is_valid_language_identifier',
    'is_valid_key_name',
    'normalize_locale_code',
]
