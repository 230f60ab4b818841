"""Tests for validation helpers."""

import pytest

from localization_storage.utils.validators import (
    is_valid_key_name,
    is_valid_language_code,
    is_valid_language_identifier,
    normalize_locale_code,
)


class TestLanguageCode:
    """Test cases for is_valid_language_code."""

    @pytest.mark.parametrize('code', ['en', 'ru', 'de', 'zz'])
    def test_valid(self, code):
        assert is_valid_language_code(code)

    @pytest.mark.parametrize('code', ['', 'EN', 'eng', 'en-US', 'e1', None])
    def test_invalid(self, code):
        assert not is_valid_language_code(code)


class TestLanguageIdentifier:
    """Test cases for is_valid_language_identifier."""

    @pytest.mark.parametrize('name', ['English', 'pt-BR', 'Chinese (Simplified)', 'Español'])
    def test_valid(self, name):
        assert is_valid_language_identifier(name)

    @pytest.mark.parametrize('name', ['', ' English', 'English ', 'a/b', 'a\\b', 'a:b', '..', None])
    def test_invalid(self, name):
        assert not is_valid_language_identifier(name)


class TestKeyName:
    """Test cases for is_valid_key_name."""

    def test_valid(self):
        assert is_valid_key_name('menu.play')
        assert is_valid_key_name('Greeting Text')

    def test_invalid(self):
        assert not is_valid_key_name('')
        assert not is_valid_key_name(' padded ')
        assert not is_valid_key_name(None)


class TestNormalizeLocaleCode:
    """Test cases for normalize_locale_code."""

    @pytest.mark.parametrize('value,expected', [
        ('en', 'en'),
        ('EN', 'en'),
        ('en_US', 'en'),
        ('ru_RU.UTF-8', 'ru'),
        ('pt-BR', 'pt'),
        ('de@euro', 'de'),
        ('C', ''),
        ('POSIX', ''),
        ('C.UTF-8', ''),
        ('', ''),
        (None, ''),
    ])
    def test_normalize(self, value, expected):
        assert normalize_locale_code(value) == expected
