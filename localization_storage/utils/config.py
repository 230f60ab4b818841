"""Configuration management for localization storage."""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from ..core.storage import DEFAULT_LANGUAGE, STORAGE_DIR_NAME, resolve_storage_dir
from ..features.locale_detector import DEFAULT_LANGUAGE_MAP
from .validators import is_valid_language_code, is_valid_language_identifier

CONFIG_FILE_NAME = '.localization-storage.yml'


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class StorageConfig:
    """Where catalog files live."""
    asset_root: str = "Assets"
    folder: str = STORAGE_DIR_NAME


@dataclass
class LanguagesConfig:
    """Default language and device locale mapping."""
    default: str = DEFAULT_LANGUAGE
    locale_map: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LANGUAGE_MAP))


@dataclass
class ImporterConfig:
    """CSV / Google Sheets importer settings."""
    sheet_url: str = ""
    timeout: int = 10
    clear_existing: bool = True  # remove catalogs that are not in the new sheet
    backup: bool = True
    keep_backups: int = 5  # newest backups kept after each import


@dataclass
class Config:
    """Main configuration class."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    languages: LanguagesConfig = field(default_factory=LanguagesConfig)
    importer: ImporterConfig = field(default_factory=ImporterConfig)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from YAML file.

        Missing or empty sections use their defaults.

        Raises:
            ConfigValidationError: If the file is not valid YAML, is not a
                mapping, or a section has an unknown key
        """
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

            if not config_path.exists():
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigValidationError([f"{config_path} is not valid YAML: {e}"]) from e

        if not isinstance(data, dict):
            raise ConfigValidationError([f"{config_path} must contain a mapping of sections"])

        sections = {}
        for name, section_cls in (('storage', StorageConfig),
                                  ('languages', LanguagesConfig),
                                  ('importer', ImporterConfig)):
            values = data.get(name) or {}
            try:
                sections[name] = section_cls(**values)
            except TypeError as e:
                raise ConfigValidationError([f"Invalid '{name}' section: {e}"]) from e

        return cls(**sections)

    @property
    def storage_dir(self) -> Path:
        """Absolute or cwd-relative path of the storage directory."""
        return resolve_storage_dir(Path(self.storage.asset_root), self.storage.folder)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'storage': {
                'asset_root': self.storage.asset_root,
                'folder': self.storage.folder,
            },
            'languages': {
                'default': self.languages.default,
                'locale_map': dict(self.languages.locale_map),
            },
            'importer': {
                'sheet_url': self.importer.sheet_url,
                'timeout': self.importer.timeout,
                'clear_existing': self.importer.clear_existing,
                'backup': self.importer.backup,
                'keep_backups': self.importer.keep_backups,
            },
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False,
                      allow_unicode=True)

    def validate(self, raise_on_error: bool = False) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if not self.storage.folder:
            errors.append("storage.folder cannot be empty")

        if not is_valid_language_identifier(self.languages.default):
            errors.append(
                f"Invalid default language: '{self.languages.default}'. "
                f"It must be usable as a file name (e.g., 'English')"
            )

        for code, language in self.languages.locale_map.items():
            if not is_valid_language_code(code):
                errors.append(
                    f"Invalid locale code in locale_map: '{code}'. "
                    f"Use two-letter ISO 639-1 codes (e.g., 'en', 'ru')"
                )
            if not is_valid_language_identifier(language):
                errors.append(f"Invalid language name for locale '{code}': '{language}'")

        if self.languages.default not in self.languages.locale_map.values():
            warnings.append(ConfigValidationWarning(
                f"Default language '{self.languages.default}' is not mapped from any locale code"
            ))

        if not isinstance(self.importer.timeout, (int, float)) or self.importer.timeout <= 0:
            errors.append(f"importer.timeout must be a positive number, got {self.importer.timeout}")

        keep = self.importer.keep_backups
        if isinstance(keep, bool) or not isinstance(keep, int) or keep < 1:
            errors.append(f"importer.keep_backups must be a positive integer, got {keep}")

        url = self.importer.sheet_url
        if url and not url.startswith(('http://', 'https://')):
            errors.append(f"importer.sheet_url must be an http(s) URL, got '{url}'")

        storage_dir = self.storage_dir
        if not storage_dir.exists():
            warnings.append(ConfigValidationWarning(
                f"Storage directory does not exist yet: {storage_dir}"
            ))

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings


def create_default_config(asset_root: Optional[str] = None) -> Config:
    """Create default configuration, optionally for a custom asset root."""
    config = Config()
    if asset_root:
        config.storage.asset_root = asset_root
    return config
