"""Storage directory layout for catalog files."""

from pathlib import Path

from ..utils.logging import get_logger

STORAGE_DIR_NAME = 'LocalizationStorage'
CATALOG_EXTENSION = '.json'
DEFAULT_LANGUAGE = 'English'

logger = get_logger('storage')


def resolve_storage_dir(asset_root: Path, folder: str = STORAGE_DIR_NAME) -> Path:
    """Return the storage directory below the project's asset root."""
    return Path(asset_root) / folder


def catalog_path(storage_dir: Path, language: str) -> Path:
    """Return the file that holds the catalog for ``language``."""
    return Path(storage_dir) / f'{language}{CATALOG_EXTENSION}'


def ensure_storage_dir(storage_dir: Path) -> bool:
    """
    Create the storage directory if it is missing.

    Returns:
        True if the directory was created, False if it already existed
    """
    storage_dir = Path(storage_dir)
    if storage_dir.is_dir():
        return False

    storage_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Created storage folder: {storage_dir}")
    return True
