"""Backups of the storage directory before destructive changes."""

import shutil
from pathlib import Path
from datetime import datetime
from typing import List, Optional

from ..core.storage import CATALOG_EXTENSION
from .logging import get_logger

BACKUP_DIR_NAME = '.localization_backups'
BACKUP_PREFIX = 'localization_backup_'

logger = get_logger('backup')


def default_backup_root(storage_dir: Path) -> Path:
    """Backups live next to the storage directory, not inside it."""
    return Path(storage_dir).parent / BACKUP_DIR_NAME


def create_backup(
    storage_dir: Path,
    backup_root: Optional[Path] = None,
    backup_name: Optional[str] = None
) -> Optional[Path]:
    """
    Copy every catalog file of the storage directory into a backup folder.

    Args:
        storage_dir: Directory holding the catalog files
        backup_root: Folder receiving backups (default: sibling of storage_dir)
        backup_name: Custom backup name (default: timestamp)

    Returns:
        Path to the backup directory, or None if there was nothing to copy
    """
    storage_dir = Path(storage_dir)
    files = sorted(storage_dir.glob(f'*{CATALOG_EXTENSION}')) if storage_dir.is_dir() else []
    if not files:
        logger.debug(f"Nothing to back up in {storage_dir}")
        return None

    if backup_name is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
        backup_name = f'{BACKUP_PREFIX}{timestamp}'

    backup_dir = (backup_root or default_backup_root(storage_dir)) / backup_name
    backup_dir.mkdir(parents=True, exist_ok=True)

    for file_path in files:
        if file_path.is_file():
            shutil.copy2(file_path, backup_dir / file_path.name)

    logger.info(f"Backup created: {backup_dir} ({len(files)} files)")
    return backup_dir


def restore_backup(backup_dir: Path, storage_dir: Path, replace: bool = False) -> bool:
    """
    Copy the catalog files of a backup back into the storage directory.

    Args:
        backup_dir: Backup directory
        storage_dir: Storage directory to restore into
        replace: Also delete catalogs that are not part of the backup

    Returns:
        Success status
    """
    backup_dir = Path(backup_dir)
    storage_dir = Path(storage_dir)
    if not backup_dir.is_dir():
        logger.error(f"Backup not found: {backup_dir}")
        return False

    try:
        shutil.copytree(backup_dir, storage_dir, dirs_exist_ok=True)
        if replace:
            for path in storage_dir.glob(f'*{CATALOG_EXTENSION}'):
                if not (backup_dir / path.name).exists():
                    path.unlink()
                    logger.debug(f"Removed {path.name}, not in backup")
    except (OSError, shutil.Error) as e:
        logger.error(f"Restore failed: {e}")
        return False

    logger.info(f"Restored {backup_dir.name} into {storage_dir}")
    return True


def list_backups(backup_root: Path) -> List[Path]:
    """
    List backups, newest first.

    Args:
        backup_root: Folder holding the backups

    Returns:
        List of backup directories
    """
    if not backup_root.is_dir():
        return []

    return sorted(
        (p for p in backup_root.glob(f'{BACKUP_PREFIX}*') if p.is_dir()),
        key=lambda p: p.name,
        reverse=True
    )


def cleanup_old_backups(backup_root: Path, keep_count: int = 5) -> int:
    """
    Remove old backups, keeping only the most recent ones.

    Args:
        backup_root: Folder holding the backups
        keep_count: Number of backups to keep

    Returns:
        Number of removed backups
    """
    to_remove = list_backups(backup_root)[keep_count:]

    for backup in to_remove:
        shutil.rmtree(backup)
        logger.debug(f"Removed old backup: {backup.name}")

    return len(to_remove)
