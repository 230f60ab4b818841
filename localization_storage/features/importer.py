"""Import translation tables from CSV or Google Sheets into catalog files.

Input layout (first row is the header)::

    key,English,Russian
    menu.play,Play,Играть
    menu.quit,Quit,Выход

Cells are split on plain commas. Quoted fields are not supported, so a value
that contains a comma is cut at that comma.
"""

import ssl
import urllib.error
import urllib.request
from pathlib import Path
from typing import Dict, List, Optional

import certifi

from ..core.catalog import TranslationCatalog, TranslationEntry
from ..core.storage import CATALOG_EXTENSION, catalog_path, ensure_storage_dir
from ..utils.backup import cleanup_old_backups, create_backup, default_backup_root
from ..utils.logging import get_logger
from ..utils.validators import is_valid_language_identifier
from .locale_detector import DEFAULT_LANGUAGE_MAP

SSL_CONTEXT = ssl.create_default_context(cafile=certifi.where())

SHEETS_EXPORT_URL = 'https://docs.google.com/spreadsheets/d/{document_id}/export?format=csv'

logger = get_logger('importer')


class CatalogImportError(Exception):
    """Raised when a translation table cannot be imported."""


def to_csv_export_url(url: str) -> str:
    """
    Convert a Google Sheets edit URL into its CSV export URL.

    ``https://docs.google.com/spreadsheets/d/<id>/edit#gid=0`` becomes
    ``https://docs.google.com/spreadsheets/d/<id>/export?format=csv``.
    URLs without a ``/d/<id>`` segment are returned unchanged.
    """
    marker = '/d/'
    start = url.find(marker)
    if start == -1:
        logger.debug(f"Not a Google Sheets document URL, using as is: {url}")
        return url

    start += len(marker)
    end = url.find('/', start)
    if end == -1:
        end = len(url)

    document_id = url[start:end]
    if not document_id:
        return url

    return SHEETS_EXPORT_URL.format(document_id=document_id)


def download_csv(url: str, timeout: float = 10) -> str:
    """
    Download a CSV document.

    Raises:
        CatalogImportError: on network or decoding failure
    """
    request = urllib.request.Request(url, headers={'User-Agent': 'localization-storage'})

    try:
        with urllib.request.urlopen(request, timeout=timeout, context=SSL_CONTEXT) as response:
            return response.read().decode('utf-8-sig')
    except urllib.error.URLError as e:
        raise CatalogImportError(f"Failed downloading data: {e}") from e
    except UnicodeDecodeError as e:
        raise CatalogImportError(f"Downloaded data is not UTF-8: {e}") from e
    except OSError as e:
        raise CatalogImportError(f"Failed downloading data: {e}") from e


def _language_for_header(label: str, language_map: Dict[str, str]) -> str:
    return language_map.get(label.lower(), label)


def parse_csv(text: str, language_map: Optional[Dict[str, str]] = None) -> List[TranslationCatalog]:
    """
    Split a CSV table into one catalog per language column.

    The first column holds the keys. Keys and values are trimmed, rows with
    fewer than two cells or an empty key are dropped and missing trailing
    cells become empty values. Header labels that are locale codes in
    ``language_map`` ('en', 'fr', ...) are replaced by the language name.

    Args:
        text: CSV document
        language_map: Locale code -> language name (default: DEFAULT_LANGUAGE_MAP)

    Returns:
        Catalogs in header column order

    Raises:
        CatalogImportError: if the document is empty, has no data rows or
            no usable language columns, or two columns name the same language
    """
    if language_map is None:
        language_map = DEFAULT_LANGUAGE_MAP

    if not text:
        raise CatalogImportError("Downloaded data is empty.")

    lines = [line for line in text.replace('\r\n', '\n').split('\n') if line]
    if not lines:
        raise CatalogImportError("Downloaded data is empty.")
    if len(lines) < 2:
        raise CatalogImportError("Sheet has no data rows.")

    headers = lines[0].split(',')

    # (column index, catalog)
    columns = []
    seen: Dict[str, int] = {}
    for column, label in enumerate(headers[1:], start=1):
        label = label.strip()
        if not label:
            logger.warning(f"Skipping column {column + 1}: empty language header")
            continue

        language = _language_for_header(label, language_map)
        if not is_valid_language_identifier(language):
            logger.warning(f"Skipping column {column + 1}: invalid language header '{label}'")
            continue

        if language in seen:
            raise CatalogImportError(
                f"Columns {seen[language] + 1} and {column + 1} both map to language '{language}'."
            )
        seen[language] = column
        columns.append((column, TranslationCatalog(language=language)))

    if not columns:
        raise CatalogImportError("Sheet has no language columns.")

    for line in lines[1:]:
        cells = line.split(',')
        if len(cells) < 2:
            continue

        key = cells[0].strip()
        if not key:
            continue

        for column, catalog in columns:
            value = cells[column].strip() if column < len(cells) else ''
            catalog.entries.append(TranslationEntry(key=key, value=value))

    return [catalog for _, catalog in columns]


def write_catalog(catalog: TranslationCatalog, storage_dir: Path) -> Path:
    """Write ``catalog`` to ``<storage_dir>/<language>.json``."""
    path = catalog.write(catalog_path(storage_dir, catalog.language))
    logger.info(f"Saved {path.name} in {path}")
    return path


def clear_catalogs(storage_dir: Path) -> int:
    """Delete every catalog file in the storage directory and return how many."""
    storage_dir = Path(storage_dir)
    if not storage_dir.is_dir():
        return 0

    removed = 0
    for path in storage_dir.glob(f'*{CATALOG_EXTENSION}'):
        if path.is_file():
            path.unlink()
            removed += 1

    logger.info(f"Localization folder cleared ({removed} files)")
    return removed


class CatalogImporter:
    """
    Writes catalog files from a CSV table.

    The table is parsed completely before anything on disk changes, so a
    failed download or an empty sheet leaves the existing catalogs intact.
    """

    def __init__(
        self,
        storage_dir: Path,
        language_map: Optional[Dict[str, str]] = None,
        timeout: float = 10,
        keep_backups: int = 5
    ):
        self.storage_dir = Path(storage_dir)
        self.language_map = dict(DEFAULT_LANGUAGE_MAP if language_map is None else language_map)
        self.timeout = timeout
        self.keep_backups = keep_backups
        self.last_backup: Optional[Path] = None

    @classmethod
    def from_config(cls, config) -> 'CatalogImporter':
        return cls(
            config.storage_dir,
            language_map=config.languages.locale_map,
            timeout=config.importer.timeout,
            keep_backups=config.importer.keep_backups,
        )

    def import_csv_text(
        self,
        text: str,
        clear_existing: bool = True,
        backup: bool = True
    ) -> List[Path]:
        """
        Parse ``text`` and write one catalog file per language column.

        Args:
            text: CSV document
            clear_existing: Remove existing catalog files first
            backup: Back up existing catalog files before removing them

        Returns:
            Paths of the written catalog files

        Raises:
            CatalogImportError: if the document cannot be parsed
        """
        catalogs = parse_csv(text, self.language_map)

        ensure_storage_dir(self.storage_dir)

        self.last_backup = None
        if clear_existing:
            if backup:
                self.last_backup = create_backup(self.storage_dir)
                if self.last_backup:
                    cleanup_old_backups(default_backup_root(self.storage_dir), self.keep_backups)
            clear_catalogs(self.storage_dir)

        paths = [write_catalog(catalog, self.storage_dir) for catalog in catalogs]
        logger.info(f"Localization updated successfully ({len(paths)} languages)")
        return paths

    def import_csv_file(self, csv_path: Path, **kwargs) -> List[Path]:
        """Import a CSV file from disk. Keyword arguments go to :meth:`import_csv_text`."""
        try:
            text = Path(csv_path).read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogImportError(f"Cannot read {csv_path}: {e}") from e
        return self.import_csv_text(text, **kwargs)

    def import_google_sheet(self, sheet_url: str, **kwargs) -> List[Path]:
        """Download a Google Sheets document as CSV and import it."""
        export_url = to_csv_export_url(sheet_url)
        logger.debug(f"Downloading {export_url}")
        return self.import_csv_text(download_csv(export_url, self.timeout), **kwargs)
