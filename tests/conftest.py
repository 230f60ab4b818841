"""Shared fixtures for localization storage tests."""

import json
import logging
from pathlib import Path

import pytest

from localization_storage.utils.colors import Colors
from localization_storage.utils.logging import reset_logger


@pytest.fixture
def make_catalog():
    """Return a helper that writes ``<language>.json`` from (key, value) pairs."""

    def _make(storage_dir: Path, language: str, items) -> Path:
        storage_dir.mkdir(parents=True, exist_ok=True)
        path = storage_dir / f'{language}.json'
        payload = {'_items': [{'_key': key, '_value': value} for key, value in items]}
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding='utf-8')
        return path

    return _make


@pytest.fixture
def storage_dir(tmp_path, make_catalog) -> Path:
    """Storage folder with English and Russian catalogs."""
    directory = tmp_path / 'Assets' / 'LocalizationStorage'
    make_catalog(directory, 'English', [('greeting', 'Hello'), ('farewell', 'Bye')])
    make_catalog(directory, 'Russian', [('greeting', 'Привет')])
    return directory


@pytest.fixture
def package_logs(caplog):
    """caplog capturing everything the package logs."""
    caplog.set_level(logging.DEBUG, logger='localization_storage')
    return caplog


@pytest.fixture(autouse=True)
def _restore_global_state():
    yield
    Colors.enable()
    reset_logger()
