"""Tests for CLI commands."""

import json
import pytest
import yaml
from argparse import Namespace
from pathlib import Path
from unittest.mock import patch

from localization_storage.cli import (
    build_parser,
    cmd_init,
    cmd_remove,
    load_and_validate_config,
    main,
)
from localization_storage.core.catalog import TranslationCatalog
from localization_storage.features.importer import CatalogImportError
from localization_storage.utils.backup import default_backup_root, list_backups
from localization_storage.utils.config import CONFIG_FILE_NAME, Config, ConfigValidationError

CSV = "key,en,ru\ngreeting,Hello,Привет\nplay,Play,Играть\n"


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Empty project directory used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def imported(project):
    """Project with English and Russian catalogs imported from CSV."""
    csv_path = project / 'sheet.csv'
    csv_path.write_text(CSV, encoding='utf-8')
    assert main(['import', '--file', str(csv_path), '--no-backup']) == 0
    return project / 'Assets' / 'LocalizationStorage'


class TestCmdInit:
    """Test cases for the init command."""

    def test_creates_config_and_storage(self, project):
        assert main(['init']) == 0

        data = yaml.safe_load((project / CONFIG_FILE_NAME).read_text(encoding='utf-8'))
        assert data['storage']['asset_root'] == 'Assets'
        assert (project / 'Assets' / 'LocalizationStorage').is_dir()

    def test_custom_asset_root(self, project):
        assert main(['init', '--asset-root', 'Game/Assets']) == 0
        assert (project / 'Game' / 'Assets' / 'LocalizationStorage').is_dir()

    def test_fails_without_force_if_exists(self, project):
        (project / CONFIG_FILE_NAME).write_text('existing: config')

        result = cmd_init(Namespace(asset_root=None, force=False))

        assert result == 1

    def test_overwrites_with_force(self, project):
        (project / CONFIG_FILE_NAME).write_text('old: config')

        assert cmd_init(Namespace(asset_root=None, force=True)) == 0
        data = yaml.safe_load((project / CONFIG_FILE_NAME).read_text(encoding='utf-8'))
        assert 'old' not in data


class TestConfigLoading:
    """Test cases for load_and_validate_config."""

    def test_invalid_config_raises(self, project, capsys):
        (project / CONFIG_FILE_NAME).write_text("importer:\n  timeout: 0\n")

        with pytest.raises(ConfigValidationError):
            load_and_validate_config()

        assert "Configuration errors" in capsys.readouterr().out

    def test_commands_fail_on_invalid_config(self, project):
        (project / CONFIG_FILE_NAME).write_text("importer:\n  timeout: 0\n")
        assert main(['languages']) == 1

    @pytest.mark.parametrize('content', ["storage:\n  bogus: 1\n", "languages: [en\n"])
    def test_malformed_config_file(self, project, capsys, content):
        (project / CONFIG_FILE_NAME).write_text(content)

        assert main(['languages']) == 1
        assert "Configuration errors" in capsys.readouterr().out

    def test_null_section_uses_defaults(self, imported, project):
        (project / CONFIG_FILE_NAME).write_text("storage:\nimporter:\n")
        assert main(['languages']) == 0

    def test_verbose_prints_warnings(self, project, capsys):
        load_and_validate_config(verbose=True)
        assert "Config warning" in capsys.readouterr().out


class TestCmdImport:
    """Test cases for the import command."""

    def test_import_file(self, imported):
        assert sorted(p.name for p in imported.glob('*.json')) == ['English.json', 'Russian.json']

    def test_import_prints_languages(self, project, capsys):
        (project / 'sheet.csv').write_text(CSV, encoding='utf-8')
        main(['--no-color', 'import', '--file', 'sheet.csv'])

        out = capsys.readouterr().out
        assert "Imported 2 languages" in out
        assert "Russian" in out

    def test_import_missing_file(self, project):
        assert main(['import', '--file', 'missing.csv']) == 1

    def test_import_without_url(self, project, capsys):
        assert main(['import']) == 1
        assert "No sheet URL" in capsys.readouterr().out

    def test_import_url_is_saved_to_config(self, project):
        url = 'https://docs.google.com/spreadsheets/d/doc42/edit'
        with patch('localization_storage.features.importer.download_csv', return_value=CSV) as download:
            assert main(['import', '--url', url]) == 0

        assert download.call_args.args[0].endswith('/d/doc42/export?format=csv')
        assert Config.from_file(project / CONFIG_FILE_NAME).importer.sheet_url == url

    def test_import_uses_configured_url(self, project):
        config = Config()
        config.importer.sheet_url = 'https://docs.google.com/spreadsheets/d/saved/edit'
        config.save(project / CONFIG_FILE_NAME)

        with patch('localization_storage.features.importer.download_csv', return_value=CSV) as download:
            assert main(['import']) == 0

        assert '/d/saved/' in download.call_args.args[0]

    def test_download_failure(self, project):
        with patch(
            'localization_storage.features.importer.download_csv',
            side_effect=CatalogImportError('Failed downloading data: offline')
        ):
            assert main(['import', '--url', 'https://example.com/x.csv']) == 1

    def test_keep_existing(self, imported, project):
        (project / 'de.csv').write_text("key,de\nyes,Ja\n", encoding='utf-8')

        assert main(['import', '--file', 'de.csv', '--keep-existing']) == 0
        assert sorted(p.stem for p in imported.glob('*.json')) == ['English', 'German', 'Russian']

    def test_url_and_file_are_exclusive(self, project):
        with pytest.raises(SystemExit):
            main(['import', '--url', 'https://x', '--file', 'a.csv'])


class TestLookupCommands:
    """Test cases for languages, get and detect."""

    def test_languages(self, imported, capsys):
        assert main(['--no-color', 'languages']) == 0

        out = capsys.readouterr().out
        assert "English: 2 keys" in out
        assert "Russian: 2 keys" in out

    def test_languages_json(self, imported, capsys):
        capsys.readouterr()
        assert main(['--quiet', 'languages', '--json']) == 0
        assert json.loads(capsys.readouterr().out) == ['English', 'Russian']

    def test_languages_empty(self, project, capsys):
        assert main(['languages']) == 0
        assert "No languages found" in capsys.readouterr().out

    def test_get(self, imported, capsys):
        capsys.readouterr()
        assert main(['--quiet', 'get', 'greeting', 'missing', '--lang', 'Russian']) == 0

        assert capsys.readouterr().out.splitlines() == ['Привет', '#missing']

    def test_get_output_has_no_log_lines(self, imported, capsys):
        capsys.readouterr()
        assert main(['get', 'greeting', '--lang', 'English']) == 0

        captured = capsys.readouterr()
        assert captured.out == 'Hello\n'
        assert "Loaded language 'English'" in captured.err

    def test_get_unknown_language_falls_back(self, imported, capsys):
        capsys.readouterr()
        assert main(['--quiet', 'get', 'play', '--lang', 'Klingon']) == 0
        assert capsys.readouterr().out.strip() == 'Play'

    def test_get_uses_device_language(self, imported, capsys):
        capsys.readouterr()
        with patch(
            'localization_storage.features.locale_detector.detect_device_locale',
            return_value='ru'
        ):
            assert main(['--quiet', 'get', 'play']) == 0

        assert capsys.readouterr().out.strip() == 'Играть'

    def test_get_without_catalogs(self, project, capsys):
        capsys.readouterr()
        assert main(['--quiet', 'get', 'play', '--lang', 'English']) == 1
        assert '#play' in capsys.readouterr().out

    def test_detect(self, imported, capsys):
        assert main(['--no-color', 'detect', '--code', 'ru']) == 0

        out = capsys.readouterr().out
        assert "Language:      Russian" in out
        assert "2 keys loaded" in out

    def test_detect_unmapped_code(self, imported, capsys):
        assert main(['--no-color', 'detect', '--code', 'ja']) == 0
        assert "Language:      English" in capsys.readouterr().out


class TestEditCommands:
    """Test cases for show, add, set and remove."""

    def _catalog(self, storage, language='English'):
        return TranslationCatalog.read(storage / f'{language}.json').to_index()

    def test_show(self, imported, capsys):
        assert main(['--no-color', 'show', '--lang', 'Russian']) == 0

        out = capsys.readouterr().out
        assert "Играть" in out
        assert "2 of 2 entries" in out

    def test_show_search(self, imported, capsys):
        assert main(['--no-color', 'show', '--search', 'HELLO']) == 0
        assert "1 of 2 entries" in capsys.readouterr().out

    def test_show_malformed_catalog(self, imported):
        (imported / 'English.json').write_text('{broken', encoding='utf-8')
        assert main(['show']) == 1

    def test_add(self, imported):
        assert main(['add', 'quit', 'Quit']) == 0
        assert self._catalog(imported)['quit'] == 'Quit'

    def test_add_duplicate(self, imported):
        assert main(['add', 'play', 'Again']) == 1
        assert self._catalog(imported)['play'] == 'Play'

    def test_add_to_other_language(self, imported):
        assert main(['add', 'quit', 'Выход', '--lang', 'Russian']) == 0
        assert self._catalog(imported, 'Russian')['quit'] == 'Выход'

    def test_set(self, imported):
        assert main(['set', 'play', 'Start']) == 0
        assert self._catalog(imported)['play'] == 'Start'

    def test_set_unknown_key(self, imported):
        assert main(['set', 'nope', 'x']) == 1

    def test_remove_requires_confirm(self, imported):
        result = cmd_remove(Namespace(key='play', lang=None, confirm=False))

        assert result == 1
        assert 'play' in self._catalog(imported)

    def test_remove(self, imported):
        assert main(['remove', 'play', '--confirm']) == 0
        assert 'play' not in self._catalog(imported)

    def test_remove_unknown_key(self, imported):
        assert main(['remove', 'nope', '--confirm']) == 1


class TestCmdRestore:
    """Test cases for the restore command."""

    @pytest.fixture
    def reimported(self, imported, project):
        """Second import that replaced the catalogs and left one backup."""
        (project / 'de.csv').write_text("key,de\nyes,Ja\n", encoding='utf-8')
        assert main(['import', '--file', 'de.csv']) == 0
        return imported

    def test_list(self, reimported, capsys):
        capsys.readouterr()
        assert main(['--no-color', 'restore', '--list']) == 0
        assert 'localization_backup_' in capsys.readouterr().out

    def test_list_without_backups(self, imported, capsys):
        assert main(['restore', '--list']) == 0
        assert "No backups" in capsys.readouterr().out

    def test_requires_confirm(self, reimported):
        assert main(['restore']) == 1
        assert sorted(p.stem for p in reimported.glob('*.json')) == ['German']

    def test_restores_newest_backup(self, reimported):
        assert main(['restore', '--confirm']) == 0
        assert sorted(p.stem for p in reimported.glob('*.json')) == ['English', 'Russian']

    def test_restore_by_name(self, reimported, project):
        name = list_backups(default_backup_root(reimported))[0].name

        assert main(['restore', name, '--confirm']) == 0
        assert (reimported / 'Russian.json').exists()

    def test_unknown_backup_name(self, reimported):
        assert main(['restore', '../LocalizationStorage', '--confirm']) == 1
        assert (reimported / 'German.json').exists()

    def test_no_backups(self, imported):
        assert main(['restore', '--confirm']) == 1


class TestMain:
    """Test cases for the entry point."""

    def test_no_command_prints_help(self, project, capsys):
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])

        assert exc_info.value.code == 0
        assert 'localization-storage' in capsys.readouterr().out

    def test_log_file(self, imported, project):
        log_file = project / 'logs' / 'run.log'
        main(['--log-file', str(log_file), 'get', 'play', '--lang', 'English'])

        assert "Loaded language 'English'" in log_file.read_text(encoding='utf-8')

    def test_parser_commands(self):
        parser = build_parser()
        args = parser.parse_args(['get', 'a', 'b', '-l', 'German'])

        assert args.command == 'get'
        assert args.keys == ['a', 'b']
        assert args.lang == 'German'
