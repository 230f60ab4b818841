"""Command-line interface for localization storage."""

import sys
import json
import argparse
from pathlib import Path

from .__version__ import __version__
from .utils.colors import Colors
from .utils.config import CONFIG_FILE_NAME, Config, create_default_config, ConfigValidationError
from .utils.logging import configure_logging
from .utils.backup import default_backup_root, list_backups, restore_backup
from .core.catalog import TranslationCatalog
from .core.scanner import scan_languages
from .core.storage import catalog_path, ensure_storage_dir
from .core.store import CatalogStore
from .features.locale_detector import LocaleDetector, detect_device_locale
from .features.importer import CatalogImporter, CatalogImportError
from .features.editor import CatalogEditor


def _print_config_errors(errors):
    print(f"{Colors.error('❌')} Configuration errors:")
    for error in errors:
        print(f"   • {error}")


def load_and_validate_config(validate: bool = True, verbose: bool = False) -> Config:
    """
    Load configuration and optionally validate it.

    Args:
        validate: Whether to validate the config
        verbose: Whether to print warnings

    Returns:
        Loaded Config object

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    try:
        config = Config.from_file()
    except ConfigValidationError as e:
        _print_config_errors(e.errors)
        raise

    if validate:
        errors, warnings = config.validate()

        if verbose and warnings:
            for warning in warnings:
                print(f"{Colors.warning('⚠️')}  Config warning: {warning}")

        if errors:
            _print_config_errors(errors)
            raise ConfigValidationError(errors)

    return config


def _open_editor(config: Config, language):
    """Open an editor on ``language`` (default language when None)."""
    editor = CatalogEditor(config.storage_dir, language or config.languages.default)
    try:
        editor.load()
    except (ValueError, OSError) as e:
        print(f"{Colors.error('❌')} Cannot open {editor.path}: {e}")
        return None
    return editor


def cmd_init(args):
    """Create the configuration file and the storage folder."""
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if config_path.exists() and not args.force:
        print(f"{Colors.error('❌')} Config already exists: {config_path}")
        print(f"   Use --force to overwrite")
        return 1

    config = create_default_config(args.asset_root)
    config.save(config_path)
    print(f"{Colors.success('✅')} Created: {config_path}")

    if ensure_storage_dir(config.storage_dir):
        print(f"{Colors.success('✅')} Created storage folder: {config.storage_dir}")

    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Set importer.sheet_url in {CONFIG_FILE_NAME}, or pass --url / --file")
    print(f"2. Run: localization-storage import")

    return 0


def cmd_languages(args):
    """List available languages."""
    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    storage_dir = config.storage_dir
    languages = scan_languages(storage_dir)

    if args.json:
        print(json.dumps(languages, ensure_ascii=False))
        return 0

    if not languages:
        print(f"{Colors.warning('⚠️')}  No languages found in {storage_dir}")
        return 0

    print(f"\n{Colors.bold('🌍 AVAILABLE LANGUAGES')} {Colors.dim(str(storage_dir))}")
    print("=" * 70)

    for language in languages:
        marker = Colors.info('*') if language == config.languages.default else ' '
        try:
            count = len(TranslationCatalog.read(catalog_path(storage_dir, language)))
            detail = f"{count} keys"
        except (ValueError, OSError) as e:
            detail = Colors.error(f"unreadable ({e.__class__.__name__})")
        print(f"{marker} {Colors.bold(language)}: {detail}")

    return 0


def cmd_detect(args):
    """Show the detected device language and load it."""
    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    store = CatalogStore.from_config(config)
    detector = LocaleDetector.from_config(store, config)

    code = args.code if args.code is not None else detect_device_locale()
    result = detector.initialize(code)

    print(f"Device locale: {Colors.bold(code or '(unknown)')}")
    print(f"Language:      {Colors.bold(result.language)}"
          + (f" {Colors.dim('(default)')}" if result.used_fallback else ''))

    if not result.ok:
        print(f"{Colors.error('❌')} {result.error}")
        return 1

    print(f"{Colors.success('✓')} {result.key_count} keys loaded")
    return 0


def cmd_get(args):
    """Look up keys in a language."""
    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    store = CatalogStore.from_config(config)
    if args.lang:
        result = store.load(args.lang)
    else:
        result = LocaleDetector.from_config(store, config).initialize()

    for key in args.keys:
        print(store.get(key))

    return 0 if result.ok else 1


def cmd_import(args):
    """Import a CSV file or Google Sheet into catalog files."""
    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    importer = CatalogImporter.from_config(config)
    options = {
        'clear_existing': config.importer.clear_existing and not args.keep_existing,
        'backup': config.importer.backup and not args.no_backup,
    }

    try:
        if args.file:
            paths = importer.import_csv_file(Path(args.file), **options)
        else:
            url = args.url or config.importer.sheet_url
            if not url:
                print(f"{Colors.error('❌')} No sheet URL given")
                print(f"   Use --url, --file or set importer.sheet_url in {CONFIG_FILE_NAME}")
                return 1

            if args.url and args.url != config.importer.sheet_url:
                config.importer.sheet_url = args.url
                config.save()

            paths = importer.import_google_sheet(url, **options)
    except CatalogImportError as e:
        print(f"{Colors.error('❌')} {e}")
        return 1

    if importer.last_backup:
        print(f"{Colors.info('💾')} Backup: {importer.last_backup}")

    print(f"{Colors.success('✅')} Imported {len(paths)} languages:")
    for path in paths:
        print(f"   {Colors.success('✓')} {path.stem}")

    return 0


def cmd_show(args):
    """Print the entries of a catalog."""
    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    editor = _open_editor(config, args.lang)
    if editor is None:
        return 1

    entries = editor.search(args.search or '')

    print(f"\n{Colors.bold(editor.language)} {Colors.dim(str(editor.path))}")
    print("=" * 70)
    for entry in entries:
        print(f"{entry.key:<40} {entry.value}")
    print(f"\n{len(entries)} of {len(editor.catalog)} entries")

    return 0


def cmd_add(args):
    """Add a key to a catalog."""
    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    editor = _open_editor(config, args.lang)
    if editor is None or not editor.add_entry(args.key, args.value):
        return 1

    print(f"{Colors.success('✅')} Added '{args.key}' to {editor.language}")
    return 0


def cmd_set(args):
    """Change the value of an existing key."""
    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    editor = _open_editor(config, args.lang)
    if editor is None or not editor.set_value(args.key, args.value):
        return 1

    editor.save()
    print(f"{Colors.success('✅')} Updated '{args.key}' in {editor.language}")
    return 0


def cmd_remove(args):
    """Delete a key from a catalog."""
    if not args.confirm:
        print(f"{Colors.warning('⚠️')}  Deleting '{args.key}' needs --confirm")
        return 1

    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    editor = _open_editor(config, args.lang)
    if editor is None or not editor.remove_entry(args.key):
        return 1

    print(f"{Colors.success('✅')} Removed '{args.key}' from {editor.language}")
    return 0


def cmd_restore(args):
    """List backups or restore one into the storage folder."""
    try:
        config = load_and_validate_config(validate=True)
    except ConfigValidationError:
        return 1

    backup_root = default_backup_root(config.storage_dir)
    backups = list_backups(backup_root)

    if args.list:
        if not backups:
            print(f"{Colors.warning('⚠️')}  No backups in {backup_root}")
            return 0
        print(f"\n{Colors.bold('💾 BACKUPS')} {Colors.dim(str(backup_root))}")
        print("=" * 70)
        for backup in backups:
            print(f"   {backup.name}")
        return 0

    if not backups:
        print(f"{Colors.error('❌')} No backups found in {backup_root}")
        return 1

    if args.name:
        matches = [backup for backup in backups if backup.name == args.name]
        if not matches:
            print(f"{Colors.error('❌')} Backup not found: {args.name}")
            print(f"   Use --list to see available backups")
            return 1
        backup_dir = matches[0]
    else:
        backup_dir = backups[0]

    if not args.confirm:
        print(f"{Colors.warning('⚠️')}  Restoring {backup_dir.name} replaces the current catalogs, needs --confirm")
        return 1

    if not restore_backup(backup_dir, config.storage_dir, replace=True):
        return 1

    print(f"{Colors.success('✅')} Restored {backup_dir.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='localization-storage',
        description='Manage per-language JSON string tables',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show debug output')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only show warnings and errors')
    parser.add_argument('--log-file', metavar='PATH', help='Also write logs to a file')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Create config file and storage folder')
    init_parser.add_argument('--asset-root', metavar='DIR', help='Project asset root (default: Assets)')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # languages command
    languages_parser = subparsers.add_parser('languages', help='List available languages')
    languages_parser.add_argument('--json', action='store_true', help='Print the list as JSON')

    # detect command
    detect_parser = subparsers.add_parser('detect', help='Load the language matching the device locale')
    detect_parser.add_argument('--code', metavar='CODE', help='Use this locale code instead of the system one')

    # get command
    get_parser = subparsers.add_parser('get', help='Look up translations')
    get_parser.add_argument('keys', nargs='+', metavar='KEY', help='Keys to look up')
    get_parser.add_argument('--lang', '-l', metavar='LANG', help='Language (default: device language)')

    # import command
    import_parser = subparsers.add_parser('import', help='Import a CSV file or Google Sheet')
    source = import_parser.add_mutually_exclusive_group()
    source.add_argument('--url', metavar='URL', help='Google Sheets URL (saved to the config)')
    source.add_argument('--file', metavar='PATH', help='Local CSV file')
    import_parser.add_argument('--keep-existing', action='store_true',
                               help='Do not delete catalogs missing from the table')
    import_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')

    # show command
    show_parser = subparsers.add_parser('show', help='Show catalog entries')
    show_parser.add_argument('--lang', '-l', metavar='LANG', help='Language (default: config default)')
    show_parser.add_argument('--search', '-s', metavar='QUERY', help='Filter by key or value')

    # add command
    add_parser = subparsers.add_parser('add', help='Add a key')
    add_parser.add_argument('key', help='Key')
    add_parser.add_argument('value', nargs='?', default='', help='Value')
    add_parser.add_argument('--lang', '-l', metavar='LANG', help='Language (default: config default)')

    # set command
    set_parser = subparsers.add_parser('set', help='Change the value of a key')
    set_parser.add_argument('key', help='Key')
    set_parser.add_argument('value', help='New value')
    set_parser.add_argument('--lang', '-l', metavar='LANG', help='Language (default: config default)')

    # remove command
    remove_parser = subparsers.add_parser('remove', help='Delete a key')
    remove_parser.add_argument('key', help='Key')
    remove_parser.add_argument('--lang', '-l', metavar='LANG', help='Language (default: config default)')
    remove_parser.add_argument('--confirm', action='store_true', help='Confirm deletion')

    # restore command
    restore_parser = subparsers.add_parser('restore', help='Restore catalogs from an import backup')
    restore_parser.add_argument('name', nargs='?', metavar='BACKUP', help='Backup name (default: newest)')
    restore_parser.add_argument('--list', action='store_true', help='List backups, newest first')
    restore_parser.add_argument('--confirm', action='store_true', help='Confirm replacing the current catalogs')

    return parser


COMMANDS = {
    'init': cmd_init,
    'languages': cmd_languages,
    'detect': cmd_detect,
    'get': cmd_get,
    'import': cmd_import,
    'show': cmd_show,
    'add': cmd_add,
    'set': cmd_set,
    'remove': cmd_remove,
    'restore': cmd_restore,
}


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        Colors.disable()

    configure_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        log_file=Path(args.log_file) if args.log_file else None,
        use_colors=not args.no_color,
    )

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    return command(args)


if __name__ == '__main__':
    sys.exit(main())
