"""Version information for localization-storage."""

__version__ = "1.4.0"
__author__ = "Playbox Team"
__description__ = "JSON string tables with locale detection, CSV import and a key/value editor"

# Changelog:
# 1.4.0 - Safer imports and backup rotation
#       - Sheet headers that are not valid file names are skipped
#       - Duplicate language columns and sheets without language columns are rejected
#       - Old import backups pruned (importer.keep_backups, default 5)
#       - restore CLI command
#       - Editor rejects keys with surrounding whitespace
#       - Console logs go to stderr
#       - Empty config sections fall back to defaults
#
# 1.3.0 - Catalog editor
#       - CatalogEditor class (list, search, add, set, remove, save)
#       - show / add / set / remove CLI commands
#       - remove requires --confirm
#
# 1.2.0 - Google Sheets import
#       - Edit URLs are converted to their CSV export URL
#       - SSL context built from certifi
#       - Sheet URL is remembered in .localization-storage.yml
#       - Existing catalogs are cleared only after the sheet parsed
#       - Storage backup before clearing (--no-backup to skip)
#
# 1.1.0 - Explicit load outcomes
#       - CatalogStore.load returns a LoadResult instead of None
#       - LoadStatus enum (loaded, not_found, unreadable, parse_error)
#       - Duplicate keys reported in LoadResult.duplicate_keys
#       - Store is an instance owned by the caller (no module globals)
#
# 1.0.0 - Initial release
#       - Runtime catalog store with "#key" miss sentinel
#       - Language directory scanner
#       - Device locale detection (en, ru, de, fr, es)
#       - CSV importer
