"""Translation catalog data model and its JSON file format.

A catalog file looks like::

    {
      "_items": [
        {"_key": "greeting", "_value": "Hello"}
      ]
    }
"""

import json
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

ITEMS_FIELD = '_items'
KEY_FIELD = '_key'
VALUE_FIELD = '_value'


class CatalogFormatError(ValueError):
    """Raised when catalog JSON does not have the expected structure."""


@dataclass
class TranslationEntry:
    """A single key/value pair."""
    key: str
    value: str = ''

    def to_dict(self) -> Dict[str, str]:
        return {KEY_FIELD: self.key, VALUE_FIELD: self.value}


@dataclass
class TranslationCatalog:
    """
    All translation entries of one language, in file order.

    Keys are expected to be unique. Files written by hand may still contain
    duplicates; :meth:`to_index` keeps the last occurrence and
    :meth:`duplicate_keys` reports them.
    """
    language: str
    entries: List[TranslationEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[TranslationEntry]:
        return iter(self.entries)

    def keys(self) -> List[str]:
        return [entry.key for entry in self.entries]

    def find(self, key: str) -> Optional[TranslationEntry]:
        """Return the first entry with ``key``, or None."""
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def to_index(self) -> Dict[str, str]:
        """Build the key -> value lookup table (later duplicates win)."""
        return {entry.key: entry.value for entry in self.entries}

    def duplicate_keys(self) -> List[str]:
        """Keys that occur more than once, in order of first appearance."""
        counts = Counter(self.keys())
        return [key for key in counts if counts[key] > 1]

    @classmethod
    def from_dict(cls, language: str, data: Any) -> 'TranslationCatalog':
        """
        Build a catalog from decoded JSON.

        Items with a missing or empty key are skipped. A missing or null value
        becomes an empty string; other scalar values are converted with str().

        Raises:
            CatalogFormatError: if the structure is not an object holding a
                list of objects
        """
        if data is None:
            return cls(language=language)

        if not isinstance(data, dict):
            raise CatalogFormatError(
                f"Expected a JSON object at top level, got {type(data).__name__}"
            )

        items = data.get(ITEMS_FIELD)
        if items is None:
            return cls(language=language)

        if not isinstance(items, list):
            raise CatalogFormatError(f"'{ITEMS_FIELD}' must be a list, got {type(items).__name__}")

        entries = []
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                raise CatalogFormatError(
                    f"Item {position} in '{ITEMS_FIELD}' must be an object, got {type(item).__name__}"
                )

            key = item.get(KEY_FIELD)
            if key is None or key == '':
                continue

            value = item.get(VALUE_FIELD)
            entries.append(TranslationEntry(
                key=str(key),
                value='' if value is None else str(value),
            ))

        return cls(language=language, entries=entries)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {ITEMS_FIELD: [entry.to_dict() for entry in self.entries]}

    @classmethod
    def read(cls, path: Path, language: Optional[str] = None) -> 'TranslationCatalog':
        """
        Read a catalog file. The language defaults to the file name stem.

        Raises:
            OSError: if the file cannot be read
            json.JSONDecodeError: if the file is not valid JSON
            CatalogFormatError: if the JSON has the wrong structure
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8-sig') as f:
            data = json.load(f)
        return cls.from_dict(language or path.stem, data)

    def write(self, path: Path) -> Path:
        """Write the catalog as indented UTF-8 JSON and return the path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
            f.write('\n')
        return path
