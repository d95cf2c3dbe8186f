"""Loading of the three label catalogs.

The star map cache, the localization index and the string table are
decoded JSON files produced by the extraction run. All three are needed;
any missing or malformed file aborts label resolution.
"""

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from ..core.config import LabelConfig
from ..core.errors import CatalogLoadError
from ..core.types import LocalizationIndex, StarMapCatalog
from ..core.validator import (
    LOCALIZATION_INDEX_SCHEMA,
    LOCALIZED_STRINGS_SCHEMA,
    STAR_MAP_SCHEMA,
    describe_validation_error,
    validate_document,
)


@dataclass
class LocalizedStrings:
    """String table indexed by message ID.

    Each entry is a list whose first element is the display text.
    """

    table: dict[str, Any]

    @classmethod
    def from_document(cls, document: list | dict) -> "LocalizedStrings":
        """Wrap a decoded string table.

        The game format is ``[languageInfo, {messageId: [...]}, ...]``;
        a bare ``{messageId: [...]}`` mapping is accepted too.
        """
        if isinstance(document, list):
            return cls(table=document[1])
        return cls(table=document)

    def entry(self, message_id: int) -> Any:
        return self.table.get(str(message_id))

    def display_name(self, message_id: int) -> str | None:
        """Return the display text for a message, or None if it has none."""
        entry = self.entry(message_id)
        if not isinstance(entry, list) or not entry:
            return None

        name = entry[0]
        if not isinstance(name, str) or not name:
            return None
        return name

    def __contains__(self, message_id: int) -> bool:
        return str(message_id) in self.table

    def __len__(self) -> int:
        return len(self.table)


@dataclass
class LabelCatalogs:
    """The three independently keyed catalogs."""

    star_map: StarMapCatalog
    localization: LocalizationIndex
    strings: LocalizedStrings


def load_json_file(file_path: Path) -> Any:
    """Load a JSON file.

    Raises:
        CatalogLoadError: If the file is missing or not valid JSON
    """
    print(f"Loading {file_path}...", file=sys.stderr)

    try:
        with Path(file_path).open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise CatalogLoadError(file_path, "file not found") from None
    except json.JSONDecodeError as e:
        raise CatalogLoadError(file_path, f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadError(file_path, str(e)) from e


def load_catalog(file_path: Path, schema_name: str) -> Any:
    """Load a JSON catalog and check its structure.

    Raises:
        CatalogLoadError: If the file is missing, unparsable or fails the schema
    """
    document = load_json_file(file_path)

    try:
        validate_document(document, schema_name)
    except ValidationError as e:
        raise CatalogLoadError(file_path, describe_validation_error(e)) from e

    return document


def load_catalogs(config: LabelConfig) -> LabelCatalogs:
    """Load the star map, localization index and string table.

    Raises:
        CatalogLoadError: On the first catalog that cannot be loaded
    """
    star_map = load_catalog(config.star_map_path, STAR_MAP_SCHEMA)
    localization = load_catalog(config.localization_index_path, LOCALIZATION_INDEX_SCHEMA)
    strings = load_catalog(config.strings_path, LOCALIZED_STRINGS_SCHEMA)

    return LabelCatalogs(
        star_map=star_map,
        localization=localization,
        strings=LocalizedStrings.from_document(strings),
    )
