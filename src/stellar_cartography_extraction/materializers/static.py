"""Materializer for ``static`` entries.

Static files are copied as-is. Many of them are SQLite databases; those get
a second copy in the sqlite directory for the query service to load.
"""

from pathlib import Path

from ..core.sniffer import is_sqlite_file
from ..core.types import AssetCategory, ManifestEntry, MaterializationResult
from ..registry import MaterializerRegistry
from .base import Materializer


class StaticMaterializer(Materializer):
    """Copies to static/ and, for SQLite databases, to sqlite/ as well."""

    category = AssetCategory.STATIC

    def process(
        self, entry: ManifestEntry, source_path: Path, result: MaterializationResult
    ) -> None:
        destination = self.layout.static / self.destination_name(entry, "static")
        self.copy(source_path, destination, result)

        if not is_sqlite_file(source_path):
            self.log(f"Not a SQLite database: {source_path}")
            return

        result.sqlite_detected = True
        # The static copy stays in place even if this one fails
        sqlite_destination = self.layout.sqlite / self.destination_name(entry, "sqlite")
        self.copy(source_path, sqlite_destination, result)


MaterializerRegistry.register_factory(AssetCategory.STATIC, StaticMaterializer)
