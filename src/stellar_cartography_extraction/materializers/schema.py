"""Materializer for ``schema`` entries."""

from pathlib import Path

from ..core.types import AssetCategory, ManifestEntry, MaterializationResult
from ..registry import MaterializerRegistry
from .base import Materializer


class SchemaMaterializer(Materializer):
    """Copies schema files verbatim into schema/."""

    category = AssetCategory.SCHEMA

    def process(
        self, entry: ManifestEntry, source_path: Path, result: MaterializationResult
    ) -> None:
        destination = self.layout.schema / self.destination_name(entry, "schema")
        self.copy(source_path, destination, result)


MaterializerRegistry.register_factory(AssetCategory.SCHEMA, SchemaMaterializer)
