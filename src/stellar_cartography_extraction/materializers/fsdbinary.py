"""Materializer for ``fsdbinary`` entries.

FSD binaries need their matching schema and loader to be read, so they are
only collected into one tree here.
"""

from pathlib import Path

from ..core.types import AssetCategory, ManifestEntry, MaterializationResult
from ..registry import MaterializerRegistry
from .base import Materializer


class FsdBinaryMaterializer(Materializer):
    """Copies FSD binary files verbatim into fsdbinary/src/."""

    category = AssetCategory.BINARY_FORMAT

    def process(
        self, entry: ManifestEntry, source_path: Path, result: MaterializationResult
    ) -> None:
        destination = self.layout.fsdbinary / self.destination_name(entry, "fsdbinary")
        self.copy(source_path, destination, result)


MaterializerRegistry.register_factory(AssetCategory.BINARY_FORMAT, FsdBinaryMaterializer)
