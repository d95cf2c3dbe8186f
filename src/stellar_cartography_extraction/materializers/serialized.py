"""Materializer for ``pickle`` entries.

The blob is copied into pickle/ and the copy is decoded into json/. The
star map cache and the localization tables used by the label resolver
arrive this way.
"""

import sys
from pathlib import Path

from ..core.decoder import DecodeError, convert_blob_to_json
from ..core.errors import MaterializationError
from ..core.types import AssetCategory, ManifestEntry, MaterializationResult
from ..registry import MaterializerRegistry
from .base import Materializer

# Filename fragment that marks the galaxy map cache
STARMAP_MARKER = "starmap"


class SerializedBlobMaterializer(Materializer):
    """Copies serialized blobs and writes their decoded JSON next to them."""

    category = AssetCategory.SERIALIZED_BLOB

    def process(
        self, entry: ManifestEntry, source_path: Path, result: MaterializationResult
    ) -> None:
        blob_destination = self.layout.pickle / self.destination_name(entry, "pickle")
        self.copy(source_path, blob_destination, result)

        json_destination = self.layout.json / self.destination_name(entry, "json")
        try:
            convert_blob_to_json(blob_destination, json_destination)
        except (DecodeError, OSError) as e:
            raise MaterializationError(
                entry.filename, f"Failed to convert {blob_destination} to JSON: {e}"
            ) from e

        result.outputs.append(json_destination)
        self.log(f"Converted {blob_destination} to {json_destination}")

        if STARMAP_MARKER in entry.filename:
            print(f"Found starmap data: {json_destination}", file=sys.stderr)


MaterializerRegistry.register_factory(
    AssetCategory.SERIALIZED_BLOB, SerializedBlobMaterializer
)
