"""Fallback materializer for every other file type.

Files keep their virtual directory structure under raw/, e.g.
``res:/dx9/model/ship.red`` lands in ``raw/dx9/model/ship.red``.
"""

from pathlib import Path

from ..core.errors import MaterializationError
from ..core.paths import strip_res_scheme, validate_path_safety
from ..core.types import AssetCategory, ManifestEntry, MaterializationResult
from ..registry import MaterializerRegistry
from .base import Materializer


class RawMaterializer(Materializer):
    """Copies into raw/<respath>/{filename}.{filetype}."""

    category = AssetCategory.OTHER

    def process(
        self, entry: ManifestEntry, source_path: Path, result: MaterializationResult
    ) -> None:
        directory = self.layout.raw / strip_res_scheme(entry.respath)

        try:
            validate_path_safety(directory, self.layout.raw)
            directory.mkdir(parents=True, exist_ok=True)
        except (ValueError, OSError) as e:
            raise MaterializationError(entry.filename, str(e)) from e

        destination = directory / self.destination_name(entry, entry.filetype)
        self.copy(source_path, destination, result)


MaterializerRegistry.register_factory(AssetCategory.OTHER, RawMaterializer)
