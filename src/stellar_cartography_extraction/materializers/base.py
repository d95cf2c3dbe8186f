"""Base class for materializers.

A materializer performs the concrete I/O for one asset category: copying
the source file into its category directory and, for some categories,
converting or sniffing it first.
"""

import shutil
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from ..core.config import OutputLayout
from ..core.errors import MaterializationError
from ..core.paths import resolve_source_path, sanitize_filename
from ..core.types import AssetCategory, ManifestEntry, MaterializationResult


class Materializer(ABC):
    """Abstract base class for category-specific materializers.

    Implementations raise MaterializationError from process(); materialize()
    never raises for per-entry problems. Failures are reported on stderr and
    returned in the MaterializationResult so the run can continue with the
    next entry.
    """

    category: AssetCategory

    def __init__(self, layout: OutputLayout, quiet: bool = False):
        """Initialize the materializer.

        Args:
            layout: Output directory layout to write into
            quiet: Suppress per-file success messages
        """
        self.layout = layout
        self.quiet = quiet

    def materialize(self, entry: ManifestEntry, source_root: Path) -> MaterializationResult:
        """Materialize one manifest entry.

        Args:
            entry: The parsed manifest entry
            source_root: Root directory holding the ResFiles

        Returns:
            Result listing the files written and any error
        """
        result = MaterializationResult(entry=entry, category=self.category)

        try:
            source_path = resolve_source_path(source_root, entry.source_relative_path)
        except ValueError as e:
            return self.fail(result, MaterializationError(entry.filename, str(e)))

        try:
            self.process(entry, source_path, result)
        except MaterializationError as e:
            self.fail(result, e)
        return result

    @abstractmethod
    def process(
        self, entry: ManifestEntry, source_path: Path, result: MaterializationResult
    ) -> None:
        """Write the entry's outputs, recording each one on result.

        Raises:
            MaterializationError: If a step fails; outputs already recorded stay
        """
        pass

    def destination_name(self, entry: ManifestEntry, extension: str) -> str:
        return sanitize_filename(f"{entry.filename}.{extension}")

    def copy(self, source_path: Path, destination: Path, result: MaterializationResult) -> None:
        """Copy a file, overwriting any previous output.

        Raises:
            MaterializationError: If the copy fails
        """
        try:
            shutil.copyfile(source_path, destination)
        except OSError as e:
            raise MaterializationError(
                result.entry.filename, f"Failed to copy {source_path} to {destination}: {e}"
            ) from e

        result.outputs.append(destination)
        self.log(f"Copied {source_path} to {destination}")

    def log(self, message: str) -> None:
        if not self.quiet:
            print(message, file=sys.stderr)

    def fail(
        self, result: MaterializationResult, error: MaterializationError
    ) -> MaterializationResult:
        print(f"Error: Failed to process {error}", file=sys.stderr)
        cause = error.cause
        result.error = cause if result.error is None else f"{result.error}; {cause}"
        return result
