"""Type definitions for manifest entries, run results and label catalogs.

The TypedDict classes mirror the JSON documents read and written by the
label resolver (see the schemas/ directory).
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TypedDict


class AssetCategory(str, Enum):
    """Declared manifest file types that select a materializer.

    Anything that is not one of the known tags is ``OTHER``; the raw tag
    stays on the entry as ``ManifestEntry.filetype``.
    """

    STATIC = "static"
    SCHEMA = "schema"
    BINARY_FORMAT = "fsdbinary"
    SERIALIZED_BLOB = "pickle"
    OTHER = "other"


@dataclass(frozen=True)
class ManifestEntry:
    """One parsed line of the ResFile index."""

    respath: str  # Virtual path prefix, e.g. "res:/dx9/model/"
    filename: str  # File stem
    filetype: str  # Declared type tag, e.g. "static", "pickle", "red"
    source_relative_path: str  # "{sourceDir}/{sourceFile}" under the source root


@dataclass
class MaterializationResult:
    """Outcome of materializing one manifest entry."""

    entry: ManifestEntry
    category: AssetCategory
    outputs: list[Path] = field(default_factory=list)
    sqlite_detected: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ExtractionSummary:
    """Run-scoped counters, filled in by the pipeline as results come back."""

    processed: int = 0
    by_category: Counter = field(default_factory=Counter)
    serialized_blobs: int = 0
    sqlite_detected: int = 0
    outputs_written: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)

    def record_entry(self, category: AssetCategory) -> None:
        self.processed += 1
        self.by_category[category.value] += 1
        if category is AssetCategory.SERIALIZED_BLOB:
            self.serialized_blobs += 1

    def record_result(self, result: MaterializationResult) -> None:
        self.outputs_written += len(result.outputs)
        if result.sqlite_detected:
            self.sqlite_detected += 1
        if result.error is not None:
            self.failures.append((result.entry.filename, result.error))

    def record_failure(self, filename: str, cause: str) -> None:
        self.failures.append((filename, cause))

    def as_dict(self) -> dict:
        return {
            "processed": self.processed,
            "by_category": dict(self.by_category),
            "serialized_blobs": self.serialized_blobs,
            "sqlite_detected": self.sqlite_detected,
            "outputs_written": self.outputs_written,
            "failures": [
                {"filename": filename, "cause": cause} for filename, cause in self.failures
            ],
        }


class RegionRecord(TypedDict, total=False):
    """Region entry in the star map cache."""

    constellationIDs: list[int]
    solarSystemIDs: list[int]


class ConstellationRecord(TypedDict, total=False):
    """Constellation entry in the star map cache."""

    solarSystemIDs: list[int]


class StarMapCatalog(TypedDict, total=False):
    """Decoded starmapcache document. Keys of each map are stringified IDs."""

    regions: dict[str, RegionRecord]
    constellations: dict[str, ConstellationRecord]
    solarSystems: dict[str, dict]


class LocalizationLabel(TypedDict, total=False):
    """One entry of the localization index, keyed by message ID."""

    FullPath: str  # Category tag, e.g. "Map/SolarSystems"
    label: str  # Identifying label, e.g. "solar_system_30000001"


class LocalizationIndex(TypedDict):
    """Decoded localization_fsd_main document."""

    labels: dict[str, LocalizationLabel]


class StellarLabels(TypedDict):
    """Combined label export (stellar_labels.json)."""

    systems: dict[str, str]
    constellations: dict[str, str]
    regions: dict[str, str]
