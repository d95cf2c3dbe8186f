"""Stellar Cartography - Extraction Module.

This package turns a game ResFile index into categorized data files
(static databases, schemas, FSD binaries, decoded pickles) and resolves
human-readable names for solar systems, constellations and regions from
the decoded localization catalogs.
"""

# Core library interface
from .pipeline import ExtractionPipeline
from .registry import MaterializerRegistry
from .manifest import classify, parse_manifest_line

# Core utilities
from .core import (
    AssetCategory,
    CatalogLoadError,
    ConfigurationError,
    DecodeError,
    ExtractionConfig,
    ExtractionSummary,
    LabelConfig,
    ManifestEntry,
    OutputLayout,
    decode_blob,
    is_sqlite_file,
)

# Label resolution
from .labels import resolve_labels, run_label_extraction

# CLI interface
from .cli import main

__version__ = "0.1.0"

# Register every materializer
MaterializerRegistry.discover_materializers()

__all__ = [
    # Primary library interface
    "ExtractionPipeline",
    "MaterializerRegistry",
    "parse_manifest_line",
    "classify",
    # Core utilities
    "AssetCategory",
    "CatalogLoadError",
    "ConfigurationError",
    "DecodeError",
    "ExtractionConfig",
    "ExtractionSummary",
    "LabelConfig",
    "ManifestEntry",
    "OutputLayout",
    "decode_blob",
    "is_sqlite_file",
    # Label resolution
    "resolve_labels",
    "run_label_extraction",
    # CLI
    "main",
]
