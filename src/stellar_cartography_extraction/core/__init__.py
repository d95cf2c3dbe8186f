"""Core utilities for extraction and label resolution.

This package contains the data model, error types, configuration,
the serialized-blob decoder, the SQLite header sniffer, path helpers
and schema validation shared by the pipeline and the label resolver.
"""

from .config import ExtractionConfig, LabelConfig, LabelKind, OutputLayout
from .decoder import DecodeError, convert_blob_to_json, decode_blob, to_jsonable
from .errors import (
    CatalogLoadError,
    ConfigurationError,
    ExtractionError,
    MaterializationError,
)
from .sniffer import SQLITE_SIGNATURE, has_sqlite_signature, is_sqlite_file
from .types import AssetCategory, ExtractionSummary, ManifestEntry, MaterializationResult
from .validator import validate_document, validate_with_error_details

__all__ = [
    "AssetCategory",
    "CatalogLoadError",
    "ConfigurationError",
    "DecodeError",
    "ExtractionConfig",
    "ExtractionError",
    "ExtractionSummary",
    "LabelConfig",
    "LabelKind",
    "ManifestEntry",
    "MaterializationError",
    "MaterializationResult",
    "OutputLayout",
    "SQLITE_SIGNATURE",
    "convert_blob_to_json",
    "decode_blob",
    "has_sqlite_signature",
    "is_sqlite_file",
    "to_jsonable",
    "validate_document",
    "validate_with_error_details",
]
