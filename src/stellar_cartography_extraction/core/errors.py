"""Exception hierarchy for the extraction tool.

Fatal errors (configuration, catalog loading) propagate to the CLI and end
the run. Per-entry errors are caught by the materializers and recorded in
the run summary instead of being raised.
"""


class ExtractionError(Exception):
    """Base class for all extraction errors."""


class ConfigurationError(ExtractionError):
    """A required setting (environment path, worker count) is missing or invalid."""


class CatalogLoadError(ExtractionError):
    """A label catalog file is missing, unreadable or structurally invalid."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load catalog {path}: {reason}")


class MaterializationError(ExtractionError):
    """Copying or converting a single manifest entry failed."""

    def __init__(self, filename: str, cause: str):
        self.filename = filename
        self.cause = cause
        super().__init__(f"{filename}: {cause}")


class DecodeError(ExtractionError):
    """A serialized blob could not be decoded."""
