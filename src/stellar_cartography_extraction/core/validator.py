"""JSON Schema validation for label catalogs and label exports.

Schemas ship with the package in the schemas/ directory.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

# stellar_cartography_extraction/core/validator.py -> stellar_cartography_extraction/schemas/
SCHEMA_DIR = Path(__file__).parent.parent / "schemas"

STAR_MAP_SCHEMA = "starmap.schema.json"
LOCALIZATION_INDEX_SCHEMA = "localization_index.schema.json"
LOCALIZED_STRINGS_SCHEMA = "localized_strings.schema.json"
STELLAR_LABELS_SCHEMA = "stellar_labels.schema.json"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the package.

    Args:
        name: Schema filename, e.g. "starmap.schema.json"

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    schema_path = SCHEMA_DIR / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_document(document: Any, schema_name: str) -> None:
    """Validate a document against one of the packaged schemas.

    Raises:
        ValidationError: If the document doesn't conform to the schema
        FileNotFoundError: If schema file is missing
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=document, schema=schema)


def describe_validation_error(error: ValidationError) -> str:
    """Build a one-line description of where and why validation failed."""
    error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
    return f"Validation error at {error_path}: {error.message}"


def validate_with_error_details(document: Any, schema_name: str) -> tuple[bool, str | None]:
    """Validate a document and return detailed error information.

    This is a convenience wrapper that catches validation errors and
    returns user-friendly error messages.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_document(document, schema_name)
        return True, None
    except ValidationError as e:
        return False, describe_validation_error(e)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
