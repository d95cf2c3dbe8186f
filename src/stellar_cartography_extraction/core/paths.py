"""Path helpers for resolving manifest entries against the filesystem.

Manifest paths come from game data, so every source and destination is
checked against its root before anything is read or written.
"""

import re
from pathlib import Path

# Dangerous characters to remove from destination filenames
DANGEROUS_FILENAME_CHARS = r'[<>:"|?*\x00-\x1f]'

# Scheme prefix carried by virtual resource paths
RES_SCHEME = "res:"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename by removing dangerous characters.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename safe for storage
    """
    # Remove dangerous characters
    sanitized = re.sub(DANGEROUS_FILENAME_CHARS, "", filename)
    # Remove path separators
    sanitized = sanitized.replace("/", "").replace("\\", "")
    return sanitized


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    This prevents path traversal through crafted manifest lines.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ValueError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ValueError(f"Path {path} escapes base directory {base_dir}")


def strip_res_scheme(respath: str) -> str:
    """Turn a virtual resource path into a relative directory fragment.

    Leading separators and entry delimiters are dropped.

    Example:
        "res:/dx9/model/" -> "dx9/model/"
        "res:|" -> ""
    """
    return respath.replace(RES_SCHEME, "", 1).lstrip("/\\|")


def resolve_source_path(base_dir: Path, source_relative_path: str) -> Path:
    """Locate an entry's source file under the source root.

    Raises:
        ValueError: If the relative path escapes the source root
    """
    source_path = base_dir / source_relative_path
    validate_path_safety(source_path, base_dir)
    return source_path
