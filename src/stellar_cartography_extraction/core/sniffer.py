"""SQLite header detection for ``static`` entries."""

import sys
from pathlib import Path

# "SQLite format 3" followed by the null terminator
SQLITE_SIGNATURE = b"SQLite format 3\x00"
SIGNATURE_LENGTH = len(SQLITE_SIGNATURE)


def has_sqlite_signature(buffer: bytes) -> bool:
    """Return True if the first 16 bytes are the SQLite header string."""
    if len(buffer) < SIGNATURE_LENGTH:
        return False
    return bytes(buffer[:SIGNATURE_LENGTH]) == SQLITE_SIGNATURE


def is_sqlite_file(file_path: Path) -> bool:
    """Check whether a file starts with the SQLite header.

    Unreadable files are reported and treated as a non-match.
    """
    try:
        with open(file_path, "rb") as f:
            header = f.read(SIGNATURE_LENGTH)
    except OSError as e:
        print(f"Warning: Could not read {file_path} for SQLite check: {e}", file=sys.stderr)
        return False

    return has_sqlite_signature(header)
