"""ResFile index parsing and classification.

Each index line maps a virtual resource path to a file under the source
root, for example::

    res:/staticdata/mapobjects.static,a1/a1b2c3_mapobjects,0fe3...,123,456

which parses into respath ``res:/staticdata/``, filename ``mapobjects``,
filetype ``static`` and source path ``a1/a1b2c3_mapobjects``. Anything after
the source path (hashes, sizes) is ignored.
"""

import re
from collections.abc import Iterable, Iterator

from .core.types import AssetCategory, ManifestEntry

# {respath}{filename}.{filetype},{sourceDir}/{sourceFile}{rest}
# "|" may delimit the entry, so it is excluded from the captured names.
MANIFEST_LINE_PATTERN = re.compile(r"^(.*?)([^/|]+)\.([^,/|]+),([^/|]+/[^,|]+)(.*)$")

_CATEGORIES = {category.value: category for category in AssetCategory}


def parse_manifest_line(line: str) -> ManifestEntry | None:
    """Parse one index line.

    Returns:
        The parsed entry, or None if the line does not match the pattern
    """
    match = MANIFEST_LINE_PATTERN.match(line.rstrip("\r\n"))
    if not match:
        return None

    respath, filename, filetype, source_relative_path, _ = match.groups()
    return ManifestEntry(
        respath=respath,
        filename=filename,
        filetype=filetype,
        source_relative_path=source_relative_path,
    )


def iter_manifest_entries(lines: Iterable[str]) -> Iterator[ManifestEntry]:
    """Yield an entry for every line that matches, skipping the rest."""
    for line in lines:
        entry = parse_manifest_line(line)
        if entry is not None:
            yield entry


def classify(filetype: str) -> AssetCategory:
    """Map a declared file type onto its category.

    Only the exact tags static, schema, fsdbinary and pickle are special;
    every other type (including "other" itself) is AssetCategory.OTHER.
    """
    category = _CATEGORIES.get(filetype)
    if category is None:
        return AssetCategory.OTHER
    return category
