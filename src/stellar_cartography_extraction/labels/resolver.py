"""Resolution of human-readable names for stellar objects.

The catalogs share no foreign keys, so the mapping is rebuilt in three
passes:

1. Collect every solar system, constellation and region ID from the star map.
2. Find the localization message for each ID by parsing labels such as
   ``solar_system_30000001`` under the kind's path tag.
3. Look each message up in the string table.

An ID that drops out at any stage is simply missing from the output.
"""

import json
import re
import sys
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from ..core.config import CONSTELLATIONS, REGIONS, SYSTEMS, LabelConfig, LabelKind
from ..core.types import LocalizationIndex, StarMapCatalog, StellarLabels
from ..core.validator import STELLAR_LABELS_SCHEMA, validate_document
from .catalogs import LabelCatalogs, LocalizedStrings, load_catalogs

DEFAULT_KINDS = (SYSTEMS, CONSTELLATIONS, REGIONS)

# Number of sample labels printed per kind after a run
SAMPLE_SIZE = 5


@dataclass
class DiscoveredIds:
    """Every ID seen anywhere in the star map, per kind."""

    systems: set[int] = field(default_factory=set)
    constellations: set[int] = field(default_factory=set)
    regions: set[int] = field(default_factory=set)

    def for_kind(self, kind: LabelKind) -> set[int]:
        return getattr(self, kind.section)


def discover_ids(star_map: StarMapCatalog) -> DiscoveredIds:
    """Collect solar system, constellation and region IDs from every level."""
    ids = DiscoveredIds()

    for region_id, region in star_map.get("regions", {}).items():
        ids.regions.add(int(region_id))
        ids.systems.update(region.get("solarSystemIDs") or [])
        ids.constellations.update(region.get("constellationIDs") or [])

    for constellation_id, constellation in star_map.get("constellations", {}).items():
        ids.constellations.add(int(constellation_id))
        ids.systems.update(constellation.get("solarSystemIDs") or [])

    for system_id in star_map.get("solarSystems", {}):
        ids.systems.add(int(system_id))

    return ids


def parse_label_id(label: str, prefix: str) -> int | None:
    """Extract the numeric ID that follows prefix at the end of a label.

    The prefix must start the label or follow a non-alphanumeric character,
    and the digits must run to the very end.

    Example:
        parse_label_id("region_10000001", "region_") -> 10000001
        parse_label_id("subregion_10000001", "region_") -> None
    """
    match = re.search(r"(?<![A-Za-z0-9])" + re.escape(prefix) + r"(\d+)\Z", label)
    if not match:
        return None
    return int(match.group(1))


def parse_solar_system_id(label: str) -> int | None:
    return parse_label_id(label, "solar_system_")


def parse_constellation_id(label: str) -> int | None:
    return parse_label_id(label, "constellation_")


def parse_region_id(label: str) -> int | None:
    return parse_label_id(label, "region_")


LABEL_ID_PARSERS: dict[str, Callable[[str], int | None]] = {
    "solar_system_": parse_solar_system_id,
    "constellation_": parse_constellation_id,
    "region_": parse_region_id,
}


def parser_for(kind: LabelKind) -> Callable[[str], int | None]:
    parser = LABEL_ID_PARSERS.get(kind.label_prefix)
    if parser is None:
        return partial(parse_label_id, prefix=kind.label_prefix)
    return parser


@dataclass
class MessageIndex:
    """Object ID to message ID, per kind, plus what was dropped on the way."""

    message_ids: dict[str, dict[int, int]] = field(default_factory=dict)
    unparsed_labels: Counter = field(default_factory=Counter)
    unknown_ids: Counter = field(default_factory=Counter)
    unrecognized_tags: Counter = field(default_factory=Counter)

    def for_kind(self, kind: LabelKind) -> dict[int, int]:
        return self.message_ids.setdefault(kind.section, {})


def build_message_index(
    localization: LocalizationIndex,
    ids: DiscoveredIds,
    kinds: Iterable[LabelKind] = DEFAULT_KINDS,
) -> MessageIndex:
    """Map each discovered object ID to its localization message ID.

    Entries whose path tag matches no kind are counted in
    ``unrecognized_tags`` so unexpected taxonomies show up in the report.
    """
    kinds_by_tag = {kind.path_tag: kind for kind in kinds}
    index = MessageIndex()
    for kind in kinds_by_tag.values():
        index.for_kind(kind)

    for message_key, entry in localization.get("labels", {}).items():
        path_tag = entry.get("FullPath")
        kind = kinds_by_tag.get(path_tag)
        if kind is None:
            index.unrecognized_tags[path_tag] += 1
            continue

        label = entry.get("label")
        object_id = parser_for(kind)(label) if label else None
        if object_id is None:
            index.unparsed_labels[kind.section] += 1
            continue

        if object_id not in ids.for_kind(kind):
            index.unknown_ids[kind.section] += 1
            continue

        index.for_kind(kind)[object_id] = int(message_key)

    return index


def resolve_names(message_ids: dict[int, int], strings: LocalizedStrings) -> dict[int, str]:
    """Look up the display name of every mapped message."""
    names: dict[int, str] = {}
    for object_id, message_id in message_ids.items():
        name = strings.display_name(message_id)
        if name is not None:
            names[object_id] = name
    return names


def _stringify(labels: dict[int, str]) -> dict[str, str]:
    return {str(object_id): labels[object_id] for object_id in sorted(labels)}


@dataclass
class LabelResolution:
    """Result of a label run: one ID to name map per kind."""

    kinds: tuple[LabelKind, ...]
    ids: DiscoveredIds
    message_index: MessageIndex
    labels: dict[str, dict[int, str]]

    def label_map(self, kind: LabelKind) -> dict[int, str]:
        return self.labels.get(kind.section, {})

    def combined(self) -> StellarLabels:
        """The combined export, keyed by section with stringified IDs."""
        return {  # type: ignore[return-value]
            kind.section: _stringify(self.label_map(kind)) for kind in self.kinds
        }


def resolve_labels(
    catalogs: LabelCatalogs, kinds: Iterable[LabelKind] = DEFAULT_KINDS
) -> LabelResolution:
    """Run all three resolution passes and report the count at each stage."""
    kinds = tuple(kinds)

    print("Extracting IDs from star map...", file=sys.stderr)
    ids = discover_ids(catalogs.star_map)
    for kind in kinds:
        print(f"Found {len(ids.for_kind(kind))} unique {kind.section} IDs", file=sys.stderr)

    print("Building message ID mappings...", file=sys.stderr)
    message_index = build_message_index(catalogs.localization, ids, kinds)
    for kind in kinds:
        print(
            f"Found {len(message_index.for_kind(kind))} {kind.section} message ID mappings "
            f"({message_index.unparsed_labels[kind.section]} unparsed labels, "
            f"{message_index.unknown_ids[kind.section]} IDs not in star map)",
            file=sys.stderr,
        )
    if message_index.unrecognized_tags:
        total = sum(message_index.unrecognized_tags.values())
        print(
            f"Skipped {total} entries under {len(message_index.unrecognized_tags)} "
            "unrecognized path tags, most common:",
            file=sys.stderr,
        )
        for tag, count in message_index.unrecognized_tags.most_common(SAMPLE_SIZE):
            print(f"  {tag}: {count}", file=sys.stderr)

    print("Extracting names from string table...", file=sys.stderr)
    labels = {
        kind.section: resolve_names(message_index.for_kind(kind), catalogs.strings)
        for kind in kinds
    }
    for kind in kinds:
        print(
            f"Successfully extracted {len(labels[kind.section])} {kind.section} labels",
            file=sys.stderr,
        )

    return LabelResolution(kinds=kinds, ids=ids, message_index=message_index, labels=labels)


def _write_json(path: Path, data: dict) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def export_labels(resolution: LabelResolution, config: LabelConfig) -> dict[str, Path]:
    """Write the per-kind label files and the combined file.

    Returns:
        Mapping of section name (and "combined") to the file written

    Raises:
        jsonschema.ValidationError: If the combined labels are malformed
        OSError: If a file cannot be written
    """
    combined = resolution.combined()
    validate_document(combined, STELLAR_LABELS_SCHEMA)

    config.json_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}

    for kind in resolution.kinds:
        output_path = config.json_dir / kind.output_file
        _write_json(output_path, combined[kind.section])  # type: ignore[literal-required]
        print(f"{kind.section.capitalize()} labels saved to {output_path}", file=sys.stderr)
        written[kind.section] = output_path

    combined_path = config.json_dir / config.combined_file
    _write_json(combined_path, dict(combined))
    print(f"Combined labels saved to {combined_path}", file=sys.stderr)
    written["combined"] = combined_path

    return written


def print_samples(resolution: LabelResolution, sample_size: int = SAMPLE_SIZE) -> None:
    for kind in resolution.kinds:
        print(f"\nExample {kind.section} labels:", file=sys.stderr)
        labels = resolution.label_map(kind)
        for object_id in sorted(labels)[:sample_size]:
            print(f"  {object_id}: {labels[object_id]}", file=sys.stderr)


def run_label_extraction(config: LabelConfig) -> LabelResolution:
    """Load the catalogs, resolve every label and write the exports.

    Raises:
        CatalogLoadError: If any catalog is missing or malformed
    """
    print("Starting stellar label extraction...", file=sys.stderr)
    catalogs = load_catalogs(config)
    resolution = resolve_labels(catalogs, config.kinds)
    export_labels(resolution, config)
    print_samples(resolution)
    return resolution
