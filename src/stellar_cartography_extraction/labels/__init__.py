"""Label resolution for solar systems, constellations and regions."""

from .catalogs import LabelCatalogs, LocalizedStrings, load_catalogs
from .resolver import (
    DiscoveredIds,
    LabelResolution,
    MessageIndex,
    build_message_index,
    discover_ids,
    export_labels,
    parse_constellation_id,
    parse_region_id,
    parse_solar_system_id,
    resolve_labels,
    resolve_names,
    run_label_extraction,
)

__all__ = [
    "DiscoveredIds",
    "LabelCatalogs",
    "LabelResolution",
    "LocalizedStrings",
    "MessageIndex",
    "build_message_index",
    "discover_ids",
    "export_labels",
    "load_catalogs",
    "parse_constellation_id",
    "parse_region_id",
    "parse_solar_system_id",
    "resolve_labels",
    "resolve_names",
    "run_label_extraction",
]
