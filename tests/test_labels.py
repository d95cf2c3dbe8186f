"""Tests for stellar label resolution."""

import json
from pathlib import Path

import pytest

from stellar_cartography_extraction.core.config import (
    CONSTELLATIONS,
    REGIONS,
    SYSTEMS,
    LabelConfig,
    LabelKind,
)
from stellar_cartography_extraction.core.errors import CatalogLoadError
from stellar_cartography_extraction.labels import (
    LabelCatalogs,
    LocalizedStrings,
    build_message_index,
    discover_ids,
    export_labels,
    load_catalogs,
    parse_constellation_id,
    parse_region_id,
    parse_solar_system_id,
    resolve_labels,
    resolve_names,
    run_label_extraction,
)


@pytest.fixture
def catalogs(star_map, localization_index, localized_strings) -> LabelCatalogs:
    return LabelCatalogs(
        star_map=star_map,
        localization=localization_index,
        strings=LocalizedStrings.from_document(localized_strings),
    )


class TestDiscoverIds:
    """Test collection of IDs from the star map."""

    def test_union_of_all_levels(self, star_map) -> None:
        """Test that IDs listed anywhere in the hierarchy are found."""
        ids = discover_ids(star_map)

        assert ids.regions == {10000001}
        assert ids.constellations == {20000001, 20000002}
        assert ids.systems == {30000001, 30000002, 30000003, 30000004}

    def test_empty_star_map(self) -> None:
        """Test that missing sections yield empty sets."""
        ids = discover_ids({})

        assert ids.systems == set()
        assert ids.constellations == set()
        assert ids.regions == set()

    def test_for_kind(self, star_map) -> None:
        """Test lookup by label kind."""
        ids = discover_ids(star_map)

        assert ids.for_kind(REGIONS) == {10000001}


class TestLabelIdParsers:
    """Test the label-to-ID parsers."""

    def test_solar_system(self) -> None:
        """Test a solar system label."""
        assert parse_solar_system_id("solar_system_30000142") == 30000142

    def test_constellation(self) -> None:
        """Test a constellation label."""
        assert parse_constellation_id("constellation_20000020") == 20000020

    def test_region(self) -> None:
        """Test a region label."""
        assert parse_region_id("region_10000002") == 10000002

    @pytest.mark.parametrize(
        "label",
        ["solar_system_", "solar_system_abc", "solar_system_123_name", "region_10000002", ""],
    )
    def test_non_matching_system_labels(self, label: str) -> None:
        """Test that labels without a trailing numeric ID are rejected."""
        assert parse_solar_system_id(label) is None

    @pytest.mark.parametrize("label", ["region_10000001\n", "region_10000001 ", "region_1x"])
    def test_digits_must_end_the_label(self, label: str) -> None:
        """Test that trailing newlines and other characters are not accepted."""
        assert parse_region_id(label) is None

    @pytest.mark.parametrize(
        "label", ["subregion_10000001", "xregion_10000001", "2region_10000001"]
    )
    def test_prefix_inside_a_word_is_rejected(self, label: str) -> None:
        """Test that a prefix glued to a preceding word does not match."""
        assert parse_region_id(label) is None

    def test_prefix_after_separator(self) -> None:
        """Test that a prefix following a separator still matches."""
        assert parse_region_id("map_region_10000001") == 10000001
        assert parse_region_id("map.region_10000001") == 10000001


class TestBuildMessageIndex:
    """Test mapping object IDs to message IDs."""

    def test_maps_known_ids(self, star_map, localization_index) -> None:
        """Test that labels for IDs in the star map are mapped."""
        index = build_message_index(localization_index, discover_ids(star_map))

        assert index.for_kind(SYSTEMS) == {30000001: 500, 30000002: 501}
        assert index.for_kind(CONSTELLATIONS) == {20000001: 600}
        assert index.for_kind(REGIONS) == {10000001: 700}

    def test_ids_missing_from_star_map_are_dropped(self, star_map, localization_index) -> None:
        """Test that a label for an unknown object is counted and skipped."""
        index = build_message_index(localization_index, discover_ids(star_map))

        assert 39999999 not in index.for_kind(SYSTEMS)
        assert index.unknown_ids["systems"] == 1

    def test_unrecognized_tags_are_counted(self, star_map, localization_index) -> None:
        """Test that entries outside the map taxonomy are tallied."""
        index = build_message_index(localization_index, discover_ids(star_map))

        assert index.unrecognized_tags == {"UI/Generic": 1}

    def test_unparsable_labels_are_counted(self, star_map) -> None:
        """Test that a label under a known tag without an ID is tallied."""
        localization = {
            "labels": {
                "900": {"FullPath": "Map/Regions", "label": "region_unknown"},
                "901": {"FullPath": "Map/Regions"},
            }
        }

        index = build_message_index(localization, discover_ids(star_map))

        assert index.for_kind(REGIONS) == {}
        assert index.unparsed_labels["regions"] == 2

    def test_custom_kind(self) -> None:
        """Test that path tags and prefixes come from the kind definition."""
        kind = LabelKind("systems", "Universe/Systems", "system_", "systems.json")
        localization = {"labels": {"42": {"FullPath": "Universe/Systems", "label": "system_7"}}}
        ids = discover_ids({"solarSystems": {"7": {}}})

        index = build_message_index(localization, ids, kinds=[kind])

        assert index.for_kind(kind) == {7: 42}


class TestLocalizedStrings:
    """Test the string table wrapper."""

    def test_list_form(self, localized_strings) -> None:
        """Test that the table is taken from the second element."""
        strings = LocalizedStrings.from_document(localized_strings)

        assert strings.display_name(500) == "Jita"
        assert 500 in strings
        assert len(strings) == 6

    def test_dict_form(self) -> None:
        """Test that a bare mapping is accepted."""
        strings = LocalizedStrings.from_document({"1": ["Amarr"]})

        assert strings.display_name(1) == "Amarr"

    @pytest.mark.parametrize("entry", [[None], [], [""], "Jita", [42]])
    def test_entries_without_text(self, entry) -> None:
        """Test that entries with no usable first element give no name."""
        strings = LocalizedStrings.from_document({"1": entry})

        assert strings.display_name(1) is None

    def test_missing_message(self) -> None:
        """Test a message ID absent from the table."""
        assert LocalizedStrings.from_document({}).display_name(1) is None


class TestResolveLabels:
    """Test the full three-stage resolution."""

    def test_system_name(self, catalogs) -> None:
        """Test that a system is resolved through its message to its name."""
        resolution = resolve_labels(catalogs)

        assert resolution.combined()["systems"] == {"30000001": "Jita"}

    def test_message_without_text_is_omitted(self, catalogs) -> None:
        """Test that a mapped message with no text leaves the ID out."""
        resolution = resolve_labels(catalogs)

        assert 30000002 not in resolution.label_map(SYSTEMS)

    def test_all_kinds(self, catalogs) -> None:
        """Test the combined output across kinds."""
        combined = resolve_labels(catalogs).combined()

        assert combined == {
            "systems": {"30000001": "Jita"},
            "constellations": {"20000001": "Kimotoro"},
            "regions": {"10000001": "The Forge"},
        }

    def test_resolve_names(self, localized_strings) -> None:
        """Test the final lookup stage on its own."""
        strings = LocalizedStrings.from_document(localized_strings)

        assert resolve_names({1: 500, 2: 501, 3: 999}, strings) == {1: "Jita"}

    def test_output_keys_are_sorted_numerically(self) -> None:
        """Test that exported IDs are ordered as numbers, not strings."""
        catalogs = LabelCatalogs(
            star_map={"solarSystems": {"9": {}, "10": {}}},
            localization={
                "labels": {
                    "1": {"FullPath": "Map/SolarSystems", "label": "solar_system_10"},
                    "2": {"FullPath": "Map/SolarSystems", "label": "solar_system_9"},
                }
            },
            strings=LocalizedStrings.from_document({"1": ["Ten"], "2": ["Nine"]}),
        )

        combined = resolve_labels(catalogs).combined()

        assert list(combined["systems"]) == ["9", "10"]


class TestLoadCatalogs:
    """Test catalog loading and validation."""

    def test_loads_all_three(self, catalog_dir: Path) -> None:
        """Test that valid catalogs load."""
        catalogs = load_catalogs(LabelConfig(json_dir=catalog_dir))

        assert "regions" in catalogs.star_map
        assert "500" in catalogs.localization["labels"]
        assert catalogs.strings.display_name(700) == "The Forge"

    def test_missing_file(self, catalog_dir: Path) -> None:
        """Test that a missing catalog aborts loading."""
        config = LabelConfig(json_dir=catalog_dir)
        config.strings_path.unlink()

        with pytest.raises(CatalogLoadError, match="file not found"):
            load_catalogs(config)

    def test_invalid_json(self, catalog_dir: Path) -> None:
        """Test that a corrupt catalog aborts loading."""
        config = LabelConfig(json_dir=catalog_dir)
        config.star_map_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogLoadError, match="invalid JSON"):
            load_catalogs(config)

    def test_structure_is_validated(self, catalog_dir: Path) -> None:
        """Test that a localization index without labels is rejected."""
        config = LabelConfig(json_dir=catalog_dir)
        config.localization_index_path.write_text(json.dumps({"other": {}}), encoding="utf-8")

        with pytest.raises(CatalogLoadError, match="labels"):
            load_catalogs(config)

    def test_error_names_the_file(self, catalog_dir: Path) -> None:
        """Test that the error message identifies the catalog."""
        config = LabelConfig(json_dir=catalog_dir)
        config.star_map_path.unlink()

        with pytest.raises(CatalogLoadError) as exc_info:
            load_catalogs(config)

        assert exc_info.value.path == config.star_map_path
        assert "starmapcache.json" in str(exc_info.value)


class TestExportLabels:
    """Test writing label files."""

    def test_writes_per_kind_and_combined(self, catalogs, tmp_path: Path) -> None:
        """Test that all four files are written with the expected content."""
        config = LabelConfig(json_dir=tmp_path / "json")

        written = export_labels(resolve_labels(catalogs), config)

        assert set(written) == {"systems", "constellations", "regions", "combined"}
        systems = json.loads((tmp_path / "json" / "system_labels.json").read_text(encoding="utf-8"))
        assert systems == {"30000001": "Jita"}
        regions = json.loads((tmp_path / "json" / "region_labels.json").read_text(encoding="utf-8"))
        assert regions == {"10000001": "The Forge"}
        combined = json.loads(written["combined"].read_text(encoding="utf-8"))
        assert set(combined) == {"systems", "constellations", "regions"}
        assert written["combined"].name == "stellar_labels.json"

    def test_non_ascii_names_are_kept(self, tmp_path: Path) -> None:
        """Test that names are written as UTF-8 text."""
        catalogs = LabelCatalogs(
            star_map={"regions": {"1": {}}},
            localization={"labels": {"5": {"FullPath": "Map/Regions", "label": "region_1"}}},
            strings=LocalizedStrings.from_document({"5": ["Étoile"]}),
        )
        config = LabelConfig(json_dir=tmp_path)

        export_labels(resolve_labels(catalogs), config)

        assert "Étoile" in (tmp_path / "region_labels.json").read_text(encoding="utf-8")


class TestRunLabelExtraction:
    """Test the end-to-end label run."""

    def test_end_to_end(self, catalog_dir: Path, capsys) -> None:
        """Test that a run loads, resolves, writes and prints samples."""
        resolution = run_label_extraction(LabelConfig(json_dir=catalog_dir))

        assert resolution.combined()["constellations"] == {"20000001": "Kimotoro"}
        assert (catalog_dir / "stellar_labels.json").exists()
        assert (catalog_dir / "constellation_labels.json").exists()
        err = capsys.readouterr().err
        assert "Example systems labels:" in err
        assert "30000001: Jita" in err
