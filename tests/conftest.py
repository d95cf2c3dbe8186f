"""Shared fixtures for extraction and label tests."""

import json
from pathlib import Path

import pytest

from stellar_cartography_extraction.core.config import LabelConfig, OutputLayout
from stellar_cartography_extraction.core.sniffer import SQLITE_SIGNATURE

# A header that passes the sniffer, padded like a real database page
SQLITE_BYTES = SQLITE_SIGNATURE + b"\x10\x00\x01\x01" + b"\x00" * 80


@pytest.fixture
def sqlite_bytes() -> bytes:
    return SQLITE_BYTES


@pytest.fixture
def layout(tmp_path: Path) -> OutputLayout:
    """Output layout rooted in a temporary data directory, already created."""
    output = OutputLayout(tmp_path / "data")
    output.ensure()
    return output


@pytest.fixture
def res_dir(tmp_path: Path) -> Path:
    """Empty ResFiles root directory."""
    directory = tmp_path / "ResFiles"
    directory.mkdir()
    return directory


@pytest.fixture
def write_source(res_dir: Path):
    """Write a file under the ResFiles root and return its path."""

    def _write(relative_path: str, content: bytes) -> Path:
        path = res_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _write


@pytest.fixture
def star_map() -> dict:
    return {
        "regions": {
            "10000001": {
                "constellationIDs": [20000001],
                "solarSystemIDs": [30000001, 30000002],
            }
        },
        "constellations": {
            "20000001": {"solarSystemIDs": [30000001, 30000003]},
            "20000002": {"solarSystemIDs": []},
        },
        "solarSystems": {"30000004": {"security": 0.5}},
    }


@pytest.fixture
def localization_index() -> dict:
    return {
        "labels": {
            "500": {"FullPath": "Map/SolarSystems", "label": "solar_system_30000001"},
            "501": {"FullPath": "Map/SolarSystems", "label": "solar_system_30000002"},
            "502": {"FullPath": "Map/SolarSystems", "label": "solar_system_39999999"},
            "600": {"FullPath": "Map/Constellations", "label": "constellation_20000001"},
            "700": {"FullPath": "Map/Regions", "label": "region_10000001"},
            "800": {"FullPath": "UI/Generic", "label": "ok_button"},
        }
    }


@pytest.fixture
def localized_strings() -> list:
    return [
        "en-us",
        {
            "500": ["Jita", None, None],
            "501": [None],
            "502": ["Nowhere", None, None],
            "600": ["Kimotoro", None, None],
            "700": ["The Forge", None, None],
            "800": ["OK", None, None],
        },
    ]


@pytest.fixture
def catalog_dir(tmp_path: Path, star_map, localization_index, localized_strings) -> Path:
    """JSON directory holding the three catalogs under their default names."""
    directory = tmp_path / "data" / "json"
    directory.mkdir(parents=True)
    config = LabelConfig(json_dir=directory)

    config.star_map_path.write_text(json.dumps(star_map), encoding="utf-8")
    config.localization_index_path.write_text(json.dumps(localization_index), encoding="utf-8")
    config.strings_path.write_text(json.dumps(localized_strings), encoding="utf-8")
    return directory
