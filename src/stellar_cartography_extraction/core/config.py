"""Run configuration: environment paths, output layout and label settings.

Values come from the process environment, optionally seeded from a
``.env`` file via python-dotenv. CLI flags override them.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError

INDEX_PATH_VAR = "RES_FILE_INDEX_PATH"
RES_DIR_VAR = "RES_FILES_BASE_DIR"
DATA_DIR_VAR = "STELLAR_DATA_DIR"
WORKERS_VAR = "EXTRACT_WORKERS"

DEFAULT_DATA_DIR = Path("data")
DEFAULT_WORKERS = 8


def parse_workers(value: str | int) -> int:
    """Parse a worker count, which must be a positive integer.

    Raises:
        ConfigurationError: If the value is not a positive integer
    """
    try:
        workers = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Worker count must be an integer, got {value!r}") from None

    if workers < 1:
        raise ConfigurationError(f"Worker count must be at least 1, got {workers}")
    return workers


@dataclass(frozen=True)
class OutputLayout:
    """Destination directories, all rooted at the data directory."""

    root: Path

    @property
    def raw(self) -> Path:
        return self.root / "raw"

    @property
    def sqlite(self) -> Path:
        return self.root / "sqlite"

    @property
    def schema(self) -> Path:
        return self.root / "schema"

    @property
    def fsdbinary(self) -> Path:
        return self.root / "fsdbinary" / "src"

    @property
    def static(self) -> Path:
        return self.root / "static"

    @property
    def pickle(self) -> Path:
        return self.root / "pickle"

    @property
    def json(self) -> Path:
        return self.root / "json"

    def directories(self) -> list[Path]:
        return [
            self.root,
            self.raw,
            self.sqlite,
            self.schema,
            self.fsdbinary,
            self.static,
            self.pickle,
            self.json,
        ]

    def ensure(self) -> None:
        """Create every destination directory. Safe to call repeatedly."""
        for directory in self.directories():
            directory.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class ExtractionConfig:
    """Settings for one manifest extraction run."""

    index_path: Path
    res_files_base_dir: Path
    data_dir: Path = DEFAULT_DATA_DIR
    workers: int = DEFAULT_WORKERS

    @property
    def layout(self) -> OutputLayout:
        return OutputLayout(self.data_dir)

    @classmethod
    def from_env(
        cls,
        index_path: Path | None = None,
        res_files_base_dir: Path | None = None,
        data_dir: Path | None = None,
        workers: int | None = None,
        environ: dict[str, str] | None = None,
    ) -> "ExtractionConfig":
        """Build a config from explicit values, falling back to the environment.

        Args:
            index_path: Overrides RES_FILE_INDEX_PATH
            res_files_base_dir: Overrides RES_FILES_BASE_DIR
            data_dir: Overrides STELLAR_DATA_DIR
            workers: Overrides EXTRACT_WORKERS
            environ: Environment mapping; defaults to os.environ after
                loading a .env file

        Raises:
            ConfigurationError: If either required path is missing
        """
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)

        index_value = index_path or environ.get(INDEX_PATH_VAR)
        res_dir_value = res_files_base_dir or environ.get(RES_DIR_VAR)

        missing = [
            name
            for name, value in ((INDEX_PATH_VAR, index_value), (RES_DIR_VAR, res_dir_value))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Environment variables {' and '.join(missing)} must be set"
            )

        return cls(
            index_path=Path(index_value),
            res_files_base_dir=Path(res_dir_value),
            data_dir=Path(data_dir or environ.get(DATA_DIR_VAR) or DEFAULT_DATA_DIR),
            workers=parse_workers(
                workers if workers is not None else environ.get(WORKERS_VAR, DEFAULT_WORKERS)
            ),
        )


@dataclass(frozen=True)
class LabelKind:
    """How one kind of stellar object is found in the localization index.

    The path tag is data-defined by the game client, so it is configuration
    rather than a hard-coded assumption.
    """

    section: str  # Key in the combined export
    path_tag: str  # FullPath value in the localization index
    label_prefix: str  # Label prefix before the numeric ID
    output_file: str  # Per-kind export filename


SYSTEMS = LabelKind("systems", "Map/SolarSystems", "solar_system_", "system_labels.json")
CONSTELLATIONS = LabelKind(
    "constellations", "Map/Constellations", "constellation_", "constellation_labels.json"
)
REGIONS = LabelKind("regions", "Map/Regions", "region_", "region_labels.json")


@dataclass(frozen=True)
class LabelConfig:
    """Input and output locations for label resolution."""

    json_dir: Path = DEFAULT_DATA_DIR / "json"
    star_map_file: str = "starmapcache.json"
    localization_index_file: str = "localization_fsd_main.json"
    strings_file: str = "localization_fsd_en-us.json"
    combined_file: str = "stellar_labels.json"
    kinds: tuple[LabelKind, ...] = field(default=(SYSTEMS, CONSTELLATIONS, REGIONS))

    @property
    def star_map_path(self) -> Path:
        return self.json_dir / self.star_map_file

    @property
    def localization_index_path(self) -> Path:
        return self.json_dir / self.localization_index_file

    @property
    def strings_path(self) -> Path:
        return self.json_dir / self.strings_file

    @classmethod
    def from_env(
        cls, json_dir: Path | None = None, environ: dict[str, str] | None = None
    ) -> "LabelConfig":
        """Resolve the JSON directory from the flag, STELLAR_DATA_DIR or the default."""
        if json_dir is not None:
            return cls(json_dir=Path(json_dir))

        if environ is None:
            load_dotenv()
            environ = dict(os.environ)

        data_dir = environ.get(DATA_DIR_VAR)
        if data_dir:
            return cls(json_dir=Path(data_dir) / "json")
        return cls()
