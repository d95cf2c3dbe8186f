"""Command-line interface for the extraction tool.

Two subcommands:

* ``extract`` streams the ResFile index and materializes every entry.
* ``labels`` resolves stellar object names from the decoded catalogs.
"""

import argparse
import json
import sys
from pathlib import Path

from jsonschema import ValidationError

from .core.config import ExtractionConfig, LabelConfig
from .core.errors import ExtractionError
from .core.types import ExtractionSummary
from .labels.resolver import LabelResolution, run_label_extraction
from .pipeline import ExtractionPipeline


def run_extraction(
    index_path: Path | None = None,
    res_dir: Path | None = None,
    data_dir: Path | None = None,
    workers: int | None = None,
    quiet: bool = False,
) -> ExtractionSummary:
    """Run a full extraction, reading unset paths from the environment.

    Raises:
        ConfigurationError: If the index path or source directory is missing
        OSError: If the index cannot be read
    """
    config = ExtractionConfig.from_env(
        index_path=index_path,
        res_files_base_dir=res_dir,
        data_dir=data_dir,
        workers=workers,
    )
    pipeline = ExtractionPipeline.from_config(config, quiet=quiet)
    return pipeline.run_index(config.index_path)


def run_labels(json_dir: Path | None = None) -> LabelResolution:
    """Run label resolution against the decoded JSON directory.

    Raises:
        CatalogLoadError: If any catalog is missing or malformed
    """
    return run_label_extraction(LabelConfig.from_env(json_dir=json_dir))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stellar-extract",
        description="Extract game data from a ResFile index and resolve stellar labels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Paths from the environment (or a .env file)
  RES_FILE_INDEX_PATH=resfileindex.txt RES_FILES_BASE_DIR=ResFiles stellar-extract extract

  # Explicit paths and a larger pool
  stellar-extract extract --index resfileindex.txt --res-dir ResFiles --workers 16

  # Resolve names after extraction
  stellar-extract labels --json-dir data/json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Materialize every entry of the ResFile index")
    extract.add_argument("--index", type=Path, help="ResFile index (default: $RES_FILE_INDEX_PATH)")
    extract.add_argument(
        "--res-dir", type=Path, help="ResFiles root directory (default: $RES_FILES_BASE_DIR)"
    )
    extract.add_argument(
        "--data-dir", type=Path, help="Output root (default: $STELLAR_DATA_DIR or ./data)"
    )
    extract.add_argument(
        "--workers", type=int, help="Materialization threads (default: $EXTRACT_WORKERS or 8)"
    )
    extract.add_argument("-q", "--quiet", action="store_true", help="Suppress per-file messages")
    extract.add_argument("--json", action="store_true", help="Print the run summary as JSON")

    labels = subparsers.add_parser("labels", help="Resolve stellar object names")
    labels.add_argument(
        "--json-dir", type=Path, help="Decoded JSON directory (default: <data dir>/json)"
    )
    labels.add_argument("--json", action="store_true", help="Print the combined labels as JSON")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the extraction tool."""
    args = build_parser().parse_args(argv)

    try:
        if args.command == "extract":
            summary = run_extraction(
                index_path=args.index,
                res_dir=args.res_dir,
                data_dir=args.data_dir,
                workers=args.workers,
                quiet=args.quiet,
            )
            if args.json:
                json.dump(summary.as_dict(), sys.stdout, indent=2)
                print()
        else:
            resolution = run_labels(json_dir=args.json_dir)
            if args.json:
                json.dump(resolution.combined(), sys.stdout, indent=2, ensure_ascii=False)
                print()

    except (ExtractionError, OSError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
