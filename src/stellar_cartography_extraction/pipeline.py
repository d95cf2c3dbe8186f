"""Extraction pipeline driven by the ResFile index.

The pipeline streams the index line by line, classifies each entry and
hands it to the materializer registered for its category. Materialization
runs on a fixed-size thread pool with a cap on entries in flight, so very
large indexes never hold more than a bounded number of files open.
"""

import sys
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path

from .core.config import DEFAULT_WORKERS, ExtractionConfig, OutputLayout
from .core.types import AssetCategory, ExtractionSummary, ManifestEntry, MaterializationResult
from .manifest import classify, parse_manifest_line
from .materializers.base import Materializer
from .registry import MaterializerRegistry

# Progress is reported every this many processed entries
PROGRESS_INTERVAL = 1000


class ExtractionPipeline:
    """Routes manifest entries to category materializers.

    Example:
        >>> config = ExtractionConfig.from_env()
        >>> pipeline = ExtractionPipeline.from_config(config)
        >>> summary = pipeline.run_index(config.index_path)
        >>> print(summary.processed)
    """

    def __init__(
        self,
        layout: OutputLayout,
        source_root: Path,
        workers: int = DEFAULT_WORKERS,
        quiet: bool = False,
        materializers: dict[AssetCategory, Materializer] | None = None,
    ):
        """Initialize the pipeline.

        Args:
            layout: Output directory layout
            source_root: Directory holding the files the index points at
            workers: Size of the materialization thread pool
            quiet: Suppress per-file success messages
            materializers: Override the registered materializers (mainly for tests)
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        self.layout = layout
        self.source_root = Path(source_root)
        self.workers = workers
        self.max_in_flight = workers * 2
        self.quiet = quiet
        self.materializers = materializers or MaterializerRegistry.create_all(layout, quiet=quiet)

    @classmethod
    def from_config(cls, config: ExtractionConfig, quiet: bool = False) -> "ExtractionPipeline":
        return cls(
            layout=config.layout,
            source_root=config.res_files_base_dir,
            workers=config.workers,
            quiet=quiet,
        )

    def run_index(self, index_path: Path) -> ExtractionSummary:
        """Process every entry of an index file.

        Raises:
            OSError: If the index file cannot be opened
        """
        print(f"Reading ResFile index from: {index_path}", file=sys.stderr)
        print(f"ResFiles base directory: {self.source_root}", file=sys.stderr)

        with open(index_path, "r", encoding="utf-8", errors="replace") as f:
            return self.run(f)

    def run(self, lines: Iterable[str]) -> ExtractionSummary:
        """Process a stream of index lines.

        Lines that don't parse are skipped without being counted. Failures
        of single entries are recorded in the summary and never stop the
        run.

        Returns:
            Summary with counts and failures for the whole run
        """
        self.layout.ensure()
        summary = ExtractionSummary()
        future_to_entry: dict[Future, ManifestEntry] = {}

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            for line in lines:
                entry = parse_manifest_line(line)
                if entry is None:
                    continue

                category = classify(entry.filetype)
                summary.record_entry(category)

                if summary.processed % PROGRESS_INTERVAL == 0:
                    print(f"Processed {summary.processed} files...", file=sys.stderr)
                if category is AssetCategory.SERIALIZED_BLOB:
                    print(
                        f"Processing pickle file #{summary.serialized_blobs}: {entry.filename}",
                        file=sys.stderr,
                    )

                # Block the reader until a slot frees up
                if len(future_to_entry) >= self.max_in_flight:
                    done, _ = wait(future_to_entry, return_when=FIRST_COMPLETED)
                    self._collect(done, future_to_entry, summary)

                future = executor.submit(self._materialize, category, entry)
                future_to_entry[future] = entry

            done, _ = wait(future_to_entry)
            self._collect(done, future_to_entry, summary)

        self._report(summary)
        return summary

    def _materialize(self, category: AssetCategory, entry: ManifestEntry) -> MaterializationResult:
        return self.materializers[category].materialize(entry, self.source_root)

    def _collect(
        self,
        done: set[Future],
        future_to_entry: dict[Future, ManifestEntry],
        summary: ExtractionSummary,
    ) -> None:
        for future in done:
            entry = future_to_entry.pop(future)
            try:
                result = future.result()
            except Exception as e:
                # Materializers report their own failures; this is anything that escaped
                print(f"Error: Failed to process {entry.filename}: {e}", file=sys.stderr)
                summary.record_failure(entry.filename, str(e))
                continue
            summary.record_result(result)

    def _report(self, summary: ExtractionSummary) -> None:
        print("\nExtraction complete!", file=sys.stderr)
        print(f"Total files processed: {summary.processed}", file=sys.stderr)
        print(f"Pickle files found: {summary.serialized_blobs}", file=sys.stderr)
        print(f"SQLite databases found: {summary.sqlite_detected}", file=sys.stderr)
        for category, count in sorted(summary.by_category.items()):
            print(f"  {category}: {count}", file=sys.stderr)
        print(f"Files written: {summary.outputs_written}", file=sys.stderr)
        print(f"Failures: {len(summary.failures)}", file=sys.stderr)

        print("\nGenerated data directories:", file=sys.stderr)
        print(f"- JSON files: {self.layout.json}", file=sys.stderr)
        print(f"- SQLite files: {self.layout.sqlite}", file=sys.stderr)
        print(f"- Pickle files: {self.layout.pickle}", file=sys.stderr)
