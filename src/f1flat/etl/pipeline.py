"""
Load pipeline implementation.

Drives the run through explicit states:

    PREFLIGHT -> INITIALIZING -> LOADING(entity) ... -> INDEXING -> DONE

with FAILED reachable from any of them. Each state has its own method so
every failure point can be exercised on its own. There is no retry and no
resume: a failed run is restarted from PREFLIGHT.
"""

import sqlite3
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from f1flat.config.settings import LoaderSettings
from f1flat.errors import PreflightError, StoreError
from f1flat.schemas.registry import EntityInfo, SchemaRegistry
from f1flat.store.indexes import build_indexes
from f1flat.store.initializer import initialize_store, remove_store
from f1flat.store.loader import ProgressCallback, load_entity
from f1flat.utils.logging import get_logger

log = get_logger(__name__)


class PipelineState(str, Enum):
    """Named states of a load run."""

    PREFLIGHT = "preflight"
    INITIALIZING = "initializing"
    LOADING = "loading"
    INDEXING = "indexing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class LoadResult:
    """
    Result of a successful pipeline run.

    Attributes:
        output_path: Location of the finished store.
        row_counts: Rows loaded per table, in load order.
        indexes: Names of the indexes created.
        history: Visited states; loading states carry the entity name
            (e.g. 'loading:race').
        duration_seconds: Wall time of the run.
    """

    output_path: Path
    row_counts: dict[str, int] = field(default_factory=dict)
    indexes: list[str] = field(default_factory=list)
    history: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def total_rows(self) -> int:
        return sum(self.row_counts.values())


class LoadPipeline:
    """
    Builds the store from the dataset's CSV files.

    The pipeline exclusively owns its SQLite connection: it is opened in
    INITIALIZING and closed on DONE or FAILED. On any failure after
    preflight the partially written store is deleted, so an invalid file is
    never left at the output path.
    """

    def __init__(
        self,
        settings: LoaderSettings,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            settings: Paths, store pragmas and batching configuration.
            on_progress: Optional observer receiving (entity, rows so far).
        """
        self.settings = settings
        self.on_progress = on_progress
        self.state = PipelineState.PREFLIGHT
        self.history: list[str] = []
        self.row_counts: dict[str, int] = {}
        self._conn: sqlite3.Connection | None = None

    def _enter(self, state: PipelineState, entity: str | None = None) -> None:
        self.state = state
        label = f"{state.value}:{entity}" if entity else state.value
        self.history.append(label)
        log.debug("State transition", state=label)

    def preflight(self) -> None:
        """
        Check that the source directory and all expected CSV files exist.

        Raises:
            PreflightError: Listing every missing path. The output store is
                not touched.
        """
        source_dir = self.settings.source_dir
        if not source_dir.is_dir():
            raise PreflightError([source_dir])

        missing = [
            source_dir / name
            for name in SchemaRegistry.csv_files()
            if not (source_dir / name).is_file()
        ]
        if missing:
            raise PreflightError(missing)

        log.info(
            "Preflight passed",
            source_dir=str(source_dir),
            files=len(SchemaRegistry.csv_files()),
        )

    def initialize(self) -> None:
        """Create the fresh store and all tables."""
        self._conn = initialize_store(self.settings.output, self.settings.store)

    def load(self, info: EntityInfo) -> int:
        """
        Load one entity into its table.

        Returns:
            Rows inserted.
        """
        if self._conn is None:
            msg = "Store is not initialized"
            raise StoreError(msg, entity=info.name)

        rows = load_entity(
            self._conn,
            info,
            self.settings.source_dir,
            batch_size=self.settings.load.batch_size,
            progress_every=self.settings.load.progress_every,
            on_progress=self.on_progress,
        )
        self.row_counts[info.table] = rows
        return rows

    def index(self) -> list[str]:
        """Create lookup and foreign-key indexes."""
        if self._conn is None:
            msg = "Store is not initialized"
            raise StoreError(msg)
        return build_indexes(self._conn)

    def _close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _fail(self, error: Exception) -> None:
        failed_in = self.history[-1] if self.history else self.state.value
        self._enter(PipelineState.FAILED)
        self._close()
        try:
            removed = remove_store(self.settings.output)
        except OSError as cleanup_error:
            log.warning(
                "Could not delete partial store",
                path=str(self.settings.output),
                error=str(cleanup_error),
            )
            removed = []
        log.error(
            "Pipeline failed",
            failed_in=failed_in,
            error=str(error),
            error_type=type(error).__name__,
            removed=[str(p) for p in removed],
        )

    def run(self) -> LoadResult:
        """
        Run every state in order.

        Returns:
            LoadResult describing the finished store.

        Raises:
            PreflightError: If inputs are missing (nothing written).
            ValidationError: If a record fails validation (store deleted).
            StoreError: If an SQLite operation fails (store deleted).
        """
        start = time.perf_counter()
        log.info(
            "Starting load pipeline",
            source_dir=str(self.settings.source_dir),
            output=str(self.settings.output),
        )

        self._enter(PipelineState.PREFLIGHT)
        try:
            self.preflight()
        except PreflightError as e:
            self._enter(PipelineState.FAILED)
            log.error("Preflight failed", error=str(e))
            raise

        try:
            self._enter(PipelineState.INITIALIZING)
            self.initialize()

            for info in SchemaRegistry.entities():
                self._enter(PipelineState.LOADING, info.name)
                self.load(info)

            self._enter(PipelineState.INDEXING)
            indexes = self.index()
            self._close()
        except Exception as e:
            self._fail(e)
            raise

        self._enter(PipelineState.DONE)
        result = LoadResult(
            output_path=self.settings.output,
            row_counts=dict(self.row_counts),
            indexes=indexes,
            history=list(self.history),
            duration_seconds=time.perf_counter() - start,
        )
        log.info(
            "Load pipeline finished",
            tables=len(result.row_counts),
            rows=result.total_rows,
            indexes=len(result.indexes),
            seconds=round(result.duration_seconds, 2),
        )
        return result


def run_load(
    settings: LoaderSettings,
    on_progress: ProgressCallback | None = None,
) -> LoadResult:
    """
    Convenience function to run the load pipeline.

    Args:
        settings: Loader settings.
        on_progress: Optional progress observer.

    Returns:
        LoadResult for the finished store.
    """
    pipeline = LoadPipeline(settings, on_progress=on_progress)
    return pipeline.run()
