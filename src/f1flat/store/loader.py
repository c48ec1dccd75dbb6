"""
Bulk loading of one entity's CSV into its table.

A single parameterized loader serves all fourteen entities; the per-entity
differences (file, table, column mapping, coercions) come from the schema
registry.
"""

import csv
import sqlite3
from collections.abc import Callable
from pathlib import Path
from typing import Any

from f1flat.errors import StoreError, ValidationError
from f1flat.ingestion.decoder import iter_records, read_header
from f1flat.ingestion.normalize import normalize_nulls
from f1flat.schemas.registry import EntityInfo, validate_record
from f1flat.utils.logging import get_logger, log_context

log = get_logger(__name__)

ProgressCallback = Callable[[str, int], None]


def check_header(info: EntityInfo, path: Path) -> None:
    """
    Ensure the CSV header carries every column the entity needs.

    Raises:
        ValidationError: Naming the first missing column.
    """
    header = set(read_header(path))
    missing = [col for col in info.source_columns if col not in header]
    if missing:
        reason = f"column missing from header (missing: {', '.join(missing)})"
        raise ValidationError(info.name, 1, missing[0], None, reason)


def _insert_batch(
    conn: sqlite3.Connection,
    info: EntityInfo,
    rows: list[tuple[Any, ...]],
    lines: list[int],
) -> int:
    before = conn.total_changes
    try:
        conn.executemany(info.insert_sql, rows)
    except sqlite3.Error as e:
        # executemany stops at the failing row; the rows before it were inserted
        failed = lines[min(conn.total_changes - before, len(lines) - 1)]
        msg = f"Insert into {info.table} failed: {e}"
        raise StoreError(msg, entity=info.name, line=failed) from e
    return len(rows)


def load_entity(
    conn: sqlite3.Connection,
    info: EntityInfo,
    source_dir: Path,
    *,
    batch_size: int = 5000,
    progress_every: int = 50000,
    on_progress: ProgressCallback | None = None,
) -> int:
    """
    Decode, normalize, validate and insert one entity's CSV file.

    Rows are inserted in file order. Validated rows are buffered up to
    ``batch_size`` and written with one ``executemany`` before decoding
    continues. The table is committed once the file is exhausted.

    Args:
        conn: Open store connection with the entity's table created.
        info: Entity to load.
        source_dir: Directory holding the CSV files.
        batch_size: Validated rows per insert batch.
        progress_every: Rows between progress log events; 0 disables them.
        on_progress: Optional observer called with (entity name, rows so far)
            after every batch.

    Returns:
        Number of rows inserted.

    Raises:
        ValidationError: On the first record failing validation, or when the
            file itself cannot be parsed.
        StoreError: If an insert fails (e.g. a foreign key violation).
    """
    path = source_dir / info.csv_file
    rows = 0
    batch: list[tuple[Any, ...]] = []
    lines: list[int] = []
    next_report = progress_every

    def flush() -> None:
        nonlocal rows, batch, lines, next_report
        rows += _insert_batch(conn, info, batch, lines)
        batch, lines = [], []
        if on_progress is not None:
            on_progress(info.name, rows)
        if progress_every and rows >= next_report:
            log.info("Loading progress", rows=rows)
            next_report = (rows // progress_every + 1) * progress_every

    with log_context(entity=info.name):
        log.info("Reading data", path=str(path), table=info.table)
        try:
            check_header(info, path)
            for line, raw in iter_records(path):
                record = validate_record(info, normalize_nulls(raw), line)
                batch.append(info.to_row(record))
                lines.append(line)
                if len(batch) >= batch_size:
                    flush()
            if batch:
                flush()
        except (csv.Error, UnicodeDecodeError) as e:
            raise ValidationError(
                info.name, None, "<file>", str(path), f"malformed CSV: {e}"
            ) from e

        try:
            conn.commit()
        except sqlite3.Error as e:
            msg = f"Commit of {info.table} failed: {e}"
            raise StoreError(msg, entity=info.name) from e

        log.info("Data inserted", table=info.table, rows=rows)
    return rows


def count_rows(conn: sqlite3.Connection, info: EntityInfo) -> int:
    """Number of rows currently stored for an entity."""
    return conn.execute(f"SELECT COUNT(*) FROM {info.table}").fetchone()[0]
