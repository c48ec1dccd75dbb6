"""
Streaming CSV decoding.

Rows are read one at a time so large tables (lap times run to hundreds of
thousands of rows) never sit in memory as a whole. Every cell is kept as
text; typing is the record models' job.

The row shape is checked here: a cell absent from a short row is left out of
its record (the record models then report the column as missing), and a row
longer than the header is a format error.
"""

import csv
from collections.abc import Iterator
from pathlib import Path

from f1flat.utils.logging import get_logger

log = get_logger(__name__)


def read_header(path: Path) -> list[str]:
    """
    Return the column names of a CSV file without reading its rows.

    Raises:
        csv.Error: If the file is empty.
    """
    with path.open(encoding="utf-8", newline="") as f:
        header = next(csv.reader(f), None)
    if header is None:
        msg = f"CSV file is empty: {path}"
        raise csv.Error(msg)
    return header


def iter_records(path: Path) -> Iterator[tuple[int, dict[str, str]]]:
    """
    Lazily decode a CSV file into (line number, record) pairs.

    The sequence is one-pass: iterating again requires a new call, which
    re-opens the file. Values are raw strings, so neither empty strings nor
    the null sentinel are touched. Line numbers are physical file lines,
    counting the header as line 1 and following quoted line breaks.

    Args:
        path: CSV file with a header row.

    Yields:
        Tuples of (1-based file line number, header -> text mapping).

    Raises:
        FileNotFoundError: If the file does not exist.
        csv.Error: If the file has no header or a row has more fields than
            the header.
    """
    if not path.exists():
        msg = f"CSV file not found: {path}"
        raise FileNotFoundError(msg)

    log.debug("Opening CSV", path=str(path))

    with path.open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            msg = f"CSV file is empty: {path}"
            raise csv.Error(msg)
        width = len(reader.fieldnames)

        for row in reader:
            # DictReader collects surplus cells under None and fills absent ones with None
            if None in row:
                msg = (
                    f"line {reader.line_num}: expected {width} fields, "
                    f"saw {width + len(row[None])}"
                )
                raise csv.Error(msg)
            yield reader.line_num, {k: v for k, v in row.items() if v is not None}
