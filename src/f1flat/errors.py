"""
Error taxonomy for the load pipeline.

Every error is fatal to a run; none of them is recovered locally.
"""

from pathlib import Path
from typing import Any


class F1FlatError(Exception):
    """Base class for all pipeline failures."""


class PreflightError(F1FlatError):
    """Input directory or one of the expected CSV files is missing."""

    def __init__(self, missing: list[Path]) -> None:
        self.missing = list(missing)
        listed = ", ".join(str(p) for p in self.missing)
        super().__init__(f"Missing input path(s): {listed} (download the CSVs first)")


class ValidationError(F1FlatError):
    """A CSV record failed coercion or a constraint check."""

    def __init__(
        self,
        entity: str,
        line: int | None,
        field: str,
        value: Any,
        reason: str,
    ) -> None:
        self.entity = entity
        self.line = line
        self.field = field
        self.value = value
        self.reason = reason
        where = f"{entity} line {line}" if line is not None else entity
        super().__init__(f"{where}: field '{field}' rejected value {value!r}: {reason}")


class StoreError(F1FlatError):
    """An SQLite operation failed (DDL, insert, constraint, I/O)."""

    def __init__(
        self,
        message: str,
        entity: str | None = None,
        line: int | None = None,
    ) -> None:
        self.entity = entity
        self.line = line
        prefix = f"{entity}: " if entity else ""
        if entity and line is not None:
            prefix = f"{entity} line {line}: "
        super().__init__(f"{prefix}{message}")
