"""
Verification of a finished store.

Reads every table back with pandas and checks it against a Pandera schema
derived from the same record model that validated its CSV rows, then asks
SQLite for foreign key violations and compares the index set.
"""

import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd
import pandera.pandas as pa
from pandera.errors import SchemaError, SchemaErrors

from f1flat.schemas.base import column_type
from f1flat.schemas.registry import EntityInfo, SchemaRegistry
from f1flat.store.indexes import expected_indexes, list_indexes
from f1flat.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class TableCheck:
    """Result of verifying a single table."""

    entity: str
    table: str
    exists: bool
    row_count: int | None = None
    schema_valid: bool | None = None
    fk_violations: int = 0
    missing_indexes: list[str] = field(default_factory=list)
    error_message: str | None = None

    @property
    def passed(self) -> bool:
        return (
            self.exists
            and self.schema_valid is True
            and self.fk_violations == 0
            and not self.missing_indexes
        )


def _integral(series: pd.Series) -> pd.Series:
    return series == series.round()


def table_schema(info: EntityInfo) -> pa.DataFrameSchema:
    """
    Build the Pandera schema a stored table must satisfy.

    Nullable integers come back from SQLite as float64 whenever NULLs are
    present, so they are checked as floats with an integral-value check.
    Text columns are plain object columns.

    Args:
        info: Registered entity.

    Returns:
        Strict DataFrameSchema named after the table.
    """
    columns = {}
    for name, model_field in info.model.model_fields.items():
        scalar, nullable = column_type(model_field)
        checks = [
            pa.Check.ge(bound.ge)
            for bound in model_field.metadata
            if getattr(bound, "ge", None) is not None
        ]
        if scalar is int and nullable:
            dtype: object = "float64"
            checks.append(pa.Check(_integral, name="integral"))
        elif scalar is int:
            dtype = "int64"
        elif scalar is float:
            dtype = "float64"
        else:
            dtype = object
        columns[name] = pa.Column(
            dtype,
            nullable=nullable,
            checks=checks,
            coerce=scalar is not str,
        )

    return pa.DataFrameSchema(
        columns,
        name=info.table,
        strict=True,
        unique=list(info.primary_key),
    )


class StoreVerifier:
    """
    Runs verification for every table of a store.

    Checks table presence, Pandera schema conformance, foreign key
    integrity and index completeness.
    """

    def __init__(self, store_path: Path) -> None:
        """
        Initialize the verifier.

        Args:
            store_path: SQLite file produced by the load pipeline.
        """
        self.store_path = store_path

    def _connect(self) -> sqlite3.Connection:
        if not self.store_path.is_file():
            msg = f"Store not found: {self.store_path}"
            raise FileNotFoundError(msg)
        uri = f"{self.store_path.resolve().as_uri()}?mode=ro"
        return sqlite3.connect(uri, uri=True)

    def run(self) -> list[TableCheck]:
        """
        Verify all registered tables.

        Returns:
            One TableCheck per entity, in dependency order.
        """
        conn = self._connect()
        try:
            present_indexes = list_indexes(conn)
            tables = {
                row[0]
                for row in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                )
            }
            return [
                self._check_table(conn, info, tables, present_indexes)
                for info in SchemaRegistry.entities()
            ]
        finally:
            conn.close()

    def _check_table(
        self,
        conn: sqlite3.Connection,
        info: EntityInfo,
        tables: set[str],
        present_indexes: set[str],
    ) -> TableCheck:
        if info.table not in tables:
            log.warning("Table missing", table=info.table)
            return TableCheck(
                entity=info.name,
                table=info.table,
                exists=False,
                error_message="Table not found",
            )

        df = pd.read_sql_query(f"SELECT * FROM {info.table}", conn)
        check = TableCheck(
            entity=info.name,
            table=info.table,
            exists=True,
            row_count=len(df),
        )

        try:
            table_schema(info).validate(df, lazy=True)
            check.schema_valid = True
        except (SchemaError, SchemaErrors) as e:
            check.schema_valid = False
            check.error_message = self._format_schema_error(e)

        check.fk_violations = len(
            conn.execute(f"PRAGMA foreign_key_check({info.table})").fetchall()
        )
        check.missing_indexes = sorted(
            spec.name
            for spec in expected_indexes()
            if spec.table == info.table and spec.name not in present_indexes
        )

        if check.passed:
            log.info("Verification passed", table=info.table, rows=check.row_count)
        else:
            log.error(
                "Verification failed",
                table=info.table,
                schema_valid=check.schema_valid,
                fk_violations=check.fk_violations,
                missing_indexes=check.missing_indexes,
            )
        return check

    def _format_schema_error(self, error: SchemaError | SchemaErrors) -> str:
        """
        Format a Pandera error for display.

        Returns:
            Failure summary (first 5 failure cases).
        """
        failures = getattr(error, "failure_cases", None)
        if isinstance(failures, pd.DataFrame):
            n_failures = len(failures)
            if n_failures > 5:
                failures_str = failures.head(5).to_string(index=False)
                return f"{n_failures} schema errors (showing first 5):\n{failures_str}"
            return f"{n_failures} schema error(s):\n{failures.to_string(index=False)}"

        return str(error).split("\n")[0][:200]
