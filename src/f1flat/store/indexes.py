"""
Post-load index creation.

Indexes are built once every table is populated, which is cheaper than
maintaining them during the bulk inserts.
"""

import sqlite3
from dataclasses import dataclass

from f1flat.errors import StoreError
from f1flat.schemas.registry import SchemaRegistry
from f1flat.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class IndexSpec:
    """A single-column, non-unique index."""

    name: str
    table: str
    column: str

    @property
    def sql(self) -> str:
        return f"CREATE INDEX IF NOT EXISTS {self.name} ON {self.table} ({self.column})"


def lookup_indexes() -> list[IndexSpec]:
    """Indexes on the human-readable reference keys (circuit/constructor/driver ref)."""
    return [
        IndexSpec(f"{info.name}_{info.lookup_column}", info.table, info.lookup_column)
        for info in SchemaRegistry.entities()
        if info.lookup_column is not None
    ]


def foreign_key_indexes() -> list[IndexSpec]:
    """One index per declared foreign key column."""
    return [
        IndexSpec(f"{info.table}_by_{fk.column}", info.table, fk.column)
        for info in SchemaRegistry.entities()
        for fk in info.foreign_keys
    ]


def expected_indexes() -> list[IndexSpec]:
    """Every index the finished store should carry."""
    return lookup_indexes() + foreign_key_indexes()


def build_indexes(conn: sqlite3.Connection) -> list[str]:
    """
    Create lookup and foreign-key indexes.

    Args:
        conn: Connection to a fully loaded store.

    Returns:
        Names of the created indexes.

    Raises:
        StoreError: If any index cannot be created.
    """
    lookups = _create(conn, lookup_indexes())
    log.info("Ref key indexes created", count=len(lookups))
    fks = _create(conn, foreign_key_indexes())
    log.info("Foreign key indexes created", count=len(fks))
    conn.commit()
    return lookups + fks


def _create(conn: sqlite3.Connection, specs: list[IndexSpec]) -> list[str]:
    for spec in specs:
        try:
            conn.execute(spec.sql)
        except sqlite3.Error as e:
            msg = f"Creating index {spec.name} failed: {e}"
            raise StoreError(msg, entity=spec.table) from e
        log.debug("Index created", index=spec.name, table=spec.table)
    return [spec.name for spec in specs]


def list_indexes(conn: sqlite3.Connection) -> set[str]:
    """Names of the explicitly created indexes in a store."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'index' AND sql IS NOT NULL"
    ).fetchall()
    return {row[0] for row in rows}
