"""
Store creation and table DDL.

DDL is generated from the schema registry: column types and NOT NULL come
from the record model annotations, keys and references from EntityInfo.
"""

import sqlite3
from pathlib import Path

from f1flat.config.settings import StoreConfig
from f1flat.errors import StoreError
from f1flat.schemas.base import column_type, sql_type
from f1flat.schemas.registry import EntityInfo, SchemaRegistry
from f1flat.utils.logging import get_logger

log = get_logger(__name__)

# SQLite companions written next to the database in WAL mode.
STORE_SUFFIXES = ("", "-wal", "-shm", "-journal")


def store_files(path: Path) -> list[Path]:
    """All files that belong to the store at ``path``."""
    return [path.with_name(path.name + suffix) for suffix in STORE_SUFFIXES]


def remove_store(path: Path) -> list[Path]:
    """
    Delete the store and its journal files.

    Args:
        path: Store location.

    Returns:
        The files that existed and were removed.
    """
    removed = []
    for candidate in store_files(path):
        if candidate.exists():
            candidate.unlink()
            removed.append(candidate)
    return removed


def table_ddl(info: EntityInfo) -> str:
    """
    Build the CREATE TABLE statement for an entity.

    Args:
        info: Registered entity.

    Returns:
        SQL creating the table if absent.
    """
    lines = []
    single_pk = info.primary_key[0] if len(info.primary_key) == 1 else None
    for name, field in info.model.model_fields.items():
        _, nullable = column_type(field)
        parts = [name, sql_type(field)]
        if name == single_pk:
            parts.append("PRIMARY KEY")
        elif not nullable:
            parts.append("NOT NULL")
        lines.append(" ".join(parts))

    if single_pk is None:
        lines.append(f"PRIMARY KEY ({', '.join(info.primary_key)})")
    for fk in info.foreign_keys:
        lines.append(f"FOREIGN KEY ({fk.column}) REFERENCES {fk.table}({fk.target})")

    body = ",\n  ".join(lines)
    return f"CREATE TABLE IF NOT EXISTS {info.table} (\n  {body}\n)"


def configure_connection(conn: sqlite3.Connection, config: StoreConfig) -> None:
    """Enable foreign keys and apply the bulk-write pragmas."""
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute(f"PRAGMA journal_mode = {config.journal_mode.value}")
    conn.execute(f"PRAGMA synchronous = {config.synchronous.value}")


def create_tables(conn: sqlite3.Connection) -> list[str]:
    """
    Create all tables in dependency order.

    Returns:
        Table names in creation order.
    """
    created = []
    for info in SchemaRegistry.entities():
        log.info("Creating table", table=info.table)
        conn.execute(table_ddl(info))
        created.append(info.table)
    conn.commit()
    return created


def initialize_store(path: Path, config: StoreConfig | None = None) -> sqlite3.Connection:
    """
    Create a fresh store with every table in place.

    Any existing store at ``path`` is deleted first; there is no append mode.

    Args:
        path: Output SQLite file.
        config: Pragmas to apply. Defaults to WAL journaling, NORMAL sync.

    Returns:
        Open connection, owned by the caller.

    Raises:
        StoreError: If the file cannot be replaced or any DDL fails.
    """
    config = config or StoreConfig()

    try:
        removed = remove_store(path)
        if removed:
            log.info("Deleted existing store", path=str(path))
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot prepare output location {path}: {e}"
        raise StoreError(msg) from e

    try:
        conn = sqlite3.connect(path)
    except sqlite3.Error as e:
        msg = f"Cannot open store {path}: {e}"
        raise StoreError(msg) from e

    try:
        configure_connection(conn, config)
        create_tables(conn)
    except sqlite3.Error as e:
        conn.close()
        msg = f"Store initialization failed: {e}"
        raise StoreError(msg) from e

    log.info(
        "Store initialized",
        path=str(path),
        journal_mode=config.journal_mode.value,
        synchronous=config.synchronous.value,
    )
    return conn
