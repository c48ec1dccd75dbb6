"""
SQLite store: creation, bulk loading and indexing.
"""

from f1flat.store.indexes import build_indexes, expected_indexes, list_indexes
from f1flat.store.initializer import initialize_store, remove_store, table_ddl
from f1flat.store.loader import count_rows, load_entity

__all__ = [
    "build_indexes",
    "count_rows",
    "expected_indexes",
    "initialize_store",
    "list_indexes",
    "load_entity",
    "remove_store",
    "table_ddl",
]
