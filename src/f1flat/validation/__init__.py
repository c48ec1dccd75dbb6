"""Store verification module."""

from f1flat.validation.core import StoreVerifier, TableCheck, table_schema
from f1flat.validation.reporter import ConsoleReporter

__all__ = ["ConsoleReporter", "StoreVerifier", "TableCheck", "table_schema"]
