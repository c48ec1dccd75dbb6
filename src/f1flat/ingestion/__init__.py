"""
Ingestion layer: CSV decoding and null normalization.

Records leave this layer as header -> text mappings with the dataset's null
sentinel already replaced by None.
"""

from f1flat.ingestion.decoder import iter_records, read_header
from f1flat.ingestion.normalize import NULL_SENTINEL, normalize_nulls

__all__ = ["NULL_SENTINEL", "iter_records", "normalize_nulls", "read_header"]
