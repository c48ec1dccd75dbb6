"""
Null-sentinel normalization.

The dataset marks missing values with the two-character token ``\\N``.
It must become None before validation: numeric coercion would reject it,
and text fields would store it literally.
"""

from collections.abc import Mapping

NULL_SENTINEL = r"\N"


def normalize_nulls(record: Mapping[str, str | None]) -> dict[str, str | None]:
    """
    Replace the null sentinel with None.

    Only exact matches are replaced; the empty string and values that merely
    contain the sentinel pass through unchanged. The input is not modified.

    Args:
        record: Raw CSV record (header -> text).

    Returns:
        New record with sentinel values replaced by None.
    """
    return {
        key: None if value == NULL_SENTINEL else value for key, value in record.items()
    }
