"""
Shared base for the per-entity record models.

Each model declares its store column names as field names and the dataset's
CSV header names as aliases, so the source-to-store column mapping lives in
the model definition rather than in loader code.
"""

import re
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.fields import FieldInfo

SQL_TYPES: dict[type, str] = {
    int: "INTEGER",
    float: "REAL",
    str: "TEXT",
}

# Optional sign followed by ASCII digits only.
INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")


class RecordModel(BaseModel):
    """
    Base model for all dataset records.

    Records are validated in pydantic's lax mode, which gives the coercion
    rules the CSV text needs: float literals to float, text passed through.
    Integer fields are stricter than lax mode: only plain base-10 digits with
    an optional sign are accepted, so "2_021", "2021.0" and " 2021 " fail.
    None is accepted only by fields annotated ``X | None``.
    """

    model_config = ConfigDict(
        populate_by_name=True,  # Accept store column names as well as CSV headers
        extra="ignore",  # CSV columns without a store column are dropped
        frozen=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def check_integer_text(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, str) or info.field_name is None:
            return value
        scalar, _ = column_type(cls.model_fields[info.field_name])
        if scalar is int and not INTEGER_TEXT.fullmatch(value):
            msg = "Input should be base-10 integer text"
            raise ValueError(msg)
        return value


def column_type(field: FieldInfo) -> tuple[type, bool]:
    """
    Resolve a model field to its scalar type and nullability.

    Args:
        field: Pydantic field info from ``model_fields``.

    Returns:
        Tuple of (python scalar type, nullable flag).
    """
    annotation = field.annotation
    args = get_args(annotation)
    if not args:
        return annotation, False  # type: ignore[return-value]
    members = [a for a in args if a is not type(None)]
    if len(members) != 1:
        msg = f"Unsupported field annotation: {annotation!r}"
        raise TypeError(msg)
    return members[0], len(members) != len(args)


def sql_type(field: FieldInfo) -> str:
    """SQLite column type for a model field."""
    scalar, _ = column_type(field)
    return SQL_TYPES[scalar]
