"""
Record schemas for the dataset's fourteen entities.

Every CSV row passes through one of these pydantic models before it
reaches the store.
"""

from f1flat.schemas.base import RecordModel
from f1flat.schemas.events import (
    ConstructorResultRecord,
    ConstructorStandingRecord,
    DriverStandingRecord,
    LapTimeRecord,
    PitStopRecord,
    QualifyingSessionRecord,
    RaceRecord,
    RaceResultRecord,
    SprintResultRecord,
)
from f1flat.schemas.reference import (
    CircuitRecord,
    ConstructorRecord,
    DriverRecord,
    SeasonRecord,
    StatusRecord,
)
from f1flat.schemas.registry import (
    EntityInfo,
    EntityKind,
    ForeignKey,
    SchemaRegistry,
    validate_record,
)

__all__ = [
    "CircuitRecord",
    "ConstructorRecord",
    "ConstructorResultRecord",
    "ConstructorStandingRecord",
    "DriverRecord",
    "DriverStandingRecord",
    "EntityInfo",
    "EntityKind",
    "ForeignKey",
    "LapTimeRecord",
    "PitStopRecord",
    "QualifyingSessionRecord",
    "RaceRecord",
    "RaceResultRecord",
    "RecordModel",
    "SchemaRegistry",
    "SeasonRecord",
    "SprintResultRecord",
    "StatusRecord",
    "validate_record",
]
