"""
Schema registry for the fourteen dataset entities.

The registry is the single source of truth for dependency order, table
names, CSV file names, keys and foreign keys. Table creation, loading and
indexing all iterate it instead of repeating per-entity code.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

import pydantic

from f1flat.errors import ValidationError
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


class EntityKind(Enum):
    """Classification of entities by what they describe."""

    REFERENCE = "reference"  # Lookup data without foreign keys
    CALENDAR = "calendar"  # Races
    RESULT = "result"  # Classified outcomes and standings
    TIMING = "timing"  # Per-lap and per-stop timing data


@dataclass(frozen=True)
class ForeignKey:
    """A column referencing another table's key."""

    column: str
    table: str
    target: str = "id"


@dataclass(frozen=True)
class EntityInfo:
    """Metadata about a registered entity."""

    name: str
    table: str
    csv_file: str
    model: type[RecordModel]
    kind: EntityKind
    description: str
    primary_key: tuple[str, ...] = ("id",)
    foreign_keys: tuple[ForeignKey, ...] = ()
    lookup_column: str | None = None

    @property
    def columns(self) -> tuple[str, ...]:
        """Store column names in insert order."""
        return tuple(self.model.model_fields)

    @property
    def source_columns(self) -> tuple[str, ...]:
        """CSV header names in the same order as ``columns``."""
        return tuple(
            info.alias or name for name, info in self.model.model_fields.items()
        )

    @property
    def references(self) -> tuple[str, ...]:
        """Tables this entity depends on."""
        return tuple(dict.fromkeys(fk.table for fk in self.foreign_keys))

    @property
    def insert_sql(self) -> str:
        """Parameterized INSERT statement for this entity's table."""
        cols = ", ".join(self.columns)
        params = ", ".join("?" for _ in self.columns)
        return f"INSERT INTO {self.table} ({cols}) VALUES ({params})"

    def to_row(self, record: RecordModel) -> tuple[Any, ...]:
        """Flatten a validated record into insert parameters."""
        return tuple(getattr(record, col) for col in self.columns)


def _race_fks(*others: str) -> tuple[ForeignKey, ...]:
    refs = {"driver": "drivers", "constructor": "constructors", "status": "status"}
    return (ForeignKey("race", "races"),) + tuple(
        ForeignKey(col, refs[col]) for col in others
    )


# Dependency order: every referenced table precedes the tables referencing it.
_ENTITIES: tuple[EntityInfo, ...] = (
    EntityInfo(
        name="circuit",
        table="circuits",
        csv_file="circuits.csv",
        model=CircuitRecord,
        kind=EntityKind.REFERENCE,
        description="Racing circuits with coordinates",
        lookup_column="ref",
    ),
    EntityInfo(
        name="constructor",
        table="constructors",
        csv_file="constructors.csv",
        model=ConstructorRecord,
        kind=EntityKind.REFERENCE,
        description="Constructors (teams)",
        lookup_column="ref",
    ),
    EntityInfo(
        name="driver",
        table="drivers",
        csv_file="drivers.csv",
        model=DriverRecord,
        kind=EntityKind.REFERENCE,
        description="Drivers",
        lookup_column="ref",
    ),
    EntityInfo(
        name="season",
        table="seasons",
        csv_file="seasons.csv",
        model=SeasonRecord,
        kind=EntityKind.REFERENCE,
        description="Championship seasons",
        primary_key=("year",),
    ),
    EntityInfo(
        name="race",
        table="races",
        csv_file="races.csv",
        model=RaceRecord,
        kind=EntityKind.CALENDAR,
        description="Races with session schedule",
        foreign_keys=(
            ForeignKey("year", "seasons", "year"),
            ForeignKey("circuit", "circuits"),
        ),
    ),
    EntityInfo(
        name="status",
        table="status",
        csv_file="status.csv",
        model=StatusRecord,
        kind=EntityKind.REFERENCE,
        description="Finishing status codes",
    ),
    EntityInfo(
        name="constructor_result",
        table="constructor_results",
        csv_file="constructor_results.csv",
        model=ConstructorResultRecord,
        kind=EntityKind.RESULT,
        description="Constructor points per race",
        foreign_keys=_race_fks("constructor"),
    ),
    EntityInfo(
        name="constructor_standing",
        table="constructor_standings",
        csv_file="constructor_standings.csv",
        model=ConstructorStandingRecord,
        kind=EntityKind.RESULT,
        description="Constructor championship standings after each race",
        foreign_keys=_race_fks("constructor"),
    ),
    EntityInfo(
        name="driver_standing",
        table="driver_standings",
        csv_file="driver_standings.csv",
        model=DriverStandingRecord,
        kind=EntityKind.RESULT,
        description="Driver championship standings after each race",
        foreign_keys=_race_fks("driver"),
    ),
    EntityInfo(
        name="lap_time",
        table="lap_times",
        csv_file="lap_times.csv",
        model=LapTimeRecord,
        kind=EntityKind.TIMING,
        description="Per-lap timings",
        primary_key=("race", "driver", "lap"),
        foreign_keys=_race_fks("driver"),
    ),
    EntityInfo(
        name="pit_stop",
        table="pit_stops",
        csv_file="pit_stops.csv",
        model=PitStopRecord,
        kind=EntityKind.TIMING,
        description="Pit stops",
        primary_key=("race", "driver", "stop"),
        foreign_keys=_race_fks("driver"),
    ),
    EntityInfo(
        name="qualifying_session",
        table="qualifying_sessions",
        csv_file="qualifying.csv",
        model=QualifyingSessionRecord,
        kind=EntityKind.RESULT,
        description="Qualifying results",
        foreign_keys=_race_fks("driver", "constructor"),
    ),
    EntityInfo(
        name="race_result",
        table="race_results",
        csv_file="results.csv",
        model=RaceResultRecord,
        kind=EntityKind.RESULT,
        description="Race results",
        foreign_keys=_race_fks("driver", "constructor", "status"),
    ),
    EntityInfo(
        name="sprint_result",
        table="sprint_results",
        csv_file="sprint_results.csv",
        model=SprintResultRecord,
        kind=EntityKind.RESULT,
        description="Sprint race results",
        foreign_keys=_race_fks("driver", "constructor", "status"),
    ),
)


def validate_record(
    info: EntityInfo,
    record: Mapping[str, Any],
    line: int | None = None,
) -> RecordModel:
    """
    Validate one normalized CSV record against its entity model.

    Args:
        info: Entity the record belongs to.
        record: Mapping of CSV header to string or None.
        line: 1-based line number in the CSV file, for error context.

    Returns:
        The typed, immutable record.

    Raises:
        ValidationError: If a field is missing, not coercible, or violates
            a constraint. Only the first failing field is reported.
    """
    try:
        return info.model.model_validate(record)
    except pydantic.ValidationError as e:
        errors = e.errors()
        first = errors[0]
        column = ".".join(str(part) for part in first["loc"]) or "<record>"
        value = None if first["type"] == "missing" else first.get("input")
        reason = first["msg"]
        if len(errors) > 1:
            reason = f"{reason} (+{len(errors) - 1} more)"
        raise ValidationError(info.name, line, column, value, reason) from e


class SchemaRegistry:
    """
    Centralized registry for all entity schemas.

    Iteration order is the dependency order used for table creation and
    loading.
    """

    _entities: ClassVar[dict[str, EntityInfo]] = {e.name: e for e in _ENTITIES}

    @classmethod
    def get(cls, name: str) -> type[RecordModel]:
        """
        Get a record model by entity name.

        Args:
            name: Entity identifier (e.g. 'race_result').

        Returns:
            The pydantic record model class.

        Raises:
            KeyError: If the entity is not registered.
        """
        return cls.get_info(name).model

    @classmethod
    def get_info(cls, name: str) -> EntityInfo:
        """Get full entity info by name."""
        if name not in cls._entities:
            available = ", ".join(cls._entities.keys())
            msg = f"Unknown entity '{name}'. Available: {available}"
            raise KeyError(msg)
        return cls._entities[name]

    @classmethod
    def by_table(cls, table: str) -> EntityInfo:
        """Get entity info by its store table name."""
        for info in cls._entities.values():
            if info.table == table:
                return info
        msg = f"No entity stores into table '{table}'"
        raise KeyError(msg)

    @classmethod
    def list_entities(cls) -> list[str]:
        """List entity names in dependency order."""
        return list(cls._entities.keys())

    @classmethod
    def list_by_kind(cls, kind: EntityKind) -> list[str]:
        """List entities filtered by kind."""
        return [name for name, info in cls._entities.items() if info.kind == kind]

    @classmethod
    def entities(cls) -> Iterator[EntityInfo]:
        """Iterate entity infos in dependency order."""
        return iter(cls._entities.values())

    @classmethod
    def csv_files(cls) -> list[str]:
        """CSV file names expected in the source directory."""
        return [info.csv_file for info in cls._entities.values()]

    @classmethod
    def validate(
        cls,
        record: Mapping[str, Any],
        entity_name: str,
        line: int | None = None,
    ) -> RecordModel:
        """Validate a normalized record against a registered entity."""
        return validate_record(cls.get_info(entity_name), record, line)
