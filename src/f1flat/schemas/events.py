"""
Record models for races and everything that happens at them.

Every model here references at least one previously loaded entity.
"""

from pydantic import Field

from f1flat.schemas.base import RecordModel
from f1flat.schemas.reference import FIRST_SEASON


class RaceRecord(RecordModel):
    """
    A championship race.

    Session dates and times were only recorded for recent seasons, so all of
    them are nullable. Dates and times stay text, as in the source files.
    """

    id: int = Field(alias="raceId", description="Race identifier")
    year: int = Field(ge=FIRST_SEASON, description="Season year (references seasons)")
    round: int = Field(ge=1, description="Round number within the season")
    circuit: int = Field(alias="circuitId", description="References circuits")
    name: str
    date: str
    time: str | None
    url: str
    fp1_date: str | None
    fp1_time: str | None
    fp2_date: str | None
    fp2_time: str | None
    fp3_date: str | None
    fp3_time: str | None
    quali_date: str | None
    quali_time: str | None
    sprint_date: str | None
    sprint_time: str | None


class ConstructorResultRecord(RecordModel):
    """Points scored by a constructor at one race."""

    id: int = Field(alias="constructorResultsId")
    race: int = Field(alias="raceId")
    constructor: int = Field(alias="constructorId")
    points: float
    # Only ever a code like 'D' (disqualified), not a status id
    status: str | None


class ConstructorStandingRecord(RecordModel):
    """Constructor championship standing after a race."""

    id: int = Field(alias="constructorStandingsId")
    race: int = Field(alias="raceId")
    constructor: int = Field(alias="constructorId")
    points: float
    position: int
    position_text: str = Field(alias="positionText")
    wins: int


class DriverStandingRecord(RecordModel):
    """Driver championship standing after a race."""

    id: int = Field(alias="driverStandingsId")
    race: int = Field(alias="raceId")
    driver: int = Field(alias="driverId")
    points: float
    position: int
    position_text: str = Field(alias="positionText")
    wins: int


class LapTimeRecord(RecordModel):
    """One lap of one driver; keyed by (race, driver, lap)."""

    race: int = Field(alias="raceId")
    driver: int = Field(alias="driverId")
    lap: int
    position: int
    time: str
    milliseconds: int


class PitStopRecord(RecordModel):
    """One pit stop; keyed by (race, driver, stop)."""

    race: int = Field(alias="raceId")
    driver: int = Field(alias="driverId")
    stop: int
    lap: int
    time: str = Field(description="Time of day the stop happened")
    duration: str = Field(description="Stop duration as displayed")
    milliseconds: int


class QualifyingSessionRecord(RecordModel):
    """A driver's qualifying result; q2/q3 are missing when knocked out."""

    id: int = Field(alias="qualifyId")
    race: int = Field(alias="raceId")
    driver: int = Field(alias="driverId")
    constructor: int = Field(alias="constructorId")
    number: int
    position: int
    q1: str | None
    q2: str | None
    q3: str | None


class RaceResultRecord(RecordModel):
    """
    A driver's classified result in a race.

    ``position`` is null for non-classified finishers while ``position_text``
    keeps the retirement code ('R', 'D', 'W', ...).
    """

    id: int = Field(alias="resultId")
    race: int = Field(alias="raceId")
    driver: int = Field(alias="driverId")
    constructor: int = Field(alias="constructorId")
    number: int | None
    grid: int
    position: int | None
    position_text: str = Field(alias="positionText")
    position_order: int = Field(alias="positionOrder")
    points: float
    laps: int
    time: str | None
    milliseconds: int | None
    fastest_lap: int | None = Field(alias="fastestLap")
    rank: int | None
    fastest_lap_time: str | None = Field(alias="fastestLapTime")
    fastest_lap_speed: float | None = Field(alias="fastestLapSpeed")
    status: int = Field(alias="statusId", description="References status")


class SprintResultRecord(RecordModel):
    """A driver's result in a sprint race."""

    id: int = Field(alias="resultId")
    race: int = Field(alias="raceId")
    driver: int = Field(alias="driverId")
    constructor: int = Field(alias="constructorId")
    number: int
    grid: int
    position: int | None
    position_text: str = Field(alias="positionText")
    position_order: int = Field(alias="positionOrder")
    points: float
    laps: int
    time: str | None
    milliseconds: int | None
    fastest_lap: int | None = Field(alias="fastestLap")
    fastest_lap_time: str | None = Field(alias="fastestLapTime")
    status: int = Field(alias="statusId")
