"""
Record models for reference entities.

Circuits, constructors, drivers, seasons and status codes have no
foreign keys and are loaded first.
"""

from pydantic import Field

from f1flat.schemas.base import RecordModel

FIRST_SEASON = 1950


class CircuitRecord(RecordModel):
    """A racing circuit."""

    id: int = Field(alias="circuitId", description="Circuit identifier")
    ref: str = Field(
        alias="circuitRef", description="Human-readable circuit key (e.g. 'monza')"
    )
    name: str = Field(description="Circuit name")
    location: str = Field(description="Nearest town or city")
    country: str = Field(description="Country name")
    lat: float = Field(description="Latitude in degrees")
    lng: float = Field(description="Longitude in degrees")
    alt: int | None = Field(description="Altitude in metres, missing for some circuits")
    url: str = Field(description="Wikipedia URL")


class ConstructorRecord(RecordModel):
    """A constructor (team)."""

    id: int = Field(alias="constructorId", description="Constructor identifier")
    ref: str = Field(
        alias="constructorRef", description="Human-readable constructor key (e.g. 'ferrari')"
    )
    name: str = Field(description="Constructor name")
    nationality: str = Field(description="Constructor nationality")
    url: str = Field(description="Wikipedia URL")


class DriverRecord(RecordModel):
    """
    A driver.

    Permanent numbers and three-letter codes only exist for recent drivers,
    so both are nullable.
    """

    id: int = Field(alias="driverId", description="Driver identifier")
    ref: str = Field(alias="driverRef", description="Human-readable driver key")
    number: int | None = Field(description="Permanent racing number")
    code: str | None = Field(description="Three-letter abbreviation (e.g. 'HAM')")
    forename: str
    surname: str
    dob: str = Field(description="Date of birth, ISO formatted text")
    nationality: str
    url: str


class SeasonRecord(RecordModel):
    """A championship season, keyed by year."""

    year: int = Field(ge=FIRST_SEASON, description="Season year")
    url: str = Field(description="Wikipedia URL")


class StatusRecord(RecordModel):
    """A finishing status code (e.g. 'Finished', 'Engine', '+1 Lap')."""

    id: int = Field(alias="statusId")
    status: str
