"""
Typed configuration models using Pydantic.

The loader is configured only through file system paths and a few
store/batching knobs; nothing here changes the dataset shape.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class JournalMode(str, Enum):
    """SQLite journal modes accepted for the bulk-write session."""

    WAL = "WAL"
    DELETE = "DELETE"
    TRUNCATE = "TRUNCATE"
    MEMORY = "MEMORY"
    OFF = "OFF"


class SynchronousMode(str, Enum):
    """SQLite synchronous pragma values."""

    OFF = "OFF"
    NORMAL = "NORMAL"
    FULL = "FULL"


class PathsConfig(BaseModel):
    """Input directory and output store location."""

    model_config = ConfigDict(frozen=True)

    source_dir: Path = Field(
        default=Path("csv"), description="Directory holding the 14 dataset CSV files"
    )
    output: Path = Field(
        default=Path("out/f1.sqlite"), description="SQLite file written by the loader"
    )


class StoreConfig(BaseModel):
    """Pragmas applied when the store is created."""

    model_config = ConfigDict(frozen=True)

    journal_mode: JournalMode = Field(default=JournalMode.WAL)
    synchronous: SynchronousMode = Field(default=SynchronousMode.NORMAL)


class LoadConfig(BaseModel):
    """Bulk loading configuration."""

    model_config = ConfigDict(frozen=True)

    batch_size: int = Field(
        default=5000, ge=1, description="Validated rows per executemany call"
    )
    progress_every: int = Field(
        default=50000,
        ge=0,
        description="Rows between progress log events (0 disables them)",
    )


class LoaderSettings(BaseModel):
    """Complete loader configuration."""

    model_config = ConfigDict(frozen=True)

    paths: PathsConfig = Field(default_factory=PathsConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    load: LoadConfig = Field(default_factory=LoadConfig)

    @property
    def source_dir(self) -> Path:
        """Convenience accessor for the CSV directory."""
        return self.paths.source_dir

    @property
    def output(self) -> Path:
        """Convenience accessor for the output store path."""
        return self.paths.output
