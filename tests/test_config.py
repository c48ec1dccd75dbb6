"""Tests for configuration system."""

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from f1flat.config import (
    JournalMode,
    LoadConfig,
    LoaderSettings,
    SynchronousMode,
    load_config,
)


class TestLoaderSettings:
    """Tests for the settings models."""

    def test_defaults(self) -> None:
        """Test default paths and pragmas."""
        settings = LoaderSettings()
        assert settings.source_dir == Path("csv")
        assert settings.output == Path("out/f1.sqlite")
        assert settings.store.journal_mode == JournalMode.WAL
        assert settings.store.synchronous == SynchronousMode.NORMAL
        assert settings.load.batch_size == 5000

    def test_batch_size_must_be_positive(self) -> None:
        """Test that a zero batch size is rejected."""
        with pytest.raises(PydanticValidationError):
            LoadConfig(batch_size=0)

    def test_frozen(self) -> None:
        """Test that settings are immutable."""
        settings = LoaderSettings()
        with pytest.raises(PydanticValidationError):
            settings.load = LoadConfig(batch_size=10)


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_no_file_gives_defaults(self) -> None:
        """Test that omitting the path yields defaults."""
        assert load_config() == LoaderSettings()

    def test_load_yaml(self, tmp_path: Path) -> None:
        """Test loading values from a YAML file."""
        config_file = tmp_path / "loader.yaml"
        config_file.write_text(
            "paths:\n"
            "  source_dir: data/csv\n"
            "store:\n"
            "  journal_mode: DELETE\n"
            "load:\n"
            "  batch_size: 100\n"
        )

        settings = load_config(config_file)

        assert settings.source_dir == Path("data/csv")
        assert settings.output == Path("out/f1.sqlite")
        assert settings.store.journal_mode == JournalMode.DELETE
        assert settings.load.batch_size == 100

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty file yields defaults."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(config_file) == LoaderSettings()

    def test_env_interpolation(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test ${VAR} and ${VAR:default} substitution."""
        monkeypatch.setenv("F1_CSV_DIR", "/data/ergast")
        monkeypatch.delenv("F1_OUT", raising=False)
        config_file = tmp_path / "loader.yaml"
        config_file.write_text(
            "paths:\n"
            "  source_dir: ${F1_CSV_DIR}\n"
            "  output: ${F1_OUT:build/f1.sqlite}\n"
        )

        settings = load_config(config_file)

        assert settings.source_dir == Path("/data/ergast")
        assert settings.output == Path("build/f1.sqlite")

    def test_overrides_win(self, tmp_path: Path) -> None:
        """Test that overrides replace file values and None is ignored."""
        config_file = tmp_path / "loader.yaml"
        config_file.write_text("paths:\n  source_dir: a\n  output: b.sqlite\n")

        settings = load_config(
            config_file,
            overrides={"paths": {"source_dir": "c", "output": None}},
        )

        assert settings.source_dir == Path("c")
        assert settings.output == Path("b.sqlite")

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing config file raises."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nope.yaml")

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        """Test that a YAML list is rejected."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(config_file)

    def test_invalid_value(self, tmp_path: Path) -> None:
        """Test that an out-of-range value fails validation."""
        config_file = tmp_path / "loader.yaml"
        config_file.write_text("load:\n  batch_size: -1\n")
        with pytest.raises(ValueError):
            load_config(config_file)
