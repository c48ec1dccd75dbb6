"""Tests for the command-line interface."""

import sqlite3
from pathlib import Path

from typer.testing import CliRunner

from f1flat.cli import app

runner = CliRunner()


def _load(source_dir: Path, output_path: Path, *extra: str):
    return runner.invoke(
        app,
        ["load", "--source", str(source_dir), "--output", str(output_path), *extra],
    )


class TestLoadCommand:
    """Tests for `f1flat load`."""

    def test_load_succeeds(self, source_dir: Path, output_path: Path) -> None:
        """Test a full load from the fixture dataset."""
        result = _load(source_dir, output_path, "--batch-size", "3")

        assert result.exit_code == 0, result.output
        assert "Load Results" in result.output
        assert output_path.is_file()

    def test_missing_source_fails(self, tmp_path: Path, output_path: Path) -> None:
        """Test that a missing CSV directory exits non-zero."""
        result = _load(tmp_path / "missing", output_path)

        assert result.exit_code == 1
        assert "Load failed" in result.output
        assert not output_path.exists()

    def test_invalid_record_fails(
        self, source_dir: Path, output_path: Path, dataset, write_csv
    ) -> None:
        """Test that a rejected record exits non-zero and leaves no store."""
        header, rows = dataset["seasons.csv"]
        write_csv(source_dir / "seasons.csv", header, [*rows, ["1949", "x"]])

        result = _load(source_dir, output_path)

        assert result.exit_code == 1
        assert "Load failed" in result.output
        assert not output_path.exists()

    def test_config_file(
        self, tmp_path: Path, source_dir: Path, output_path: Path
    ) -> None:
        """Test that paths can come from a YAML file."""
        config_file = tmp_path / "loader.yaml"
        config_file.write_text(
            f"paths:\n  source_dir: {source_dir}\n  output: {output_path}\n"
        )

        result = runner.invoke(app, ["load", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert output_path.is_file()

    def test_invalid_config_file(self, tmp_path: Path) -> None:
        """Test that an invalid config value exits non-zero."""
        config_file = tmp_path / "loader.yaml"
        config_file.write_text("load:\n  batch_size: 0\n")

        result = runner.invoke(app, ["load", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestVerifyCommand:
    """Tests for `f1flat verify`."""

    def test_verify_fresh_store(self, source_dir: Path, output_path: Path) -> None:
        """Test that a freshly built store verifies."""
        assert _load(source_dir, output_path).exit_code == 0

        result = runner.invoke(app, ["verify", "--output", str(output_path)])

        assert result.exit_code == 0, result.output

    def test_verify_detects_missing_index(
        self, source_dir: Path, output_path: Path
    ) -> None:
        """Test that a damaged store fails verification."""
        assert _load(source_dir, output_path).exit_code == 0
        conn = sqlite3.connect(output_path)
        conn.execute("DROP INDEX driver_ref")
        conn.commit()
        conn.close()

        result = runner.invoke(app, ["verify", "--output", str(output_path)])

        assert result.exit_code == 1

    def test_verify_missing_store(self, tmp_path: Path) -> None:
        """Test that verifying a missing store exits non-zero."""
        result = runner.invoke(app, ["verify", "--output", str(tmp_path / "x.sqlite")])

        assert result.exit_code == 1
        assert "Store not found" in result.output


class TestInfoCommands:
    """Tests for `f1flat schemas` and `f1flat version`."""

    def test_schemas(self) -> None:
        """Test that the entity listing runs."""
        result = runner.invoke(app, ["schemas"])
        assert result.exit_code == 0
        assert "Entities" in result.output

    def test_version(self) -> None:
        """Test the version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "f1flat version" in result.output
