"""
Configuration loading utilities.

Supports environment variable interpolation in YAML values.
A missing or empty file yields the defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from f1flat.config.settings import LoaderSettings


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config root must be a mapping, got {type(data).__name__}: {path}"
        raise ValueError(msg)
    return _process_config_values(data)


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> LoaderSettings:
    """
    Load loader settings from an optional YAML file.

    Expected layout (every key optional):

        paths:
          source_dir: csv
          output: out/f1.sqlite
        store:
          journal_mode: WAL
          synchronous: NORMAL
        load:
          batch_size: 5000
          progress_every: 50000

    Args:
        config_path: YAML file to read. None means defaults only.
        overrides: Nested mapping applied on top of the file (e.g. CLI options).
            Keys whose value is None are ignored.

    Returns:
        Fully validated LoaderSettings instance.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            msg = f"Config file not found: {config_path}"
            raise FileNotFoundError(msg)
        data = load_yaml(config_path)

    for section, values in (overrides or {}).items():
        present = {k: v for k, v in values.items() if v is not None}
        if present:
            data[section] = {**data.get(section, {}), **present}

    return LoaderSettings.model_validate(data)
