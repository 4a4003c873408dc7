"""Engine configuration and config file discovery."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError

CONFIG_FILENAME = "critpath_config.yaml"


class CriticalEdgeMode(str, Enum):
    """How edges between critical tasks are classified."""

    ENDPOINTS = "endpoints"  # Both endpoints critical
    TIGHT = "tight"  # Both endpoints critical and EF(pred) == ES(succ)


class EngineConfig(BaseModel):
    """Tunable constants of the scheduling engine.

    The defaults reproduce the behaviour task stores already rely on; only
    change them when the stored data is known to follow different conventions.
    """

    # Hours-to-days heuristic: values above hours_per_day are read as hours
    convert_hours: bool = True
    hours_per_day: float = Field(default=8.0, gt=0)

    # Every task takes at least this long
    min_duration: float = Field(default=1.0, gt=0)

    # Three-point estimates at or below this value are placeholders
    placeholder_ceiling: float = 1.0
    # Estimate must differ from the duration field by more than this to win
    estimate_tolerance: float = 1.0

    # |slack| below this counts as zero
    critical_tolerance: float = Field(default=0.001, gt=0)
    critical_edges: CriticalEdgeMode = CriticalEdgeMode.ENDPOINTS

    min_tasks: int = 2
    min_dependencies: int = 1

    # Decimal places for presentation output
    round_digits: int = Field(default=1, ge=0)


class _ConfigState:
    def __init__(self) -> None:
        self.path: Path | None = None


_state = _ConfigState()


def get_config_path() -> Path | None:
    """Get the config path selected on the command line, if any."""
    return _state.path


def set_config_path(path: Path | None) -> None:
    """Set the config path selected on the command line."""
    _state.path = path


def load_config(config_path: Path | str) -> EngineConfig:
    """Load engine configuration from a YAML file.

    The file may either hold the settings at the top level or under an
    ``engine`` key.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is not valid YAML or has invalid settings
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse config YAML: {e}") from e

    if data is None:
        return EngineConfig()
    if not isinstance(data, dict):
        raise ParseError("Config must contain a mapping at the root level")
    if "engine" in data:
        data = data["engine"] or {}

    try:
        return EngineConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ParseError(f"Invalid config {config_path}: {e}") from e


def discover_config(
    project_path: Path | str | None = None,
    config_path: Path | None = None,
) -> EngineConfig:
    """Find and load the engine configuration.

    Search order:
    1. Explicit config_path argument
    2. Path set via the CLI --config option
    3. critpath_config.yaml next to the project file
    4. critpath_config.yaml in the current directory

    Falls back to the defaults when nothing is found.
    """
    if config_path is not None:
        return load_config(config_path)

    cli_path = get_config_path()
    if cli_path is not None:
        return load_config(cli_path)

    if project_path is not None:
        candidate = Path(project_path).parent / CONFIG_FILENAME
        if candidate.exists():
            return load_config(candidate)

    cwd_candidate = Path(CONFIG_FILENAME)
    if cwd_candidate.exists():
        return load_config(cwd_candidate)

    return EngineConfig()
