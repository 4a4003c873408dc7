"""Tests for engine configuration loading and discovery."""

from pathlib import Path

import pytest

from critpath.config import (
    CONFIG_FILENAME,
    CriticalEdgeMode,
    EngineConfig,
    discover_config,
    load_config,
    set_config_path,
)
from critpath.exceptions import ParseError
from tests.conftest import EXAMPLES_DIR


class TestEngineConfig:
    """Tests for the configuration model."""

    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.convert_hours
        assert config.hours_per_day == 8
        assert config.min_duration == 1
        assert config.estimate_tolerance == 1
        assert config.critical_tolerance == 0.001
        assert config.critical_edges is CriticalEdgeMode.ENDPOINTS
        assert config.round_digits == 1

    def test_example_file_matches_defaults(self) -> None:
        config = load_config(EXAMPLES_DIR / "critpath_config.yaml")
        assert config == EngineConfig()


class TestLoadConfig:
    """Tests for reading config files."""

    def test_top_level_settings(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("hours_per_day: 10\ncritical_edges: tight\n")

        config = load_config(path)
        assert config.hours_per_day == 10
        assert config.critical_edges is CriticalEdgeMode.TIGHT

    def test_engine_section(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("engine:\n  convert_hours: false\n")
        assert not load_config(path).convert_hours

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == EngineConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("engine: [\n")
        with pytest.raises(ParseError, match="Failed to parse config YAML"):
            load_config(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("hours_per_day: 0\n")
        with pytest.raises(ParseError, match="Invalid config"):
            load_config(path)

    def test_unknown_edge_mode(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("critical_edges: sometimes\n")
        with pytest.raises(ParseError):
            load_config(path)

    def test_root_must_be_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- 1\n")
        with pytest.raises(ParseError, match="mapping"):
            load_config(path)


class TestDiscoverConfig:
    """Tests for the config search order."""

    def test_defaults_when_nothing_found(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert discover_config(tmp_path / "project.yaml") == EngineConfig()

    def test_next_to_project_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        project_dir = tmp_path / "project"
        project_dir.mkdir()
        (project_dir / CONFIG_FILENAME).write_text("round_digits: 2\n")

        assert discover_config(project_dir / "project.yaml").round_digits == 2

    def test_current_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / CONFIG_FILENAME).write_text("round_digits: 3\n")

        assert discover_config(Path("/nonexistent/project.yaml")).round_digits == 3

    def test_cli_path_wins_over_project_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / CONFIG_FILENAME).write_text("round_digits: 2\n")
        cli_config = tmp_path / "cli.yaml"
        cli_config.write_text("round_digits: 0\n")
        set_config_path(cli_config)

        assert discover_config(tmp_path / "project.yaml").round_digits == 0

    def test_explicit_path_wins(self, tmp_path: Path) -> None:
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("min_tasks: 1\n")
        set_config_path(tmp_path / "ignored.yaml")

        assert discover_config(config_path=explicit).min_tasks == 1

    def test_cli_path_must_exist(self, tmp_path: Path) -> None:
        set_config_path(tmp_path / "missing.yaml")
        with pytest.raises(FileNotFoundError):
            discover_config()
