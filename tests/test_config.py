"""Tests for configuration loading and validation."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from pomolog.config import Config, ConfigError, parse_date


def test_defaults() -> None:
    config = Config()
    assert config.log_dir == Path.home() / ".pomodoro_logs"
    assert config.status_file == Path.home() / ".pomodoro_current"
    assert config.work_seconds == 25 * 60
    assert config.break_seconds == 5 * 60
    assert config.long_break_seconds == 15 * 60
    assert config.sessions_before_long_break == 4
    assert config.deep_work is False
    assert config.deep_work_plan.segments == [50, 35, 20]
    assert config.deep_work_plan.sets == 3
    assert config.analyzer.output_file == Path("pomodoro_summary.csv")
    config.validate()


def test_load_missing_file(tmp_path: Path) -> None:
    config = Config.load(config_path=tmp_path / "missing.toml")
    assert config.work_minutes == 25


def test_load_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        'log_dir = "~/pomo"\n'
        "work_minutes = 50\n"
        "tick_interval = 0.2\n"
        "\n[deep_work_plan]\n"
        "segments = [40, 30, 20]\n"
        "break_minutes = 5\n"
        "\n[analyzer]\n"
        'public_output = "stats.md"\n'
    )

    config = Config.load(config_path=path)

    assert config.log_dir == Path.home() / "pomo"
    assert config.work_minutes == 50
    assert config.tick_interval == 0.2
    assert config.deep_work_plan.segments == [40, 30, 20]
    assert config.deep_work_plan.break_minutes == 5
    assert config.analyzer.public_output == Path("stats.md")


def test_overrides_win(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("work_minutes = 50\n")
    config = Config.load({"work_minutes": 30, "deep_work": True}, config_path=path)
    assert config.work_minutes == 30
    assert config.deep_work is True


def test_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("work_minutes = \n")
    with pytest.raises(ConfigError, match="Invalid config file"):
        Config.load(config_path=path)


def test_invalid_value_type(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        Config.load({"work_minutes": "soon"}, config_path=tmp_path / "none.toml")


@pytest.mark.parametrize(
    "field_name, value",
    [
        ("work_minutes", 0),
        ("break_minutes", -5),
        ("long_break_minutes", 0),
        ("sessions_before_long_break", 0),
        ("tick_interval", 0.01),
        ("tick_interval", 2.0),
    ],
)
def test_validate_rejects(field_name: str, value: float) -> None:
    config = Config()
    setattr(config, field_name, value)
    with pytest.raises(ConfigError):
        config.validate()


def test_validate_rejects_empty_deep_work_segments() -> None:
    config = Config()
    config.deep_work_plan.segments = []
    with pytest.raises(ConfigError, match="segments"):
        config.validate()


def test_parse_date() -> None:
    assert parse_date("2026-02-11") == date(2026, 2, 11)
    assert parse_date(" 2026-02-11 ") == date(2026, 2, 11)


@pytest.mark.parametrize("value", ["2026/02/11", "11-02-2026", "2026-02-30", "yesterday", ""])
def test_parse_date_invalid(value: str) -> None:
    with pytest.raises(ConfigError, match="Invalid date"):
        parse_date(value)
