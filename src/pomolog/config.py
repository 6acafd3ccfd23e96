"""Configuration management for pomolog."""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path


_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "pomolog"

MIN_TICK_INTERVAL = 0.1
MAX_TICK_INTERVAL = 1.0

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class ConfigError(ValueError):
    """Raised for invalid configuration or command-line values."""


@dataclass
class DeepWorkPlan:
    """Fixed deep-work schedule: sets of asymmetric work segments."""

    segments: list[int] = field(default_factory=lambda: [50, 35, 20])  # minutes
    break_minutes: int = 10
    sets: int = 3


@dataclass
class AnalyzerConfig:
    """Output locations for the log analyzer."""

    output_file: Path = field(default_factory=lambda: Path("pomodoro_summary.csv"))
    public_output: Path = field(
        default_factory=lambda: Path("pomodoro_public_stats.md")
    )


@dataclass
class Config:
    log_dir: Path = field(default_factory=lambda: Path.home() / ".pomodoro_logs")
    status_file: Path = field(
        default_factory=lambda: Path.home() / ".pomodoro_current"
    )
    work_minutes: int = 25
    break_minutes: int = 5
    long_break_minutes: int = 15
    sessions_before_long_break: int = 4
    deep_work: bool = False
    tick_interval: float = 0.5  # seconds between key polls
    verbose: bool = False
    deep_work_plan: DeepWorkPlan = field(default_factory=DeepWorkPlan)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)

    @property
    def work_seconds(self) -> int:
        return self.work_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self.break_minutes * 60

    @property
    def long_break_seconds(self) -> int:
        return self.long_break_minutes * 60

    @classmethod
    def load(cls, overrides: dict | None = None, config_path: Path | None = None) -> Config:
        """Load config from TOML file, then apply CLI overrides."""
        config = cls()

        # Try loading from config file
        config_path = config_path or _DEFAULT_CONFIG_DIR / "config.toml"
        if config_path.exists():
            try:
                with open(config_path, "rb") as f:
                    data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"Invalid config file {config_path}: {e}") from e
            config = cls._apply_dict(config, data)

        # Apply CLI overrides
        if overrides:
            config = cls._apply_dict(config, overrides)

        return config

    @classmethod
    def _apply_dict(cls, config: Config, data: dict) -> Config:
        try:
            if "log_dir" in data:
                config.log_dir = Path(data["log_dir"]).expanduser()
            if "status_file" in data:
                config.status_file = Path(data["status_file"]).expanduser()
            if "work_minutes" in data:
                config.work_minutes = int(data["work_minutes"])
            if "break_minutes" in data:
                config.break_minutes = int(data["break_minutes"])
            if "long_break_minutes" in data:
                config.long_break_minutes = int(data["long_break_minutes"])
            if "sessions_before_long_break" in data:
                config.sessions_before_long_break = int(data["sessions_before_long_break"])
            if "deep_work" in data:
                config.deep_work = bool(data["deep_work"])
            if "tick_interval" in data:
                config.tick_interval = float(data["tick_interval"])
            if "verbose" in data:
                config.verbose = bool(data["verbose"])

            if "deep_work_plan" in data:
                plan_data = data["deep_work_plan"]
                if "segments" in plan_data:
                    config.deep_work_plan.segments = [int(m) for m in plan_data["segments"]]
                if "break_minutes" in plan_data:
                    config.deep_work_plan.break_minutes = int(plan_data["break_minutes"])
                if "sets" in plan_data:
                    config.deep_work_plan.sets = int(plan_data["sets"])

            if "analyzer" in data:
                analyzer_data = data["analyzer"]
                if "output_file" in analyzer_data:
                    config.analyzer.output_file = Path(analyzer_data["output_file"]).expanduser()
                if "public_output" in analyzer_data:
                    config.analyzer.public_output = Path(
                        analyzer_data["public_output"]
                    ).expanduser()
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}") from e

        return config

    def validate(self) -> None:
        """Check timer settings before any countdown starts.

        Raises:
            ConfigError: If a duration or interval is out of range.
        """
        for name in ("work_minutes", "break_minutes", "long_break_minutes"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be a positive number of minutes")
        if self.sessions_before_long_break <= 0:
            raise ConfigError("sessions_before_long_break must be at least 1")
        if not MIN_TICK_INTERVAL <= self.tick_interval <= MAX_TICK_INTERVAL:
            raise ConfigError(
                f"tick_interval must be between {MIN_TICK_INTERVAL} "
                f"and {MAX_TICK_INTERVAL} seconds"
            )
        plan = self.deep_work_plan
        if not plan.segments or any(m <= 0 for m in plan.segments):
            raise ConfigError("deep_work_plan.segments must be positive minutes")
        if plan.break_minutes <= 0 or plan.sets <= 0:
            raise ConfigError("deep_work_plan break_minutes and sets must be positive")


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string.

    Raises:
        ConfigError: If the string is not a valid calendar date.
    """
    value = value.strip()
    if not _DATE_RE.fullmatch(value):
        raise ConfigError(f"Invalid date '{value}'. Use YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ConfigError(f"Invalid date '{value}': {e}") from e
