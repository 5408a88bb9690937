from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from types import SimpleNamespace

LOGGER = logging.getLogger(__name__)


def _load_local_env_file() -> None:
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        normalized_key = key.strip()
        normalized_value = value.strip().strip('"').strip("'")
        os.environ.setdefault(normalized_key, normalized_value)


def _read_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _read_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    screen_width: int = 800
    screen_height: int = 600
    logo_width: int = 120
    logo_height: int = 60
    min_speed: float = 0.5
    max_speed: float = 10.0
    speed_step: float = 0.5
    initial_speed: float = 3.0
    fps: int = 60
    show_logs: bool = True
    max_log_lines: int = 10
    log_file: str = "dvd_screensaver.log"
    font_size: int = 13

    def __post_init__(self) -> None:
        problems = _conflicts(self)
        if problems:
            raise ValueError("Invalid settings: " + "; ".join(problems.values()))

    def clamp_speed(self, speed: float) -> float:
        return max(self.min_speed, min(self.max_speed, speed))


# Each group of fields is checked and reset as a unit.
_GROUPS: dict[str, tuple[str, ...]] = {
    "geometry": ("screen_width", "screen_height", "logo_width", "logo_height"),
    "speed": ("min_speed", "max_speed", "speed_step"),
    "fps": ("fps",),
    "log_lines": ("max_log_lines",),
    "font": ("font_size",),
}


def _conflicts(values: Settings | SimpleNamespace) -> dict[str, str]:
    problems: dict[str, str] = {}
    if min(values.logo_width, values.logo_height) <= 0 or (
        values.logo_width >= values.screen_width or values.logo_height >= values.screen_height
    ):
        problems["geometry"] = (
            f"logo {values.logo_width}x{values.logo_height} must fit inside "
            f"screen {values.screen_width}x{values.screen_height}"
        )
    if values.min_speed <= 0 or values.min_speed > values.max_speed or values.speed_step <= 0:
        problems["speed"] = (
            f"speed range [{values.min_speed}, {values.max_speed}] step {values.speed_step} is not usable"
        )
    if values.fps <= 0:
        problems["fps"] = f"fps must be positive, got {values.fps}"
    if values.max_log_lines < 0:
        problems["log_lines"] = f"max_log_lines must not be negative, got {values.max_log_lines}"
    if values.font_size <= 0:
        problems["font"] = f"font_size must be positive, got {values.font_size}"
    return problems


def load_settings() -> Settings:
    _load_local_env_file()
    defaults = Settings()
    values = SimpleNamespace(
        screen_width=_read_int("DVD_SCREEN_WIDTH", defaults.screen_width),
        screen_height=_read_int("DVD_SCREEN_HEIGHT", defaults.screen_height),
        logo_width=_read_int("DVD_LOGO_WIDTH", defaults.logo_width),
        logo_height=_read_int("DVD_LOGO_HEIGHT", defaults.logo_height),
        min_speed=_read_float("DVD_MIN_SPEED", defaults.min_speed),
        max_speed=_read_float("DVD_MAX_SPEED", defaults.max_speed),
        speed_step=_read_float("DVD_SPEED_STEP", defaults.speed_step),
        initial_speed=_read_float("DVD_INITIAL_SPEED", defaults.initial_speed),
        fps=_read_int("DVD_FPS", defaults.fps),
        show_logs=_read_bool("DVD_SHOW_LOGS", defaults.show_logs),
        max_log_lines=_read_int("DVD_MAX_LOG_LINES", defaults.max_log_lines),
        log_file=os.getenv("DVD_LOG_FILE", defaults.log_file),
        font_size=_read_int("DVD_FONT_SIZE", defaults.font_size),
    )

    for group, message in _conflicts(values).items():
        LOGGER.warning("Ignoring %s settings, using defaults: %s", group, message)
        for name in _GROUPS[group]:
            setattr(values, name, getattr(defaults, name))

    return Settings(**vars(values))
