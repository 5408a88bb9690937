from __future__ import annotations

from collections import deque
import logging
import sys

from .config import Settings

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class LogBuffer(logging.Handler):
    """Keeps the most recent log messages for the on-screen overlay."""

    def __init__(self, capacity: int, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.lines: deque[str] = deque(maxlen=capacity)
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.lines.append(self.format(record))
        except Exception:
            self.handleError(record)

    def __len__(self) -> int:
        return len(self.lines)


def format_elapsed(seconds: float) -> str:
    """Millisecond-rounded duration in the compact h/m/s notation, e.g. 1m2.5s."""
    millis = round(seconds * 1000)
    if millis == 0:
        return "0s"
    sign = "-" if millis < 0 else ""
    millis = abs(millis)
    if millis < 1000:
        return f"{sign}{millis}ms"

    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    whole, frac = divmod(millis, 1000)
    secs = f"{whole}.{frac:03d}".rstrip("0") if frac else str(whole)

    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def configure_logging(settings: Settings) -> LogBuffer:
    """Route log records to the log file, stdout and the overlay buffer.

    The log file is truncated on every run. An OSError from opening it is left
    to the caller.
    """
    file_handler = logging.FileHandler(settings.log_file, mode="w", encoding="utf-8")
    console_handler = logging.StreamHandler(sys.stdout)
    buffer = LogBuffer(settings.max_log_lines)

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[file_handler, console_handler, buffer],
        force=True,
    )
    return buffer
