from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import random
import time
from typing import Callable, Mapping, Protocol

from .config import Settings
from .controls import EXIT_FULLSCREEN, FASTER, SLOWER, TOGGLE_FULLSCREEN, KeyLatch
from .eventlog import format_elapsed
from .logo import Color, LogoRenderer

LOGGER = logging.getLogger(__name__)

PALETTE: tuple[Color, ...] = (
    (255, 0, 0, 255),  # red
    (0, 255, 0, 255),  # green
    (0, 0, 255, 255),  # blue
    (255, 255, 0, 255),  # yellow
    (255, 0, 255, 255),  # magenta
    (0, 255, 255, 255),  # cyan
    (255, 165, 0, 255),  # orange
    (128, 0, 128, 255),  # purple
)


class Window(Protocol):
    def set_fullscreen(self, fullscreen: bool) -> None: ...


@dataclass
class MotionState:
    x: float
    y: float
    vx: float
    vy: float
    speed: float
    color_index: int = 0


def random_state(settings: Settings, rng: random.Random | None = None) -> MotionState:
    """Random in-bounds start with each velocity axis moving at least 1px per tick."""
    rng = rng or random.Random()
    speed = settings.clamp_speed(settings.initial_speed)

    angle = rng.random() * 2 * math.pi
    vx = math.cos(angle) * speed
    vy = math.sin(angle) * speed
    if abs(vx) < 1.0:
        vx = math.copysign(1.0, vx)
    if abs(vy) < 1.0:
        vy = math.copysign(1.0, vy)

    x = float(rng.randrange(settings.screen_width - settings.logo_width))
    y = float(rng.randrange(settings.screen_height - settings.logo_height))
    return MotionState(x=x, y=y, vx=vx, vy=vy, speed=speed)


class LogoController:
    def __init__(
        self,
        settings: Settings,
        renderer: LogoRenderer,
        window: Window,
        state: MotionState | None = None,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self.state = state or random_state(settings, rng)
        self.fullscreen = False
        self._renderer = renderer
        self._window = window
        self._log = logger or LOGGER
        self._clock = clock
        self._started = clock()
        self._latch = KeyLatch()

        self.logo = self._render_logo()
        self._log.info(
            "Initial position: (%.2f, %.2f), velocity: (%.2f, %.2f), speed: %.1f, color: %s",
            self.state.x,
            self.state.y,
            self.state.vx,
            self.state.vy,
            self.state.speed,
            self.color,
        )

    @property
    def color(self) -> Color:
        return PALETTE[self.state.color_index]

    def elapsed(self) -> str:
        return format_elapsed(self._clock() - self._started)

    def update(self, held: Mapping[str, bool]) -> None:
        """Advance one tick given which actions are currently held down."""
        state = self.state
        state.x += state.vx
        state.y += state.vy
        elapsed = self.elapsed()

        pressed = self._latch.update(held)
        if TOGGLE_FULLSCREEN in pressed:
            self.set_fullscreen(not self.fullscreen, "Fullscreen toggled", elapsed)
        if EXIT_FULLSCREEN in pressed and self.fullscreen:
            self.set_fullscreen(False, "Fullscreen exited with ESC key", elapsed)

        if SLOWER in pressed:
            old_speed, new_speed = self.decrease_speed()
            if new_speed != old_speed:
                self._log.info("[%s] Speed decreased from %.1f to %.1f", elapsed, old_speed, new_speed)
        if FASTER in pressed:
            old_speed, new_speed = self.increase_speed()
            if new_speed != old_speed:
                self._log.info("[%s] Speed increased from %.1f to %.1f", elapsed, old_speed, new_speed)

        self._check_edges(elapsed)

    def _check_edges(self, elapsed: str) -> None:
        state = self.state
        settings = self.settings

        if state.x <= 0:
            state.vx = -state.vx
            self._bounce("Left", elapsed)
        elif state.x + settings.logo_width >= settings.screen_width:
            state.vx = -state.vx
            self._bounce("Right", elapsed)

        if state.y <= 0:
            state.vy = -state.vy
            self._bounce("Top", elapsed)
        elif state.y + settings.logo_height >= settings.screen_height:
            state.vy = -state.vy
            self._bounce("Bottom", elapsed)

    def _bounce(self, edge: str, elapsed: str) -> None:
        self.advance_color()
        state = self.state
        self._log.info(
            "[%s] BOUNCE: %s edge hit at position (%.2f, %.2f), new velocity: (%.2f, %.2f), new color: %s",
            elapsed,
            edge,
            state.x,
            state.y,
            state.vx,
            state.vy,
            self.color,
        )

    def advance_color(self) -> None:
        self.state.color_index = (self.state.color_index + 1) % len(PALETTE)
        self.logo = self._render_logo()

    def _render_logo(self):
        return self._renderer.create_logo(self.settings.logo_width, self.settings.logo_height, self.color)

    def increase_speed(self) -> tuple[float, float]:
        return self._set_speed(self.state.speed + self.settings.speed_step)

    def decrease_speed(self) -> tuple[float, float]:
        return self._set_speed(self.state.speed - self.settings.speed_step)

    def _set_speed(self, target: float) -> tuple[float, float]:
        state = self.state
        old_speed = state.speed
        state.speed = self.settings.clamp_speed(target)

        if old_speed > 0 and state.speed != old_speed:
            ratio = state.speed / old_speed
            state.vx *= ratio
            state.vy *= ratio
        return old_speed, state.speed

    def set_fullscreen(self, fullscreen: bool, reason: str, elapsed: str | None = None) -> None:
        self.fullscreen = fullscreen
        self._window.set_fullscreen(fullscreen)
        self._log.info("[%s] %s: %s", elapsed or self.elapsed(), reason, fullscreen)
