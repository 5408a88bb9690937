from __future__ import annotations

from datetime import datetime, timezone
import logging

import pygame

from .config import Settings, load_settings
from .controls import EXIT_FULLSCREEN, FASTER, SLOWER, TOGGLE_FULLSCREEN
from .eventlog import LogBuffer, configure_logging
from .logo import DVDLogoRenderer
from .motion import LogoController

LOGGER = logging.getLogger(__name__)

KEY_BINDINGS: dict[str, int] = {
    TOGGLE_FULLSCREEN: pygame.K_f,
    EXIT_FULLSCREEN: pygame.K_ESCAPE,
    SLOWER: pygame.K_j,
    FASTER: pygame.K_l,
}

BG = (0, 0, 0)
LOG_PANEL_BG = (0, 0, 0, 120)
LOG_TEXT = (150, 150, 150)
STATUS_TEXT = (255, 255, 255)
LINE_HEIGHT = 20
MAX_LINE_CHARS = 100


def truncate_line(message: str, limit: int = MAX_LINE_CHARS) -> str:
    if len(message) > limit:
        return message[: limit - 3] + "..."
    return message


def status_text(fps: float, speed: float) -> str:
    return (
        f"FPS: {fps:.1f} | Speed: {speed:.1f} | [F] fullscreen | "
        "[ESC] exit fullscreen | [J] slower | [L] faster"
    )


def sample_keys(pressed, bindings: dict[str, int] = KEY_BINDINGS) -> dict[str, bool]:
    """Map pygame's key state onto controller actions."""
    return {action: bool(pressed[key]) for action, key in bindings.items()}


class PygameWindow:
    def __init__(self, width: int, height: int, title: str = "DVD Screensaver") -> None:
        self.size = (width, height)
        self.surface = pygame.display.set_mode(self.size, pygame.SCALED)
        pygame.display.set_caption(title)

    def set_fullscreen(self, fullscreen: bool) -> None:
        flags = pygame.SCALED | (pygame.FULLSCREEN if fullscreen else 0)
        self.surface = pygame.display.set_mode(self.size, flags)


class Screensaver:
    def __init__(
        self,
        settings: Settings,
        log_buffer: LogBuffer | None = None,
        window: PygameWindow | None = None,
    ) -> None:
        self.settings = settings
        self.log_buffer = log_buffer
        self.window = window or PygameWindow(settings.screen_width, settings.screen_height)
        LOGGER.info("Window created with size %dx%d", settings.screen_width, settings.screen_height)

        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", settings.font_size)
        self.controller = LogoController(settings, DVDLogoRenderer(settings.font_size), self.window)
        self.running = False

    def step(self) -> None:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                self.running = False

        self.controller.update(sample_keys(pygame.key.get_pressed()))
        self.draw(self.window.surface)

    def draw(self, screen: pygame.Surface) -> None:
        settings = self.settings
        screen.fill(BG)

        if settings.show_logs and self.log_buffer is not None and len(self.log_buffer):
            self.draw_log_panel(screen, list(self.log_buffer.lines))

        state = self.controller.state
        screen.blit(self.controller.logo, (int(state.x), int(state.y)))

        info = self.font.render(status_text(self.clock.get_fps(), state.speed), True, STATUS_TEXT)
        screen.blit(info, (0, 0))

    def draw_log_panel(self, screen: pygame.Surface, lines: list[str]) -> None:
        max_lines = self.settings.max_log_lines
        width, height = screen.get_size()
        panel_h = LINE_HEIGHT * max_lines

        panel = pygame.Surface((width, panel_h), pygame.SRCALPHA)
        panel.fill(LOG_PANEL_BG)
        screen.blit(panel, (0, height - panel_h))

        for i, msg in enumerate(lines):
            ts = self.font.render(truncate_line(msg), True, LOG_TEXT)
            screen.blit(ts, (10, height - LINE_HEIGHT * (max_lines - i)))

    def run(self) -> None:
        LOGGER.info("Starting game loop")
        self.running = True
        try:
            while self.running:
                self.step()
                pygame.display.flip()
                self.clock.tick(self.settings.fps)
        except Exception as exc:
            LOGGER.error("Game terminated with error: %s", exc)
            raise


def main() -> None:
    settings = load_settings()
    try:
        log_buffer = configure_logging(settings)
    except OSError as exc:
        raise SystemExit(f"Failed to create log file: {exc}") from exc

    LOGGER.info("DVD Screensaver started at %s", datetime.now(tz=timezone.utc).isoformat())

    pygame.init()
    try:
        Screensaver(settings, log_buffer).run()
    finally:
        pygame.quit()
