"""Pytest fixtures for all tests."""

import logging
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from dvdsaver.config import Settings
from dvdsaver.motion import LogoController, MotionState


class FakeRenderer:
    """Records logo requests instead of drawing."""

    def __init__(self):
        self.calls = []

    def create_logo(self, width, height, color):
        self.calls.append((width, height, color))
        return ("logo", color)


class FakeWindow:
    def __init__(self):
        self.calls = []

    def set_fullscreen(self, fullscreen):
        self.calls.append(fullscreen)


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture(scope="session", autouse=True)
def pygame_font():
    pygame.font.init()
    yield
    pygame.font.quit()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def window():
    return FakeWindow()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_controller(settings, renderer, window, clock):
    """Build a controller with a fixed starting state."""

    def _make(x=300.0, y=200.0, vx=3.0, vy=2.0, speed=3.0, color_index=0, settings=settings):
        state = MotionState(x=x, y=y, vx=vx, vy=vy, speed=speed, color_index=color_index)
        return LogoController(settings, renderer, window, state=state, clock=clock)

    return _make


@pytest.fixture
def restore_root_logging():
    """Undo handler changes made by configure_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
