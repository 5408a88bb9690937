from __future__ import annotations

from typing import Protocol

import pygame

LOGO_TEXT = "DVD"
SHADOW_COLOR = (0, 0, 0)
SHADOW_ALPHA = 128
TEXT_COLOR = (255, 255, 255)

Color = tuple[int, int, int, int]


class FontMetrics(Protocol):
    def size(self, text: str) -> tuple[int, int]: ...

    def get_ascent(self) -> int: ...


class LogoRenderer(Protocol):
    def create_logo(self, width: int, height: int, color: Color) -> pygame.Surface: ...


def default_font(size: int = 13) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.SysFont("monospace", size)


def text_origin(width: int, height: int, font: FontMetrics) -> tuple[int, int]:
    """Top-left corner that centers LOGO_TEXT inside a width x height box."""
    advance = font.size(LOGO_TEXT)[0]
    text_x = (width - advance) // 2
    text_y = height // 2 + font.get_ascent() // 2
    return text_x, text_y


def create_dvd_logo(
    width: int,
    height: int,
    fill: Color,
    font: pygame.font.Font | None = None,
) -> pygame.Surface:
    """Render "DVD" over a solid fill, with a half-transparent shadow 1px down-right."""
    font = font or default_font()
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    surface.fill(fill)

    text_x, text_y = text_origin(width, height, font)

    shadow = font.render(LOGO_TEXT, True, SHADOW_COLOR)
    shadow.set_alpha(SHADOW_ALPHA)
    surface.blit(shadow, (text_x + 1, text_y + 1))

    text = font.render(LOGO_TEXT, True, TEXT_COLOR)
    surface.blit(text, (text_x, text_y))
    return surface


class DVDLogoRenderer:
    def __init__(self, font_size: int = 13) -> None:
        self._font_size = font_size
        self._font: pygame.font.Font | None = None

    def create_logo(self, width: int, height: int, color: Color) -> pygame.Surface:
        if self._font is None:
            self._font = default_font(self._font_size)
        return create_dvd_logo(width, height, color, self._font)
