from __future__ import annotations

from typing import Iterable, Mapping

TOGGLE_FULLSCREEN = "toggle_fullscreen"
EXIT_FULLSCREEN = "exit_fullscreen"
SLOWER = "slower"
FASTER = "faster"

ACTIONS = (TOGGLE_FULLSCREEN, EXIT_FULLSCREEN, SLOWER, FASTER)


class KeyLatch:
    """Turns per-frame "held" flags into "just pressed" events."""

    def __init__(self, actions: Iterable[str] = ACTIONS) -> None:
        self._previous: dict[str, bool] = {action: False for action in actions}

    def update(self, held: Mapping[str, bool]) -> set[str]:
        pressed = {
            action
            for action, was_held in self._previous.items()
            if held.get(action, False) and not was_held
        }
        for action in self._previous:
            self._previous[action] = bool(held.get(action, False))
        return pressed
