"""Event variants consumed by the navigation state machine.

Raw key tokens from :mod:`ujust_picker.input` are decoded here into one of
three event kinds so the state machine has a single dispatch point.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MouseAction(Enum):
    LEFT_DOWN = "left_down"
    LEFT_UP = "left_up"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class MouseEvent:
    """Pointer event with zero-based screen coordinates."""

    action: MouseAction
    col: int
    row: int


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


Event = KeyEvent | MouseEvent | ResizeEvent

_MOUSE_PREFIXES: dict[str, MouseAction] = {
    "MOUSE_LEFT_DOWN": MouseAction.LEFT_DOWN,
    "MOUSE_LEFT_UP": MouseAction.LEFT_UP,
    "MOUSE_WHEEL_UP": MouseAction.WHEEL_UP,
    "MOUSE_WHEEL_DOWN": MouseAction.WHEEL_DOWN,
}


def _parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


def event_from_key(key: str) -> KeyEvent | MouseEvent | None:
    """Decode one key token; returns ``None`` for tokens with no meaning here."""
    if not key:
        return None
    if key.startswith("MOUSE"):
        action = _MOUSE_PREFIXES.get(key.split(":", 1)[0])
        col, row = _parse_mouse_col_row(key)
        if action is None or col is None or row is None:
            return None
        # SGR reports 1-based cells.
        return MouseEvent(action=action, col=col - 1, row=row - 1)
    if key in {"ENTER_CR", "ENTER_LF"}:
        return KeyEvent("ENTER")
    return KeyEvent(key)


__all__ = [
    "Event",
    "KeyEvent",
    "MouseAction",
    "MouseEvent",
    "ResizeEvent",
    "event_from_key",
]
