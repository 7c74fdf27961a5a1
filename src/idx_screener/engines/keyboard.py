"""Key bindings for the screener shell."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyCommand(Enum):
    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    CONFIRM = "confirm"
    CLEAR_FILTERS = "clear_filters"
    BLUR_INPUT = "blur_input"
    FOCUS_SEARCH = "focus_search"
    NONE = "none"


BINDINGS: dict[str, KeyCommand] = {
    "ArrowDown": KeyCommand.MOVE_DOWN,
    "ArrowUp": KeyCommand.MOVE_UP,
    "Enter": KeyCommand.CONFIRM,
    "Escape": KeyCommand.CLEAR_FILTERS,
    "f": KeyCommand.FOCUS_SEARCH,
    "F": KeyCommand.FOCUS_SEARCH,
}

_ALIASES = {
    "down": "ArrowDown",
    "up": "ArrowUp",
    "enter": "Enter",
    "return": "Enter",
    "escape": "Escape",
    "esc": "Escape",
}


@dataclass(frozen=True)
class KeyResult:
    command: KeyCommand
    consumed: bool


def normalize_key(key: str) -> str:
    if len(key) == 1:
        return key
    return _ALIASES.get(key.lower(), key)


def dispatch(key: str, *, input_focused: bool = False) -> KeyResult:
    """Map one key press to a command.

    While a text or selection input has focus, Escape only blurs it and every
    other key is left to the input.
    """
    name = normalize_key(key)
    if input_focused:
        if name == "Escape":
            return KeyResult(KeyCommand.BLUR_INPUT, consumed=True)
        return KeyResult(KeyCommand.NONE, consumed=False)
    command = BINDINGS.get(name, KeyCommand.NONE)
    return KeyResult(command, consumed=command is not KeyCommand.NONE)
