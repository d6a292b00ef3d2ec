"""Shared keyboard utility functions."""

from typing import Optional

from blessed.keyboard import Keystroke

# blessed key names -> binding names used in config and handlers
_NAMED_BINDINGS = {
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "esc",
    "KEY_BACKSPACE": "backspace",
    "KEY_DELETE": "del",
    "KEY_TAB": "tab",
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_LEFT": "left",
    "KEY_RIGHT": "right",
    "KEY_PGUP": "pageup",  # blessed uses PGUP not PPAGE
    "KEY_PGDOWN": "pagedown",
    "KEY_HOME": "home",
    "KEY_END": "end",
}

_EVENT_TYPES = {
    "enter": "enter",
    "esc": "escape",
    "backspace": "backspace",
    "del": "delete",
    "tab": "tab",
    "up": "arrow_up",
    "down": "arrow_down",
    "left": "arrow_left",
    "right": "arrow_right",
    "pageup": "page_up",
    "pagedown": "page_down",
    "home": "home",
    "end": "end",
    "space": "char",
}


def key_event(binding: str, key: Optional[Keystroke] = None) -> dict:
    """
    Build an event dictionary from a binding name.

    Args:
        binding: Normalized binding ("enter", "ctrl-d", "space", "j", ...)
        key: Originating blessed Keystroke, if any

    Returns:
        Event dictionary with type, char and binding
    """
    if binding in _EVENT_TYPES:
        event_type = _EVENT_TYPES[binding]
    elif binding.startswith("ctrl-"):
        event_type = "ctrl"
    elif len(binding) == 1:
        event_type = "char"
    else:
        event_type = "unknown"

    if binding == "space":
        char = " "
    elif event_type == "char":
        char = binding
    else:
        char = None

    return {
        "type": event_type,
        "key": key,
        "name": key.name if key is not None and hasattr(key, "name") else None,
        "char": char,
        "binding": binding,
    }


def parse_key(key: Keystroke) -> dict:
    """
    Parse keystroke into event dictionary.

    Args:
        key: blessed Keystroke

    Returns:
        Event dictionary describing the key press
    """
    text = str(key)

    if key.name in _NAMED_BINDINGS:
        binding = _NAMED_BINDINGS[key.name]
    elif text in ("\r", "\n"):
        binding = "enter"
    elif text == "\t":
        binding = "tab"
    elif text in ("\x7f", "\x08"):
        binding = "backspace"
    elif text == "\x1b[3~":
        binding = "del"
    elif text == " ":
        binding = "space"
    elif len(text) == 1 and 1 <= ord(text) <= 26:
        # Control characters map to ctrl-a .. ctrl-z
        binding = "ctrl-" + chr(ord(text) + 96)
    elif text and text.isprintable():
        binding = text
    else:
        binding = key.name or "unknown"

    return key_event(binding, key)
