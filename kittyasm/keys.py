"""Mapping of keyboard keys to the machine's key values."""

from enum import Enum

KeyCode = Enum(
    "KeyCode",
    [
        "SPACE", "APOSTROPHE", "COMMA", "MINUS", "PERIOD", "SLASH",
        *(f"KEY{digit}" for digit in range(10)),
        "SEMICOLON", "EQUAL",
        *"ABCDEFGHIJKLMNOPQRSTUVWXYZ",
        "LEFT_BRACKET", "BACKSLASH", "RIGHT_BRACKET", "GRAVE_ACCENT",
        "WORLD1", "WORLD2", "ESCAPE", "ENTER", "TAB", "BACKSPACE",
        "INSERT", "DELETE", "RIGHT", "LEFT", "DOWN", "UP",
        "PAGE_UP", "PAGE_DOWN", "HOME", "END",
        "CAPS_LOCK", "SCROLL_LOCK", "NUM_LOCK", "PRINT_SCREEN", "PAUSE",
        *(f"F{number}" for number in range(1, 26)),
        *(f"KP{digit}" for digit in range(10)),
        "KP_DECIMAL", "KP_DIVIDE", "KP_MULTIPLY", "KP_SUBTRACT", "KP_ADD",
        "KP_ENTER", "KP_EQUAL",
        "LEFT_SHIFT", "LEFT_CONTROL", "LEFT_ALT", "LEFT_SUPER",
        "RIGHT_SHIFT", "RIGHT_CONTROL", "RIGHT_ALT", "RIGHT_SUPER",
        "MENU", "UNKNOWN",
    ],
)
KeyCode.__doc__ = "Keys reported by the window system."


class KeyLayout(Enum):
    """Letter numbering schemes.

    LEGACY skips 0x4D, so M..Z map to 0x4E..0x5B; ALPHABETIC numbers the
    letters A..Z as 0x41..0x5A.
    """

    LEGACY = "legacy"
    ALPHABETIC = "alphabetic"


_OTHER = 0x22
_UNKNOWN = 0x98

_COMMON = {
    KeyCode.SPACE: 0x20,
    KeyCode.APOSTROPHE: 0x21,
    KeyCode.COMMA: 0x22,
    KeyCode.MINUS: 0x23,
    KeyCode.PERIOD: 0x24,
    KeyCode.SLASH: 0x25,
    **{KeyCode[f"KEY{digit}"]: 0x26 + digit for digit in range(10)},
    KeyCode.SEMICOLON: 0x30,
    KeyCode.EQUAL: 0x31,
    **{KeyCode[letter]: value for value, letter in enumerate("ABCDEFGHIJKL", 0x41)},
    KeyCode.UNKNOWN: _UNKNOWN,
}

_LATE_LETTERS = "MNOPQRSTUVWXYZ"

_LAYOUTS = {
    KeyLayout.LEGACY: {
        **_COMMON,
        **{KeyCode[letter]: value for value, letter in enumerate(_LATE_LETTERS, 0x4E)},
    },
    KeyLayout.ALPHABETIC: {
        **_COMMON,
        **{KeyCode[letter]: value for value, letter in enumerate(_LATE_LETTERS, 0x4D)},
    },
}


def key_value(key, layout=KeyLayout.LEGACY):
    """Return the machine key value for `key` under `layout`."""
    return _LAYOUTS[KeyLayout(layout)].get(KeyCode(key), _OTHER)