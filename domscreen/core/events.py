"""
Events dispatched by locator interactions, and the key-event table used by
``ScreenLocator.press``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import string


@dataclass
class Event:
    """A DOM-style event delivered through ``Node.dispatch_event``."""
    type: str
    bubbles: bool = True
    cancelable: bool = False
    key: Optional[str] = None
    code: Optional[str] = None
    key_code: Optional[int] = None
    target: Any = None
    current_target: Any = None
    propagation_stopped: bool = field(default=False, repr=False)

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass(frozen=True)
class KeyEvent:
    """Keyboard event fields for one named key."""
    key: str
    code: str
    key_code: int

    def to_event(self, event_type: str) -> Event:
        return Event(
            type=event_type,
            bubbles=True,
            cancelable=True,
            key=self.key,
            code=self.code,
            key_code=self.key_code,
        )


def _build_key_table() -> Dict[str, KeyEvent]:
    table: Dict[str, KeyEvent] = {}
    for ch in string.ascii_lowercase:
        table[ch] = KeyEvent(ch, f"Key{ch.upper()}", ord(ch.upper()))
        table[ch.upper()] = KeyEvent(ch.upper(), f"Key{ch.upper()}", ord(ch.upper()))
    for ch in string.digits:
        table[ch] = KeyEvent(ch, f"Digit{ch}", ord(ch))

    punctuation = {
        "-": ("Minus", 189),
        "=": ("Equal", 187),
        ",": ("Comma", 188),
        ".": ("Period", 190),
        "/": ("Slash", 191),
        ";": ("Semicolon", 186),
        "'": ("Quote", 222),
        "[": ("BracketLeft", 219),
        "]": ("BracketRight", 221),
        "@": ("Digit2", 50),
        "!": ("Digit1", 49),
        "?": ("Slash", 191),
    }
    for ch, (code, key_code) in punctuation.items():
        table[ch] = KeyEvent(ch, code, key_code)

    named = {
        "Enter": ("Enter", 13),
        "Tab": ("Tab", 9),
        "Escape": ("Escape", 27),
        "Backspace": ("Backspace", 8),
        "Delete": ("Delete", 46),
        " ": ("Space", 32),
        "ArrowLeft": ("ArrowLeft", 37),
        "ArrowUp": ("ArrowUp", 38),
        "ArrowRight": ("ArrowRight", 39),
        "ArrowDown": ("ArrowDown", 40),
        "Home": ("Home", 36),
        "End": ("End", 35),
        "PageUp": ("PageUp", 33),
        "PageDown": ("PageDown", 34),
        "Shift": ("ShiftLeft", 16),
        "Control": ("ControlLeft", 17),
        "Alt": ("AltLeft", 18),
    }
    for key, (code, key_code) in named.items():
        table[key] = KeyEvent(key, code, key_code)
    return table


# Keys supported by ScreenLocator.press, by name.
KEY_PRESS: Dict[str, KeyEvent] = _build_key_table()


def is_printable(key_event: KeyEvent) -> bool:
    """
    Whether pressing the key types a character into a text control.

    Only single visible ASCII characters count. Control keys such as Enter,
    Tab and the arrows never change an input's value, even though some of
    their key codes fall inside the printable ASCII range.
    """
    if len(key_event.key) != 1:
        return False
    return 33 <= ord(key_event.key) < 127
