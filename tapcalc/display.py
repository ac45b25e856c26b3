"""Display adapter — the calculator screen and keypad without any widgets.

Holds the display text, converts it to and from the engine's numbers, and
forwards key captions to the right engine call. Also tracks which binary
operator key is currently selected (highlighted) on the keypad.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from tapcalc.engine import CalculatorEngine
from tapcalc.models import (
    DECIMAL_KEY,
    DIGIT_KEYS,
    ERROR_DISPLAY,
    MAX_MAGNITUDE,
    Operation,
)

# Typing-friendly spellings accepted by split_keys() for the keypad captions.
KEY_ALIASES: dict[str, str] = {
    "/": Operation.DIVIDE.value,
    "*": Operation.MULTIPLY.value,
    "x": Operation.MULTIPLY.value,
    "c": Operation.ALL_CLEAR.value,
}

# Multi-character captions are matched before single characters.
_LONG_CAPTIONS = sorted(
    (op.value for op in Operation if len(op.value) > 1), key=len, reverse=True
)


def split_keys(text: str) -> list[str]:
    """Split a compact key string into key captions.

    ``"12+3=="`` → ``["1", "2", "+", "3", "=", "="]`` and
    ``"5+/-"`` → ``["5", "+/-"]``. Whitespace is ignored and aliases
    (``/``, ``*``, ``x``, ``c``) are translated to the real captions.

    Raises:
        ValueError: ``text`` contains something that is not a key.
    """
    keys: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
            continue

        long = next(
            (c for c in _LONG_CAPTIONS if text[i:i + len(c)].upper() == c.upper()),
            None,
        )
        if long:
            keys.append(long)
            i += len(long)
            continue

        key = KEY_ALIASES.get(ch.lower(), ch)
        if not is_key(key):
            raise ValueError(f"Unknown key: {ch!r}")
        keys.append(key)
        i += 1
    return keys


def is_key(caption: str) -> bool:
    """True if ``caption`` is one of the keypad's captions."""
    if caption in DIGIT_KEYS or caption == DECIMAL_KEY:
        return True
    return caption in {op.value for op in Operation}


@dataclass
class Display:
    """Calculator screen wired to an engine."""

    engine: CalculatorEngine = field(default_factory=CalculatorEngine)
    text: str = "0"
    selected: Optional[Operation] = None

    @property
    def value(self) -> float:
        """The displayed number. The error token reads as 0."""
        if self.text == ERROR_DISPLAY:
            return 0.0
        return self.engine.string_to_number(self.text)

    @value.setter
    def value(self, number: Optional[float]) -> None:
        if number is not None and abs(number) <= MAX_MAGNITUDE:
            self.text = self.engine.number_to_string(number)
            return
        self.text = ERROR_DISPLAY

    def press(self, caption: str) -> str:
        """Press one key and return the new display text.

        Raises:
            ValueError: ``caption`` is not a key on the keypad.
        """
        if caption in DIGIT_KEYS or caption == DECIMAL_KEY:
            self.selected = None
            self.text = self.engine.append(caption, self.text)
            return self.text

        op = Operation(caption)
        self.selected = op if op.is_binary else None
        self.value = self.engine.apply_operation(op, self.value)
        return self.text

    def press_many(self, captions: Iterable[str]) -> list[str]:
        """Press keys in order, returning the display text after each one."""
        return [self.press(caption) for caption in captions]
