"""Data models for the tapcalc engine.

Operation enum, PendingOperation, EngineState — the typed structures that flow
through engine → display → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Largest magnitude (+/-) the calculator will hold, bounded by what a float can
# represent exactly with 11 integer and 4 fractional digits.
MAX_MAGNITUDE = 99999999999.9999

# Text shown when a result is invalid or too large.
ERROR_DISPLAY = "Error (∞)"

DIGIT_KEYS = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9")
DECIMAL_KEY = "."


class Operation(str, Enum):
    """Operation keys. Values are the exact key captions."""

    ALL_CLEAR = "AC"
    SIGN = "+/-"
    PERCENT = "%"
    DIVIDE = "÷"
    MULTIPLY = "×"
    SUBTRACT = "-"
    ADD = "+"
    EQUALS = "="

    @property
    def is_binary(self) -> bool:
        return self in BINARY_OPERATIONS


BINARY_OPERATIONS = frozenset({
    Operation.DIVIDE,
    Operation.MULTIPLY,
    Operation.SUBTRACT,
    Operation.ADD,
})


@dataclass
class PendingOperation:
    """Left operand and operator waiting for the next operand.

    After the first equals press ``value`` holds the right operand instead, so
    further presses can replay the last step.
    """

    value: float
    operation: Operation


@dataclass
class EngineState:
    """Everything the engine remembers between key presses."""

    pending: Optional[PendingOperation] = None
    equals_in_sequence: int = 0
    new_entry: bool = False

    @property
    def is_clear(self) -> bool:
        return self.pending is None and self.equals_in_sequence == 0 and not self.new_entry

    def reset(self) -> None:
        """Back to the freshly constructed state."""
        self.pending = None
        self.equals_in_sequence = 0
        self.new_entry = False
