"""tapcalc — the logic engine of a four-function keypad calculator.

Turns key presses into display text: digits accumulate into a grouped,
bounded-precision number, operator keys drive a single pending operation, and
repeated "=" replays the last step. Anything too large or undefined shows the
error token and clears the calculator.

Usage:
    python -m tapcalc press 5 + 3 = =     # 5, 5, 3, 8, 11
    python -m tapcalc repl                # Interactive keypad
"""

from tapcalc.display import Display, split_keys
from tapcalc.engine import CalculatorEngine, calculate
from tapcalc.formatter import (
    DEFAULT_FORMAT,
    DisplayParseError,
    FormattingError,
    NumberFormat,
    format_number,
    parse_number,
)
from tapcalc.models import ERROR_DISPLAY, MAX_MAGNITUDE, EngineState, Operation, PendingOperation

__all__ = [
    "CalculatorEngine",
    "DEFAULT_FORMAT",
    "Display",
    "DisplayParseError",
    "ERROR_DISPLAY",
    "EngineState",
    "FormattingError",
    "MAX_MAGNITUDE",
    "NumberFormat",
    "Operation",
    "PendingOperation",
    "calculate",
    "format_number",
    "parse_number",
    "split_keys",
]
