"""Arithmetic engine — turns key presses into display text and results.

The engine owns three pieces of state (see ``EngineState``): the pending
operation, the count of equals presses in a row, and the "new entry" flag set by
binary operators. Two operations mutate it:

    append(key, display)           digit / decimal point → new display text
    apply_operation(op, value)     operation key + displayed value → new value

Invalid results never raise. They reset the state and come back as ``None``
(or as ``ERROR_DISPLAY`` for text), which the caller shows as the error token.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from tapcalc.formatter import (
    DEFAULT_FORMAT,
    FormattingError,
    NumberFormat,
    format_number,
    parse_number,
)
from tapcalc.models import (
    DECIMAL_KEY,
    DIGIT_KEYS,
    ERROR_DISPLAY,
    MAX_MAGNITUDE,
    EngineState,
    Operation,
    PendingOperation,
)

logger = logging.getLogger(__name__)


def calculate(operation: Operation, n1: float, n2: float) -> Optional[float]:
    """Apply a binary operation.

    Division with a zero left operand is 0 whatever the divisor, so ``0 ÷ 0``
    is 0 while ``n ÷ 0`` is infinite and therefore invalid.

    Args:
        operation: One of ÷ × - +.
        n1: Left operand.
        n2: Right operand.

    Returns:
        The result, or None if it is NaN, infinite or above ``MAX_MAGNITUDE``.

    Raises:
        ValueError: ``operation`` is not a binary operation.
    """
    if operation == Operation.DIVIDE:
        if n1 == 0:
            result = 0.0
        elif n2 == 0:
            result = math.copysign(math.inf, n1) * math.copysign(1.0, n2)
        else:
            result = n1 / n2
    elif operation == Operation.MULTIPLY:
        result = n1 * n2
    elif operation == Operation.SUBTRACT:
        result = n1 - n2
    elif operation == Operation.ADD:
        result = n1 + n2
    else:
        raise ValueError(f"Not a binary operation: {operation.value}")

    if math.isnan(result) or math.isinf(result) or abs(result) > MAX_MAGNITUDE:
        return None
    return result


class CalculatorEngine:
    """State machine behind a four-function calculator keypad."""

    def __init__(self, fmt: NumberFormat = DEFAULT_FORMAT):
        self.fmt = fmt
        self.state = EngineState()

    # --- Display text ---

    def append(self, key: str, display: str) -> str:
        """Add a digit or decimal point to the display text.

        Args:
            key: "0"-"9" or ".".
            display: Text currently on the display.

        Returns:
            The new display text. ``ERROR_DISPLAY`` if the number grew past
            ``MAX_MAGNITUDE`` (the engine is reset in that case).

        Raises:
            ValueError: ``key`` is not a digit or the decimal point.
        """
        if key not in DIGIT_KEYS and key != DECIMAL_KEY:
            raise ValueError(f"Not a digit key: {key!r}")

        if self.state.new_entry or display == ERROR_DISPLAY:
            self.state.new_entry = False
            return "0." if key == DECIMAL_KEY else key

        if key == DECIMAL_KEY:
            if DECIMAL_KEY in display:
                return display
            return display + DECIMAL_KEY

        if display == "0":
            return key

        return self._reformat(display + key)

    def _reformat(self, text: str) -> str:
        """Re-render typed text through the formatter, enforcing the ceiling."""
        number = parse_number(text, self.fmt)
        if abs(number) > MAX_MAGNITUDE:
            self._reset(f"entry {text!r} exceeds maximum magnitude")
            return ERROR_DISPLAY
        return self.number_to_string(number)

    def number_to_string(self, number: float) -> str:
        """Format a number for the display, or reset and return the error token."""
        if math.isfinite(number) and abs(number) <= MAX_MAGNITUDE:
            try:
                text = format_number(number, self.fmt)
            except FormattingError as e:
                self._reset(str(e))
                return ERROR_DISPLAY
            if abs(parse_number(text, self.fmt)) <= MAX_MAGNITUDE:
                return text
        self._reset(f"{number} cannot be displayed")
        return ERROR_DISPLAY

    def string_to_number(self, text: str) -> float:
        return parse_number(text, self.fmt)

    # --- Operations ---

    def apply_operation(
        self, operation: Union[Operation, str], value: float
    ) -> Optional[float]:
        """Handle an operation key (AC, +/-, %, ÷, ×, -, +, =).

        Args:
            operation: The operation or its exact key caption.
            value: Number currently on the display.

        Returns:
            The number to display, or None when the result is invalid (the
            engine has been reset and the caller should show the error token).

        Raises:
            ValueError: ``operation`` is not a known key caption.
        """
        op = Operation(operation)
        state = self.state

        if op == Operation.ALL_CLEAR:
            state.reset()
            return 0.0

        if op == Operation.SIGN:
            return value * -1

        if op == Operation.PERCENT:
            return value / 100

        if op == Operation.EQUALS:
            state.equals_in_sequence += 1
            result: Optional[float] = value

            if state.pending is not None:
                pending = state.pending
                if state.equals_in_sequence == 1:
                    result = calculate(pending.operation, pending.value, value)
                    pending.value = value
                else:
                    # Repeated "=" replays the last step against the new value
                    result = calculate(pending.operation, value, pending.value)

            if result is None:
                self._reset(f"invalid result for {op.value}")
            return result

        # Binary operators
        state.new_entry = True

        if state.pending is not None and state.equals_in_sequence == 0:
            pending = state.pending
            result = calculate(pending.operation, pending.value, value)
            if result is None:
                self._reset(f"invalid result folding {pending.operation.value}")
                return None
            pending.value = result
            pending.operation = op
            return result

        state.equals_in_sequence = 0
        state.pending = PendingOperation(value=value, operation=op)
        return value

    def _reset(self, reason: str) -> None:
        logger.debug("Resetting engine: %s", reason)
        self.state.reset()
