"""Number ↔ display string conversion.

Pure functions, no engine state. The formatting rules (grouping, bounded
precision) are part of the calculator's behaviour: a number shown on the display
is always the rounded, grouped rendition of the value the engine works with.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal

# Plain decimal literal, optional sign. No exponents, no nan/inf.
_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)")


class FormattingError(ValueError):
    """A number cannot be rendered under the configured format."""


class DisplayParseError(ValueError):
    """Display text does not read as a number."""


@dataclass(frozen=True)
class NumberFormat:
    """Rendering rules for display numbers (US style by default)."""

    min_integer_digits: int = 1
    max_integer_digits: int = 11
    min_fraction_digits: int = 0
    max_fraction_digits: int = 4
    decimal_separator: str = "."
    grouping_separator: str = ","
    grouping_size: int = 3
    use_grouping: bool = True


DEFAULT_FORMAT = NumberFormat()


def _group(digits: str, fmt: NumberFormat) -> str:
    """Insert the grouping separator between every ``grouping_size`` digits."""
    if not fmt.use_grouping or fmt.grouping_size <= 0:
        return digits
    size = fmt.grouping_size
    groups: list[str] = []
    while len(digits) > size:
        groups.insert(0, digits[-size:])
        digits = digits[:-size]
    if digits:
        groups.insert(0, digits)
    return fmt.grouping_separator.join(groups)


def format_number(number: float, fmt: NumberFormat = DEFAULT_FORMAT) -> str:
    """Render a number for the display.

    Rounds half-to-even to ``max_fraction_digits``, drops trailing fractional
    zeros and groups the integer part, e.g. ``15927312.22`` → ``"15,927,312.22"``
    and ``.85`` → ``"0.85"``.

    Args:
        number: Value to render.
        fmt: Formatting rules.

    Returns:
        The display string.

    Raises:
        FormattingError: ``number`` is NaN/infinite, or its integer part needs
            more than ``max_integer_digits`` digits.
    """
    if not math.isfinite(number):
        raise FormattingError(f"Cannot format non-finite number: {number}")
    if abs(number) >= 10 ** fmt.max_integer_digits:
        raise FormattingError(f"Too many integer digits: {number}")

    quantum = Decimal(1).scaleb(-fmt.max_fraction_digits)
    rounded = Decimal(repr(float(number))).quantize(quantum, rounding=ROUND_HALF_EVEN)
    text = f"{rounded:f}"

    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    int_part, _, frac_part = text.partition(".")

    int_part = int_part.lstrip("0").rjust(fmt.min_integer_digits, "0")
    # Rounding can carry into a new integer digit (99,999,999,999.99995)
    if len(int_part) > fmt.max_integer_digits:
        raise FormattingError(f"Too many integer digits: {number}")

    frac_part = frac_part.rstrip("0").ljust(fmt.min_fraction_digits, "0")

    result = sign + _group(int_part, fmt)
    if frac_part:
        result += fmt.decimal_separator + frac_part
    return result


def parse_number(text: str, fmt: NumberFormat = DEFAULT_FORMAT) -> float:
    """Read a display string back into a number.

    Grouping separators are stripped first, so ``"1,234.5"`` and ``"1234.5"``
    both read as ``1234.5``. A trailing decimal point (``"7."``) is accepted.

    Raises:
        DisplayParseError: ``text`` is not a plain decimal number.
    """
    cleaned = text.strip()
    if fmt.grouping_separator:
        cleaned = cleaned.replace(fmt.grouping_separator, "")
    if fmt.decimal_separator != ".":
        cleaned = cleaned.replace(fmt.decimal_separator, ".")

    if not _NUMBER_RE.fullmatch(cleaned):
        raise DisplayParseError(f"Not a number: {text!r}")
    return float(cleaned)
