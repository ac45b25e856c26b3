"""Tests for the display adapter: key dispatch, display value and key parsing."""

import pytest

from tapcalc.display import Display, split_keys
from tapcalc.models import ERROR_DISPLAY, Operation


@pytest.fixture
def display():
    """A display showing "0" on a fresh engine."""
    return Display()


def press(display, keys):
    return display.press_many(split_keys(keys))


# --- Starting state ---

def test_starts_at_zero(display):
    assert display.text == "0"
    assert display.value == 0
    assert display.selected is None


# --- Key sequences ---

def test_repeated_equals_progression(display):
    """5 + 3 = = shows 5, 5, 3, 8, 11."""
    assert display.press_many(["5", "+", "3", "=", "="]) == ["5", "5", "3", "8", "11"]


def test_chained_operators(display):
    assert press(display, "2+3×4=")[-1] == "20"


def test_fraction_result(display):
    assert press(display, "10÷4=")[-1] == "2.5"
    assert press(display, "AC1÷3=")[-1] == "0.3333"


def test_sign_and_percent(display):
    assert press(display, "5+/-")[-1] == "-5"
    assert press(display, "AC50%")[-1] == "0.5"


def test_decimal_point_typed_once(display):
    assert display.press_many(["1", ".", ".", "5"])[-1] == "1.5"


def test_large_entry_is_grouped(display):
    assert press(display, "1234567")[-1] == "1,234,567"


def test_all_clear_from_deep_state(display):
    press(display, "12+3×4==")
    assert display.press("AC") == "0"
    assert display.engine.state.is_clear
    assert display.selected is None


# --- Operator selection ---

def test_binary_operator_is_selected(display):
    display.press("5")
    display.press("+")
    assert display.selected == Operation.ADD


def test_selection_cleared_by_digits_and_equals(display):
    press(display, "5+")
    display.press("3")
    assert display.selected is None
    display.press("×")
    display.press("=")
    assert display.selected is None


# --- Error token ---

def test_division_by_zero_shows_error(display):
    assert press(display, "5÷0=")[-1] == ERROR_DISPLAY
    assert display.value == 0


def test_digit_escapes_error(display):
    press(display, "5÷0=")
    assert display.press("7") == "7"


def test_decimal_point_escapes_error(display):
    press(display, "5÷0=")
    assert display.press(".") == "0."
    assert display.press(".") == "0."
    assert display.press("5") == "0.5"
    assert display.press("+") == "0.5"
    assert press(display, "2=")[-1] == "2.5"


def test_operator_after_error_starts_fresh(display):
    press(display, "5÷0=")
    assert display.press("+") == "0"
    assert press(display, "4=")[-1] == "4"


def test_typing_past_ceiling_shows_error(display):
    assert press(display, "9" * 11)[-1] == "99,999,999,999"
    assert display.press("9") == ERROR_DISPLAY
    assert display.engine.state.is_clear


def test_value_setter_rules(display):
    display.value = 1234.5
    assert display.text == "1,234.5"
    display.value = None
    assert display.text == ERROR_DISPLAY
    display.value = 1e12
    assert display.text == ERROR_DISPLAY


def test_press_rejects_unknown_caption(display):
    with pytest.raises(ValueError):
        display.press("x")


# --- split_keys ---

def test_split_compact_sequence():
    assert split_keys("12+3==") == ["1", "2", "+", "3", "=", "="]


def test_split_multi_character_captions():
    assert split_keys("5+/-") == ["5", "+/-"]
    assert split_keys("AC7") == ["AC", "7"]


def test_split_aliases_and_whitespace():
    assert split_keys("ac 7 * 2 / 4 x 1 c") == ["AC", "7", "×", "2", "÷", "4", "×", "1", "AC"]


def test_split_rejects_unknown_key():
    with pytest.raises(ValueError):
        split_keys("5?")
