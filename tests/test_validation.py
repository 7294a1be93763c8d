"""Mini README: Tests for entry form validation."""

from __future__ import annotations

from expensetracker.expenses import validate_input, validate_submission


def test_validate_input_is_a_literal_emptiness_check() -> None:
    """Only the empty string (or a missing value) is invalid."""

    assert validate_input("") is False
    assert validate_input(None) is False
    assert validate_input("   ") is True
    assert validate_input("0") is True


def test_validate_submission_flags_every_missing_field() -> None:
    assert validate_submission("2024-01-05", "Coffee", "4.50").is_valid
    result = validate_submission("", "Coffee", "")
    assert not result.is_valid
    assert result.invalid_fields == ("date", "amount")


def test_validate_submission_flags_unreadable_date() -> None:
    """A typed but meaningless date is treated like a missing one."""

    result = validate_submission("not a date", "Coffee", "4.50")
    assert result.invalid_fields == ("date",)


def test_whitespace_description_is_accepted() -> None:
    assert validate_submission("2024-01-05", " ", "4.50").is_valid


def test_validate_submission_flags_non_numeric_amount() -> None:
    """Amounts must read as finite numbers, as a number input would enforce."""

    assert validate_submission("2024-01-05", "Coffee", "four fifty").invalid_fields == ("amount",)
    assert validate_submission("2024-01-05", "Coffee", "NaN").invalid_fields == ("amount",)
    assert validate_submission("2024-01-05", "Coffee", "-3.10").is_valid
