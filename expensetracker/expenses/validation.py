"""Mini README: Entry form validation.

Structure:
    * validate_input - literal emptiness check for a single field.
    * SubmissionValidation - per-field outcome of a form submission.
    * validate_submission - check all three entry fields at once.

A field is invalid when it is the empty string; whitespace is kept as
typed. Date and amount must also be readable as a date and a finite
number, as the form's date and number inputs guarantee in a browser.
Invalid fields are reported as markers for the form to highlight, never
raised as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..models import parse_expense_amount, parse_expense_date

DATE_FIELD = "date"
DESCRIPTION_FIELD = "description"
AMOUNT_FIELD = "amount"


def validate_input(value: Optional[str]) -> bool:
    """Return ``True`` when the raw field value is non-empty."""

    return value is not None and value != ""


@dataclass(frozen=True, slots=True)
class SubmissionValidation:
    """Result of validating the entry form."""

    invalid_fields: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.invalid_fields


def validate_submission(
    date_input: Optional[str],
    description_input: Optional[str],
    amount_input: Optional[str],
) -> SubmissionValidation:
    """Flag every missing field; an unreadable date or amount counts as missing."""

    invalid = []
    if not validate_input(date_input):
        invalid.append(DATE_FIELD)
    else:
        try:
            parse_expense_date(date_input)
        except ValueError:
            invalid.append(DATE_FIELD)
    if not validate_input(description_input):
        invalid.append(DESCRIPTION_FIELD)
    if not validate_input(amount_input):
        invalid.append(AMOUNT_FIELD)
    else:
        try:
            parse_expense_amount(amount_input)
        except ValueError:
            invalid.append(AMOUNT_FIELD)
    return SubmissionValidation(invalid_fields=tuple(invalid))
