"""Mini README: Expense record model shared by the store and the controller.

Structure:
    * ExpenseRecord - dataclass describing one stored expense.
    * parse_expense_date - coerce user or store supplied dates.
    * parse_expense_amount - numeric reading of an entered amount.

Amounts are kept exactly as they were typed into the entry form. The
record only interprets them numerically on demand, so a store round trip
never reformats what the user entered.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

# The entry form's date picker renders dates as month/day/year.
_PICKER_DATE_FORMAT = "%m/%d/%Y"


def parse_expense_date(value: object) -> date:
    """Parse ISO strings, picker strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.strptime(text, _PICKER_DATE_FORMAT).date()
        except ValueError as error:
            raise ValueError(f"Unrecognised expense date: {value!r}") from error
    raise ValueError("Dates must be provided as strings or date/datetime instances.")


def parse_expense_amount(value: str) -> Decimal:
    """Read an amount as typed into the form; only finite numbers qualify."""

    try:
        amount = Decimal(value.strip())
    except (InvalidOperation, AttributeError) as error:
        raise ValueError(f"Amount {value!r} is not numeric") from error
    if not amount.is_finite():
        raise ValueError(f"Amount {value!r} is not numeric")
    return amount


@dataclass(slots=True)
class ExpenseRecord:
    """A single expense as held by the store and displayed in the grid."""

    date: date
    description: str
    amount: str
    expense_id: Optional[str] = None

    @property
    def numeric_amount(self) -> Decimal:
        """Interpret the entered amount as a number."""

        return parse_expense_amount(self.amount)

    def with_id(self, expense_id: str) -> "ExpenseRecord":
        return replace(self, expense_id=expense_id)

    def to_document(self) -> Dict[str, Any]:
        """Return the stored fields; the id lives outside the document."""

        return {
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
        }

    @classmethod
    def from_document(cls, expense_id: str, data: Mapping[str, Any]) -> "ExpenseRecord":
        amount = data.get("amount", "")
        return cls(
            expense_id=expense_id,
            date=parse_expense_date(data["date"]),
            description=str(data.get("description", "")),
            amount=amount if isinstance(amount, str) else str(amount),
        )

    def as_dict(self) -> Dict[str, Any]:
        """Export the record with serialisable values."""

        return {
            "id": self.expense_id,
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": self.amount,
        }
