"""Mini README: Expense lifecycle package.

This package holds the only business rules of the tracker: validating new
entries, tracking which grid rows are being edited, and keeping the local
expense list a faithful snapshot of the remote store. The web interface
talks exclusively to ``ExpenseViewController``.
"""

from .controller import ExpenseViewController, ViewState
from .row_state import RowEditState, RowMode, RowModeEntry
from .validation import SubmissionValidation, validate_input, validate_submission

__all__ = [
    "ExpenseViewController",
    "RowEditState",
    "RowMode",
    "RowModeEntry",
    "SubmissionValidation",
    "ViewState",
    "validate_input",
    "validate_submission",
]
