"""Mini README: Expense view controller.

Structure:
    * ViewState - immutable snapshot handed to presentation surfaces.
    * ExpenseViewController - owns the expense list, row modes and busy flag.

Every user intent is mediated here. Mutations call the store gateway and
then re-read the whole collection, so the displayed list is always a full
snapshot of the store and never a locally patched copy. Store calls are
serialised through a single lock, which keeps overlapping intents from
interleaving their refreshes and publishing an older snapshot last.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import AsyncIterator, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .row_state import RowEditState, RowMode, RowModeEntry
from .validation import SubmissionValidation, validate_submission
from ..logging_utils import get_logger
from ..models import ExpenseRecord, parse_expense_amount, parse_expense_date
from ..store.base import ExpenseStoreGateway, StoreUnavailable

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ViewState:
    """Read-only view of the controller state at one point in time."""

    expenses: Tuple[ExpenseRecord, ...]
    row_modes: Mapping[str, RowModeEntry] = field(default_factory=dict)
    busy: bool = False
    invalid_fields: Tuple[str, ...] = ()
    last_error: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        """Export the state for JSON responses."""

        return {
            "expenses": [record.as_dict() for record in self.expenses],
            "row_modes": {
                expense_id: entry.as_dict() for expense_id, entry in self.row_modes.items()
            },
            "busy": self.busy,
            "invalid_fields": list(self.invalid_fields),
            "last_error": self.last_error,
        }


StateListener = Callable[[ViewState], None]


class ExpenseViewController:
    """Mediate user intents into store calls followed by a snapshot refresh."""

    def __init__(
        self,
        gateway: ExpenseStoreGateway,
        expenses: Optional[Iterable[ExpenseRecord]] = None,
    ) -> None:
        self._gateway = gateway
        self._expenses: List[ExpenseRecord] = list(expenses or [])
        self._row_edit_state = RowEditState()
        self._busy = False
        self._invalid_fields: Tuple[str, ...] = ()
        self._last_error: Optional[str] = None
        self._listeners: List[StateListener] = []
        self._lock = asyncio.Lock()

    # -- read-only views -------------------------------------------------

    @property
    def expenses(self) -> Tuple[ExpenseRecord, ...]:
        return tuple(self._expenses)

    @property
    def row_edit_state(self) -> Mapping[str, RowModeEntry]:
        return MappingProxyType(self._row_edit_state.copy())

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def invalid_fields(self) -> Tuple[str, ...]:
        return self._invalid_fields

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def row_mode(self, expense_id: str) -> RowModeEntry:
        """Return the mode of a row, View for ids never edited."""

        return self._row_edit_state.get(expense_id)

    def snapshot(self) -> ViewState:
        return ViewState(
            expenses=tuple(self._expenses),
            row_modes=MappingProxyType(self._row_edit_state.copy()),
            busy=self._busy,
            invalid_fields=self._invalid_fields,
            last_error=self._last_error,
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with every published state."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        state = self.snapshot()
        for listener in list(self._listeners):
            listener(state)

    # -- store round trips -----------------------------------------------

    @asynccontextmanager
    async def _store_operation(self, name: str) -> AsyncIterator[None]:
        async with self._lock:
            self._busy = True
            self._last_error = None
            self._publish()
            try:
                yield
            except StoreUnavailable as error:
                self._last_error = str(error)
                LOGGER.error("Expense %s failed: %s", name, error)
                raise
            finally:
                self._busy = False
                self._publish()

    async def _reload(self) -> None:
        records = await self._gateway.list_all()
        for record in records:
            if not record.expense_id:
                raise StoreUnavailable("list", "store returned a record without an id")
        self._expenses = list(records)
        pruned = self._row_edit_state.prune(record.expense_id for record in records)
        LOGGER.debug("Snapshot refreshed: %s expenses, %s stale row modes dropped", len(records), pruned)

    def _known(self, expense_id: str) -> bool:
        return any(record.expense_id == expense_id for record in self._expenses)

    async def refresh(self) -> None:
        """Replace the local list with a full read of the store."""

        async with self._store_operation("refresh"):
            await self._reload()

    async def submit_new_expense(
        self,
        date_input: Optional[str],
        description_input: Optional[str],
        amount_input: Optional[str],
    ) -> SubmissionValidation:
        """Validate the entry form and, when complete, store a new expense."""

        validation = validate_submission(date_input, description_input, amount_input)
        self._invalid_fields = validation.invalid_fields
        if not validation.is_valid:
            LOGGER.info("Rejected new expense; invalid fields: %s", ", ".join(validation.invalid_fields))
            self._publish()
            return validation

        record = ExpenseRecord(
            date=parse_expense_date(date_input),
            description=description_input,
            amount=amount_input,
        )
        async with self._store_operation("create"):
            await self._gateway.create(record)
            LOGGER.info("Stored new expense '%s' (%s)", record.description, record.amount)
            await self._reload()
        return validation

    def _set_row_mode(self, expense_id: str, entry: RowModeEntry) -> bool:
        if not self._known(expense_id):
            LOGGER.debug("Ignoring %s for unknown expense %s", entry.mode.value, expense_id)
            return False
        self._row_edit_state.set(expense_id, entry)
        self._publish()
        return True

    def begin_edit(self, expense_id: str) -> bool:
        """Put a row into Edit mode. Returns ``False`` for unknown ids."""

        return self._set_row_mode(expense_id, RowModeEntry(mode=RowMode.EDIT))

    def save_edit(self, expense_id: str) -> bool:
        """Return a row to View mode.

        This only changes the visual mode. The write happens separately in
        ``commit_row_edit`` when the grid hands over the edited row.
        """

        return self._set_row_mode(expense_id, RowModeEntry(mode=RowMode.VIEW))

    def cancel_edit(self, expense_id: str) -> bool:
        """Return a row to View mode and ask the grid to discard its edits."""

        return self._set_row_mode(
            expense_id, RowModeEntry(mode=RowMode.VIEW, ignore_modifications=True)
        )

    async def commit_row_edit(self, updated_record: ExpenseRecord) -> None:
        """Write an edited row to the store, then refresh.

        A non-numeric amount raises ``ValueError`` before the store is
        called. On store failure the previous snapshot is kept as is and the
        row mode is left untouched.
        """

        expense_id = updated_record.expense_id
        if not expense_id:
            raise ValueError("Edited rows must carry the id of an existing expense")
        parse_expense_amount(updated_record.amount)
        async with self._store_operation("update"):
            await self._gateway.update(expense_id, updated_record)
            LOGGER.info("Updated expense %s", expense_id)
            await self._reload()

    async def delete_expense(self, expense_id: str) -> None:
        """Delete an expense from the store, then refresh."""

        async with self._store_operation("delete"):
            await self._gateway.remove(expense_id)
            LOGGER.info("Deleted expense %s", expense_id)
            await self._reload()
