"""Mini README: Shared fixtures for the expense tracker tests.

Structure:
    * RecordingStore - in-memory gateway that logs calls and fails on demand.
    * store / controller - fixtures wiring a fresh store into a controller.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import List, Set, Tuple

import pytest

from expensetracker.expenses import ExpenseViewController
from expensetracker.models import ExpenseRecord
from expensetracker.store import StoreUnavailable
from expensetracker.store.backends import InMemoryExpenseStore


class RecordingStore(InMemoryExpenseStore):
    """Memory store that records every call and can be told to fail."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: List[Tuple[str, object]] = []
        self.fail_on: Set[str] = set()
        self.delay = 0.0

    async def _enter(self, operation: str, argument: object) -> None:
        self.calls.append((operation, argument))
        if self.delay:
            await asyncio.sleep(self.delay)
        if operation in self.fail_on:
            raise StoreUnavailable(operation, "simulated outage")

    async def list_all(self):
        await self._enter("list", None)
        return await super().list_all()

    async def create(self, record):
        await self._enter("create", record)
        await super().create(record)

    async def update(self, expense_id, record):
        await self._enter("update", (expense_id, record))
        await super().update(expense_id, record)

    async def remove(self, expense_id):
        await self._enter("remove", expense_id)
        await super().remove(expense_id)

    def operations(self) -> List[str]:
        return [operation for operation, _ in self.calls]


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore(
        records=[
            ExpenseRecord(
                expense_id="groceries",
                date=date(2024, 1, 2),
                description="Groceries",
                amount="54.20",
            ),
            ExpenseRecord(
                expense_id="rent",
                date=date(2024, 1, 1),
                description="Rent",
                amount="950",
            ),
        ]
    )


@pytest.fixture
def empty_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def controller(store: RecordingStore) -> ExpenseViewController:
    controller = ExpenseViewController(store)
    asyncio.run(controller.refresh())
    store.calls.clear()
    return controller
