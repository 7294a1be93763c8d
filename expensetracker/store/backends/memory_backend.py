"""Mini README: In-process expense store.

Structure:
    * InMemoryExpenseStore - dict-backed gateway used for local runs and tests.

The store mimics a document database closely enough for the controller to
be exercised without network access: ids are opaque strings assigned on
insert, records are copied in and out, and listing follows insertion order.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..base import ExpenseStoreGateway, StoreUnavailable
from ..registry import REGISTRY
from ...logging_utils import get_logger
from ...models import ExpenseRecord

LOGGER = get_logger(__name__)

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 20


class InMemoryExpenseStore(ExpenseStoreGateway):
    """Keep expenses in a dictionary keyed by generated ids."""

    backend_name = "memory"

    def __init__(
        self,
        collection: str = "expenses",
        records: Optional[Iterable[ExpenseRecord]] = None,
    ) -> None:
        super().__init__(collection=collection)
        self._documents: Dict[str, ExpenseRecord] = {}
        for record in records or ():
            expense_id = record.expense_id or self._next_id()
            self._documents[expense_id] = replace(record, expense_id=expense_id)

    def _next_id(self) -> str:
        while True:
            candidate = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))
            if candidate not in self._documents:
                return candidate

    async def list_all(self) -> List[ExpenseRecord]:
        LOGGER.debug("Listing %s documents from '%s'", len(self._documents), self.collection)
        return [replace(record) for record in self._documents.values()]

    async def create(self, record: ExpenseRecord) -> None:
        expense_id = self._next_id()
        self._documents[expense_id] = record.with_id(expense_id)
        LOGGER.debug("Created document %s in '%s'", expense_id, self.collection)

    async def update(self, expense_id: str, record: ExpenseRecord) -> None:
        if expense_id not in self._documents:
            raise StoreUnavailable("update", "no such document", expense_id=expense_id)
        self._documents[expense_id] = record.with_id(expense_id)
        LOGGER.debug("Updated document %s in '%s'", expense_id, self.collection)

    async def remove(self, expense_id: str) -> None:
        removed = self._documents.pop(expense_id, None)
        LOGGER.debug(
            "Removed document %s from '%s' (existed=%s)",
            expense_id,
            self.collection,
            removed is not None,
        )


REGISTRY.register(InMemoryExpenseStore)
