"""Mini README: Abstract gateway describing the remote expense store.

Structure:
    * StoreUnavailable - the single error raised by any gateway call.
    * ExpenseStoreGateway - abstract interface implemented by backends.

Every operation performs exactly one round trip against the backing store
and never retries. Backends translate their driver errors into
``StoreUnavailable`` so callers only ever handle one failure type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, List, Optional

from ..logging_utils import get_logger
from ..models import ExpenseRecord

if TYPE_CHECKING:  # pragma: no cover
    from ..configuration import ExpenseTrackerSettings

LOGGER = get_logger(__name__)


class StoreUnavailable(Exception):
    """Raised when a store call fails for any reason."""

    def __init__(
        self, operation: str, message: str, *, expense_id: Optional[str] = None
    ) -> None:
        self.operation = operation
        self.expense_id = expense_id
        target = f" ({expense_id})" if expense_id else ""
        super().__init__(f"Store {operation}{target} failed: {message}")


class ExpenseStoreGateway(ABC):
    """Base interface for expense store integrations."""

    backend_name: str = "generic"

    def __init__(self, collection: str = "expenses") -> None:
        self.collection = collection
        LOGGER.debug(
            "Initialising %s store for collection '%s'", self.backend_name, collection
        )

    @classmethod
    def from_settings(cls, settings: "ExpenseTrackerSettings") -> "ExpenseStoreGateway":
        """Build the gateway from application settings."""

        return cls(collection=settings.expenses_collection)

    @abstractmethod
    async def list_all(self) -> List[ExpenseRecord]:
        """Return every record in the collection in store order."""

    @abstractmethod
    async def create(self, record: ExpenseRecord) -> None:
        """Insert a new record; the store assigns its id."""

    @abstractmethod
    async def update(self, expense_id: str, record: ExpenseRecord) -> None:
        """Overwrite the stored fields of an existing record."""

    @abstractmethod
    async def remove(self, expense_id: str) -> None:
        """Delete a record; unknown ids are not an error."""

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for UI displays."""

        return {"backend": self.backend_name, "collection": self.collection}
