"""Mini README: Google Cloud Firestore expense store.

Structure:
    * FirestoreExpenseStore - gateway over ``firestore.AsyncClient``.

Expenses live as documents in a single collection; Firestore assigns the
document ids. Firestore has no plain date type, so dates are written as
UTC-midnight timestamps and converted back to dates when read. Every call
is one request and any API failure is re-raised as ``StoreUnavailable``.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore

from ..base import ExpenseStoreGateway, StoreUnavailable
from ..registry import REGISTRY
from ...logging_utils import get_logger
from ...models import ExpenseRecord

if TYPE_CHECKING:  # pragma: no cover
    from ...configuration import ExpenseTrackerSettings

LOGGER = get_logger(__name__)


def _to_timestamp(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


class FirestoreExpenseStore(ExpenseStoreGateway):
    """Persist expenses in a Firestore collection."""

    backend_name = "firestore"

    def __init__(
        self,
        collection: str = "expenses",
        *,
        client: Optional[Any] = None,
        project: Optional[str] = None,
        database: Optional[str] = None,
    ) -> None:
        super().__init__(collection=collection)
        if client is None:
            client_kwargs: Dict[str, Any] = {"project": project}
            if database:
                client_kwargs["database"] = database
            client = firestore.AsyncClient(**client_kwargs)
        self._client = client

    @classmethod
    def from_settings(cls, settings: "ExpenseTrackerSettings") -> "FirestoreExpenseStore":
        return cls(
            collection=settings.expenses_collection,
            project=settings.firestore_project_id,
            database=settings.firestore_database,
        )

    def _collection(self):
        return self._client.collection(self.collection)

    @staticmethod
    def _encode(record: ExpenseRecord) -> Dict[str, Any]:
        document = record.to_document()
        document["date"] = _to_timestamp(record.date)
        return document

    async def list_all(self) -> List[ExpenseRecord]:
        try:
            snapshots = [snapshot async for snapshot in self._collection().stream()]
        except GoogleAPICallError as error:
            LOGGER.warning("Listing '%s' failed: %s", self.collection, error)
            raise StoreUnavailable("list", str(error)) from error
        LOGGER.debug("Fetched %s documents from '%s'", len(snapshots), self.collection)
        records = []
        for snapshot in snapshots:
            try:
                records.append(ExpenseRecord.from_document(snapshot.id, snapshot.to_dict() or {}))
            except (KeyError, TypeError, ValueError) as error:
                LOGGER.warning(
                    "Document %s in '%s' is not a readable expense: %r",
                    snapshot.id,
                    self.collection,
                    error,
                )
                raise StoreUnavailable(
                    "list", f"unreadable document: {error!r}", expense_id=snapshot.id
                ) from error
        return records

    async def create(self, record: ExpenseRecord) -> None:
        try:
            _, reference = await self._collection().add(self._encode(record))
        except GoogleAPICallError as error:
            LOGGER.warning("Creating document in '%s' failed: %s", self.collection, error)
            raise StoreUnavailable("create", str(error)) from error
        LOGGER.debug("Created document %s in '%s'", reference.id, self.collection)

    async def update(self, expense_id: str, record: ExpenseRecord) -> None:
        try:
            await self._collection().document(expense_id).update(self._encode(record))
        except GoogleAPICallError as error:
            LOGGER.warning("Updating %s in '%s' failed: %s", expense_id, self.collection, error)
            raise StoreUnavailable("update", str(error), expense_id=expense_id) from error
        LOGGER.debug("Updated document %s in '%s'", expense_id, self.collection)

    async def remove(self, expense_id: str) -> None:
        try:
            await self._collection().document(expense_id).delete()
        except GoogleAPICallError as error:
            LOGGER.warning("Deleting %s from '%s' failed: %s", expense_id, self.collection, error)
            raise StoreUnavailable("remove", str(error), expense_id=expense_id) from error
        LOGGER.debug("Deleted document %s from '%s'", expense_id, self.collection)


REGISTRY.register(FirestoreExpenseStore)
