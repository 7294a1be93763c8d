"""Mini README: Concrete expense store implementations.

The package demonstrates how storage services plug into the registry. New
backends should export a subclass of ``ExpenseStoreGateway`` and call
``REGISTRY.register`` during module import to keep the system discoverable.
"""

from .firestore_backend import FirestoreExpenseStore
from .memory_backend import InMemoryExpenseStore

__all__ = ["FirestoreExpenseStore", "InMemoryExpenseStore"]
