"""Mini README: Remote store gateway subsystem.

Re-exports key abstractions to simplify imports for the controller and the
web interface. The package is divided into ``base`` for the abstract
gateway and its error, ``registry`` for backend management, and
``backends`` for concrete store implementations.
"""

from .base import ExpenseStoreGateway, StoreUnavailable
from .registry import REGISTRY, StoreBackendRegistry, create_store_gateway
from . import backends  # noqa: F401  # ensure built-in backends register on import

__all__ = [
    "ExpenseStoreGateway",
    "REGISTRY",
    "StoreBackendRegistry",
    "StoreUnavailable",
    "create_store_gateway",
]
