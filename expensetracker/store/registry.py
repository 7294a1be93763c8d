"""Mini README: Backend registry enabling pluggable expense stores.

Structure:
    * StoreBackendRegistry - manages registration and instantiation of
      ``ExpenseStoreGateway`` implementations.
    * create_store_gateway - build the backend named in the settings.

The registry supports runtime discovery, so third-party packages can publish
their own gateways under the ``expensetracker.stores`` entry point group.
"""

from __future__ import annotations

import inspect
from typing import Dict, Iterable, Type

from .base import ExpenseStoreGateway
from ..configuration import ExpenseTrackerSettings
from ..logging_utils import get_logger
from ..utils.plugin_loader import load_entry_point_plugins

LOGGER = get_logger(__name__)

PLUGIN_GROUP = "expensetracker.stores"


class StoreBackendRegistry:
    """Simple registry for mapping backend identifiers to gateway classes."""

    def __init__(self) -> None:
        self._backends: Dict[str, Type[ExpenseStoreGateway]] = {}

    def register(self, backend: Type[ExpenseStoreGateway]) -> Type[ExpenseStoreGateway]:
        """Register a new gateway class with the registry."""

        identifier = backend.backend_name.lower()
        LOGGER.debug("Registering store backend '%s'", identifier)
        self._backends[identifier] = backend
        return backend

    def available_backends(self) -> Iterable[str]:
        """Return iterable of backend identifiers for display."""

        return sorted(self._backends.keys())

    def load_plugins(self, group: str = PLUGIN_GROUP) -> int:
        """Register gateway classes published through entry points."""

        registered = 0
        for plugin in load_entry_point_plugins(group):
            if inspect.isclass(plugin) and issubclass(plugin, ExpenseStoreGateway):
                self.register(plugin)
                registered += 1
            else:
                LOGGER.warning("Ignoring store plugin %r: not an ExpenseStoreGateway", plugin)
        return registered

    def create(self, identifier: str, *, settings: ExpenseTrackerSettings) -> ExpenseStoreGateway:
        """Instantiate the backend matching the identifier."""

        backend_cls = self._backends.get(identifier.lower())
        if not backend_cls:
            raise KeyError(f"Unknown store backend '{identifier}'")
        LOGGER.info("Creating store backend '%s'", identifier)
        return backend_cls.from_settings(settings)


REGISTRY = StoreBackendRegistry()


def create_store_gateway(settings: ExpenseTrackerSettings) -> ExpenseStoreGateway:
    """Discover plugins and build the configured backend."""

    REGISTRY.load_plugins()
    return REGISTRY.create(settings.store_backend, settings=settings)
