"""Mini README: Centralised configuration models and helpers.

Structure:
    * ExpenseTrackerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables, choose the store
    backend, and specify service ports. The configuration is cached so the
    cost of validation is incurred only once per process. Firestore
    credentials follow the Google client conventions
    (``GOOGLE_APPLICATION_CREDENTIALS`` or ``FIRESTORE_EMULATOR_HOST``) and
    are therefore not duplicated here.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class ExpenseTrackerSettings(BaseSettings):
    """Runtime configuration for the expense tracker."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the web interface exposes.",
        ge=1,
        le=65535,
    )
    store_backend: str = Field(
        "memory",
        description="Identifier of the registered store backend holding expenses.",
    )
    expenses_collection: str = Field(
        "expenses",
        description="Name of the remote collection storing expense documents.",
    )
    firestore_project_id: Optional[str] = Field(
        None,
        description="Google Cloud project for the Firestore backend; inferred when unset.",
    )
    firestore_database: Optional[str] = Field(
        None,
        description="Firestore database name; the project's default database when unset.",
    )
    page_size_options: List[int] = Field(
        default_factory=lambda: [5, 10],
        description="Page sizes offered by the expense grid. The first is the default.",
    )

    class Config:
        env_prefix = "EXPENSE_TRACKER_"
        env_file = ".env"
        case_sensitive = False

    @validator("store_backend")
    def _normalise_backend(cls, value: str) -> str:
        """Backend identifiers are matched case-insensitively."""

        value = value.strip().lower()
        if not value:
            raise ValueError("store_backend must not be empty")
        return value

    @validator("page_size_options")
    def _check_page_sizes(cls, value: List[int]) -> List[int]:
        if not value:
            raise ValueError("At least one page size option is required")
        if any(size < 1 for size in value):
            raise ValueError("Page sizes must be positive")
        return value

    @property
    def default_page_size(self) -> int:
        return self.page_size_options[0]


@lru_cache()
def get_settings() -> ExpenseTrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return ExpenseTrackerSettings()
