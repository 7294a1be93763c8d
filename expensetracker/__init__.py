"""Mini README: Core package initializer for the expense tracker.

This module exposes convenience imports that allow other parts of the
application to access shared helpers without needing to know the exact
module structure. Heavier pieces (the web interface and the store
backends) are imported from their own subpackages.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
