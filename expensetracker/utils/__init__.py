"""Mini README: Utility helper functions for the expense tracker.

Currently exports the dynamic plugin loader used by the store registry to
discover third-party backends at runtime.
"""

from .plugin_loader import load_entry_point_plugins

__all__ = ["load_entry_point_plugins"]
