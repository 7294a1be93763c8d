"""Mini README: Interactive interfaces for the expense tracker.

Exports the FastAPI application factory that powers the browser-based
expense page. Future interface modules (e.g. CLI dashboards) should live
alongside this module.
"""

from .web_app import create_application

__all__ = ["create_application"]
