"""
App assembly entry point.

Re-exports the FastAPI `app` from `contact_manager.api.main` so servers can
be pointed at `app:app`.
"""

from contact_manager.api.main import app  # noqa: F401
