"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from insights.api import app

    uvicorn insights.api:app --reload
"""

from insights.api.app import app

__all__ = ["app"]
