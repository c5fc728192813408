"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from linkscout.api import app

    uvicorn linkscout.api:app --reload
"""

from linkscout.api.app import app

__all__ = ["app"]
