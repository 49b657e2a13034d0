# backend/forest_reservation/api/dependencies/database.py
"""
Database-related dependencies.
"""

from typing import Generator, Optional

from fastapi import Request
from sqlalchemy.orm import Session


def get_db(request: Request) -> Generator[Optional[Session], None, None]:
    """
    Get database session dependency.

    Yields:
        A session from the app's session factory (closed after the request),
        or None when the in-memory backend is configured
    """
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        yield None
        return

    db = session_factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
