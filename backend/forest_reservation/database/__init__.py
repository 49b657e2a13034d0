"""
Database engine, session factory, and metadata shared across the application.

Engines are built explicitly by the application factory (and by tests) from
the configured URL; nothing here connects at import time.
"""

from __future__ import annotations

from datetime import datetime
import logging
import random
import time
from typing import Any, Callable, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

logger = logging.getLogger(__name__)

_DEFAULT_POOL_KWARGS: dict[str, Any] = {
    "pool_size": 5,
    "max_overflow": 10,
    "pool_timeout": 5,
    "pool_recycle": 300,
    "pool_pre_ping": True,
}

Base: DeclarativeMeta = declarative_base()


def _is_sqlite(db_url: str) -> bool:
    return db_url.startswith("sqlite")


def _is_sqlite_memory(db_url: str) -> bool:
    return _is_sqlite(db_url) and (":memory:" in db_url or db_url.rstrip("/") == "sqlite:")


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    if _is_sqlite(db_url):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if _is_sqlite_memory(db_url):
            # One shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {"poolclass": QueuePool, **_DEFAULT_POOL_KWARGS}


def build_engine(db_url: str, *, echo: bool = False) -> Engine:
    """Create an engine for ``db_url`` with pool settings suited to its dialect."""
    engine = create_engine(db_url, echo=echo, **_build_engine_kwargs(db_url))

    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
        connection_record.info["connect_time"] = datetime.now()
        logger.debug("Database connection established")

    @event.listens_for(engine, "checkout")
    def receive_checkout(dbapi_connection: Any, connection_record: Any, connection_proxy: Any) -> None:
        logger.debug("Connection checked out from pool")

    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


T = TypeVar("T")
# Only target transient disconnects and SQLite writer contention.
_RETRYABLE_ERROR_SNIPPETS = (
    "server closed the connection",
    "ssl connection has been closed unexpectedly",
    "database is locked",
)


def _is_retryable_db_error(exc: OperationalError) -> bool:
    message = str(exc).lower()
    return any(snippet in message for snippet in _RETRYABLE_ERROR_SNIPPETS)


def _retry_delay(attempt: int) -> float:
    base = 0.1 * (2 ** (attempt - 1))
    return base + random.uniform(0, 0.05 * attempt)


def with_db_retry(op_name: str, func: Callable[[], T], *, max_attempts: int = 3) -> T:
    """
    Execute a read-only DB operation with retries for transient connection failures.

    Writes must not go through here; a retried write could apply twice.
    """

    attempt = 1
    while True:
        try:
            return func()
        except OperationalError as exc:
            if attempt >= max_attempts or not _is_retryable_db_error(exc):
                raise

            delay = _retry_delay(attempt)
            logger.warning(
                "Transient DB failure detected, retrying",
                extra={
                    "event": "db_retry",
                    "op": op_name,
                    "attempt": attempt,
                    "delay": delay,
                    "error": str(exc),
                },
            )
            time.sleep(delay)
            attempt += 1


__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "with_db_retry",
]
