# backend/forest_reservation/repositories/base_repository.py
"""
Base repository for the SQLAlchemy adapters.

Provides:
- Session and model binding
- Consistent translation of SQLAlchemyError into RepositoryException
- Read retries for transient connection failures
- Dialect helpers (row locks are only requested where the database honours them)

Repositories never commit; transaction boundaries belong to the services.
"""

import logging
from typing import Callable, Generic, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateRecordError, RepositoryException
from ..database import with_db_retry
from ..database.session_utils import supports_row_locks

# Type variable for generic model support
T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Concrete base repository with common data access patterns.

    Attributes:
        db: SQLAlchemy session (managed by service layer)
        model: SQLAlchemy model class
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @property
    def supports_row_locks(self) -> bool:
        return supports_row_locks(self.db)

    def _read(self, op_name: str, func: Callable[[], R]) -> R:
        """Run a read query with retries, wrapping driver errors."""
        try:
            return with_db_retry(f"{self.model.__name__}.{op_name}", func)
        except SQLAlchemyError as e:
            self.logger.error(f"Error in {op_name} for {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to {op_name} {self.model.__name__}: {str(e)}")

    def _write(self, op_name: str, func: Callable[[], R]) -> R:
        """
        Run a write and flush, wrapping driver errors.

        Unique-key violations surface as DuplicateRecordError so callers can
        tell them apart from infrastructure failures.
        """
        try:
            result = func()
            self.db.flush()
            return result
        except IntegrityError as exc:
            self.logger.warning(
                "Integrity error during %s on %s: %s", op_name, self.model.__name__, exc
            )
            self.db.rollback()
            raise DuplicateRecordError(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error in {op_name} for {self.model.__name__}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to {op_name} {self.model.__name__}: {str(e)}")

    def count(self) -> int:
        """Count all rows of the model."""
        return self._read("count", lambda: self.db.query(self.model).count())

    def delete_all(self) -> int:
        """Bulk delete every row of the model (no ORM events)."""
        return self._write(
            "delete_all",
            lambda: self.db.query(self.model).delete(synchronize_session=False),
        )
