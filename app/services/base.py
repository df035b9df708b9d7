"""
Shared transaction handling for the service layer.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session, action: str) -> Iterator[Session]:
    """
    Run a block of writes as a single transaction.

    Commits when the block exits cleanly. On any exception the session is
    rolled back; database errors are logged and re-raised as StorageError,
    everything else (NotFoundError, ReferentialIntegrityError, ...) propagates
    unchanged.

    Usage:
        with atomic(db, "create task"):
            db.add(task)
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to %s", action)
        raise StorageError(f"Failed to {action}") from exc
    except Exception:
        db.rollback()
        raise


@contextmanager
def reading(db: Session, action: str) -> Iterator[Session]:
    """
    Log and wrap database errors raised by read-only queries.

    The session is rolled back on failure so it stays usable afterwards.
    """
    try:
        yield db
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to %s", action)
        raise StorageError(f"Failed to {action}") from exc
