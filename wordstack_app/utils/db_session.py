"""Commit helper for the SQLAlchemy session.

SQLite holds a single write lock. Connections already wait for it through the
``busy_timeout`` pragma set in :mod:`wordstack_app.core.extensions`; a commit
that still reports ``database is locked`` has lost its transaction. The pending
changes cannot be replayed by committing again, so the session is rolled back
and the caller gets a :class:`StorageBusyError` (HTTP 503) to retry the whole
request.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.session import Session

from ..core.error_handlers import StorageBusyError

logger = logging.getLogger(__name__)

LOCKED_MESSAGES = ("database is locked", "database is busy")


def is_lock_error(error: OperationalError) -> bool:
    message = str(error).lower()
    return any(token in message for token in LOCKED_MESSAGES)


def safe_commit(session: Session) -> None:
    """Commit the current transaction.

    Raises:
        StorageBusyError: SQLite stayed locked past the busy timeout. Nothing
            was written and the session has been rolled back.
        OperationalError: any other database failure, after rollback.
    """
    try:
        session.commit()
    except OperationalError as exc:
        session.rollback()
        if is_lock_error(exc):
            logger.warning("Commit rejected, database locked: %s", exc.orig)
            raise StorageBusyError() from exc
        raise
