"""
Persistence Error Translation

Turns driver and SQLAlchemy errors into typed persistence exceptions at the
point of failure, so retry decisions never depend on message text.
"""

import asyncio

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from app.core.domain import (
    PermanentPersistenceException,
    PersistenceException,
    TransientPersistenceException,
)

# PostgreSQL SQLSTATE classes worth retrying:
# 08 connection exception, 40 transaction rollback (serialization, deadlock),
# 53 insufficient resources, 57P operator intervention (shutdown, cancel)
TRANSIENT_SQLSTATE_PREFIXES = ("08", "40", "53", "57P")


def _sqlstate(exc: BaseException) -> str | None:
    orig = getattr(exc, "orig", None)
    for source in (orig, getattr(orig, "__cause__", None)):
        if source is None:
            continue
        code = getattr(source, "sqlstate", None) or getattr(source, "pgcode", None)
        if code:
            return str(code)
    return None


def is_transient_error(exc: BaseException) -> bool:
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError, ConnectionError)):
        return True
    if isinstance(exc, OSError) and not isinstance(exc, PermissionError):
        return True
    if isinstance(exc, (DisconnectionError, PoolTimeoutError, InterfaceError)):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True

    sqlstate = _sqlstate(exc)
    if sqlstate:
        return sqlstate.startswith(TRANSIENT_SQLSTATE_PREFIXES)

    return isinstance(exc, OperationalError)


def translate_persistence_error(operation: str, exc: BaseException) -> PersistenceException:
    """Wrap ``exc`` in the transient or permanent persistence exception."""
    if isinstance(exc, PersistenceException):
        return exc

    detail = str(getattr(exc, "orig", None) or exc)
    original = exc if isinstance(exc, Exception) else None
    if is_transient_error(exc):
        return TransientPersistenceException(operation, f"Temporary database error during {operation}: {detail}", original)
    return PermanentPersistenceException(operation, f"Database error during {operation}: {detail}", original)


PERSISTENCE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)
