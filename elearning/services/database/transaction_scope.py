"""
Transaction Scope für DSP E-Learning Platform

Explicit unit-of-work handle around ``django.db.transaction.atomic``.

Django ties transactions to the connection of the current thread, so
services usually just nest ``with transaction.atomic()`` blocks. The payment
workflow needs more control than that: one owner opens the scope, hands it
to every service that has to participate, and decides at the end whether
to commit or abort. ``TransactionScope`` gives that owner a handle with
explicit ``commit()`` / ``abort()`` and guarantees, through the context
manager protocol, that the scope is resolved exactly once on every exit
path.

Usage::

    with TransactionScope() as scope:
        result = enrollment_service.enroll(course_ids, user_id, scope)
        scope.commit()

Participating queries use ``Model.objects.using(scope.using)``.

Author: DSP Development Team
Version: 1.0.0
"""

import enum
import logging
from typing import Optional

from django.db import DEFAULT_DB_ALIAS, transaction

logger = logging.getLogger(__name__)


class TransactionScopeError(RuntimeError):
    """Raised when a scope is used outside its lifecycle (e.g. committed twice)."""


class ScopeState(str, enum.Enum):
    PENDING = "pending"
    OPEN = "open"
    COMMITTED = "committed"
    ABORTED = "aborted"
    FAILED = "failed"


class TransactionScope:
    """
    Atomic unit of work bound to one database connection.

    Attributes:
        using: Connection alias all participating queries must use
        state: Current ScopeState
    """

    def __init__(self, using: Optional[str] = None):
        self.using = using or DEFAULT_DB_ALIAS
        self.state = ScopeState.PENDING
        self._atomic = None

    def __repr__(self) -> str:
        return f"<TransactionScope(using={self.using!r}, state={self.state.value})>"

    @property
    def is_open(self) -> bool:
        return self.state is ScopeState.OPEN

    def __enter__(self) -> "TransactionScope":
        if self.state is not ScopeState.PENDING:
            raise TransactionScopeError(f"Scope cannot be reopened (state={self.state.value})")

        self._atomic = transaction.atomic(using=self.using)
        self._atomic.__enter__()
        self.state = ScopeState.OPEN
        logger.debug("Transaction scope opened on %s", self.using)
        return self

    def commit(self) -> None:
        """
        Commit all writes made through this scope.

        The scope counts as released even when the commit raises; Django
        rolls the transaction back in that case and the error propagates.
        """
        self._ensure_open("commit")
        try:
            self._atomic.__exit__(None, None, None)
        except Exception:
            self.state = ScopeState.FAILED
            logger.error("Transaction scope on %s failed to commit", self.using)
            raise
        self.state = ScopeState.COMMITTED
        logger.debug("Transaction scope on %s committed", self.using)

    def abort(self) -> None:
        """Roll back every write made through this scope."""
        self._ensure_open("abort")
        try:
            transaction.set_rollback(True, using=self.using)
            self._atomic.__exit__(None, None, None)
        except Exception:
            self.state = ScopeState.FAILED
            raise
        self.state = ScopeState.ABORTED
        logger.info("Transaction scope on %s aborted", self.using)

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if self.state is not ScopeState.OPEN:
            return False

        if exc_type is None:
            logger.warning("Transaction scope on %s left unresolved, aborting", self.using)

        try:
            self.abort()
        except Exception:
            # never mask the exception that is already propagating
            logger.exception("Failed to release transaction scope on %s", self.using)
            if exc_type is None:
                raise
        return False

    def _ensure_open(self, action: str) -> None:
        if self.state is not ScopeState.OPEN:
            raise TransactionScopeError(
                f"Cannot {action} a transaction scope in state '{self.state.value}'"
            )
