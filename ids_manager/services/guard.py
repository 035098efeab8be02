"""
guard.py - Authorization guard and service plumbing
Single responsibility: resolve identity, check ownership, wrap store failures.
"""
import logging
import sqlite3
from contextlib import contextmanager

from ids_manager.database.connection import Store
from ids_manager.domain.errors import AccessDenied, StoreError, Unauthenticated
from ids_manager.domain.models import Profile

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    def __init__(self, identity):
        self.identity = identity

    def require_user(self) -> Profile:
        user = self.identity.get_current_user()
        if user is None:
            logger.warning("Rejected: no authenticated user")
            raise Unauthenticated()
        return user

    def require_owner(self, record, field: str, message: str) -> Profile:
        """Return the current user if it matches ``record.<field>``, else AccessDenied."""
        user = self.require_user()
        if getattr(record, field) != user.id:
            logger.warning(
                "Access denied: user=%s %s=%s id=%s",
                user.id,
                field,
                getattr(record, field),
                getattr(record, "id", None),
            )
            raise AccessDenied(message)
        return user


class ServiceBase:
    """Common constructor: every service gets its store and identity explicitly."""

    def __init__(self, store: Store, identity):
        self.store = store
        self.identity = identity
        self.guard = AuthorizationGuard(identity)

    @contextmanager
    def _connection(self, action: str):
        try:
            with self.store.connection() as conn:
                yield conn
        except sqlite3.Error as e:
            logger.error("Failed to %s: %s", action, e)
            raise StoreError(f"Failed to {action}", details=e) from e
