"""
errors.py - Typed service errors
Single responsibility: closed set of failure kinds and their user-facing text.
"""
from enum import Enum


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    STORE_ERROR = "store_error"
    HISTORY_WRITE_FAILED = "history_write_failed"


class TransitionReason(str, Enum):
    NO_DELIVERABLES = "no_deliverables"
    NOT_ALL_COMPLETED = "not_all_completed"
    HAS_DELIVERABLES = "has_deliverables"


_TRANSITION_MESSAGES = {
    TransitionReason.NO_DELIVERABLES: "Cannot mark as solved: Issue has no deliverables.",
    TransitionReason.NOT_ALL_COMPLETED: "Cannot mark as solved: Not all deliverables are completed.",
    TransitionReason.HAS_DELIVERABLES: "Cannot delete: Issue still has deliverables.",
}


class IdsError(Exception):
    """Base class for every failure a service reports to its caller."""

    kind: ErrorKind

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class Unauthenticated(IdsError):
    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class AccessDenied(IdsError):
    kind = ErrorKind.ACCESS_DENIED


class NotFound(IdsError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransition(IdsError):
    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, reason: TransitionReason):
        super().__init__(_TRANSITION_MESSAGES[reason])
        self.reason = reason


class StoreError(IdsError):
    kind = ErrorKind.STORE_ERROR


class HistoryWriteFailed(IdsError):
    """Primary update committed but its history rows were not written."""

    kind = ErrorKind.HISTORY_WRITE_FAILED


def user_message(error: IdsError) -> str:
    """Human-readable text for a service error, one per kind."""
    kind = error.kind
    if kind is ErrorKind.UNAUTHENTICATED:
        return "You must be logged in to do this."
    if kind is ErrorKind.ACCESS_DENIED:
        return error.message or "You are not allowed to change this item."
    if kind is ErrorKind.NOT_FOUND:
        return "This item no longer exists."
    if kind is ErrorKind.INVALID_TRANSITION:
        return error.message
    if kind is ErrorKind.STORE_ERROR:
        return "The database rejected the change. Please try again."
    if kind is ErrorKind.HISTORY_WRITE_FAILED:
        return "Status updated but failed to record history."
    raise ValueError(f"Unhandled error kind: {kind}")
