"""
models.py - Domain models
Single responsibility: typed containers for core entities and their statuses.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class HeadlineStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class IssueStatus(str, Enum):
    PENDING = "pending"
    DISCUSSED = "discussed"
    SOLVED = "solved"


class DeliverableStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class FeedbackCategory(str, Enum):
    BUG = "bug"
    FEATURE = "feature"
    IMPROVEMENT = "improvement"
    OTHER = "other"


class FeedbackPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FeedbackStatus(str, Enum):
    PENDING = "pending"
    IN_REVIEW = "in_review"
    IMPLEMENTED = "implemented"
    REJECTED = "rejected"


@dataclass
class Profile:
    id: str
    email: str

    def __getitem__(self, key):
        return getattr(self, key)


@dataclass
class Headline:
    title: str
    description: str
    created_by: str
    status: str = HeadlineStatus.PENDING.value
    created_at: str | None = None
    author_email: str | None = None
    id: Optional[int] = None

    def __getitem__(self, key):
        return getattr(self, key)


@dataclass
class Issue:
    title: str
    description: str
    created_by: str
    status: str = IssueStatus.PENDING.value
    created_at: str | None = None
    updated_at: str | None = None
    author_email: str | None = None
    id: Optional[int] = None

    def __getitem__(self, key):
        return getattr(self, key)


@dataclass
class Deliverable:
    issue_id: int
    title: str
    description: str
    due_date: str
    accountable_id: str
    created_by: str
    status: str = DeliverableStatus.PENDING.value
    created_at: str | None = None
    updated_at: str | None = None
    last_updated_by: str | None = None
    accountable_email: str | None = None
    issue_title: str | None = None
    id: Optional[int] = None

    def __getitem__(self, key):
        return getattr(self, key)


@dataclass
class DeliverableHistory:
    deliverable_id: int
    field_name: str
    old_value: str | None
    new_value: str | None
    updated_by: str
    created_at: str | None = None
    updated_by_email: str | None = None
    id: Optional[int] = None

    def __getitem__(self, key):
        return getattr(self, key)


@dataclass
class Feedback:
    user_id: str
    title: str
    description: str
    category: str = FeedbackCategory.OTHER.value
    priority: str = FeedbackPriority.MEDIUM.value
    status: str = FeedbackStatus.PENDING.value
    tags: list[str] = field(default_factory=list)
    created_at: str | None = None
    id: Optional[int] = None

    def __getitem__(self, key):
        return getattr(self, key)


def coerce_status(enum_cls, value) -> str:
    """Return the stored text for ``value`` or raise ValueError if unknown."""
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Unsupported {enum_cls.__name__}: {value!r} (allowed: {allowed})")
