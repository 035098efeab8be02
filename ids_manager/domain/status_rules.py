"""
status_rules.py - Issue / deliverable status consistency
Single responsibility: decide whether an issue may be solved from its deliverables.
"""
from typing import Iterable

from ids_manager.domain.errors import TransitionReason
from ids_manager.domain.models import Deliverable, DeliverableStatus


def solve_blocker(deliverables: Iterable[Deliverable]) -> TransitionReason | None:
    """Return why the issue cannot be solved, or None when it can."""
    items = list(deliverables)
    if not items:
        return TransitionReason.NO_DELIVERABLES
    if any(d.status != DeliverableStatus.COMPLETED.value for d in items):
        return TransitionReason.NOT_ALL_COMPLETED
    return None


def all_completed(deliverables: Iterable[Deliverable]) -> bool:
    return solve_blocker(deliverables) is None


def progress(deliverables: Iterable[Deliverable]) -> tuple[int, int, int]:
    """Return (total, completed, percent)."""
    items = list(deliverables)
    total = len(items)
    if total == 0:
        return 0, 0, 0
    done = sum(1 for d in items if d.status == DeliverableStatus.COMPLETED.value)
    return total, done, int((done / total) * 100)
