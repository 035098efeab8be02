"""
deliverable_service.py - Deliverable (todo) service layer
Single responsibility: deliverable CRUD, history recording and the issue cascade.

Only the accountable user may change a deliverable. Completing one re-checks
the parent issue and marks it solved when every deliverable is completed.
History and cascade failures never undo the committed update; they are
reported on the returned DeliverableUpdate instead.
"""
import logging
from dataclasses import dataclass

from ids_manager.database.connection import Store
from ids_manager.database.repositories import deliverables as deliverable_repo
from ids_manager.database.repositories import history as history_repo
from ids_manager.database.repositories import issues as issue_repo
from ids_manager.database.repositories import profiles as profile_repo
from ids_manager.domain.errors import HistoryWriteFailed, IdsError, NotFound, StoreError
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.models import (
    Deliverable,
    DeliverableHistory,
    DeliverableStatus,
    coerce_status,
)
from ids_manager.services.guard import ServiceBase
from ids_manager.services.issue_service import IssueService
from ids_manager.utils.time import now_iso, parse_due_date

logger = logging.getLogger(__name__)


@dataclass
class DeliverableUpdate:
    deliverable: Deliverable
    history_error: HistoryWriteFailed | None = None
    cascade_error: IdsError | None = None
    issue_solved: bool = False

    @property
    def degraded(self) -> bool:
        return self.history_error is not None or self.cascade_error is not None


def _as_text(value) -> str | None:
    return None if value is None else str(value)


class DeliverableService(ServiceBase):
    def __init__(self, store: Store, identity, issues: IssueService | None = None):
        super().__init__(store, identity)
        self.issues = issues or IssueService(store, identity)

    def get(self, deliverable_id: int) -> Deliverable:
        with self._connection("fetch deliverable") as conn:
            deliverable = deliverable_repo.get(conn, deliverable_id)
        if deliverable is None:
            raise NotFound("Deliverable", deliverable_id)
        return deliverable

    def list_for_issue(self, issue_id: int) -> list[Deliverable]:
        with self._connection("fetch deliverables") as conn:
            return deliverable_repo.list_by_issue(conn, issue_id)

    def history(self, deliverable_id: int) -> list[DeliverableHistory]:
        with self._connection("fetch deliverable history") as conn:
            return history_repo.list_by_deliverable(conn, deliverable_id)

    def create(
        self,
        issue_id: int,
        title: str,
        description: str,
        due_date,
        accountable_id: str,
    ) -> Deliverable:
        user = self.guard.require_user()
        due = parse_due_date(due_date)
        with self._connection("create deliverable") as conn:
            if issue_repo.get_issue(conn, issue_id) is None:
                raise NotFound("Issue", issue_id)
            if profile_repo.get(conn, accountable_id) is None:
                raise NotFound("Profile", accountable_id)
            did = deliverable_repo.create(
                conn,
                Deliverable(
                    issue_id=issue_id,
                    title=title.strip(),
                    description=(description or "").strip(),
                    due_date=due,
                    accountable_id=accountable_id,
                    created_by=user.id,
                    status=DeliverableStatus.PENDING.value,
                    created_at=now_iso(),
                    updated_at=now_iso(),
                ),
            )
        logger.info("Deliverable %s created on issue %s for %s", did, issue_id, accountable_id)
        return self.get(did)

    def update_status(self, deliverable_id: int, status: str) -> DeliverableUpdate:
        return self.update(deliverable_id, status=status)

    def update(self, deliverable_id: int, **fields) -> DeliverableUpdate:
        unknown = set(fields) - set(deliverable_repo.UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unsupported deliverable fields: {sorted(unknown)}")
        if "status" in fields:
            fields["status"] = coerce_status(DeliverableStatus, fields["status"])
        if "due_date" in fields:
            fields["due_date"] = parse_due_date(fields["due_date"])
        for key in ("title", "description"):
            if key in fields:
                fields[key] = (fields[key] or "").strip()

        self.guard.require_user()
        current = self.get(deliverable_id)
        user = self.guard.require_owner(
            current, "accountable_id", "You can only update todos assigned to you."
        )

        changes = {
            k: v for k, v in fields.items() if _as_text(getattr(current, k)) != _as_text(v)
        }
        result = DeliverableUpdate(deliverable=current)
        if changes:
            with self._connection("update deliverable") as conn:
                if "accountable_id" in changes and profile_repo.get(conn, changes["accountable_id"]) is None:
                    raise NotFound("Profile", changes["accountable_id"])
                deliverable_repo.update_fields(conn, deliverable_id, changes, user.id)
            logger.info("Deliverable %s updated by %s: %s", deliverable_id, user.id, sorted(changes))
            result.history_error = self._record_history(current, changes, user.id)
            result.deliverable = self.get(deliverable_id)

        if fields.get("status") == DeliverableStatus.COMPLETED.value:
            self._cascade(result)
        return result

    def _record_history(self, current: Deliverable, changes: dict, user_id: str) -> HistoryWriteFailed | None:
        entries = [
            DeliverableHistory(
                deliverable_id=current.id,
                field_name=name,
                old_value=_as_text(getattr(current, name)),
                new_value=_as_text(value),
                updated_by=user_id,
                created_at=now_iso(),
            )
            for name, value in changes.items()
        ]
        try:
            with self._connection("record deliverable history") as conn:
                history_repo.add_entries(conn, entries)
        except StoreError as e:
            logger.warning("History for deliverable %s not recorded: %s", current.id, e.details)
            return HistoryWriteFailed("Status updated but failed to record history.", details=e)
        return None

    def _cascade(self, result: DeliverableUpdate) -> None:
        issue_id = result.deliverable.issue_id
        try:
            result.issue_solved = self.issues.solve_if_complete(issue_id)
        except IdsError as e:
            logger.warning("Cascade to issue %s failed: %s", issue_id, e)
            result.cascade_error = e

    def list(self, filter: ListFilter | None = None) -> list[Deliverable]:
        with self._connection("fetch todos") as conn:
            return deliverable_repo.list_deliverables(conn, filter or ListFilter())
