"""
issue_service.py - Issue service layer
Single responsibility: orchestrate issue operations and enforce the solve rule.
"""
import logging

from ids_manager.database.repositories import deliverables as deliverable_repo
from ids_manager.database.repositories import issues as issue_repo
from ids_manager.domain import status_rules
from ids_manager.domain.errors import InvalidTransition, NotFound, TransitionReason
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.models import Deliverable, Issue, IssueStatus, coerce_status
from ids_manager.services.guard import ServiceBase
from ids_manager.utils.time import now_iso

logger = logging.getLogger(__name__)


class IssueService(ServiceBase):
    def get(self, issue_id: int) -> Issue:
        with self._connection("fetch issue") as conn:
            issue = issue_repo.get_issue(conn, issue_id)
        if issue is None:
            raise NotFound("Issue", issue_id)
        return issue

    def deliverables(self, issue_id: int) -> list[Deliverable]:
        with self._connection("fetch deliverables") as conn:
            return deliverable_repo.list_by_issue(conn, issue_id)

    def deliverables_map(self, issue_ids: list[int]) -> dict[int, list[Deliverable]]:
        with self._connection("fetch deliverables") as conn:
            return deliverable_repo.list_by_issues(conn, issue_ids)

    def progress(self, issue_id: int) -> tuple[int, int, int]:
        """Return (total, completed, percent) over the issue's deliverables."""
        return status_rules.progress(self.deliverables(issue_id))

    def _owned(self, issue_id: int, message: str) -> Issue:
        self.guard.require_user()
        issue = self.get(issue_id)
        self.guard.require_owner(issue, "created_by", message)
        return issue

    def create(self, title: str, description: str) -> Issue:
        user = self.guard.require_user()
        issue = Issue(
            title=title.strip(),
            description=(description or "").strip(),
            created_by=user.id,
            status=IssueStatus.PENDING.value,
            created_at=now_iso(),
            updated_at=now_iso(),
        )
        with self._connection("create issue") as conn:
            iid = issue_repo.create_issue(conn, issue)
        logger.info("Issue %s created by %s", iid, user.id)
        return self.get(iid)

    def update(self, issue_id: int, title: str, description: str) -> Issue:
        self._owned(issue_id, "You can only edit issues you created.")
        with self._connection("edit issue") as conn:
            issue_repo.update_issue(conn, issue_id, title.strip(), (description or "").strip())
        logger.info("Issue %s edited", issue_id)
        return self.get(issue_id)

    def update_status(self, issue_id: int, status: str) -> Issue:
        status = coerce_status(IssueStatus, status)
        self._owned(issue_id, "You can only update issues you created.")
        if status == IssueStatus.SOLVED.value:
            blocker = status_rules.solve_blocker(self.deliverables(issue_id))
            if blocker is not None:
                logger.warning("Issue %s cannot be solved: %s", issue_id, blocker.value)
                raise InvalidTransition(blocker)
        with self._connection("update issue status") as conn:
            issue_repo.set_status(conn, issue_id, status)
        logger.info("Issue %s status -> %s", issue_id, status)
        return self.get(issue_id)

    def solve_if_complete(self, issue_id: int) -> bool:
        """
        System-triggered cascade: mark the issue solved when every deliverable
        is completed. No ownership check. Returns True if the status changed.
        """
        with self._connection("re-evaluate issue status") as conn:
            issue = issue_repo.get_issue(conn, issue_id)
            if issue is None:
                raise NotFound("Issue", issue_id)
            if issue.status == IssueStatus.SOLVED.value:
                return False
            if not status_rules.all_completed(deliverable_repo.list_by_issue(conn, issue_id)):
                return False
            issue_repo.set_status(conn, issue_id, IssueStatus.SOLVED.value)
        logger.info("Issue %s solved: all deliverables completed", issue_id)
        return True

    def delete(self, issue_id: int) -> None:
        self._owned(issue_id, "You can only delete issues you created.")
        if self.deliverables(issue_id):
            raise InvalidTransition(TransitionReason.HAS_DELIVERABLES)
        with self._connection("delete issue") as conn:
            issue_repo.delete_issue(conn, issue_id)
        logger.info("Issue %s deleted", issue_id)

    def list(self, filter: ListFilter | None = None) -> list[Issue]:
        with self._connection("fetch issues") as conn:
            return issue_repo.list_issues(conn, filter or ListFilter())
