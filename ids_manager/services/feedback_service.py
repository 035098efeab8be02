"""
feedback_service.py - Feedback service layer
Single responsibility: submit and triage user feedback.
"""
import logging

from ids_manager.database.repositories import feedback as feedback_repo
from ids_manager.database.repositories.tags import normalize_tags
from ids_manager.domain.errors import NotFound
from ids_manager.domain.models import (
    Feedback,
    FeedbackCategory,
    FeedbackPriority,
    FeedbackStatus,
    coerce_status,
)
from ids_manager.services.guard import ServiceBase
from ids_manager.utils.time import now_iso

logger = logging.getLogger(__name__)


class FeedbackService(ServiceBase):
    def get(self, feedback_id: int) -> Feedback:
        with self._connection("fetch feedback") as conn:
            fb = feedback_repo.get(conn, feedback_id)
        if fb is None:
            raise NotFound("Feedback", feedback_id)
        return fb

    def submit(
        self,
        title: str,
        description: str,
        category: str = FeedbackCategory.OTHER.value,
        priority: str = FeedbackPriority.MEDIUM.value,
        tags: list[str] | None = None,
    ) -> Feedback:
        category = coerce_status(FeedbackCategory, category)
        priority = coerce_status(FeedbackPriority, priority)
        user = self.guard.require_user()
        fb = Feedback(
            user_id=user.id,
            title=title.strip(),
            description=(description or "").strip(),
            category=category,
            priority=priority,
            status=FeedbackStatus.PENDING.value,
            tags=normalize_tags(tags),
            created_at=now_iso(),
        )
        with self._connection("submit feedback") as conn:
            fid = feedback_repo.create(conn, fb)
        logger.info("Feedback %s submitted by %s", fid, user.id)
        return self.get(fid)

    def list_mine(self) -> list[Feedback]:
        user = self.guard.require_user()
        with self._connection("fetch feedback") as conn:
            return feedback_repo.list_all(conn, user_id=user.id)

    def update_status(self, feedback_id: int, status: str) -> Feedback:
        status = coerce_status(FeedbackStatus, status)
        self.guard.require_user()
        fb = self.get(feedback_id)
        self.guard.require_owner(fb, "user_id", "You can only update feedback you submitted.")
        with self._connection("update feedback status") as conn:
            feedback_repo.set_status(conn, feedback_id, status)
        logger.info("Feedback %s status -> %s", feedback_id, status)
        return self.get(feedback_id)

    def list(self) -> list[Feedback]:
        with self._connection("fetch feedback") as conn:
            return feedback_repo.list_all(conn)
