"""
headline_service.py - Headline service layer
Single responsibility: orchestrate headline operations and enforce creator ownership.
"""
import logging

from ids_manager.database.repositories import headlines as headline_repo
from ids_manager.domain.errors import NotFound
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.models import Headline, HeadlineStatus, coerce_status
from ids_manager.services.guard import ServiceBase
from ids_manager.utils.time import now_iso

logger = logging.getLogger(__name__)


class HeadlineService(ServiceBase):
    def list(self, filter: ListFilter | None = None) -> list[Headline]:
        with self._connection("fetch headlines") as conn:
            return headline_repo.list_headlines(conn, filter or ListFilter())

    def get(self, headline_id: int) -> Headline:
        with self._connection("fetch headline") as conn:
            headline = headline_repo.get(conn, headline_id)
        if headline is None:
            raise NotFound("Headline", headline_id)
        return headline

    def _owned(self, headline_id: int, message: str) -> Headline:
        self.guard.require_user()
        headline = self.get(headline_id)
        self.guard.require_owner(headline, "created_by", message)
        return headline

    def create(self, title: str, description: str) -> Headline:
        user = self.guard.require_user()
        headline = Headline(
            title=title.strip(),
            description=(description or "").strip(),
            created_by=user.id,
            status=HeadlineStatus.PENDING.value,
            created_at=now_iso(),
        )
        with self._connection("create headline") as conn:
            hid = headline_repo.create(conn, headline)
        logger.info("Headline %s created by %s", hid, user.id)
        return self.get(hid)

    def update(self, headline_id: int, title: str, description: str, status: str | None = None) -> Headline:
        if status is not None:
            status = coerce_status(HeadlineStatus, status)
        self._owned(headline_id, "You can only edit headlines you created.")
        with self._connection("update headline") as conn:
            headline_repo.update(conn, headline_id, title.strip(), (description or "").strip(), status)
        logger.info("Headline %s updated", headline_id)
        return self.get(headline_id)

    def update_status(self, headline_id: int, status: str) -> Headline:
        status = coerce_status(HeadlineStatus, status)
        self._owned(headline_id, "You can only update headlines you created.")
        with self._connection("update headline status") as conn:
            headline_repo.set_status(conn, headline_id, status)
        logger.info("Headline %s status -> %s", headline_id, status)
        return self.get(headline_id)

    def toggle_status(self, headline_id: int) -> Headline:
        current = self._owned(headline_id, "You can only update headlines you created.")
        new_status = (
            HeadlineStatus.PENDING.value
            if current.status == HeadlineStatus.COMPLETED.value
            else HeadlineStatus.COMPLETED.value
        )
        return self.update_status(headline_id, new_status)

    def delete(self, headline_id: int) -> None:
        self._owned(headline_id, "You can only delete headlines you created.")
        with self._connection("delete headline") as conn:
            headline_repo.delete(conn, headline_id)
        logger.info("Headline %s deleted", headline_id)
