"""
my_ids_service.py - "My IDS" views
Single responsibility: the signed-in user's own issues, headlines and todos.
"""
from ids_manager.database.repositories import deliverables as deliverable_repo
from ids_manager.database.repositories import headlines as headline_repo
from ids_manager.database.repositories import issues as issue_repo
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.models import Deliverable, Headline, Issue
from ids_manager.services.guard import ServiceBase


class MyIdsService(ServiceBase):
    def issues(self) -> list[Issue]:
        user = self.guard.require_user()
        with self._connection("fetch my issues") as conn:
            return issue_repo.list_issues(conn, ListFilter(owner=user.id))

    def headlines(self) -> list[Headline]:
        user = self.guard.require_user()
        with self._connection("fetch my headlines") as conn:
            return headline_repo.list_headlines(conn, ListFilter(owner=user.id))

    def todos(self) -> list[Deliverable]:
        user = self.guard.require_user()
        with self._connection("fetch my todos") as conn:
            todos = deliverable_repo.list_deliverables(conn, ListFilter(owner=user.id))
        # newest first, unlike the due-date ordering of the todo list
        return sorted(todos, key=lambda d: (d.created_at or "", d.id or 0), reverse=True)
