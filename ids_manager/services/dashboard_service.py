"""
dashboard_service.py - Dashboard aggregation
Single responsibility: status counts, personal progress and 7-day activity.
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta

from ids_manager.database.repositories import deliverables as deliverable_repo
from ids_manager.database.repositories import headlines as headline_repo
from ids_manager.database.repositories import issues as issue_repo
from ids_manager.database.repositories import profiles as profile_repo
from ids_manager.domain import status_rules
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.models import (
    Deliverable,
    DeliverableStatus,
    HeadlineStatus,
    Issue,
    IssueStatus,
)
from ids_manager.services.guard import ServiceBase

ACTIVITY_DAYS = 7


@dataclass
class IssueProgress:
    issue: Issue
    total: int
    completed: int
    percent: int


@dataclass
class ActivityDay:
    day: date
    headlines: int = 0
    issues: int = 0
    todos: int = 0


@dataclass
class DashboardSummary:
    headlines: dict[str, int]
    issues: dict[str, int]
    todos: dict[str, int]
    users: int
    my_issues: list[IssueProgress] = field(default_factory=list)
    my_open_todos: list[Deliverable] = field(default_factory=list)
    todos_on_my_issues: list[Deliverable] = field(default_factory=list)
    activity: list[ActivityDay] = field(default_factory=list)


def _counts(enum_cls, raw: dict[str, int]) -> dict[str, int]:
    counts = {m.value: raw.get(m.value, 0) for m in enum_cls}
    counts["total"] = sum(raw.values())
    return counts


class DashboardService(ServiceBase):
    def summary(self, today: date | None = None) -> DashboardSummary:
        user = self.guard.require_user()
        today = today or date.today()
        days = [today - timedelta(days=n) for n in range(ACTIVITY_DAYS - 1, -1, -1)]
        since = days[0].isoformat()

        with self._connection("build dashboard") as conn:
            summary = DashboardSummary(
                headlines=_counts(HeadlineStatus, headline_repo.count_by_status(conn)),
                issues=_counts(IssueStatus, issue_repo.count_by_status(conn)),
                todos=_counts(DeliverableStatus, deliverable_repo.count_by_status(conn)),
                users=profile_repo.count(conn),
            )
            my_issues = issue_repo.list_issues(conn, ListFilter(owner=user.id))
            by_issue = deliverable_repo.list_by_issues(conn, [i.id for i in my_issues])
            my_todos = deliverable_repo.list_deliverables(conn, ListFilter(owner=user.id))
            created = {
                "headlines": headline_repo.created_since(conn, since),
                "issues": issue_repo.created_since(conn, since),
                "todos": deliverable_repo.created_since(conn, since),
            }

        for issue in my_issues:
            items = by_issue.get(issue.id, [])
            total, done, pct = status_rules.progress(items)
            summary.my_issues.append(IssueProgress(issue, total, done, pct))
            summary.todos_on_my_issues.extend(items)
        summary.my_open_todos = [
            d for d in my_todos if d.status != DeliverableStatus.COMPLETED.value
        ]

        per_day = {name: Counter(ts[:10] for ts in stamps) for name, stamps in created.items()}
        for day in days:
            key = day.isoformat()
            summary.activity.append(
                ActivityDay(
                    day=day,
                    headlines=per_day["headlines"][key],
                    issues=per_day["issues"][key],
                    todos=per_day["todos"][key],
                )
            )
        return summary
