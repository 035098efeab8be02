from datetime import date

import pytest

from conftest import ALICE, BOB
from ids_manager.domain.errors import Unauthenticated


def test_my_ids_scopes_to_signed_in_user(services, issue_with_todos, act_as):
    services.headlines.create("Alice headline", "")
    act_as(BOB)
    services.headlines.create("Bob headline", "")
    services.issues.create("Bob issue", "")

    assert [h.title for h in services.my_ids.headlines()] == ["Bob headline"]
    assert [i.title for i in services.my_ids.issues()] == ["Bob issue"]
    assert [t.title for t in services.my_ids.todos()] == ["Add index", "Profile queries"]

    act_as(ALICE)
    assert services.my_ids.todos() == []
    assert [i.title for i in services.my_ids.issues()] == ["Checkout is slow"]

    act_as(None)
    with pytest.raises(Unauthenticated):
        services.my_ids.issues()


def test_dashboard_summary(services, issue_with_todos, act_as):
    issue, first, _second = issue_with_todos
    services.headlines.create("News", "")
    act_as(BOB)
    services.deliverables.update_status(first.id, "completed")
    act_as(ALICE)

    today = date.today()
    summary = services.dashboard.summary(today)

    assert summary.headlines == {"pending": 1, "completed": 0, "total": 1}
    assert summary.issues == {"pending": 1, "discussed": 0, "solved": 0, "total": 1}
    assert summary.todos == {"pending": 1, "in_progress": 0, "completed": 1, "total": 2}
    assert summary.users == 2

    [mine] = summary.my_issues
    assert (mine.issue.id, mine.total, mine.completed, mine.percent) == (issue.id, 2, 1, 50)
    assert len(summary.todos_on_my_issues) == 2
    assert summary.my_open_todos == []

    assert len(summary.activity) == 7
    assert summary.activity[-1].day == today
    assert (summary.activity[-1].headlines, summary.activity[-1].issues, summary.activity[-1].todos) == (1, 1, 2)
    assert sum(day.issues for day in summary.activity[:-1]) == 0
