import pytest

from conftest import ALICE, BOB
from ids_manager.database.repositories import deliverables as deliverable_repo
from ids_manager.database.repositories import headlines as headline_repo
from ids_manager.database.repositories import issues as issue_repo
from ids_manager.domain.models import Deliverable, Headline, Issue
from ids_manager.services import filter_service


@pytest.fixture
def seeded(store):
    with store.connection() as conn:
        headline_repo.create(conn, Headline("Week one news", "", ALICE.id, created_at="2025-01-02T09:00:00"))
        headline_repo.create(conn, Headline("Week two news", "", BOB.id, created_at="2025-01-07T09:00:00"))
        headline_repo.create(
            conn,
            Headline("Week two done", "", ALICE.id, status="completed", created_at="2025-01-12T23:59:00"),
        )
        old = issue_repo.create_issue(
            conn, Issue("Old outage", "db", ALICE.id, status="solved", created_at="2025-01-03T10:00:00")
        )
        issue_repo.create_issue(conn, Issue("Login bug", "sso", BOB.id, created_at="2025-01-08T10:00:00"))
        issue_repo.create_issue(conn, Issue("Slow search", "index", ALICE.id, created_at="2025-01-09T10:00:00"))
        for title, due, who in [
            ("Later", "2025-01-12", ALICE.id),
            ("Sooner", "2025-01-06", BOB.id),
            ("Next week", "2025-01-13", BOB.id),
        ]:
            deliverable_repo.create(conn, Deliverable(old, title, "", due, who, ALICE.id))
    return store


def test_headlines_week_filter_and_order(services, seeded):
    rows = services.headlines.list(filter_service.build_filter(week="2025-W02"))
    assert [h.title for h in rows] == ["Week two done", "Week two news"]


def test_filters_compose(services, seeded):
    flt = filter_service.build_filter(week="2025-W02", status="pending", owner=BOB.id)
    assert [h.title for h in services.headlines.list(flt)] == ["Week two news"]


def test_issues_default_order_and_unsolved_only(services, seeded):
    assert [i.title for i in services.issues.list()] == ["Slow search", "Login bug", "Old outage"]
    flt = filter_service.build_filter(unsolved_only=True)
    assert [i.title for i in services.issues.list(flt)] == ["Slow search", "Login bug"]


def test_issue_keyword_terms_are_anded(services, seeded):
    flt = filter_service.build_filter(keyword="slow  index")
    assert [i.title for i in services.issues.list(flt)] == ["Slow search"]
    flt = filter_service.build_filter(keyword="slow sso")
    assert services.issues.list(flt) == []


def test_todos_filter_by_due_week_and_order(services, seeded):
    assert [d.title for d in services.deliverables.list()] == ["Sooner", "Later", "Next week"]
    flt = filter_service.build_filter(week="2025-W02")
    assert [d.title for d in services.deliverables.list(flt)] == ["Sooner", "Later"]
    flt = filter_service.build_filter(week="2025-W02", owner=BOB.id)
    assert [d.title for d in services.deliverables.list(flt)] == ["Sooner"]


def test_build_filter_rejects_bad_week():
    with pytest.raises(ValueError):
        filter_service.build_filter(week="2025-02")


def test_presets_are_kept_per_list():
    flt = filter_service.build_filter(status="solved", week="2025-W03")
    filter_service.save_last("issues", flt)
    assert filter_service.load_last("issues") == flt
    assert filter_service.load_last("todos").status == "ALL"
