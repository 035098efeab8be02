import pytest

from conftest import ALICE, BOB
from ids_manager.domain.errors import AccessDenied, Unauthenticated


def test_submit_normalizes_tags(services):
    fb = services.feedback.submit(
        "Dark mode", "please", category="feature", priority="low", tags=[" ui ", "ui", "", "theme"]
    )
    assert fb.tags == ["ui", "theme"]
    assert (fb.category, fb.priority, fb.status) == ("feature", "low", "pending")
    assert fb.user_id == ALICE.id


def test_submit_rejects_unknown_category(services):
    with pytest.raises(ValueError):
        services.feedback.submit("x", "y", category="rant")


def test_list_and_list_mine(services, act_as):
    services.feedback.submit("A1", "")
    act_as(BOB)
    services.feedback.submit("B1", "")
    assert [f.title for f in services.feedback.list()] == ["B1", "A1"]
    assert [f.title for f in services.feedback.list_mine()] == ["B1"]
    act_as(None)
    with pytest.raises(Unauthenticated):
        services.feedback.list_mine()


def test_status_change_by_submitter_only(services, act_as):
    fb = services.feedback.submit("Bug in export", "", category="bug")
    assert services.feedback.update_status(fb.id, "in_review").status == "in_review"
    act_as(BOB)
    with pytest.raises(AccessDenied):
        services.feedback.update_status(fb.id, "rejected")
