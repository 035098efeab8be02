import pytest

from conftest import ALICE, BOB
from ids_manager.domain.errors import (
    AccessDenied,
    ErrorKind,
    InvalidTransition,
    NotFound,
    TransitionReason,
    Unauthenticated,
)


def test_create_sets_owner_and_pending(services):
    issue = services.issues.create("  Flaky CI  ", "tests time out")
    assert issue.title == "Flaky CI"
    assert issue.created_by == ALICE.id
    assert issue.status == "pending"
    assert issue.author_email == ALICE.email


def test_create_requires_identity(services, act_as):
    act_as(None)
    with pytest.raises(Unauthenticated):
        services.issues.create("x", "y")
    act_as(ALICE)
    assert services.issues.list() == []


def test_solved_rejected_without_deliverables(services):
    issue = services.issues.create("Empty", "")
    with pytest.raises(InvalidTransition) as exc:
        services.issues.update_status(issue.id, "solved")
    assert exc.value.reason is TransitionReason.NO_DELIVERABLES
    assert exc.value.kind is ErrorKind.INVALID_TRANSITION
    assert "no deliverables" in exc.value.message
    assert services.issues.get(issue.id).status == "pending"


def test_solved_rejected_when_not_all_completed(services, issue_with_todos, act_as):
    issue, first, _second = issue_with_todos
    act_as(BOB)
    services.deliverables.update_status(first.id, "completed")
    act_as(ALICE)
    with pytest.raises(InvalidTransition) as exc:
        services.issues.update_status(issue.id, "solved")
    assert exc.value.reason is TransitionReason.NOT_ALL_COMPLETED
    assert "Not all deliverables are completed" in exc.value.message


def test_solved_allowed_when_all_completed(services, issue_with_todos, act_as):
    issue, first, second = issue_with_todos
    act_as(BOB)
    services.deliverables.update_status(first.id, "completed")
    services.deliverables.update_status(second.id, "completed")
    act_as(ALICE)
    # the cascade already solved it; reopen and solve manually
    services.issues.update_status(issue.id, "discussed")
    solved = services.issues.update_status(issue.id, "solved")
    assert solved.status == "solved"
    assert services.issues.get(issue.id).status == "solved"


@pytest.mark.parametrize("status", ["pending", "discussed"])
def test_non_solved_transitions_are_unconditional(services, status):
    issue = services.issues.create("Topic", "")
    assert services.issues.update_status(issue.id, status).status == status


def test_unknown_status_is_rejected(services):
    issue = services.issues.create("Topic", "")
    with pytest.raises(ValueError):
        services.issues.update_status(issue.id, "closed")


def test_non_owner_cannot_mutate(services, act_as):
    issue = services.issues.create("Mine", "original")
    act_as(BOB)
    with pytest.raises(AccessDenied):
        services.issues.update(issue.id, "Hijacked", "changed")
    with pytest.raises(AccessDenied):
        services.issues.update_status(issue.id, "discussed")
    with pytest.raises(AccessDenied):
        services.issues.delete(issue.id)

    stored = services.issues.get(issue.id)
    assert (stored.title, stored.description, stored.status) == ("Mine", "original", "pending")


def test_edit_by_owner(services):
    issue = services.issues.create("Old", "old")
    edited = services.issues.update(issue.id, "New", "new")
    assert (edited.title, edited.description) == ("New", "new")


def test_missing_issue_is_not_found(services):
    with pytest.raises(NotFound):
        services.issues.update_status(999, "discussed")


def test_delete_refused_while_deliverables_exist(services, issue_with_todos):
    issue, _first, _second = issue_with_todos
    with pytest.raises(InvalidTransition) as exc:
        services.issues.delete(issue.id)
    assert exc.value.reason is TransitionReason.HAS_DELIVERABLES
    assert services.issues.get(issue.id)


def test_delete_without_deliverables(services):
    issue = services.issues.create("Throwaway", "")
    services.issues.delete(issue.id)
    with pytest.raises(NotFound):
        services.issues.get(issue.id)


def test_progress(services, issue_with_todos, act_as):
    issue, first, _second = issue_with_todos
    act_as(BOB)
    services.deliverables.update_status(first.id, "completed")
    assert services.issues.progress(issue.id) == (2, 1, 50)
