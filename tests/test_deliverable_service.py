import sqlite3
from unittest.mock import patch

import pytest

from conftest import ALICE, BOB
from ids_manager.domain.errors import (
    AccessDenied,
    ErrorKind,
    NotFound,
    StoreError,
    Unauthenticated,
)


def test_create_validates_parent_and_assignee(services):
    with pytest.raises(NotFound):
        services.deliverables.create(404, "t", "", "2025-01-08", BOB.id)
    issue = services.issues.create("Issue", "")
    with pytest.raises(NotFound):
        services.deliverables.create(issue.id, "t", "", "2025-01-08", "nobody")


def test_create_defaults(services, issue_with_todos):
    issue, first, _second = issue_with_todos
    assert first.status == "pending"
    assert first.issue_id == issue.id
    assert first.created_by == ALICE.id
    assert first.accountable_email == BOB.email
    assert first.issue_title == "Checkout is slow"


def test_cascade_solves_issue_after_last_completion(services, issue_with_todos, act_as):
    issue, first, second = issue_with_todos
    act_as(BOB)

    result = services.deliverables.update_status(first.id, "completed")
    assert result.deliverable.status == "completed"
    assert not result.issue_solved
    assert services.issues.get(issue.id).status == "pending"

    result = services.deliverables.update_status(second.id, "completed")
    assert result.issue_solved
    assert not result.degraded
    assert services.issues.get(issue.id).status == "solved"


def test_only_accountable_user_may_update(services, issue_with_todos, act_as):
    _issue, first, _second = issue_with_todos
    # alice created it but bob is accountable
    with pytest.raises(AccessDenied):
        services.deliverables.update_status(first.id, "in_progress")
    act_as(None)
    with pytest.raises(Unauthenticated):
        services.deliverables.update_status(first.id, "in_progress")
    act_as(BOB)
    assert services.deliverables.get(first.id).status == "pending"


def test_history_is_recorded_per_changed_field(services, issue_with_todos, act_as):
    _issue, first, _second = issue_with_todos
    act_as(BOB)
    services.deliverables.update(first.id, status="in_progress", due_date="2025-01-10", title="Profile queries")

    entries = services.deliverables.history(first.id)
    by_field = {e.field_name: (e.old_value, e.new_value) for e in entries}
    assert by_field == {
        "status": ("pending", "in_progress"),
        "due_date": ("2025-01-08", "2025-01-10"),
    }
    assert all(e.updated_by == BOB.id for e in entries)
    assert services.deliverables.get(first.id).last_updated_by == BOB.id


def test_history_failure_is_degraded_success(services, issue_with_todos, act_as):
    _issue, first, _second = issue_with_todos
    act_as(BOB)
    with patch(
        "ids_manager.services.deliverable_service.history_repo.add_entries",
        side_effect=sqlite3.OperationalError("disk I/O error"),
    ):
        result = services.deliverables.update_status(first.id, "in_progress")

    assert result.degraded
    assert result.history_error is not None
    assert result.history_error.kind is ErrorKind.HISTORY_WRITE_FAILED
    assert result.cascade_error is None
    assert services.deliverables.get(first.id).status == "in_progress"
    assert services.deliverables.history(first.id) == []


def test_cascade_failure_keeps_deliverable_update(services, issue_with_todos, act_as):
    issue, first, second = issue_with_todos
    act_as(BOB)
    services.deliverables.update_status(first.id, "completed")
    with patch(
        "ids_manager.services.issue_service.issue_repo.set_status",
        side_effect=sqlite3.OperationalError("database is locked"),
    ):
        result = services.deliverables.update_status(second.id, "completed")

    assert result.deliverable.status == "completed"
    assert result.degraded
    assert result.cascade_error.kind is ErrorKind.STORE_ERROR
    assert not result.issue_solved
    assert services.issues.get(issue.id).status == "pending"


def test_store_error_on_primary_update_propagates(services, issue_with_todos, act_as):
    _issue, first, _second = issue_with_todos
    act_as(BOB)
    with patch(
        "ids_manager.services.deliverable_service.deliverable_repo.update_fields",
        side_effect=sqlite3.IntegrityError("constraint failed"),
    ):
        with pytest.raises(StoreError) as exc:
            services.deliverables.update_status(first.id, "in_progress")
    assert isinstance(exc.value.details, sqlite3.IntegrityError)
    assert services.deliverables.get(first.id).status == "pending"


def test_reassign_requires_existing_profile(services, issue_with_todos, act_as):
    _issue, first, _second = issue_with_todos
    act_as(BOB)
    with pytest.raises(NotFound):
        services.deliverables.update(first.id, accountable_id="ghost")
    result = services.deliverables.update(first.id, accountable_id=ALICE.id)
    assert result.deliverable.accountable_id == ALICE.id


def test_unchanged_update_writes_nothing(services, issue_with_todos, act_as):
    _issue, first, _second = issue_with_todos
    act_as(BOB)
    result = services.deliverables.update_status(first.id, "pending")
    assert not result.degraded
    assert services.deliverables.history(first.id) == []


def test_unknown_field_rejected(services, issue_with_todos, act_as):
    _issue, first, _second = issue_with_todos
    act_as(BOB)
    with pytest.raises(ValueError):
        services.deliverables.update(first.id, issue_id=42)


def test_completing_again_on_solved_issue_leaves_issue_untouched(services, issue_with_todos, act_as):
    issue, first, second = issue_with_todos
    act_as(BOB)
    services.deliverables.update_status(first.id, "completed")
    assert services.deliverables.update_status(second.id, "completed").issue_solved
    solved = services.issues.get(issue.id)

    services.deliverables.update_status(first.id, "in_progress")
    with patch("ids_manager.services.issue_service.issue_repo.set_status") as set_status:
        result = services.deliverables.update_status(first.id, "completed")
    set_status.assert_not_called()
    assert result.issue_solved is False
    assert not result.degraded
    after = services.issues.get(issue.id)
    assert after.status == "solved"
    assert after.updated_at == solved.updated_at
