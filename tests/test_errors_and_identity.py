import sqlite3
from unittest.mock import patch

import pytest

from conftest import BOB
from ids_manager.database.repositories import profiles as profile_repo
from ids_manager.db import build_services
from ids_manager.domain import status_rules
from ids_manager.domain.errors import (
    AccessDenied,
    HistoryWriteFailed,
    InvalidTransition,
    NotFound,
    StoreError,
    TransitionReason,
    Unauthenticated,
    user_message,
)
from ids_manager.domain.models import Deliverable
from ids_manager.services.identity import OsUserIdentity


def test_user_message_is_distinct_per_kind():
    errors = [
        Unauthenticated(),
        AccessDenied("Only the creator can change this issue."),
        NotFound("Issue", 3),
        InvalidTransition(TransitionReason.NO_DELIVERABLES),
        StoreError("Failed to update issue"),
        HistoryWriteFailed("Failed to record history"),
    ]
    messages = [user_message(e) for e in errors]
    assert len(set(messages)) == len(errors)
    assert messages[3] == "Cannot mark as solved: Issue has no deliverables."


def _todo(status):
    return Deliverable(1, "t", "", "2025-01-08", "bob", "alice", status=status)


@pytest.mark.parametrize(
    "statuses, blocker",
    [
        ([], TransitionReason.NO_DELIVERABLES),
        (["completed", "in_progress"], TransitionReason.NOT_ALL_COMPLETED),
        (["completed", "completed"], None),
    ],
)
def test_solve_blocker(statuses, blocker):
    assert status_rules.solve_blocker([_todo(s) for s in statuses]) is blocker


def test_progress_rounds_down():
    items = [_todo("completed"), _todo("pending"), _todo("in_progress")]
    assert status_rules.progress(items) == (3, 1, 33)
    assert status_rules.progress([]) == (0, 0, 0)


def test_os_identity_registers_profile(store):
    identity = OsUserIdentity(store, domain="corp.example")
    with patch("ids_manager.services.identity.getpass.getuser", return_value="carol"):
        user = identity.get_current_user()
    assert (user.id, user.email) == ("carol", "carol@corp.example")
    with store.connection() as conn:
        assert profile_repo.get(conn, "carol").email == "carol@corp.example"

    identity.sign_out()
    assert identity.get_current_user() is None


def test_os_identity_without_user_name(store):
    identity = OsUserIdentity(store)
    with patch("ids_manager.services.identity.getpass.getuser", side_effect=OSError("no tty")):
        assert identity.get_current_user() is None


def test_os_identity_store_failure_is_store_error(store):
    identity = OsUserIdentity(store)
    services = build_services(store, identity)
    locked = sqlite3.OperationalError("database is locked")
    with patch("ids_manager.services.identity.getpass.getuser", return_value="carol"), \
            patch("ids_manager.services.identity.profile_repo.ensure", side_effect=locked):
        with pytest.raises(StoreError) as exc:
            services.issues.create("t", "d")
    assert exc.value.details is locked


def test_sign_in_store_failure_is_store_error(store):
    identity = OsUserIdentity(store)
    with patch("ids_manager.services.identity.profile_repo.ensure",
               side_effect=sqlite3.OperationalError("disk I/O error")):
        with pytest.raises(StoreError):
            identity.sign_in(BOB)
