import pytest

from ids_manager.database.connection import Store
from ids_manager.database.repositories import profiles as profile_repo
from ids_manager.database.schema import initialize_schema
from ids_manager.db import build_services
from ids_manager.domain.models import Profile
from ids_manager.services import filter_service
from ids_manager.services.identity import StaticIdentity

ALICE = Profile(id="alice", email="alice@example.com")
BOB = Profile(id="bob", email="bob@example.com")


@pytest.fixture
def store(tmp_path):
    store = Store(str(tmp_path / "ids.db"))
    initialize_schema(store)
    with store.connection() as conn:
        profile_repo.ensure(conn, ALICE)
        profile_repo.ensure(conn, BOB)
    return store


@pytest.fixture
def identity():
    return StaticIdentity(ALICE)


@pytest.fixture
def services(store, identity):
    return build_services(store, identity)


@pytest.fixture(autouse=True)
def _reset_filter_presets():
    yield
    filter_service.clear_last()


@pytest.fixture
def act_as(identity):
    """Switch the signed-in user: act_as(BOB), act_as(None)."""

    def _switch(profile):
        if profile is None:
            identity.sign_out()
        else:
            identity.sign_in(profile)

    return _switch


@pytest.fixture
def issue_with_todos(services, act_as):
    """Alice's issue with two deliverables assigned to Bob."""
    issue = services.issues.create("Checkout is slow", "p95 above 2s")
    first = services.deliverables.create(issue.id, "Profile queries", "", "2025-01-08", BOB.id)
    second = services.deliverables.create(issue.id, "Add index", "", "2025-01-09", BOB.id)
    return issue, first, second
