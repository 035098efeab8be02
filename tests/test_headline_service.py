import pytest

from conftest import ALICE, BOB
from ids_manager.domain.errors import AccessDenied, NotFound, Unauthenticated


def test_create_and_toggle(services):
    headline = services.headlines.create("Release 1.2 shipped", "Thanks all")
    assert headline.status == "pending"
    assert headline.created_by == ALICE.id
    assert services.headlines.toggle_status(headline.id).status == "completed"
    assert services.headlines.toggle_status(headline.id).status == "pending"


def test_update_with_optional_status(services):
    headline = services.headlines.create("Draft", "")
    updated = services.headlines.update(headline.id, "Final", "body")
    assert (updated.title, updated.status) == ("Final", "pending")
    updated = services.headlines.update(headline.id, "Final", "body", status="completed")
    assert updated.status == "completed"


def test_only_creator_may_change_or_delete(services, act_as):
    headline = services.headlines.create("Alice news", "")
    act_as(BOB)
    with pytest.raises(AccessDenied):
        services.headlines.update_status(headline.id, "completed")
    with pytest.raises(AccessDenied):
        services.headlines.delete(headline.id)
    with pytest.raises(AccessDenied):
        services.headlines.update(headline.id, "Bob news", "")
    assert services.headlines.get(headline.id).title == "Alice news"


def test_delete(services):
    headline = services.headlines.create("Gone soon", "")
    services.headlines.delete(headline.id)
    with pytest.raises(NotFound):
        services.headlines.get(headline.id)


def test_delete_requires_login(services, act_as):
    headline = services.headlines.create("Stay", "")
    act_as(None)
    with pytest.raises(Unauthenticated):
        services.headlines.delete(headline.id)


def test_toggle_checks_login_before_lookup(services, act_as):
    act_as(None)
    with pytest.raises(Unauthenticated):
        services.headlines.toggle_status(999)


def test_toggle_by_non_creator_denied(services, act_as):
    headline = services.headlines.create("Alice news", "")
    act_as(BOB)
    with pytest.raises(AccessDenied):
        services.headlines.toggle_status(headline.id)
    act_as(ALICE)
    assert services.headlines.get(headline.id).status == "pending"
