import pytest

from ids_manager.config import COLOR_DONE, COLOR_WARNING
from ids_manager.domain.errors import HistoryWriteFailed, StoreError, user_message
from ids_manager.domain.models import Deliverable
from ids_manager.services.deliverable_service import DeliverableUpdate
from ids_manager.ui.helpers import parse_tags, update_message


def _update(**kwargs):
    return DeliverableUpdate(Deliverable(1, "t", "", "2025-01-08", "bob", "alice"), **kwargs)


def test_update_message_plain_success():
    assert update_message(_update(), "Status updated.") == ("Status updated.", COLOR_DONE)


def test_update_message_reports_solved_issue():
    message, color = update_message(_update(issue_solved=True), "Status updated.")
    assert "issue solved" in message
    assert color == COLOR_DONE


def test_update_message_mentions_every_degraded_part():
    history = HistoryWriteFailed("Failed to record history")
    cascade = StoreError("Failed to re-evaluate issue status")
    message, color = update_message(
        _update(history_error=history, cascade_error=cascade), "Status updated."
    )
    assert message.startswith("Status updated.")
    assert user_message(history) in message
    assert "The parent issue could not be updated" in message
    assert color == COLOR_WARNING


def test_update_message_cascade_only():
    message, color = update_message(_update(cascade_error=StoreError("boom")), "Saved.")
    assert "The parent issue could not be updated" in message
    assert color == COLOR_WARNING


@pytest.mark.parametrize(
    "text,expected",
    [
        (None, []),
        ("", []),
        (" ui, ui\ntheme,, ", ["ui", "theme"]),
        ("backend\n\nbackend,db", ["backend", "db"]),
    ],
)
def test_parse_tags(text, expected):
    assert parse_tags(text) == expected
