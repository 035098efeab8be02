"""
time.py - time utilities
Single responsibility: timestamp helpers shared by repositories and services.
"""
from datetime import date, datetime


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def parse_due_date(value) -> str:
    """Normalize a due date (date, datetime or text) to YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = (value or "").strip()
    return date.fromisoformat(text[:10]).isoformat()
