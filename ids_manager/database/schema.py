"""
schema.py - Schema creation helpers
Single responsibility: define and apply database schema.
"""
import logging

from ids_manager.database.connection import Store

logger = logging.getLogger(__name__)


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS profile (
    id    TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS headlines (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       TEXT    NOT NULL,
    description TEXT    DEFAULT '',
    created_by  TEXT    NOT NULL REFERENCES profile(id),
    status      TEXT    NOT NULL DEFAULT 'pending',
    created_at  TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS issues (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       TEXT    NOT NULL,
    description TEXT    DEFAULT '',
    created_by  TEXT    NOT NULL REFERENCES profile(id),
    status      TEXT    NOT NULL DEFAULT 'pending',
    created_at  TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS deliverables (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    issue_id        INTEGER NOT NULL REFERENCES issues(id),
    title           TEXT    NOT NULL,
    description     TEXT    DEFAULT '',
    due_date        TEXT    NOT NULL,
    status          TEXT    NOT NULL DEFAULT 'pending',
    accountable_id  TEXT    NOT NULL REFERENCES profile(id),
    created_by      TEXT    NOT NULL REFERENCES profile(id),
    last_updated_by TEXT    REFERENCES profile(id),
    created_at      TEXT    NOT NULL,
    updated_at      TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS deliverable_history (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    deliverable_id INTEGER NOT NULL REFERENCES deliverables(id) ON DELETE CASCADE,
    field_name     TEXT    NOT NULL,
    old_value      TEXT,
    new_value      TEXT,
    updated_by     TEXT    NOT NULL REFERENCES profile(id),
    created_at     TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS feedback (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     TEXT    NOT NULL REFERENCES profile(id),
    title       TEXT    NOT NULL,
    description TEXT    DEFAULT '',
    category    TEXT    NOT NULL DEFAULT 'other',
    priority    TEXT    NOT NULL DEFAULT 'medium',
    status      TEXT    NOT NULL DEFAULT 'pending',
    tags        TEXT    NOT NULL DEFAULT '[]',
    created_at  TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_headlines_created_at
    ON headlines(created_at DESC);
CREATE INDEX IF NOT EXISTS idx_issues_status
    ON issues(status);
CREATE INDEX IF NOT EXISTS idx_issues_created_at
    ON issues(created_at DESC);
CREATE INDEX IF NOT EXISTS idx_deliverables_issue_id
    ON deliverables(issue_id);
CREATE INDEX IF NOT EXISTS idx_deliverables_accountable_id
    ON deliverables(accountable_id);
CREATE INDEX IF NOT EXISTS idx_deliverables_due_date
    ON deliverables(due_date);
CREATE INDEX IF NOT EXISTS idx_deliverable_history_deliverable_id
    ON deliverable_history(deliverable_id);
CREATE INDEX IF NOT EXISTS idx_feedback_user_id
    ON feedback(user_id);
"""


def initialize_schema(store: Store) -> None:
    """Create tables and indexes if missing."""
    try:
        with store.connection() as conn:
            conn.executescript(SCHEMA_SQL)
    except Exception as e:
        logger.error("Failed to initialize database schema: %s", e)
        raise
