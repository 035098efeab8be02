"""
feedback.py - Feedback repository
Single responsibility: persistence for user feedback.
"""
from ids_manager.database.repositories.tags import dump_tags, load_tags
from ids_manager.domain.models import Feedback
from ids_manager.utils.time import now_iso


def _to_feedback(row) -> Feedback:
    return Feedback(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        description=row["description"],
        category=row["category"],
        priority=row["priority"],
        status=row["status"],
        tags=load_tags(row["tags"]),
        created_at=row["created_at"],
    )


def create(conn, fb: Feedback) -> int:
    cur = conn.execute(
        "INSERT INTO feedback (user_id, title, description, category, priority, status, tags, created_at)"
        " VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
        (
            fb.user_id,
            fb.title,
            fb.description or "",
            fb.category,
            fb.priority,
            fb.status,
            dump_tags(fb.tags),
            fb.created_at or now_iso(),
        ),
    )
    return cur.lastrowid


def get(conn, feedback_id: int) -> Feedback | None:
    row = conn.execute("SELECT * FROM feedback WHERE id = ?", (feedback_id,)).fetchone()
    return _to_feedback(row) if row else None


def list_all(conn, user_id: str | None = None) -> list[Feedback]:
    if user_id is None:
        rows = conn.execute("SELECT * FROM feedback ORDER BY created_at DESC, id DESC").fetchall()
    else:
        rows = conn.execute(
            "SELECT * FROM feedback WHERE user_id = ? ORDER BY created_at DESC, id DESC",
            (user_id,),
        ).fetchall()
    return [_to_feedback(r) for r in rows]


def set_status(conn, feedback_id: int, status: str) -> None:
    conn.execute("UPDATE feedback SET status = ? WHERE id = ?", (status, feedback_id))
