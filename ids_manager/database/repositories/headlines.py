"""
headlines.py - Headline repository
Single responsibility: persistence for headlines.
"""
from ids_manager.database.repositories.query import build_where
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.models import Headline
from ids_manager.utils.time import now_iso

_SELECT = """
    SELECT h.*, p.email AS author_email
    FROM headlines h
    LEFT JOIN profile p ON p.id = h.created_by
"""


def _to_headline(row) -> Headline:
    return Headline(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        created_by=row["created_by"],
        status=row["status"],
        created_at=row["created_at"],
        author_email=row["author_email"],
    )


def list_headlines(conn, filter: ListFilter) -> list[Headline]:
    where_clause, params = build_where(filter, "h", date_col="created_at", owner_col="created_by")
    rows = conn.execute(
        f"{_SELECT} WHERE {where_clause} ORDER BY h.created_at DESC, h.id DESC", params
    ).fetchall()
    return [_to_headline(r) for r in rows]


def get(conn, headline_id: int) -> Headline | None:
    row = conn.execute(f"{_SELECT} WHERE h.id = ?", (headline_id,)).fetchone()
    return _to_headline(row) if row else None


def create(conn, headline: Headline) -> int:
    cur = conn.execute(
        "INSERT INTO headlines (title, description, created_by, status, created_at)"
        " VALUES (?, ?, ?, ?, ?)",
        (
            headline.title,
            headline.description or "",
            headline.created_by,
            headline.status,
            headline.created_at or now_iso(),
        ),
    )
    hid = cur.lastrowid
    if hid is None:
        raise RuntimeError("Failed to insert headline")
    return hid


def update(conn, headline_id: int, title: str, description: str, status: str | None = None) -> None:
    if status is None:
        conn.execute(
            "UPDATE headlines SET title = ?, description = ? WHERE id = ?",
            (title, description, headline_id),
        )
    else:
        conn.execute(
            "UPDATE headlines SET title = ?, description = ?, status = ? WHERE id = ?",
            (title, description, status, headline_id),
        )


def set_status(conn, headline_id: int, status: str) -> None:
    conn.execute("UPDATE headlines SET status = ? WHERE id = ?", (status, headline_id))


def delete(conn, headline_id: int) -> None:
    conn.execute("DELETE FROM headlines WHERE id = ?", (headline_id,))


def count_by_status(conn) -> dict[str, int]:
    rows = conn.execute("SELECT status, COUNT(*) AS cnt FROM headlines GROUP BY status").fetchall()
    return {r["status"]: r["cnt"] for r in rows}


def created_since(conn, since_iso: str) -> list[str]:
    rows = conn.execute(
        "SELECT created_at FROM headlines WHERE created_at >= ? ORDER BY created_at",
        (since_iso,),
    ).fetchall()
    return [r["created_at"] for r in rows]
