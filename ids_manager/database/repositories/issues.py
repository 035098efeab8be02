"""
issues.py - Issue repository
Single responsibility: persistence for issues.
"""

from ids_manager.database.repositories.query import build_where
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.models import Issue, IssueStatus
from ids_manager.utils.time import now_iso

_SELECT = """
    SELECT i.*, p.email AS author_email
    FROM issues i
    LEFT JOIN profile p ON p.id = i.created_by
"""


def _to_issue(row) -> Issue:
    return Issue(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=row["status"],
        created_by=row["created_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        author_email=row["author_email"],
    )


def list_issues(conn, filter: ListFilter) -> list[Issue]:
    where_clause, params = build_where(filter, "i", date_col="created_at", owner_col="created_by")
    if filter.unsolved_only:
        where_clause += " AND i.status != ?"
        params.append(IssueStatus.SOLVED.value)
    rows = conn.execute(
        f"{_SELECT} WHERE {where_clause} ORDER BY i.created_at DESC, i.id DESC", params
    ).fetchall()
    return [_to_issue(r) for r in rows]


def get_issue(conn, issue_id: int) -> Issue | None:
    row = conn.execute(f"{_SELECT} WHERE i.id = ?", (issue_id,)).fetchone()
    return _to_issue(row) if row else None


def create_issue(conn, issue: Issue) -> int:
    cur = conn.execute(
        "INSERT INTO issues (title, description, status, created_by, created_at, updated_at)"
        " VALUES (?, ?, ?, ?, ?, ?)",
        (
            issue.title,
            issue.description or "",
            issue.status,
            issue.created_by,
            issue.created_at or now_iso(),
            issue.updated_at or now_iso(),
        ),
    )
    iid = cur.lastrowid
    if iid is None:
        raise RuntimeError("Failed to insert issue")
    return iid


def update_issue(conn, issue_id: int, title: str, description: str) -> None:
    conn.execute(
        "UPDATE issues SET title = ?, description = ?, updated_at = ? WHERE id = ?",
        (title, description, now_iso(), issue_id),
    )


def set_status(conn, issue_id: int, status: str) -> None:
    conn.execute(
        "UPDATE issues SET status = ?, updated_at = ? WHERE id = ?",
        (status, now_iso(), issue_id),
    )


def delete_issue(conn, issue_id: int) -> None:
    conn.execute("DELETE FROM issues WHERE id = ?", (issue_id,))


def count_by_status(conn) -> dict[str, int]:
    rows = conn.execute("SELECT status, COUNT(*) AS cnt FROM issues GROUP BY status").fetchall()
    return {r["status"]: r["cnt"] for r in rows}


def created_since(conn, since_iso: str) -> list[str]:
    rows = conn.execute(
        "SELECT created_at FROM issues WHERE created_at >= ? ORDER BY created_at",
        (since_iso,),
    ).fetchall()
    return [r["created_at"] for r in rows]
