"""
deliverables.py - Deliverable repository
Single responsibility: persistence for deliverables (todos).
"""
from ids_manager.database.repositories.query import build_where
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.models import Deliverable
from ids_manager.utils.time import now_iso

_SELECT = """
    SELECT d.*, p.email AS accountable_email, i.title AS issue_title
    FROM deliverables d
    LEFT JOIN profile p ON p.id = d.accountable_id
    LEFT JOIN issues i ON i.id = d.issue_id
"""

# Columns a caller may change through update_fields
UPDATABLE_FIELDS = ("title", "description", "due_date", "accountable_id", "status")


def _to_deliverable(row) -> Deliverable:
    return Deliverable(
        id=row["id"],
        issue_id=row["issue_id"],
        title=row["title"],
        description=row["description"],
        due_date=row["due_date"],
        status=row["status"],
        accountable_id=row["accountable_id"],
        created_by=row["created_by"],
        last_updated_by=row["last_updated_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        accountable_email=row["accountable_email"],
        issue_title=row["issue_title"],
    )


def list_deliverables(conn, filter: ListFilter) -> list[Deliverable]:
    where_clause, params = build_where(filter, "d", date_col="due_date", owner_col="accountable_id")
    rows = conn.execute(
        f"{_SELECT} WHERE {where_clause} ORDER BY d.due_date ASC, d.id ASC", params
    ).fetchall()
    return [_to_deliverable(r) for r in rows]


def list_by_issue(conn, issue_id: int) -> list[Deliverable]:
    rows = conn.execute(
        f"{_SELECT} WHERE d.issue_id = ? ORDER BY d.due_date ASC, d.id ASC",
        (issue_id,),
    ).fetchall()
    return [_to_deliverable(r) for r in rows]


def list_by_issues(conn, issue_ids: list[int]) -> dict[int, list[Deliverable]]:
    if not issue_ids:
        return {}
    placeholders = ",".join(["?"] * len(issue_ids))
    result: dict[int, list[Deliverable]] = {iid: [] for iid in issue_ids}
    rows = conn.execute(
        f"{_SELECT} WHERE d.issue_id IN ({placeholders}) ORDER BY d.due_date ASC, d.id ASC",
        issue_ids,
    ).fetchall()
    for row in rows:
        result.setdefault(row["issue_id"], []).append(_to_deliverable(row))
    return result


def get(conn, deliverable_id: int) -> Deliverable | None:
    row = conn.execute(f"{_SELECT} WHERE d.id = ?", (deliverable_id,)).fetchone()
    return _to_deliverable(row) if row else None


def create(conn, d: Deliverable) -> int:
    cur = conn.execute(
        "INSERT INTO deliverables (issue_id, title, description, due_date, status, accountable_id,"
        " created_by, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
        (
            d.issue_id,
            d.title,
            d.description or "",
            d.due_date,
            d.status,
            d.accountable_id,
            d.created_by,
            d.created_at or now_iso(),
            d.updated_at or now_iso(),
        ),
    )
    did = cur.lastrowid
    if did is None:
        raise RuntimeError("Failed to insert deliverable")
    return did


def update_fields(conn, deliverable_id: int, fields: dict, updated_by: str) -> None:
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unsupported deliverable fields: {sorted(unknown)}")
    assignments = [f"{name} = ?" for name in fields]
    params = list(fields.values())
    assignments += ["updated_at = ?", "last_updated_by = ?"]
    params += [now_iso(), updated_by, deliverable_id]
    conn.execute(
        f"UPDATE deliverables SET {', '.join(assignments)} WHERE id = ?",
        params,
    )


def count_by_status(conn) -> dict[str, int]:
    rows = conn.execute("SELECT status, COUNT(*) AS cnt FROM deliverables GROUP BY status").fetchall()
    return {r["status"]: r["cnt"] for r in rows}


def created_since(conn, since_iso: str) -> list[str]:
    rows = conn.execute(
        "SELECT created_at FROM deliverables WHERE created_at >= ? ORDER BY created_at",
        (since_iso,),
    ).fetchall()
    return [r["created_at"] for r in rows]
