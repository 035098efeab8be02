"""
history.py - Deliverable history repository
Single responsibility: append-only change records for deliverables.
"""
from ids_manager.domain.models import DeliverableHistory
from ids_manager.utils.time import now_iso


def add_entries(conn, entries: list[DeliverableHistory]) -> None:
    conn.executemany(
        "INSERT INTO deliverable_history (deliverable_id, field_name, old_value, new_value, updated_by, created_at)"
        " VALUES (?, ?, ?, ?, ?, ?)",
        [
            (
                e.deliverable_id,
                e.field_name,
                e.old_value,
                e.new_value,
                e.updated_by,
                e.created_at or now_iso(),
            )
            for e in entries
        ],
    )


def list_by_deliverable(conn, deliverable_id: int) -> list[DeliverableHistory]:
    rows = conn.execute(
        """
        SELECT h.*, p.email AS updated_by_email
        FROM deliverable_history h
        LEFT JOIN profile p ON p.id = h.updated_by
        WHERE h.deliverable_id = ?
        ORDER BY h.created_at DESC, h.id DESC
        """,
        (deliverable_id,),
    ).fetchall()
    return [
        DeliverableHistory(
            id=r["id"],
            deliverable_id=r["deliverable_id"],
            field_name=r["field_name"],
            old_value=r["old_value"],
            new_value=r["new_value"],
            updated_by=r["updated_by"],
            created_at=r["created_at"],
            updated_by_email=r["updated_by_email"],
        )
        for r in rows
    ]
