"""
profiles.py - Profile repository
Single responsibility: lookup of user profiles (written only by identity providers).
"""
from ids_manager.domain.models import Profile


def _to_profile(row) -> Profile:
    return Profile(id=row["id"], email=row["email"])


def get(conn, profile_id: str) -> Profile | None:
    row = conn.execute("SELECT * FROM profile WHERE id = ?", (profile_id,)).fetchone()
    return _to_profile(row) if row else None


def list_all(conn) -> list[Profile]:
    rows = conn.execute("SELECT * FROM profile ORDER BY email").fetchall()
    return [_to_profile(r) for r in rows]


def count(conn) -> int:
    return conn.execute("SELECT COUNT(*) FROM profile").fetchone()[0]


def ensure(conn, profile: Profile) -> None:
    conn.execute(
        "INSERT OR IGNORE INTO profile (id, email) VALUES (?, ?)",
        (profile.id, profile.email),
    )
