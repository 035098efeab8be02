"""
query.py - Shared WHERE-clause builder
Single responsibility: translate a ListFilter into SQL clauses for one table.
"""
import re

from ids_manager.domain.filters import ListFilter
from ids_manager.domain.weeks import week_range


def build_where(
    filter: ListFilter,
    alias: str,
    date_col: str,
    owner_col: str,
) -> tuple[str, list]:
    clauses: list[str] = []
    params: list = []

    # Split keyword by whitespace (half-width and full-width) for AND partial matching
    keywords = [w for w in re.split(r"[\s　]+", filter.keyword or "") if w]
    for kw in keywords:
        clauses.append(f"({alias}.title LIKE ? OR {alias}.description LIKE ?)")
        params.extend([f"%{kw}%", f"%{kw}%"])

    if filter.status and filter.status != "ALL":
        clauses.append(f"{alias}.status = ?")
        params.append(filter.status)

    if filter.owner:
        clauses.append(f"{alias}.{owner_col} = ?")
        params.append(filter.owner)

    if filter.week:
        rng = week_range(filter.week)
        clauses.append(f"{alias}.{date_col} >= ? AND {alias}.{date_col} < ?")
        params.extend([rng.start.isoformat(), rng.end.isoformat()])

    where_clause = (" AND ".join(clauses)) if clauses else "1=1"
    return where_clause, params
