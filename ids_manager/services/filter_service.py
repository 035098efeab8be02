"""
filter_service.py - Filter helpers and presets
Single responsibility: build ListFilter from raw UI inputs and remember the last one.
"""
from ids_manager.domain.filters import ListFilter
from ids_manager.domain.weeks import parse_week_token


def build_filter(
    keyword: str = "",
    status: str = "ALL",
    week: str | None = None,
    owner: str | None = None,
    unsolved_only: bool = False,
) -> ListFilter:
    week = (week or "").strip() or None
    if week is not None:
        # reject malformed tokens here instead of at query time
        parse_week_token(week)
    return ListFilter(
        status=status or "ALL",
        keyword=keyword or "",
        week=week,
        owner=owner or None,
        unsolved_only=unsolved_only,
    )


# Last filter per list ("headlines", "issues", "todos")
_last_filters: dict[str, ListFilter] = {}


def save_last(list_key: str, filter: ListFilter) -> None:
    _last_filters[list_key] = filter


def load_last(list_key: str, default: ListFilter | None = None) -> ListFilter:
    return _last_filters.get(list_key) or default or ListFilter()


def clear_last() -> None:
    _last_filters.clear()
