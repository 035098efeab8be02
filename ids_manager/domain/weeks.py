"""
weeks.py - Week-bucketing for list filters
Single responsibility: map "YYYY-WNN" tokens to half-open date ranges and back.

Season Y starts on the anchor date (Dec 30 of Y-1) and is cut into 7-day
weeks. Day 364 onward up to the next season's anchor is a short week 53.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ids_manager.config import (
    WEEK_ANCHOR_DAY,
    WEEK_ANCHOR_MONTH,
    WEEK_FIRST_SEASON,
    WEEKS_PER_SEASON,
)

_TOKEN_RE = re.compile(r"^(\d{4})-W(\d{2})$")
_WEEK = timedelta(days=7)


@dataclass(frozen=True)
class WeekRange:
    """Half-open ``[start, end)`` calendar range."""

    start: date
    end: date

    def contains(self, value) -> bool:
        d = as_date(value)
        return self.start <= d < self.end

    @property
    def last_day(self) -> date:
        return self.end - timedelta(days=1)


def as_date(value) -> date:
    """Accept date, datetime or an ISO-8601 string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise TypeError(f"Cannot interpret {value!r} as a date")


def season_anchor(season: int) -> date:
    return date(season - 1, WEEK_ANCHOR_MONTH, WEEK_ANCHOR_DAY)


def weeks_in_season(season: int) -> int:
    days = (season_anchor(season + 1) - season_anchor(season)).days
    full, rest = divmod(days, 7)
    return full + (1 if rest else 0)


def format_week_token(season: int, week: int) -> str:
    return f"{season}-W{week:02d}"


def parse_week_token(token: str) -> tuple[int, int]:
    """Split a week token into (season, week); raises ValueError on bad input."""
    m = _TOKEN_RE.match(token or "")
    if not m:
        raise ValueError(f"Invalid week token: {token!r} (expected YYYY-WNN)")
    season, week = int(m.group(1)), int(m.group(2))
    if not 1 <= week <= weeks_in_season(season):
        raise ValueError(f"Week {week} does not exist in season {season}")
    return season, week


def week_range(token: str) -> WeekRange:
    season, week = parse_week_token(token)
    start = season_anchor(season) + (week - 1) * _WEEK
    end = min(start + _WEEK, season_anchor(season + 1))
    return WeekRange(start=start, end=end)


def current_week_token(now=None) -> str:
    """Token of the week containing ``now`` (defaults to today)."""
    d = as_date(now) if now is not None else date.today()
    if d < season_anchor(WEEK_FIRST_SEASON):
        return format_week_token(WEEK_FIRST_SEASON, 1)
    season = d.year + 1 if d >= season_anchor(d.year + 1) else d.year
    week = (d - season_anchor(season)).days // 7 + 1
    return format_week_token(season, week)


def shift_week(token: str, delta: int) -> str:
    """Step ``delta`` tokens forward (or back), crossing season boundaries."""
    current = token
    for _ in range(abs(delta)):
        rng = week_range(current)
        if delta > 0:
            current = current_week_token(rng.end)
        else:
            current = current_week_token(rng.start - timedelta(days=1))
    return current


def week_label(token: str) -> str:
    _season, week = parse_week_token(token)
    rng = week_range(token)
    return f"Week {week} ({rng.start:%b %d} - {rng.last_day:%b %d})"


def week_options(season: int, include_short: bool = False) -> list[tuple[str, str]]:
    """(token, label) pairs for the picker; the short closing week is opt-in."""
    count = weeks_in_season(season) if include_short else WEEKS_PER_SEASON
    tokens = [format_week_token(season, n) for n in range(1, count + 1)]
    return [(t, week_label(t)) for t in tokens]
