from datetime import date, datetime, timedelta

import pytest

from ids_manager.domain.weeks import (
    WeekRange,
    current_week_token,
    parse_week_token,
    season_anchor,
    shift_week,
    week_label,
    week_options,
    week_range,
    weeks_in_season,
)


def test_first_weeks_of_2025():
    assert week_range("2025-W01") == WeekRange(date(2024, 12, 30), date(2025, 1, 6))
    assert week_range("2025-W02") == WeekRange(date(2025, 1, 6), date(2025, 1, 13))


def test_range_is_half_open():
    rng = week_range("2025-W02")
    assert rng.contains(date(2025, 1, 6))
    assert rng.contains("2025-01-12T23:59:59")
    assert not rng.contains(date(2025, 1, 13))
    assert not rng.contains(datetime(2025, 1, 5, 23, 0))


def test_short_closing_week_fills_gap_to_next_season():
    assert week_range("2025-W52") == WeekRange(date(2025, 12, 22), date(2025, 12, 29))
    assert week_range("2025-W53") == WeekRange(date(2025, 12, 29), date(2025, 12, 30))
    assert week_range("2026-W01").start == date(2025, 12, 30)


def test_leap_season_closing_week_has_two_days():
    assert weeks_in_season(2028) == 53
    rng = week_range("2028-W53")
    assert (rng.end - rng.start).days == 2
    assert rng.end == season_anchor(2029)


@pytest.mark.parametrize(
    "day, token",
    [
        (date(2024, 12, 30), "2025-W01"),
        (date(2025, 1, 1), "2025-W01"),
        (date(2025, 1, 6), "2025-W02"),
        (date(2025, 12, 29), "2025-W53"),
        (date(2025, 12, 30), "2026-W01"),
        (datetime(2026, 1, 5, 18, 30), "2026-W01"),
    ],
)
def test_current_week_token(day, token):
    assert current_week_token(day) == token


def test_dates_before_first_season_clamp_to_week_one():
    assert current_week_token(date(2024, 12, 29)) == "2025-W01"
    assert current_week_token(date(2019, 6, 1)) == "2025-W01"


def test_current_token_range_contains_every_day():
    day = date(2024, 12, 30)
    while day < date(2028, 1, 15):
        assert week_range(current_week_token(day)).contains(day), day
        day += timedelta(days=1)


def test_season_tokens_are_contiguous_and_disjoint():
    for season in (2025, 2026, 2028):
        tokens = [f"{season}-W{n:02d}" for n in range(1, weeks_in_season(season) + 1)]
        ranges = [week_range(t) for t in tokens]
        assert ranges[0].start == season_anchor(season)
        assert ranges[-1].end == season_anchor(season + 1)
        for prev, nxt in zip(ranges, ranges[1:]):
            assert prev.end == nxt.start


@pytest.mark.parametrize("token", ["2025-05", "2025-W5", "2025-W00", "2025-W54", "W01-2025", ""])
def test_parse_rejects_malformed_tokens(token):
    with pytest.raises(ValueError):
        parse_week_token(token)


def test_shift_week_crosses_seasons():
    assert shift_week("2025-W52", 1) == "2025-W53"
    assert shift_week("2025-W53", 1) == "2026-W01"
    assert shift_week("2026-W01", -1) == "2025-W53"
    assert shift_week("2025-W10", -3) == "2025-W07"
    assert shift_week("2025-W01", -1) == "2025-W01"


def test_labels_and_options():
    assert week_label("2025-W02") == "Week 2 (Jan 06 - Jan 12)"
    options = week_options(2025)
    assert len(options) == 52
    assert options[0] == ("2025-W01", "Week 1 (Dec 30 - Jan 05)")
    assert len(week_options(2025, include_short=True)) == 53


@pytest.mark.parametrize("season", [2024, 2025, 2026])
def test_stepper_never_leaves_the_picker_options(season):
    tokens = {token for token, _label in week_options(season, include_short=True)}
    token = f"{season}-W50"
    while token.startswith(f"{season}-"):
        assert token in tokens
        token = shift_week(token, 1)
    assert shift_week(f"{season + 1}-W01", -1) in tokens
