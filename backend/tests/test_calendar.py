from datetime import date
from types import SimpleNamespace

import pytest

from paracal.services.calendar import (
    business_days,
    effective_range,
    is_business_day,
    month_bounds,
    overlaps,
    sunday_based_weekday,
    week_bounds,
    year_bounds,
)

# 2025-06-01 is a Sunday
MON = date(2025, 6, 2)
WED = date(2025, 6, 4)
FRI = date(2025, 6, 6)
SAT = date(2025, 6, 7)
SUN = date(2025, 6, 8)


def test_full_work_week():
    assert business_days(MON, FRI, set()) == 5


def test_span_across_weekend():
    assert business_days(FRI, date(2025, 6, 9), set()) == 2


def test_holiday_inside_week_is_excluded():
    assert business_days(MON, FRI, {WED}) == 4


def test_holiday_on_weekend_is_not_double_counted():
    assert business_days(MON, SUN, {SAT}) == 5


@pytest.mark.parametrize("d,expected", [(MON, 1), (FRI, 1), (SAT, 0), (SUN, 0)])
def test_single_day(d, expected):
    assert business_days(d, d, set()) == expected


@pytest.mark.parametrize("d", [MON, SAT])
def test_single_day_holiday_overrides_weekday(d):
    assert business_days(d, d, {d}) == 0
    assert not is_business_day(d, {d})


def test_reversed_range_counts_nothing():
    assert business_days(FRI, MON, set()) == 0


def test_holidays_accept_any_iterable():
    assert business_days(MON, FRI, [WED, FRI]) == 3


def test_effective_range_prefers_span():
    ev = SimpleNamespace(date=None, start_date=MON, end_date=FRI)
    assert effective_range(ev) == (MON, FRI)


def test_effective_range_falls_back_to_legacy_date():
    ev = SimpleNamespace(date=WED, start_date=None, end_date=None)
    assert effective_range(ev) == (WED, WED)


def test_overlaps_is_inclusive():
    assert overlaps(date(2025, 5, 28), date(2025, 6, 1), date(2025, 6, 1), date(2025, 6, 30))
    assert not overlaps(date(2025, 5, 28), date(2025, 5, 31), date(2025, 6, 1), date(2025, 6, 30))


def test_month_and_year_bounds():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))
    assert year_bounds(2025) == (date(2025, 1, 1), date(2025, 12, 31))


def test_week_bounds_start_on_sunday():
    assert week_bounds(WED) == (date(2025, 6, 1), date(2025, 6, 7))
    assert week_bounds(date(2025, 6, 1)) == (date(2025, 6, 1), date(2025, 6, 7))
    assert week_bounds(SAT) == (date(2025, 6, 1), date(2025, 6, 7))


def test_next_week_bounds():
    assert week_bounds(WED, "next") == (date(2025, 6, 8), date(2025, 6, 14))


def test_sunday_based_weekday():
    assert sunday_based_weekday(date(2025, 6, 1)) == 0
    assert sunday_based_weekday(MON) == 1
    assert sunday_based_weekday(SAT) == 6
