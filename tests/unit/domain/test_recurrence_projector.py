from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.domain.models.manejo import Manejo, ManejoStatus
from src.domain.services.recurrence_projector import (
    MAX_OCCURRENCES,
    REASON_DAY_OF_MONTH,
    REASON_MONTH,
    REASON_WEEKDAY,
    advance_after_completion,
    auto_adjust,
    next_occurrence,
    project,
    project_manejo,
    series_limit,
    validate_date,
)
from src.domain.value_objects.recurrence import (
    DailyRecurrence,
    MonthlyRecurrence,
    NoRecurrence,
    WeeklyRecurrence,
    YearlyRecurrence,
)


def make_manejo(rule, planned_date: date, planned_time: str = "08:00", title: str = "vermifugar"):
    return Manejo.create(title=title, planned_date=planned_date, planned_time=planned_time, rule=rule)


def test_daily_adds_interval():
    assert next_occurrence(DailyRecurrence(interval_days=3), date(2024, 1, 1)) == date(2024, 1, 4)


def test_weekly_picks_next_selected_weekday():
    # 2024-01-01 is a Monday; 3 is Wednesday
    rule = WeeklyRecurrence(weekdays=frozenset({1, 3}))
    assert next_occurrence(rule, date(2024, 1, 1)) == date(2024, 1, 3)
    assert next_occurrence(rule, date(2024, 1, 3)) == date(2024, 1, 8)


def test_weekly_without_weekdays_jumps_a_week():
    assert next_occurrence(WeeklyRecurrence(), date(2024, 1, 1)) == date(2024, 1, 8)


def test_monthly_moves_to_target_day_of_next_month():
    rule = MonthlyRecurrence(day_of_month=15)
    assert next_occurrence(rule, date(2024, 1, 20)) == date(2024, 2, 15)


def test_monthly_always_starts_from_the_following_month():
    rule = MonthlyRecurrence(day_of_month=15)
    assert next_occurrence(rule, date(2024, 1, 10)) == date(2024, 2, 15)
    assert auto_adjust(rule, date(2024, 1, 2)) == date(2024, 2, 15)


def test_monthly_clamps_to_short_months_without_drifting():
    rule = MonthlyRecurrence(day_of_month=31)
    feb = next_occurrence(rule, date(2024, 1, 31))
    assert feb == date(2024, 2, 29)
    assert next_occurrence(rule, feb) == date(2024, 3, 31)


def test_monthly_without_day_keeps_current_day():
    assert next_occurrence(MonthlyRecurrence(), date(2024, 3, 10)) == date(2024, 4, 10)


def test_yearly_goes_to_first_of_next_selected_month():
    rule = YearlyRecurrence(months=frozenset({2}))  # March
    assert next_occurrence(rule, date(2024, 1, 10)) == date(2024, 3, 1)
    assert next_occurrence(rule, date(2024, 3, 1)) == date(2025, 3, 1)


def test_yearly_drops_the_anchor_day():
    rule = YearlyRecurrence(months=frozenset({0, 6}))
    assert next_occurrence(rule, date(2024, 1, 20)) == date(2024, 7, 1)
    assert next_occurrence(rule, date(2024, 7, 1)) == date(2025, 1, 1)


def test_yearly_without_months_repeats_same_day_next_year():
    assert next_occurrence(YearlyRecurrence(), date(2024, 5, 20)) == date(2025, 5, 20)
    assert next_occurrence(YearlyRecurrence(), date(2024, 2, 29)) == date(2025, 2, 28)


def test_no_recurrence_has_no_next_date():
    assert next_occurrence(NoRecurrence(), date(2024, 1, 1)) is None


def test_validate_date_reasons():
    weekly = WeeklyRecurrence(weekdays=frozenset({1}))
    assert validate_date(weekly, date(2024, 1, 1)).valid
    assert validate_date(weekly, date(2024, 1, 2)).reason == REASON_WEEKDAY

    monthly = MonthlyRecurrence(day_of_month=15)
    assert validate_date(monthly, date(2024, 1, 15)).valid
    assert validate_date(monthly, date(2024, 1, 16)).reason == REASON_DAY_OF_MONTH

    yearly = YearlyRecurrence(months=frozenset({0}))
    assert validate_date(yearly, date(2024, 1, 5)).valid
    assert validate_date(yearly, date(2024, 2, 5)).reason == REASON_MONTH

    assert validate_date(DailyRecurrence(), date(2024, 7, 7)).valid


def test_validate_date_accepts_clamped_month_end():
    assert validate_date(MonthlyRecurrence(day_of_month=31), date(2023, 2, 28)).valid


def test_auto_adjust_moves_to_next_valid_date():
    rule = WeeklyRecurrence(weekdays=frozenset({5}))  # Friday
    adjusted = auto_adjust(rule, date(2024, 1, 1))
    assert adjusted == date(2024, 1, 5)
    assert validate_date(rule, adjusted).valid


def test_weekly_projection_over_a_year():
    rule = WeeklyRecurrence(weekdays=frozenset({1}))
    manejo = make_manejo(rule, date(2024, 1, 1))
    dates = [occ.date for occ in project([manejo], date(2024, 1, 1), date(2024, 12, 31))]
    assert len(dates) in (52, 53)
    assert all(d.isoweekday() == 1 for d in dates)
    assert all(a < b for a, b in zip(dates, dates[1:]))


def test_duration_cap_is_inclusive():
    rule = DailyRecurrence(interval_days=1, duration_days=10)
    manejo = make_manejo(rule, date(2024, 1, 1))
    dates = [occ.date for occ in project_manejo(manejo, date(2024, 1, 1), date(2024, 3, 1))]
    assert dates[-1] == date(2024, 1, 11)
    assert len(dates) == 11
    assert series_limit(rule, date(2024, 1, 1)) == date(2024, 1, 11)


def test_duration_counts_from_reference_start():
    rule = DailyRecurrence(duration_days=5, reference_start_date=date(2024, 1, 1))
    manejo = make_manejo(rule, date(2024, 1, 4))
    dates = [occ.date for occ in project_manejo(manejo, date(2024, 1, 1))]
    assert dates == [date(2024, 1, 4), date(2024, 1, 5), date(2024, 1, 6)]


def test_open_ended_projection_stops_at_ceiling():
    manejo = make_manejo(DailyRecurrence(), date(2024, 1, 1))
    occurrences = list(project_manejo(manejo, date(2024, 1, 1)))
    assert len(occurrences) == MAX_OCCURRENCES
    assert occurrences[-1].date == date(2024, 1, 1) + timedelta(days=MAX_OCCURRENCES - 1)


def test_window_start_skips_earlier_occurrences():
    manejo = make_manejo(DailyRecurrence(interval_days=7), date(2024, 1, 1))
    dates = [occ.date for occ in project_manejo(manejo, date(2024, 1, 10), date(2024, 1, 31))]
    assert dates == [date(2024, 1, 15), date(2024, 1, 22), date(2024, 1, 29)]


def test_old_daily_task_reaches_a_distant_window():
    manejo = make_manejo(DailyRecurrence(interval_days=2), date(2020, 1, 1))
    dates = [occ.date for occ in project_manejo(manejo, date(2024, 6, 1), date(2024, 6, 6))]
    assert dates == [date(2024, 6, 2), date(2024, 6, 4), date(2024, 6, 6)]


def test_old_weekly_task_keeps_its_weekdays_in_a_distant_window():
    manejo = make_manejo(WeeklyRecurrence(weekdays=frozenset({1, 4})), date(2020, 1, 2))
    dates = [occ.date for occ in project_manejo(manejo, date(2024, 6, 3), date(2024, 6, 13))]
    assert dates == [date(2024, 6, 3), date(2024, 6, 6), date(2024, 6, 10), date(2024, 6, 13)]


def test_old_weekly_task_without_weekdays_keeps_its_phase():
    manejo = make_manejo(WeeklyRecurrence(), date(2020, 1, 2))  # a Thursday
    dates = [occ.date for occ in project_manejo(manejo, date(2024, 6, 3), date(2024, 6, 20))]
    assert dates == [date(2024, 6, 6), date(2024, 6, 13), date(2024, 6, 20)]


def test_ceiling_bounds_steps_before_the_window():
    manejo = make_manejo(MonthlyRecurrence(day_of_month=1), date(1900, 1, 1))
    assert list(project_manejo(manejo, date(2024, 1, 1), date(2024, 12, 31))) == []


def test_finished_tasks_do_not_recur():
    manejo = make_manejo(DailyRecurrence(), date(2024, 1, 1))
    manejo.status = ManejoStatus.DONE.value
    dates = [occ.date for occ in project([manejo], date(2024, 1, 1), date(2024, 1, 31))]
    assert dates == [date(2024, 1, 1)]


def test_projection_is_sorted_and_restartable():
    early = make_manejo(WeeklyRecurrence(weekdays=frozenset({1})), date(2024, 1, 1), "10:00")
    morning = make_manejo(DailyRecurrence(interval_days=2), date(2024, 1, 1), "06:00")
    projection = project([early, morning], date(2024, 1, 1), date(2024, 1, 14))
    first = [(occ.date, occ.planned_time) for occ in projection]
    second = [(occ.date, occ.planned_time) for occ in projection]
    assert first == second
    assert first == sorted(first)
    assert first[:2] == [(date(2024, 1, 1), "06:00"), (date(2024, 1, 1), "10:00")]


def test_projection_rejects_inverted_window():
    with pytest.raises(ValueError):
        project([], date(2024, 2, 1), date(2024, 1, 1))


def test_advance_after_completion_increments_counter():
    manejo = make_manejo(DailyRecurrence(interval_days=7, occurrence_count=2), date(2024, 1, 1))
    advance = advance_after_completion(manejo)
    assert advance is not None
    assert advance.next_date == date(2024, 1, 8)
    assert advance.occurrence_count == 3


def test_advance_after_completion_ends_series_past_cap():
    rule = DailyRecurrence(interval_days=7, duration_days=10, reference_start_date=date(2024, 1, 1))
    manejo = make_manejo(rule, date(2024, 1, 8))
    assert advance_after_completion(manejo) is None


def test_advance_after_completion_without_recurrence():
    assert advance_after_completion(make_manejo(NoRecurrence(), date(2024, 1, 1))) is None
