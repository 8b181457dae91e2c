"""
Work schedule lookups.
Weekday hours, active temporary adjustments and overtime authorization.
"""
from datetime import date
from typing import Iterable, Optional

from ..schemas.schedules import ScheduleAdjustment, WorkSchedule


# Sunday=0 ... Saturday=6
WEEKDAY_HOURS_FIELDS = (
    "sunday_hours",
    "monday_hours",
    "tuesday_hours",
    "wednesday_hours",
    "thursday_hours",
    "friday_hours",
    "saturday_hours",
)


def sunday_based_weekday(day: date) -> int:
    """Weekday index with Sunday=0 ... Saturday=6."""
    return (day.weekday() + 1) % 7


def expected_minutes_for(schedule: Optional[WorkSchedule], day: date) -> int:
    """
    Expected work minutes for `day` according to the schedule's weekday hours.

    Missing schedule or missing weekday hours count as a day off (0).
    """
    if schedule is None:
        return 0
    hours = getattr(schedule, WEEKDAY_HOURS_FIELDS[sunday_based_weekday(day)]) or 0
    return int(round(float(hours) * 60))


def weekly_minutes(schedule: WorkSchedule) -> int:
    return sum(int(round(float(getattr(schedule, f) or 0) * 60)) for f in WEEKDAY_HOURS_FIELDS)


def active_adjustments(adjustments: Iterable[ScheduleAdjustment], day: date) -> list:
    return [a for a in adjustments if a.covers(day)]


def select_active_adjustment(
    adjustments: Iterable[ScheduleAdjustment],
    day: date,
) -> Optional[ScheduleAdjustment]:
    """
    The adjustment in effect on `day`.

    When several overlap, the most recently created one wins.
    """
    candidates = active_adjustments(adjustments, day)
    if not candidates:
        return None
    return max(candidates, key=lambda a: a.created_at)


def has_overtime_authorization(adjustments: Iterable[ScheduleAdjustment], day: date) -> bool:
    """Standing authorization: any adjustment covering `day` that authorizes overtime."""
    return any(a.overtime_authorized for a in active_adjustments(adjustments, day))
