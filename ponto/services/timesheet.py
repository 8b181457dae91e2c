"""
Timesheet accumulator.
Per-day worked/expected/balance minutes from the four daily punches plus
absence and holiday overlays, monthly totals, and today's alerts.
"""
import calendar
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Callable, Collection, Dict, Iterable, List, Optional, Tuple

from ..schemas.timesheet import AlertType, DayBalance, MonthSummary, PunchEvent, PunchType
from .absences import debits_balance
from .time_rules import floor_minutes_between, minutes_between

# Punch types a complete working day is expected to have
EXPECTED_PUNCH_COUNT = len(PunchType)

OVERTIME_ALERT_MINUTES = 600  # 10h
MISSING_EXIT_ALERT_MINUTES = 540  # 9h


def partition_punches(punches: Iterable[PunchEvent]) -> Dict[PunchType, PunchEvent]:
    """First (earliest) punch of each type; input order is irrelevant."""
    first: Dict[PunchType, PunchEvent] = {}
    for punch in sorted(punches, key=lambda p: p.recorded_at):
        first.setdefault(PunchType(punch.type), punch)
    return first


def worked_minutes(by_type: Dict[PunchType, PunchEvent]) -> int:
    """Morning segment (entry->lunch_out) plus afternoon segment (lunch_in->exit)."""
    total = 0
    entry = by_type.get(PunchType.ENTRY)
    lunch_out = by_type.get(PunchType.LUNCH_OUT)
    lunch_in = by_type.get(PunchType.LUNCH_IN)
    exit_ = by_type.get(PunchType.EXIT)
    if entry and lunch_out:
        total += minutes_between(entry.recorded_at, lunch_out.recorded_at)
    if lunch_in and exit_:
        total += minutes_between(lunch_in.recorded_at, exit_.recorded_at)
    return total


def compute_day(
    day: date,
    punches: List[PunchEvent],
    expected_minutes: int,
    absence: Optional[str] = None,
    is_past_day: bool = False,
    has_adjustment_note: bool = False,
    expected_punch_count: int = EXPECTED_PUNCH_COUNT,
) -> DayBalance:
    """
    Balance for a single calendar day.

    Args:
        day: The date
        punches: Punches recorded on that date (any order)
        expected_minutes: Expected minutes for the date's weekday
        absence: Absence type or "holiday" classifying the date, if any
        is_past_day: True when the date is strictly before today
        has_adjustment_note: An adjustment request exists for the date
        expected_punch_count: Punches a complete day has

    Returns:
        DayBalance
    """
    by_type = partition_punches(punches)
    result = DayBalance(
        date=day,
        expected_minutes=expected_minutes,
        has_adjustment_note=has_adjustment_note,
        classification=absence,
        entry=_time_of(by_type, PunchType.ENTRY),
        lunch_out=_time_of(by_type, PunchType.LUNCH_OUT),
        lunch_in=_time_of(by_type, PunchType.LUNCH_IN),
        exit=_time_of(by_type, PunchType.EXIT),
    )

    # Partial days are flagged for manual review instead of being calculated
    if is_past_day and 0 < len(punches) < expected_punch_count and absence is None:
        result.has_inconsistency = True
        return result

    if absence is not None:
        if debits_balance(absence):
            result.balance_minutes = -expected_minutes
        return result

    worked = worked_minutes(by_type)
    result.worked_minutes = worked
    if worked > 0:
        result.balance_minutes = worked - expected_minutes
    elif expected_minutes > 0 and is_past_day:
        result.balance_minutes = -expected_minutes
    return result


def _time_of(by_type: Dict[PunchType, PunchEvent], punch_type: PunchType) -> Optional[datetime]:
    punch = by_type.get(punch_type)
    return punch.recorded_at if punch else None


def month_days(year: int, month: int, today: date) -> List[date]:
    """Dates from the first of the month through min(today, last day of month)."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    end = min(today, last)
    days = []
    day = first
    while day <= end:
        days.append(day)
        day += timedelta(days=1)
    return days


def group_by_day(punches: Iterable[PunchEvent]) -> Dict[date, List[PunchEvent]]:
    """Bucket punches by the calendar date of their (already local) timestamp."""
    grouped: Dict[date, List[PunchEvent]] = defaultdict(list)
    for punch in punches:
        grouped[punch.recorded_at.date()].append(punch)
    return grouped


def compute_month(
    year: int,
    month: int,
    today: date,
    punches: Iterable[PunchEvent],
    expected_for: Callable[[date], int],
    classifications: Optional[Dict[date, str]] = None,
    adjustment_note_dates: Collection[date] = (),
    first_day: Optional[date] = None,
) -> MonthSummary:
    """
    Month-to-date balance.

    Args:
        year: Year
        month: Month (1-12)
        today: Local date of evaluation; later days are left out
        punches: Punches with local timestamps, any order
        expected_for: Expected minutes for a date
        classifications: {date: absence type or "holiday"}
        adjustment_note_dates: Dates carrying an adjustment request
        first_day: Days before this date (e.g. hire date) are left out

    Returns:
        MonthSummary with one DayBalance per included date
    """
    classifications = classifications or {}
    by_day = group_by_day(punches)
    summary = MonthSummary(year=year, month=month)
    for day in month_days(year, month, today):
        if first_day is not None and day < first_day:
            continue
        balance = compute_day(
            day,
            by_day.get(day, []),
            expected_for(day),
            absence=classifications.get(day),
            is_past_day=day < today,
            has_adjustment_note=day in adjustment_note_dates,
        )
        summary.days.append(balance)
        summary.total_worked_minutes += balance.worked_minutes
        summary.total_expected_minutes += balance.expected_minutes
        summary.total_balance_minutes += balance.balance_minutes
    return summary


def today_minutes(punches: Iterable[PunchEvent], now: datetime) -> int:
    """Entry to exit (or now), minus a completed lunch interval."""
    by_type = partition_punches(punches)
    entry = by_type.get(PunchType.ENTRY)
    if entry is None:
        return 0
    exit_ = by_type.get(PunchType.EXIT)
    end = exit_.recorded_at if exit_ else now
    minutes = floor_minutes_between(entry.recorded_at, end)
    lunch_out = by_type.get(PunchType.LUNCH_OUT)
    lunch_in = by_type.get(PunchType.LUNCH_IN)
    if lunch_out and lunch_in:
        minutes -= floor_minutes_between(lunch_out.recorded_at, lunch_in.recorded_at)
    return minutes


def derive_alert(punches: List[PunchEvent], now: datetime) -> Tuple[Optional[AlertType], int]:
    """
    Today's alert for one employee.

    Overtime takes precedence over a missing exit when both hold.

    Returns:
        (alert type or None, today's minutes)
    """
    minutes = today_minutes(punches, now)
    by_type = partition_punches(punches)
    if minutes > OVERTIME_ALERT_MINUTES:
        return AlertType.OVERTIME, minutes
    if PunchType.ENTRY in by_type and PunchType.EXIT not in by_type and minutes > MISSING_EXIT_ALERT_MINUTES:
        return AlertType.MISSING_EXIT, minutes
    return None, minutes
