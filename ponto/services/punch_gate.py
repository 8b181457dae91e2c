"""
Punch gate.
Decides whether a punch is allowed right now under the organization's
schedule flexibility mode, the employee's schedule, an active temporary
adjustment and overtime authorization.

Missing configuration never blocks a punch.
"""
from datetime import datetime
from typing import Optional
import structlog

from ..schemas.schedules import (
    FlexibilityMode,
    FlexibilitySettings,
    PunchGateResult,
    ScheduleAdjustment,
    WorkSchedule,
)
from .schedules import expected_minutes_for
from .time_rules import minutes_of_day

logger = structlog.get_logger(__name__)

OUTSIDE_SCHEDULE_MESSAGE = "Você está fora da sua jornada de trabalho."
FIXED_MODE_BUFFER_MINUTES = 2
DEFAULT_OVERTIME_MAX_MINUTES = 120


def allowed() -> PunchGateResult:
    return PunchGateResult(allowed=True)


def denied() -> PunchGateResult:
    return PunchGateResult(allowed=False, reason=OUTSIDE_SCHEDULE_MESSAGE)


def permissive(cause: str, **context) -> PunchGateResult:
    """Unknown or absent policy input: allow and leave a trace of why."""
    logger.info("punch_gate_permissive", cause=cause, **context)
    return allowed()


def overtime_cap_minutes(adjustment: Optional[ScheduleAdjustment]) -> int:
    if adjustment is not None and adjustment.overtime_max_minutes is not None:
        return adjustment.overtime_max_minutes
    return DEFAULT_OVERTIME_MAX_MINUTES


def evaluate(
    now: datetime,
    org_settings: Optional[FlexibilitySettings],
    schedule: Optional[WorkSchedule],
    adjustment: Optional[ScheduleAdjustment] = None,
    has_standing_overtime_authorization: bool = False,
) -> PunchGateResult:
    """
    Evaluate a punch attempt at `now` (local wall-clock time).

    Args:
        now: Local datetime of the attempt
        org_settings: Organization flexibility settings, None when not configured
        schedule: Employee's assigned schedule, None when unassigned
        adjustment: Most recent adjustment for the employee; ignored unless it covers today
        has_standing_overtime_authorization: Overtime authorized for today by any adjustment

    Returns:
        PunchGateResult with the fixed denial message when not allowed
    """
    if org_settings is None:
        return permissive("no_flexibility_settings")

    mode = org_settings.mode
    if mode == FlexibilityMode.HOURS_ONLY.value:
        return allowed()

    if schedule is None:
        return permissive("no_schedule")

    today = now.date()
    if adjustment is not None and not adjustment.covers(today):
        adjustment = None

    has_overtime_auth = bool(adjustment and adjustment.overtime_authorized) or has_standing_overtime_authorization

    if expected_minutes_for(schedule, today) == 0:
        return allowed() if has_overtime_auth else denied()

    start_time = (adjustment.custom_start_time if adjustment else None) or schedule.start_time
    end_time = (adjustment.custom_end_time if adjustment else None) or schedule.end_time

    current_minutes = minutes_of_day(now)
    schedule_start = minutes_of_day(start_time)
    schedule_end = minutes_of_day(end_time)

    if mode == FlexibilityMode.TOLERANCE.value:
        margin = org_settings.tolerance_minutes
    elif mode == FlexibilityMode.FIXED.value:
        margin = FIXED_MODE_BUFFER_MINUTES
    else:
        return permissive("unknown_flexibility_mode", mode=mode)

    earliest = schedule_start - margin
    if has_overtime_auth:
        latest = schedule_end + overtime_cap_minutes(adjustment)
    else:
        latest = schedule_end + margin

    if earliest <= current_minutes <= latest:
        return allowed()
    return denied()
