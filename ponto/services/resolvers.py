"""
Storage-backed callers of the pure evaluators.

Each resolver loads read-only snapshots, converts timestamps to the
configured local timezone and delegates the decision. Punch gating fails
open on any lookup error.
"""
import uuid
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, List, Optional
import calendar
import structlog
from sqlalchemy import and_
from sqlalchemy.orm import Session

from ..models.models import (
    Absence,
    Holiday,
    LocationSettings as LocationSettingsRow,
    PayrollSettings,
    Profile,
    ScheduleAdjustment as ScheduleAdjustmentRow,
    TimeAdjustmentRequest,
    TimeRecord,
    WorkSchedule as WorkScheduleRow,
)
from ..schemas.location import LocationSettings
from ..schemas.schedules import (
    FlexibilityMode,
    FlexibilitySettings,
    PunchGateResult,
    ScheduleAdjustment,
    WorkSchedule,
)
from ..schemas.timesheet import EmployeeAlert, MonthSummary, PunchEvent, PunchType
from . import punch_gate
from .absences import build_day_classifications
from .schedules import expected_minutes_for, has_overtime_authorization, select_active_adjustment
from .time_rules import local_day_bounds_utc, utc_to_local
from .timesheet import compute_month, derive_alert, partition_punches

logger = structlog.get_logger(__name__)

DEFAULT_TOLERANCE_MINUTES = 10
INACTIVE_ABSENCE_STATUSES = ("rejected", "cancelled")


def get_profile(db: Session, user_id: uuid.UUID) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def get_flexibility_settings(db: Session, organization_id: uuid.UUID) -> Optional[FlexibilitySettings]:
    row = db.query(PayrollSettings).filter(PayrollSettings.organization_id == organization_id).first()
    if row is None:
        return None
    return FlexibilitySettings(
        mode=row.schedule_flexibility_mode or FlexibilityMode.TOLERANCE.value,
        tolerance_minutes=(
            row.tolerance_entry_minutes
            if row.tolerance_entry_minutes is not None
            else DEFAULT_TOLERANCE_MINUTES
        ),
    )


def get_schedule(db: Session, schedule_id: Optional[uuid.UUID]) -> Optional[WorkSchedule]:
    if schedule_id is None:
        return None
    row = db.query(WorkScheduleRow).filter(WorkScheduleRow.id == schedule_id).first()
    return WorkSchedule.model_validate(row) if row else None


def get_adjustments_on(db: Session, user_id: uuid.UUID, day: date) -> List[ScheduleAdjustment]:
    rows = db.query(ScheduleAdjustmentRow).filter(
        ScheduleAdjustmentRow.user_id == user_id,
        ScheduleAdjustmentRow.start_date <= day,
        ScheduleAdjustmentRow.end_date >= day,
    ).all()
    return [ScheduleAdjustment.model_validate(r) for r in rows]


def resolve_punch_gate(db: Session, user_id: uuid.UUID, now_utc: datetime) -> PunchGateResult:
    """
    Load the employee's policy inputs and evaluate a punch at `now_utc`.

    Never raises: any lookup failure yields an allowed result.
    """
    try:
        profile = get_profile(db, user_id)
        if profile is None:
            return punch_gate.permissive("no_profile", user_id=str(user_id))

        now_local = utc_to_local(now_utc)
        today = now_local.date()
        org_settings = get_flexibility_settings(db, profile.organization_id)
        schedule = get_schedule(db, profile.work_schedule_id)
        adjustments = get_adjustments_on(db, user_id, today)

        return punch_gate.evaluate(
            now_local,
            org_settings,
            schedule,
            select_active_adjustment(adjustments, today),
            has_overtime_authorization(adjustments, today),
        )
    except Exception as e:
        logger.warning("punch_gate_lookup_failed", user_id=str(user_id), error=str(e))
        return punch_gate.allowed()


def _local_punches(rows) -> List[PunchEvent]:
    return [
        PunchEvent(type=r.record_type, recorded_at=utc_to_local(r.recorded_at), user_id=r.user_id)
        for r in rows
    ]


def resolve_month_timesheet(
    db: Session,
    user_id: uuid.UUID,
    year: int,
    month: int,
    now_utc: datetime,
) -> Optional[MonthSummary]:
    """
    Month-to-date timesheet for an employee; None when the profile is unknown.

    A lookup failure yields an empty summary for the month.
    """
    try:
        return _month_timesheet(db, user_id, year, month, now_utc)
    except Exception as e:
        logger.warning("month_timesheet_lookup_failed", user_id=str(user_id), year=year, month=month, error=str(e))
        return MonthSummary(year=year, month=month)


def _month_timesheet(db: Session, user_id: uuid.UUID, year: int, month: int, now_utc: datetime) -> Optional[MonthSummary]:
    profile = get_profile(db, user_id)
    if profile is None:
        return None

    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    range_start, _ = local_day_bounds_utc(first)
    _, range_end = local_day_bounds_utc(last)

    records = db.query(TimeRecord).filter(
        TimeRecord.user_id == user_id,
        TimeRecord.recorded_at >= range_start,
        TimeRecord.recorded_at < range_end,
    ).order_by(TimeRecord.recorded_at.asc()).all()

    absences = db.query(Absence).filter(
        Absence.user_id == user_id,
        Absence.start_date <= last,
        Absence.end_date >= first,
        ~Absence.status.in_(INACTIVE_ABSENCE_STATUSES),
    ).order_by(Absence.created_at.asc()).all()

    holidays = db.query(Holiday).filter(
        Holiday.organization_id == profile.organization_id,
        and_(Holiday.date >= first, Holiday.date <= last),
    ).all()

    notes = db.query(TimeAdjustmentRequest.date).filter(
        TimeAdjustmentRequest.user_id == user_id,
        and_(TimeAdjustmentRequest.date >= first, TimeAdjustmentRequest.date <= last),
    ).all()

    schedule = get_schedule(db, profile.work_schedule_id)
    classifications = build_day_classifications(
        [(a.start_date, a.end_date, a.absence_type) for a in absences],
        [h.date for h in holidays],
        first,
        last,
    )

    return compute_month(
        year,
        month,
        utc_to_local(now_utc).date(),
        _local_punches(records),
        lambda day: expected_minutes_for(schedule, day),
        classifications=classifications,
        adjustment_note_dates={n.date for n in notes},
        first_day=profile.hire_date,
    )


def resolve_today_alerts(db: Session, organization_id: uuid.UUID, now_utc: datetime) -> List[EmployeeAlert]:
    """Overtime / missing-exit alerts for every employee who punched today; empty on lookup failure."""
    try:
        return _today_alerts(db, organization_id, now_utc)
    except Exception as e:
        logger.warning("today_alerts_lookup_failed", organization_id=str(organization_id), error=str(e))
        return []


def _today_alerts(db: Session, organization_id: uuid.UUID, now_utc: datetime) -> List[EmployeeAlert]:
    now_local = utc_to_local(now_utc)
    start, end = local_day_bounds_utc(now_local.date())

    profiles = db.query(Profile).filter(
        Profile.organization_id == organization_id,
    ).order_by(Profile.full_name.asc()).all()

    records = db.query(TimeRecord).filter(
        TimeRecord.organization_id == organization_id,
        TimeRecord.recorded_at >= start,
        TimeRecord.recorded_at < end,
    ).order_by(TimeRecord.recorded_at.asc()).all()

    by_user: Dict[uuid.UUID, List[PunchEvent]] = defaultdict(list)
    for punch in _local_punches(records):
        by_user[punch.user_id].append(punch)

    alerts = []
    for profile in profiles:
        punches = by_user.get(profile.user_id)
        if not punches:
            continue
        alert_type, minutes = derive_alert(punches, now_local)
        if alert_type is None:
            continue
        entry = partition_punches(punches).get(PunchType.ENTRY)
        alerts.append(EmployeeAlert(
            user_id=profile.user_id,
            full_name=profile.full_name,
            sector=profile.sector,
            position=profile.position,
            alert_type=alert_type,
            today_minutes=minutes,
            entry_time=entry.recorded_at.strftime("%H:%M") if entry else None,
        ))
    return alerts


def resolve_location_settings(db: Session, organization_id: uuid.UUID) -> Optional[LocationSettings]:
    try:
        row = db.query(LocationSettingsRow).filter(
            LocationSettingsRow.organization_id == organization_id
        ).first()
        return LocationSettings.model_validate(row) if row else None
    except Exception as e:
        logger.warning("location_settings_lookup_failed", organization_id=str(organization_id), error=str(e))
        return None
