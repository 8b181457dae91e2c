import uuid
from datetime import date, datetime, time
from typing import List, Optional

from ponto.models.models import (
    Absence,
    Holiday,
    LocationSettings,
    Organization,
    PayrollSettings,
    Profile,
    ScheduleAdjustment,
    TimeAdjustmentRequest,
    TimeRecord,
    WorkSchedule,
)
from ponto.schemas.location import GeoPoint
from ponto.schemas.schedules import WorkSchedule as WorkScheduleSnapshot

WEEKDAYS_8H = dict(
    sunday_hours=0,
    monday_hours=8,
    tuesday_hours=8,
    wednesday_hours=8,
    thursday_hours=8,
    friday_hours=8,
    saturday_hours=0,
)


def office_schedule(**overrides) -> WorkScheduleSnapshot:
    """08:00-17:00, Monday to Friday, 8h a day."""
    data = dict(start_time=time(8, 0), end_time=time(17, 0), **WEEKDAYS_8H)
    data.update(overrides)
    return WorkScheduleSnapshot(**data)


class FakeGeocoder:
    def __init__(self, result: Optional[GeoPoint] = None):
        self.result = result
        self.calls: List[str] = []

    async def geocode(self, address: str) -> Optional[GeoPoint]:
        self.calls.append(address)
        return self.result


def make_org(db, name="Padaria Central") -> Organization:
    org = Organization(name=name)
    db.add(org)
    db.flush()
    return org


def make_schedule(db, org, **overrides) -> WorkSchedule:
    data = dict(name="Comercial", start_time=time(8, 0), end_time=time(17, 0), **WEEKDAYS_8H)
    data.update(overrides)
    schedule = WorkSchedule(organization_id=org.id, **data)
    db.add(schedule)
    db.flush()
    return schedule


def make_profile(db, org, schedule=None, full_name="Maria Souza", hire_date: Optional[date] = None) -> Profile:
    profile = Profile(
        user_id=uuid.uuid4(),
        organization_id=org.id,
        work_schedule_id=schedule.id if schedule else None,
        full_name=full_name,
        hire_date=hire_date,
    )
    db.add(profile)
    db.flush()
    return profile


def make_payroll_settings(db, org, mode="tolerance", tolerance=10) -> PayrollSettings:
    row = PayrollSettings(organization_id=org.id, schedule_flexibility_mode=mode, tolerance_entry_minutes=tolerance)
    db.add(row)
    db.flush()
    return row


def make_adjustment(db, profile, start: date, end: date, created_at: datetime, **fields) -> ScheduleAdjustment:
    row = ScheduleAdjustment(
        organization_id=profile.organization_id,
        user_id=profile.user_id,
        start_date=start,
        end_date=end,
        created_at=created_at,
        **fields,
    )
    db.add(row)
    db.flush()
    return row


def make_record(db, profile, record_type: str, recorded_at_utc: datetime) -> TimeRecord:
    row = TimeRecord(
        user_id=profile.user_id,
        organization_id=profile.organization_id,
        record_type=record_type,
        recorded_at=recorded_at_utc,
    )
    db.add(row)
    db.flush()
    return row


def make_absence(db, profile, absence_type: str, start: date, end: date, created_at: Optional[datetime] = None) -> Absence:
    row = Absence(
        user_id=profile.user_id,
        organization_id=profile.organization_id,
        absence_type=absence_type,
        start_date=start,
        end_date=end,
        created_at=created_at or datetime(2024, 1, 1),
    )
    db.add(row)
    db.flush()
    return row


def make_holiday(db, org, day: date, name="Feriado") -> Holiday:
    row = Holiday(organization_id=org.id, date=day, name=name)
    db.add(row)
    db.flush()
    return row


def make_adjustment_request(db, profile, day: date) -> TimeAdjustmentRequest:
    row = TimeAdjustmentRequest(user_id=profile.user_id, organization_id=profile.organization_id, date=day)
    db.add(row)
    db.flush()
    return row


def make_location_settings(db, org, **fields) -> LocationSettings:
    row = LocationSettings(organization_id=org.id, **fields)
    db.add(row)
    db.flush()
    return row
