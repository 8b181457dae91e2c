import uuid
from datetime import date, datetime, time

from ponto.services.punch_gate import OUTSIDE_SCHEDULE_MESSAGE
from ponto.services.resolvers import (
    get_flexibility_settings,
    resolve_location_settings,
    resolve_month_timesheet,
    resolve_punch_gate,
    resolve_today_alerts,
)

from .factories import (
    make_absence,
    make_adjustment,
    make_adjustment_request,
    make_holiday,
    make_location_settings,
    make_org,
    make_payroll_settings,
    make_profile,
    make_record,
    make_schedule,
)

# America/Sao_Paulo is UTC-3 all through 2024
MONDAY = date(2024, 3, 4)


def utc(day: date, hour: int, minute: int = 0) -> datetime:
    """UTC instant for a local Sao Paulo wall-clock time."""
    return datetime.combine(day, time(hour + 3, minute))


class BrokenSession:
    def query(self, *args, **kwargs):
        raise RuntimeError("database unavailable")


def employee(db, mode="tolerance", tolerance=10, **profile_fields):
    org = make_org(db)
    schedule = make_schedule(db, org)
    make_payroll_settings(db, org, mode=mode, tolerance=tolerance)
    return make_profile(db, org, schedule, **profile_fields)


def test_punch_window_uses_local_time(db):
    profile = employee(db)
    assert resolve_punch_gate(db, profile.user_id, utc(MONDAY, 7, 50)).allowed is True
    denied = resolve_punch_gate(db, profile.user_id, utc(MONDAY, 7, 49))
    assert denied.allowed is False
    assert denied.reason == OUTSIDE_SCHEDULE_MESSAGE


def test_unknown_employee_is_allowed(db):
    assert resolve_punch_gate(db, uuid.uuid4(), utc(MONDAY, 3, 0)).allowed is True


def test_missing_settings_row_is_allowed(db):
    org = make_org(db)
    profile = make_profile(db, org, make_schedule(db, org))
    assert get_flexibility_settings(db, org.id) is None
    assert resolve_punch_gate(db, profile.user_id, utc(MONDAY, 3, 0)).allowed is True


def test_null_settings_columns_fall_back_to_tolerance(db):
    org = make_org(db)
    make_payroll_settings(db, org, mode=None, tolerance=None)
    flex = get_flexibility_settings(db, org.id)
    assert (flex.mode, flex.tolerance_minutes) == ("tolerance", 10)


def test_lookup_failure_fails_open():
    result = resolve_punch_gate(BrokenSession(), uuid.uuid4(), utc(MONDAY, 3, 0))
    assert result.allowed is True
    assert result.reason is None


def test_most_recent_adjustment_wins(db):
    profile = employee(db)
    make_adjustment(db, profile, MONDAY, MONDAY, datetime(2024, 3, 1, 9, 0), custom_end_time=time(20, 0))
    make_adjustment(db, profile, MONDAY, MONDAY, datetime(2024, 3, 2, 9, 0), custom_end_time=time(17, 0))
    assert resolve_punch_gate(db, profile.user_id, utc(MONDAY, 19, 0)).allowed is False


def test_adjustment_outside_today_is_ignored(db):
    profile = employee(db)
    make_adjustment(
        db, profile, date(2024, 3, 5), date(2024, 3, 8), datetime(2024, 3, 1, 9, 0),
        custom_end_time=time(20, 0),
    )
    assert resolve_punch_gate(db, profile.user_id, utc(MONDAY, 19, 0)).allowed is False


def test_standing_overtime_authorization_from_older_adjustment(db):
    profile = employee(db)
    make_adjustment(db, profile, MONDAY, MONDAY, datetime(2024, 3, 1, 9, 0), overtime_authorized=True)
    make_adjustment(db, profile, MONDAY, MONDAY, datetime(2024, 3, 2, 9, 0), reason="Reunião")
    assert resolve_punch_gate(db, profile.user_id, utc(MONDAY, 18, 30)).allowed is True
    assert resolve_punch_gate(db, profile.user_id, utc(MONDAY, 19, 1)).allowed is False


def test_hours_only_ignores_schedule(db):
    profile = employee(db, mode="hours_only")
    assert resolve_punch_gate(db, profile.user_id, utc(MONDAY, 2, 0)).allowed is True


def test_unknown_employee_has_no_timesheet(db):
    assert resolve_month_timesheet(db, uuid.uuid4(), 2024, 3, utc(date(2024, 3, 6), 12)) is None


def test_month_timesheet(db):
    org = make_org(db)
    make_payroll_settings(db, org)
    profile = make_profile(db, org, make_schedule(db, org))

    # Feb 29 22:00 local, outside March
    make_record(db, profile, "exit", datetime(2024, 3, 1, 1, 0))

    make_record(db, profile, "entry", utc(MONDAY, 8, 0))
    make_record(db, profile, "lunch_out", utc(MONDAY, 12, 0))
    make_record(db, profile, "lunch_in", utc(MONDAY, 13, 0))
    make_record(db, profile, "exit", utc(MONDAY, 17, 5))
    make_record(db, profile, "entry", utc(date(2024, 3, 6), 8, 0))

    make_holiday(db, org, date(2024, 3, 1))
    make_holiday(db, org, date(2024, 3, 5))
    make_absence(db, profile, "unjustified_absence", date(2024, 3, 5), date(2024, 3, 5))
    rejected = make_absence(db, profile, "vacation", date(2024, 3, 4), date(2024, 3, 4), created_at=datetime(2023, 12, 1))
    rejected.status = "rejected"
    make_adjustment_request(db, profile, date(2024, 3, 6))
    db.flush()

    summary = resolve_month_timesheet(db, profile.user_id, 2024, 3, utc(date(2024, 3, 6), 12))
    days = {d.date: d for d in summary.days}

    assert list(days) == [date(2024, 3, d) for d in range(1, 7)]
    assert days[date(2024, 3, 1)].classification == "holiday"
    assert days[date(2024, 3, 1)].balance_minutes == 0
    assert days[date(2024, 3, 4)].classification is None
    assert days[date(2024, 3, 4)].worked_minutes == 485
    assert days[date(2024, 3, 4)].balance_minutes == 5
    assert days[date(2024, 3, 5)].classification == "unjustified_absence"
    assert days[date(2024, 3, 5)].balance_minutes == -480
    assert days[date(2024, 3, 6)].has_adjustment_note is True
    assert days[date(2024, 3, 6)].has_inconsistency is False
    assert summary.total_worked_minutes == 485
    assert summary.total_balance_minutes == -475


def test_month_starts_at_hire_date(db):
    profile = employee(db, hire_date=date(2024, 3, 5))
    summary = resolve_month_timesheet(db, profile.user_id, 2024, 3, utc(date(2024, 3, 6), 12))
    assert [d.date for d in summary.days] == [date(2024, 3, 5), date(2024, 3, 6)]
    assert summary.total_balance_minutes == -480


def test_today_alerts(db):
    org = make_org(db)
    schedule = make_schedule(db, org)
    bruno = make_profile(db, org, schedule, full_name="Bruno Lima")
    ana = make_profile(db, org, schedule, full_name="Ana Costa")
    carla = make_profile(db, org, schedule, full_name="Carla Dias")
    make_profile(db, org, schedule, full_name="Davi Reis")

    make_record(db, ana, "entry", utc(MONDAY, 7, 0))
    make_record(db, ana, "lunch_out", utc(MONDAY, 12, 0))
    make_record(db, ana, "lunch_in", utc(MONDAY, 13, 0))

    make_record(db, bruno, "entry", utc(MONDAY, 8, 0))
    make_record(db, bruno, "lunch_out", utc(MONDAY, 12, 0))
    make_record(db, bruno, "lunch_in", utc(MONDAY, 13, 0))
    # Yesterday's entry is not today's
    make_record(db, bruno, "entry", utc(date(2024, 3, 3), 6, 0))

    make_record(db, carla, "entry", utc(MONDAY, 8, 0))
    make_record(db, carla, "lunch_out", utc(MONDAY, 12, 0))
    make_record(db, carla, "lunch_in", utc(MONDAY, 13, 0))
    make_record(db, carla, "exit", utc(MONDAY, 17, 0))

    alerts = resolve_today_alerts(db, org.id, utc(MONDAY, 18, 30))

    assert [(a.full_name, a.alert_type.value, a.today_minutes, a.entry_time) for a in alerts] == [
        ("Ana Costa", "overtime", 630, "07:00"),
        ("Bruno Lima", "missing_exit", 570, "08:00"),
    ]


def test_location_settings(db):
    org = make_org(db)
    assert resolve_location_settings(db, org.id) is None
    make_location_settings(db, org, location_mode="require_radius", allowed_radius_meters=300)
    location = resolve_location_settings(db, org.id)
    assert location.location_mode == "require_radius"
    assert location.allowed_radius_meters == 300
    assert resolve_location_settings(BrokenSession(), org.id) is None


def test_month_lookup_failure_returns_empty_summary():
    summary = resolve_month_timesheet(BrokenSession(), uuid.uuid4(), 2024, 3, utc(date(2024, 3, 10), 12))
    assert (summary.year, summary.month) == (2024, 3)
    assert summary.days == []
    assert summary.total_balance_minutes == 0


def test_alerts_lookup_failure_returns_no_alerts():
    assert resolve_today_alerts(BrokenSession(), uuid.uuid4(), utc(MONDAY, 18, 30)) == []


def test_stored_zero_radius_is_accepted(db):
    org = make_org(db)
    make_location_settings(db, org, location_mode="require_radius", allowed_radius_meters=0)
    location = resolve_location_settings(db, org.id)
    assert location.allowed_radius_meters == 0
