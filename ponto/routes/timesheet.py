"""
Timesheet API routes: single-day balance, monthly summary and today's alerts.
"""
import uuid
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.timesheet import DayBalance, DayRequest, EmployeeAlert, MonthSummary
from ..services.resolvers import resolve_month_timesheet, resolve_today_alerts
from ..services.time_rules import utc_to_local
from ..services.timesheet import compute_day

router = APIRouter(prefix="/timesheet", tags=["timesheet"])


@router.post("/day", response_model=DayBalance)
def day_balance(payload: DayRequest):
    return compute_day(
        payload.date,
        payload.punches,
        payload.expected_minutes,
        absence=payload.absence,
        is_past_day=payload.is_past_day,
        has_adjustment_note=payload.has_adjustment_note,
    )


@router.get("/alerts", response_model=List[EmployeeAlert])
def today_alerts(organization_id: uuid.UUID, db: Session = Depends(get_db)):
    return resolve_today_alerts(db, organization_id, datetime.now(timezone.utc))


@router.get("/{user_id}/month", response_model=MonthSummary)
def month_timesheet(
    user_id: uuid.UUID,
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    """
    Month-to-date timesheet for an employee.
    Defaults to the current local month.
    """
    now_utc = datetime.now(timezone.utc)
    local_today = utc_to_local(now_utc).date()
    year = year or local_today.year
    month = month or local_today.month

    summary = resolve_month_timesheet(db, user_id, year, month, now_utc)
    if summary is None:
        raise HTTPException(status_code=404, detail="Employee not found")
    return summary
