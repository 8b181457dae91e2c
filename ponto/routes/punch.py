"""
Punch gating API routes.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.schedules import PunchEvaluateRequest, PunchGateResult, PunchValidateRequest
from ..services import punch_gate
from ..services.resolvers import resolve_punch_gate
from ..services.schedules import has_overtime_authorization, select_active_adjustment

router = APIRouter(prefix="/punch", tags=["punch"])


@router.post("/evaluate", response_model=PunchGateResult)
def evaluate_punch(payload: PunchEvaluateRequest):
    """
    Evaluate a punch attempt against caller-supplied settings, schedule and adjustments.
    `now` is the local wall-clock time of the attempt.
    """
    today = payload.now.date()
    return punch_gate.evaluate(
        payload.now,
        payload.settings,
        payload.schedule,
        select_active_adjustment(payload.adjustments, today),
        payload.has_standing_overtime_authorization
        or has_overtime_authorization(payload.adjustments, today),
    )


@router.post("/validate", response_model=PunchGateResult)
def validate_punch(payload: PunchValidateRequest, db: Session = Depends(get_db)):
    """Evaluate a punch attempt for a stored employee. Fails open on lookup errors."""
    now_utc = payload.now or datetime.now(timezone.utc)
    return resolve_punch_gate(db, payload.user_id, now_utc)
