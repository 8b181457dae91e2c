import uuid
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class FlexibilityMode(str, Enum):
    TOLERANCE = "tolerance"
    FIXED = "fixed"
    HOURS_ONLY = "hours_only"


class FlexibilitySettings(BaseModel):
    # Kept as a plain string so an unrecognised mode reaches the permissive branch
    mode: str = FlexibilityMode.TOLERANCE.value
    tolerance_minutes: int = Field(default=10, ge=0)


class WorkSchedule(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[uuid.UUID] = None
    name: Optional[str] = None
    start_time: time
    end_time: time
    break_start_time: Optional[time] = None  # informational only
    break_end_time: Optional[time] = None

    # Expected hours per weekday; 0/None = day off
    sunday_hours: Optional[float] = Field(default=None, ge=0)
    monday_hours: Optional[float] = Field(default=None, ge=0)
    tuesday_hours: Optional[float] = Field(default=None, ge=0)
    wednesday_hours: Optional[float] = Field(default=None, ge=0)
    thursday_hours: Optional[float] = Field(default=None, ge=0)
    friday_hours: Optional[float] = Field(default=None, ge=0)
    saturday_hours: Optional[float] = Field(default=None, ge=0)


class ScheduleAdjustment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[uuid.UUID] = None
    user_id: Optional[uuid.UUID] = None
    start_date: date
    end_date: date
    custom_start_time: Optional[time] = None
    custom_end_time: Optional[time] = None
    overtime_authorized: bool = False
    overtime_max_minutes: Optional[int] = Field(default=None, ge=0)
    reason: Optional[str] = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_as_utc(cls, value: datetime) -> datetime:
        # Naive values are UTC, so aware and naive adjustments stay comparable
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def covers(self, day: date) -> bool:
        """Inclusive [start_date, end_date] check."""
        return self.start_date <= day <= self.end_date


class PunchGateResult(BaseModel):
    allowed: bool
    reason: Optional[str] = None


class PunchEvaluateRequest(BaseModel):
    now: datetime
    settings: Optional[FlexibilitySettings] = None
    schedule: Optional[WorkSchedule] = None
    adjustments: List[ScheduleAdjustment] = Field(default_factory=list)
    has_standing_overtime_authorization: bool = False


class PunchValidateRequest(BaseModel):
    user_id: uuid.UUID
    now: Optional[datetime] = None  # UTC; defaults to the server clock
