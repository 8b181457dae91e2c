import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class PunchType(str, Enum):
    ENTRY = "entry"
    LUNCH_OUT = "lunch_out"
    LUNCH_IN = "lunch_in"
    EXIT = "exit"


class PunchEvent(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: PunchType
    recorded_at: datetime
    user_id: Optional[uuid.UUID] = None


class DayBalance(BaseModel):
    date: date
    worked_minutes: int = 0
    expected_minutes: int = 0
    balance_minutes: int = 0
    has_inconsistency: bool = False
    has_adjustment_note: bool = False
    classification: Optional[str] = None  # absence type or "holiday"

    # Times of the first punch of each type, when present
    entry: Optional[datetime] = None
    lunch_out: Optional[datetime] = None
    lunch_in: Optional[datetime] = None
    exit: Optional[datetime] = None


class MonthSummary(BaseModel):
    year: int
    month: int
    days: List[DayBalance] = Field(default_factory=list)
    total_worked_minutes: int = 0
    total_expected_minutes: int = 0
    total_balance_minutes: int = 0


class AlertType(str, Enum):
    OVERTIME = "overtime"
    MISSING_EXIT = "missing_exit"


class EmployeeAlert(BaseModel):
    user_id: uuid.UUID
    full_name: Optional[str] = None
    sector: Optional[str] = None
    position: Optional[str] = None
    alert_type: AlertType
    today_minutes: int
    entry_time: Optional[str] = None  # HH:MM, local time


class DayRequest(BaseModel):
    date: date
    punches: List[PunchEvent] = Field(default_factory=list)
    expected_minutes: int = Field(default=0, ge=0)
    absence: Optional[str] = None
    is_past_day: bool = False
    has_adjustment_note: bool = False
