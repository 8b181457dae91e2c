import uuid
import datetime as dt
from datetime import date, datetime, time
from typing import Optional

from sqlalchemy import (
    String,
    DateTime,
    Date,
    Time,
    Boolean,
    ForeignKey,
    Integer,
    Float,
    Numeric,
    Text,
    Uuid,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base


def uuid_pk() -> Mapped[uuid.UUID]:
    return mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


def utcnow() -> datetime:
    return datetime.utcnow()


class Organization(Base):
    __tablename__ = "organizations"

    id: Mapped[uuid.UUID] = uuid_pk()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    cnpj: Mapped[Optional[str]] = mapped_column(String(18))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class WorkSchedule(Base):
    """Named weekly work pattern owned by an organization"""
    __tablename__ = "work_schedules"

    id: Mapped[uuid.UUID] = uuid_pk()
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    schedule_type: Mapped[str] = mapped_column(String(50), default="standard")
    start_time: Mapped[time] = mapped_column(Time(timezone=False), nullable=False)  # Local time
    end_time: Mapped[time] = mapped_column(Time(timezone=False), nullable=False)  # Local time
    break_start_time: Mapped[Optional[time]] = mapped_column(Time(timezone=False))
    break_end_time: Mapped[Optional[time]] = mapped_column(Time(timezone=False))
    sunday_hours: Mapped[Optional[float]] = mapped_column(Numeric(4, 2))
    monday_hours: Mapped[Optional[float]] = mapped_column(Numeric(4, 2))
    tuesday_hours: Mapped[Optional[float]] = mapped_column(Numeric(4, 2))
    wednesday_hours: Mapped[Optional[float]] = mapped_column(Numeric(4, 2))
    thursday_hours: Mapped[Optional[float]] = mapped_column(Numeric(4, 2))
    friday_hours: Mapped[Optional[float]] = mapped_column(Numeric(4, 2))
    saturday_hours: Mapped[Optional[float]] = mapped_column(Numeric(4, 2))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Profile(Base):
    """Employee directory entry"""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = uuid_pk()
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, unique=True, index=True)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    work_schedule_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), ForeignKey("work_schedules.id", ondelete="SET NULL"))
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    cpf: Mapped[Optional[str]] = mapped_column(String(14))
    sector: Mapped[Optional[str]] = mapped_column(String(255))
    position: Mapped[Optional[str]] = mapped_column(String(255))
    hire_date: Mapped[Optional[date]] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class PayrollSettings(Base):
    """Per-organization schedule flexibility"""
    __tablename__ = "payroll_settings"

    id: Mapped[uuid.UUID] = uuid_pk()
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, unique=True)
    schedule_flexibility_mode: Mapped[Optional[str]] = mapped_column(String(20))  # tolerance|fixed|hours_only
    tolerance_entry_minutes: Mapped[Optional[int]] = mapped_column(Integer)


class ScheduleAdjustment(Base):
    """Temporary per-employee schedule override"""
    __tablename__ = "schedule_adjustments"

    id: Mapped[uuid.UUID] = uuid_pk()
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    custom_start_time: Mapped[Optional[time]] = mapped_column(Time(timezone=False))
    custom_end_time: Mapped[Optional[time]] = mapped_column(Time(timezone=False))
    overtime_authorized: Mapped[bool] = mapped_column(Boolean, default=False)
    overtime_max_minutes: Mapped[Optional[int]] = mapped_column(Integer)
    reason: Mapped[Optional[str]] = mapped_column(Text)
    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index("idx_schedule_adjustments_user_dates", "user_id", "start_date", "end_date"),
    )


class TimeRecord(Base):
    """Punch event (entry|lunch_out|lunch_in|exit)"""
    __tablename__ = "time_records"

    id: Mapped[uuid.UUID] = uuid_pk()
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    record_type: Mapped[str] = mapped_column(String(20), nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)  # UTC
    latitude: Mapped[Optional[float]] = mapped_column(Float)
    longitude: Mapped[Optional[float]] = mapped_column(Float)
    distance_meters: Mapped[Optional[float]] = mapped_column(Float)

    __table_args__ = (
        Index("idx_time_records_user_time", "user_id", "recorded_at"),
    )


class Absence(Base):
    """Vacation or leave over an inclusive date range"""
    __tablename__ = "absences"

    id: Mapped[uuid.UUID] = uuid_pk()
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    absence_type: Mapped[str] = mapped_column(String(40), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="approved")  # pending|approved|rejected|cancelled
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Holiday(Base):
    __tablename__ = "holidays"

    id: Mapped[uuid.UUID] = uuid_pk()
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), default="custom")  # national|state|municipal|custom
    state_code: Mapped[Optional[str]] = mapped_column(String(2))
    city_name: Mapped[Optional[str]] = mapped_column(String(255))
    is_custom: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (
        UniqueConstraint("organization_id", "date", "name", name="uq_holiday_org_date_name"),
    )


class TimeAdjustmentRequest(Base):
    """Employee request to correct a day's punches"""
    __tablename__ = "time_adjustment_requests"

    id: Mapped[uuid.UUID] = uuid_pk()
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending|approved|rejected
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class LocationSettings(Base):
    """Per-organization geofence configuration"""
    __tablename__ = "location_settings"

    id: Mapped[uuid.UUID] = uuid_pk()
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, unique=True)
    location_mode: Mapped[str] = mapped_column(String(20), default="disabled")  # disabled|log_only|require_exact|require_radius
    address_cep: Mapped[Optional[str]] = mapped_column(String(9))
    address_street: Mapped[Optional[str]] = mapped_column(String(255))
    address_number: Mapped[Optional[str]] = mapped_column(String(20))
    address_neighborhood: Mapped[Optional[str]] = mapped_column(String(255))
    address_city: Mapped[Optional[str]] = mapped_column(String(255))
    address_state: Mapped[Optional[str]] = mapped_column(String(2))
    allowed_radius_meters: Mapped[Optional[int]] = mapped_column(Integer)
    company_latitude: Mapped[Optional[float]] = mapped_column(Float)
    company_longitude: Mapped[Optional[float]] = mapped_column(Float)
