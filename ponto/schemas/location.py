import uuid
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class GeofenceMode(str, Enum):
    DISABLED = "disabled"
    LOG_ONLY = "log_only"
    REQUIRE_EXACT = "require_exact"
    REQUIRE_RADIUS = "require_radius"


class GeoPoint(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class LocationSettings(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    location_mode: str = GeofenceMode.DISABLED.value
    address_cep: Optional[str] = None
    address_street: Optional[str] = None
    address_number: Optional[str] = None
    address_neighborhood: Optional[str] = None
    address_city: Optional[str] = None
    address_state: Optional[str] = None
    allowed_radius_meters: Optional[int] = None  # admin range 10-5000; 0 or None falls back to 100
    company_latitude: Optional[float] = None
    company_longitude: Optional[float] = None


class GeofenceDecision(BaseModel):
    valid: bool
    message: str
    distance_meters: Optional[float] = None


class LocationValidationResult(BaseModel):
    is_valid: bool
    message: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance_meters: Optional[float] = None


class DistanceRequest(BaseModel):
    a: GeoPoint
    b: GeoPoint


class ClassifyRequest(BaseModel):
    distance_meters: Optional[float] = Field(default=None, ge=0)
    mode: str
    allowed_radius_meters: Optional[int] = None


class LocationValidateRequest(BaseModel):
    organization_id: uuid.UUID
    position: Optional[GeoPoint] = None
    geolocation_error: Optional[str] = None  # permission_denied|unavailable|timeout
