"""
Location (geofence) API routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.location import (
    ClassifyRequest,
    DistanceRequest,
    GeofenceDecision,
    LocationValidateRequest,
    LocationValidationResult,
)
from ..services.geocoding import NominatimGeocoder
from ..services.geofence import GeolocationError, classify, distance_meters, validate_location
from ..services.resolvers import resolve_location_settings

router = APIRouter(prefix="/location", tags=["location"])


def get_geocoder() -> NominatimGeocoder:
    return NominatimGeocoder()


@router.post("/distance")
def distance(payload: DistanceRequest):
    return {"distance_meters": distance_meters(payload.a, payload.b)}


@router.post("/classify", response_model=GeofenceDecision)
def classify_distance(payload: ClassifyRequest):
    return classify(payload.distance_meters, payload.mode, payload.allowed_radius_meters)


@router.post("/validate", response_model=LocationValidationResult)
async def validate(
    payload: LocationValidateRequest,
    db: Session = Depends(get_db),
    geocoder: NominatimGeocoder = Depends(get_geocoder),
):
    """
    Validate a device position against the organization's location settings.
    The device reports either its position or the geolocation error it hit.
    """
    location = resolve_location_settings(db, payload.organization_id)

    async def device_position():
        if payload.position is None:
            raise GeolocationError(
                payload.geolocation_error or "position unavailable",
                permission_denied=payload.geolocation_error == "permission_denied",
            )
        return payload.position

    return await validate_location(location, device_position, geocoder)
