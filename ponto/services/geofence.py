"""
Geofence validation service.
Uses Haversine formula to calculate distance between points and classifies
a punch location against the organization's location mode.
"""
import asyncio
import math
from typing import Awaitable, Callable, Optional, Protocol
import structlog

from ..config import settings
from ..schemas.location import (
    GeoPoint,
    GeofenceDecision,
    GeofenceMode,
    LocationSettings,
    LocationValidationResult,
)

logger = structlog.get_logger(__name__)

# Earth radius in meters; configured radii assume this value
EARTH_RADIUS_M = 6371000
EXACT_TOLERANCE_M = 50
DEFAULT_ALLOWED_RADIUS_M = 100

MSG_SETTINGS_MISSING = "Configurações de localização não encontradas. Permitindo registro."
MSG_DISABLED = "Localização desativada. Registro permitido."
MSG_LOG_ONLY_NO_POSITION = "Não foi possível obter localização, mas registro permitido."
MSG_LOGGED = "Localização registrada."
MSG_PERMISSION_DENIED = "Permissão de localização negada. Ative a localização para registrar o ponto."
MSG_POSITION_UNAVAILABLE = "Não foi possível obter sua localização. Verifique as permissões do navegador."
MSG_ADDRESS_MISSING = "Endereço da empresa não configurado. Contate o administrador."
MSG_GEOCODE_MISS = "Não foi possível localizar o endereço da empresa. Contate o administrador."
MSG_ALLOWED = "Registro permitido."


class GeolocationError(Exception):
    """Device position could not be obtained."""

    def __init__(self, message: str = "", permission_denied: bool = False):
        super().__init__(message)
        self.permission_denied = permission_denied


class Geocoder(Protocol):
    async def geocode(self, address: str) -> Optional[GeoPoint]:
        ...


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters between two points (haversine, spherical Earth)."""
    phi_a = math.radians(a.latitude)
    phi_b = math.radians(b.latitude)
    d_phi = phi_b - phi_a
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi_a) * math.cos(phi_b) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def _rounded(distance: float) -> int:
    # Half-up, as shown to the user
    return int(math.floor(distance + 0.5))


def classify(
    distance: Optional[float],
    mode: str,
    allowed_radius: Optional[int] = None,
) -> GeofenceDecision:
    """
    Classify a distance against the location mode.

    Args:
        distance: Meters from the company address (None when not measured)
        mode: disabled|log_only|require_exact|require_radius
        allowed_radius: Admin-configured radius for require_radius (default 100)

    Returns:
        GeofenceDecision; boundary distances are valid
    """
    if mode == GeofenceMode.DISABLED.value:
        return GeofenceDecision(valid=True, message=MSG_DISABLED)

    if mode == GeofenceMode.LOG_ONLY.value:
        return GeofenceDecision(valid=True, message=MSG_LOGGED, distance_meters=distance)

    if mode in (GeofenceMode.REQUIRE_EXACT.value, GeofenceMode.REQUIRE_RADIUS.value):
        if distance is None:
            return GeofenceDecision(valid=False, message=MSG_POSITION_UNAVAILABLE)
        if mode == GeofenceMode.REQUIRE_EXACT.value:
            if distance <= EXACT_TOLERANCE_M:
                message = f"Localização validada. Você está a {_rounded(distance)}m do endereço."
                return GeofenceDecision(valid=True, message=message, distance_meters=distance)
            limit = EXACT_TOLERANCE_M
        else:
            limit = allowed_radius or DEFAULT_ALLOWED_RADIUS_M
            if distance <= limit:
                message = (
                    f"Localização validada. Você está a {_rounded(distance)}m do endereço "
                    f"(limite: {limit}m)."
                )
                return GeofenceDecision(valid=True, message=message, distance_meters=distance)
        message = (
            f"Você está a {_rounded(distance)}m do endereço da empresa. "
            f"Distância máxima permitida: {limit}m."
        )
        return GeofenceDecision(valid=False, message=message, distance_meters=distance)

    return GeofenceDecision(valid=True, message=MSG_ALLOWED, distance_meters=distance)


def compose_address(location: LocationSettings) -> Optional[str]:
    """Street, number, neighborhood, city, state, Brasil; None when no part is set."""
    parts = [
        location.address_street,
        location.address_number,
        location.address_neighborhood,
        location.address_city,
        location.address_state,
    ]
    parts = [p for p in parts if p]
    if not parts:
        return None
    return ", ".join(parts + ["Brasil"])


async def resolve_company_point(location: LocationSettings, geocoder: Geocoder) -> Optional[GeoPoint]:
    """Stored coordinates first, otherwise geocode the composed address."""
    if location.company_latitude is not None and location.company_longitude is not None:
        return GeoPoint(latitude=location.company_latitude, longitude=location.company_longitude)
    address = compose_address(location)
    if address is None:
        return None
    return await geocoder.geocode(address)


async def validate_location(
    location: Optional[LocationSettings],
    get_position: Callable[[], Awaitable[GeoPoint]],
    geocoder: Geocoder,
    timeout_seconds: Optional[float] = None,
) -> LocationValidationResult:
    """
    Validate a punch location.

    Args:
        location: Organization location settings (None when not configured)
        get_position: Coroutine factory returning the device position; raises
            GeolocationError when it cannot be obtained
        geocoder: Address geocoder used when no coordinates are stored
        timeout_seconds: Bounded wait for the device position

    Returns:
        LocationValidationResult
    """
    if location is None:
        return LocationValidationResult(is_valid=True, message=MSG_SETTINGS_MISSING)

    mode = location.location_mode
    if mode == GeofenceMode.DISABLED.value:
        return LocationValidationResult(is_valid=True, message=MSG_DISABLED)

    if timeout_seconds is None:
        timeout_seconds = settings.geolocation_timeout_seconds
    try:
        position = await asyncio.wait_for(get_position(), timeout=timeout_seconds)
    except (GeolocationError, asyncio.TimeoutError) as e:
        permission_denied = isinstance(e, GeolocationError) and e.permission_denied
        logger.warning("geolocation_failed", mode=mode, permission_denied=permission_denied, error=str(e))
        if mode == GeofenceMode.LOG_ONLY.value:
            return LocationValidationResult(is_valid=True, message=MSG_LOG_ONLY_NO_POSITION)
        message = MSG_PERMISSION_DENIED if permission_denied else MSG_POSITION_UNAVAILABLE
        return LocationValidationResult(is_valid=False, message=message)

    if mode == GeofenceMode.LOG_ONLY.value:
        # Stored coordinates only; log_only never geocodes
        distance = None
        if location.company_latitude is not None and location.company_longitude is not None:
            company = GeoPoint(latitude=location.company_latitude, longitude=location.company_longitude)
            distance = distance_meters(position, company)
        return LocationValidationResult(
            is_valid=True,
            message=MSG_LOGGED,
            latitude=position.latitude,
            longitude=position.longitude,
            distance_meters=distance,
        )

    if mode not in (GeofenceMode.REQUIRE_EXACT.value, GeofenceMode.REQUIRE_RADIUS.value):
        return LocationValidationResult(
            is_valid=True,
            message=MSG_ALLOWED,
            latitude=position.latitude,
            longitude=position.longitude,
        )

    company = await resolve_company_point(location, geocoder)
    if company is None:
        missing_address = compose_address(location) is None
        return LocationValidationResult(
            is_valid=False,
            message=MSG_ADDRESS_MISSING if missing_address else MSG_GEOCODE_MISS,
            latitude=position.latitude,
            longitude=position.longitude,
        )

    distance = distance_meters(position, company)
    decision = classify(distance, mode, location.allowed_radius_meters)
    return LocationValidationResult(
        is_valid=decision.valid,
        message=decision.message,
        latitude=position.latitude,
        longitude=position.longitude,
        distance_meters=distance,
    )
