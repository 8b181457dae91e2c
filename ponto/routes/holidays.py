"""
Holiday template API routes.
"""
from typing import Optional
from fastapi import APIRouter, Query

from ..services.holidays import holidays_for_location

router = APIRouter(prefix="/holidays", tags=["holidays"])


@router.get("/templates")
def holiday_templates(
    year: int = Query(..., ge=2000, le=2100),
    state: Optional[str] = None,
    city: Optional[str] = None,
):
    """State and municipal holidays for a company location."""
    return [
        {
            "name": row.name,
            "date": row.date.isoformat(),
            "type": row.type,
            "state_code": row.state_code,
            "city_name": row.city_name,
            "is_custom": row.is_custom,
        }
        for row in holidays_for_location(state, city, year)
    ]
