"""
Seed an organization's holiday calendar with the state and municipal holidays
of its registered address.

Usage:
  python scripts/seed_holidays.py <organization_id> <year>

This script is idempotent: holidays are matched on (organization, date, name).
"""
import sys
import os
import uuid

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ponto.db import SessionLocal, Base, engine
from ponto.models.models import Holiday, LocationSettings
from ponto.services.holidays import holidays_for_location


def ensure_holiday(session, organization_id: uuid.UUID, row) -> bool:
    existing = session.query(Holiday).filter(
        Holiday.organization_id == organization_id,
        Holiday.date == row.date,
        Holiday.name == row.name,
    ).first()
    if existing:
        return False
    session.add(Holiday(
        organization_id=organization_id,
        date=row.date,
        name=row.name,
        type=row.type,
        state_code=row.state_code,
        city_name=row.city_name,
        is_custom=False,
    ))
    session.flush()
    return True


def seed_holidays(organization_id: uuid.UUID, year: int) -> int:
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        location = session.query(LocationSettings).filter(
            LocationSettings.organization_id == organization_id
        ).first()
        if not location:
            print(f"[SKIP] No location settings for organization {organization_id}")
            return 0

        created = 0
        for row in holidays_for_location(location.address_state, location.address_city, year):
            if ensure_holiday(session, organization_id, row):
                created += 1
                print(f"[CREATE] {row.date.isoformat()} {row.name}")
        session.commit()
        print(f"[OK] {created} holiday(s) created")
        return created
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    seed_holidays(uuid.UUID(sys.argv[1]), int(sys.argv[2]))
