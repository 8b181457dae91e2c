import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_DB", "true")
os.environ.setdefault("RATE_LIMIT", "10000/minute")
os.environ.setdefault("TZ_DEFAULT", "America/Sao_Paulo")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ponto.db import Base, get_db
from ponto.models import models  # noqa: F401

from .factories import FakeGeocoder


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)()
    yield session
    session.close()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def client(db, geocoder):
    from ponto.main import app
    from ponto.routes.location import get_geocoder

    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
