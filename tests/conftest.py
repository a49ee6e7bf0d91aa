import os

# keep the app's own engine off the working directory
os.environ.setdefault("RR_DATABASE_URL", "sqlite://")

from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from readyride.database import Base, get_db
from readyride.distance import DistanceMatrixClient
from readyride.main import app
from readyride.quotes import get_matrix_client, get_now

# Sunday afternoon in the service area
NOW = datetime(2026, 10, 18, 14, 0)

engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def matrix_payload(*elements):
    """Google Distance Matrix body with one row of (meters, seconds) elements."""
    return {
        "status": "OK",
        "rows": [
            {
                "elements": [
                    {
                        "status": "OK",
                        "distance": {"value": meters, "text": f"{meters / 1000:.1f} km"},
                        "duration": {"value": seconds, "text": f"{round(seconds / 60)} mins"},
                    }
                    for meters, seconds in elements
                ]
            }
        ],
    }


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def upstream_calls():
    return []


@pytest.fixture
def matrix_client(upstream_calls):
    def handler(request: httpx.Request) -> httpx.Response:
        upstream_calls.append(request)
        count = len(request.url.params["destinations"].split("|"))
        return httpx.Response(200, json=matrix_payload(*[(5000, 900)] * count))

    return DistanceMatrixClient(api_key="test-key", transport=httpx.MockTransport(handler))


@pytest.fixture
def client(db_session, matrix_client):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_now] = lambda: NOW
    app.dependency_overrides[get_matrix_client] = lambda: matrix_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
