"""Shared fixtures: a fresh in-memory store per test and an API client bound to it."""

import itertools
import os

# Must be set before app.config builds its settings singleton
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEBUG"] = "false"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.adapters.memory_adapter import InMemoryAdapter
from app.dependencies import get_db
from app.domain.models import GeoPoint, Offering
from main import app

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
SOFIA = GeoPoint(lat=42.70, lng=23.32)


def make_offering(n: int, **overrides) -> Offering:
    """Offering number ``n``; created_at grows with ``n``."""
    data = {
        "id": str(n),
        "label": f"Task {n}",
        "description": None,
        "location": SOFIA,
        "payment_per_hour": 10,
        "max_hours": 1,
        "applications_count": 0,
        "requestor_id": "owner",
        "created_at": BASE_TIME + timedelta(minutes=n),
    }
    data.update(overrides)
    return Offering(**data)


@pytest.fixture
def five_offerings() -> list[Offering]:
    """Pay 10, 12, 15, 18, 20 / hours 1, 4, 2, 5, 3 / applications 0, 0, 3, 0, 1."""
    pays = [10, 12, 15, 18, 20]
    hours = [1, 4, 2, 5, 3]
    applications = [0, 0, 3, 0, 1]
    return [
        make_offering(
            i + 1,
            payment_per_hour=pays[i],
            max_hours=hours[i],
            applications_count=applications[i],
        )
        for i in range(5)
    ]


@pytest.fixture
def db() -> InMemoryAdapter:
    return InMemoryAdapter()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a fresh user; returns (user json, auth headers)."""
    counter = itertools.count(1)

    def _register(username: str | None = None, password: str = "secret123"):
        username = username or f"user{next(counter)}"
        resp = client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "password": password,
            },
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
def offering_body():
    def _body(**overrides):
        body = {
            "label": "Mow my yard",
            "description": "Front and back lawn",
            "location": {"lat": 42.6945, "lng": 23.3228},
            "paymentPerHour": 15,
            "maxHours": 2,
        }
        body.update(overrides)
        return body

    return _body
