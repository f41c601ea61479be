"""Shared fixtures: an in-memory store and a TestClient wired to it."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from bisbis.database import get_store
from bisbis.main import app
from tests.fakes import InMemoryStore

NOODLES = {"id": "1", "name": "Noodles", "description": "Amazing one", "price": 59.0}
SHAKSHUKA = {"id": "2", "name": "Shakshuka", "description": "Eggs in tomato", "price": 34.5}


@pytest.fixture
def store():
    """A fresh in-memory store for each test."""
    return InMemoryStore()


@pytest.fixture
def taizu(store):
    """Id of a seeded restaurant with two dishes and next dish id 3."""
    return store.seed_restaurant(
        name="Taizu",
        cuisines=["Asian", "Mexican", "Indian"],
        dishes=[dict(NOODLES), dict(SHAKSHUKA)],
        next_dish_id=3,
    )


@pytest.fixture
def client(store):
    """TestClient whose requests hit ``store`` instead of PostgreSQL."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
