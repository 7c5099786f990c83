"""
Pytest configuration & fixtures for the druginfo backend tests.

Key design decisions:
  - Uses sqlite:///:memory: for speed and isolation; every test gets a
    brand-new application and therefore an empty database.
  - Low bcrypt work factor so hashing does not dominate test time.
"""

import os
import sys

import pytest

# ── 1. Ensure backend package is importable ──
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# ── 2. Set test environment BEFORE anything else ──
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["FLASK_SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "testing"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

# ── 3. NOW safe to import application modules ──
from druginfo.main import create_app
from druginfo.database import db as _db


# ═══════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════

@pytest.fixture
def app():
    """Fresh application with an empty in-memory database."""
    application = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "MAX_PHOTO_BYTES": 1024,
    })
    yield application
    with application.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client with database ready."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def registered_user(client):
    """Register alice/a@x.com/pw1 and return the request payload."""
    payload = {"username": "alice", "email": "a@x.com", "password": "pw1"}
    resp = client.post("/register-user", json=payload)
    assert resp.status_code == 201
    return payload


@pytest.fixture
def uploaded_drug(client):
    payload = {
        "drugName": "Aspirin",
        "description": "Nonsteroidal anti-inflammatory drug.",
        "uses": ["Pain relief", "Fever"],
        "indications": ["Headache"],
        "sideEffects": ["Stomach upset"],
        "warnings": ["Bleeding risk"],
    }
    resp = client.post("/upload", json=payload)
    assert resp.status_code == 201
    return payload
