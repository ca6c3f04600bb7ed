import os
import pathlib
import shutil
import sys
import tempfile
import uuid

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Settings are read at import time, so point them at a scratch directory first
WORK_DIR = pathlib.Path(tempfile.mkdtemp(prefix="hackhub-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{WORK_DIR / 'test.db'}"
os.environ["PUBLIC_DIR"] = str(WORK_DIR / "public")
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient
from sqlalchemy import insert

from hackhub import models
from hackhub.auth import create_access_token
from hackhub.config import settings
from hackhub.database import Base, engine
from hackhub.main import app


@pytest.fixture
def client():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    shutil.rmtree(settings.certificates_path, ignore_errors=True)
    settings.certificates_path.mkdir(parents=True, exist_ok=True)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(client):
    """Insert an account and return it with ready-made auth headers"""
    def _make(role="participant", name=None, email=None):
        user_id = str(uuid.uuid4())
        name = name or f"{role.title()} {user_id[:4]}"
        email = email or f"{role}-{user_id[:8]}@hackhub.dev"
        with engine.begin() as conn:
            conn.execute(
                insert(models.User.__table__).values(
                    id=user_id, name=name, email=email, password_hash="x", role=role
                )
            )
        token = create_access_token({"user_id": user_id, "email": email, "role": role})
        return {
            "id": user_id,
            "name": name,
            "email": email,
            "role": role,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }
    return _make


EVENT_PAYLOAD = {
    "title": "Spring Hack",
    "description": "Forty-eight hours of building",
    "startDate": "2026-03-01T09:00:00Z",
    "endDate": "2026-03-03T18:00:00Z",
    "rules": ["Be kind"],
    "tracks": ["AI", "Web"],
}


@pytest.fixture
def make_event(client):
    def _make(owner, **overrides):
        payload = {**EVENT_PAYLOAD, **overrides}
        resp = client.post("/api/events", json=payload, headers=owner["headers"])
        assert resp.status_code == 201, resp.text
        return resp.json()["event"]
    return _make
