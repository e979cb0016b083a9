"""Fixtures for API tests: a temp content file, temp upload dir and a TestClient."""

import json

import pytest
from fastapi.testclient import TestClient

from api.features.canvas.canvas_session_store import clear_sessions
from api.platform.auth import ADMIN_SESSION_COOKIE

ADMIN_PASSWORD = "open-sesame"
ADMIN_SECRET = "test-secret"


def _document():
    return {
        "hero": {"name": "Ada Example", "title": "Platform Engineer", "tagline": "", "ctaText": "Go"},
        "strategy": {
            "headline": "Strategy",
            "description": "",
            "points": ["Learn", "Ship", "Measure", "Share", "Rest"],
        },
        "timeline": [
            {
                "id": f"m{i}",
                "role": f"Role {i}",
                "company": "Acme",
                "dateRange": "2020 - 2021",
                "description": "",
                "phase": "growth",
            }
            for i in range(5)
        ],
        "skills": [],
        "projects": [],
        "lessons": [],
        "futureGoals": {"headline": "Next", "vision": "", "goals": [], "ctaText": "Connect"},
    }


@pytest.fixture
def document():
    return _document()


@pytest.fixture
def content_file(tmp_path, document):
    path = tmp_path / "data" / "content.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(monkeypatch, content_file, upload_dir):
    monkeypatch.setenv("CONTENT_FILE", str(content_file))
    monkeypatch.setenv("UPLOAD_DIR", str(upload_dir))
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("ADMIN_SECRET", ADMIN_SECRET)
    monkeypatch.delenv("APP_ENV", raising=False)

    from api.main import app

    clear_sessions()
    with TestClient(app) as c:
        yield c
    clear_sessions()


@pytest.fixture
def admin_client(client):
    res = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
    assert res.status_code == 200
    return client


@pytest.fixture
def credentials():
    return {"password": ADMIN_PASSWORD, "secret": ADMIN_SECRET, "cookie": ADMIN_SESSION_COOKIE}


@pytest.fixture
def read_document():
    def _read(path):
        return json.loads(path.read_text(encoding="utf-8"))

    return _read
