"""Shared fixtures: a fresh SQLite database and app client per test."""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["TENANT_MASK_FORBIDDEN"] = "false"

from datetime import date  # noqa: E402
from itertools import count  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from portfolio.config import get_settings  # noqa: E402

API = "/api"

_codes = count(1)


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'portfolio.db'}")
    get_settings.cache_clear()
    from portfolio.main import app

    with TestClient(app) as c:
        yield c
    get_settings.cache_clear()


@pytest.fixture
def masked_client(monkeypatch, client):
    """Client with cross-tenant access answered as 404."""
    monkeypatch.setenv("TENANT_MASK_FORBIDDEN", "true")
    get_settings.cache_clear()
    yield client
    get_settings.cache_clear()


def register(client, email, company_name="Acme", password="s3cret-pass", name="Alice"):
    resp = client.post(
        f"{API}/auth/register",
        json={"name": name, "email": email, "password": password, "company_name": company_name},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


class Tenant:
    """A registered company with its first user's token."""

    def __init__(self, client, email, company_name):
        body = register(client, email, company_name)
        self.client = client
        self.token = body["token"]
        self.user = body["user"]
        self.company_id = body["user"]["company_id"]
        self.headers = auth_headers(self.token)

    def get(self, path, **kwargs):
        return self.client.get(f"{API}{path}", headers=self.headers, **kwargs)

    def post(self, path, json, **kwargs):
        return self.client.post(f"{API}{path}", json=json, headers=self.headers, **kwargs)

    def put(self, path, json, **kwargs):
        return self.client.put(f"{API}{path}", json=json, headers=self.headers, **kwargs)

    def delete(self, path, **kwargs):
        return self.client.delete(f"{API}{path}", headers=self.headers, **kwargs)

    def create(self, path, json):
        resp = self.post(path, json)
        assert resp.status_code == 201, resp.text
        return resp.json()

    def create_project(self, **overrides):
        data = {
            "name": "Apollo",
            "code": f"APL{next(_codes)}",
            "start_date": date(2025, 1, 1).isoformat(),
            "end_date": date(2025, 12, 31).isoformat(),
            "currency": "GBP",
            "sprint_length_days": 14,
            "budget": "10000",
        }
        data.update(overrides)
        return self.create("/projects", data)

    def create_resource(self, **overrides):
        data = {
            "name": "Dana",
            "role": "Developer",
            "day_rate": "100",
            "skill_tags": ["python"],
            "contact": "dana@example.com",
        }
        data.update(overrides)
        return self.create("/resources", data)


@pytest.fixture
def tenant_a(client):
    return Tenant(client, "alice@acme.example.com", "Acme")


@pytest.fixture
def tenant_b(client):
    return Tenant(client, "bob@globex.example.com", "Globex")
