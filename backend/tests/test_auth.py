"""Registration, login and token handling."""
import asyncio
from datetime import datetime, timedelta, timezone

from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from conftest import API, auth_headers, register

from portfolio.auth.deps import get_principal
from portfolio.auth.jwt import create_access_token, decode_token, get_password_hash, verify_password
from portfolio.config import get_settings

# =============================================================================
# Password hashing
# =============================================================================


class TestPasswordHashing:

    def test_hash_verifies(self):
        hashed = get_password_hash("correct horse")
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)

    def test_wrong_password_rejected(self):
        hashed = get_password_hash("correct horse")
        assert not verify_password("battery staple", hashed)


# =============================================================================
# Register / login
# =============================================================================


class TestRegister:

    def test_register_returns_token_and_user(self, client):
        body = register(client, "Carol@Example.com", "Initech", name="Carol")
        assert body["token"]
        assert body["token_type"] == "bearer"
        assert body["user"]["email"] == "carol@example.com"
        assert body["user"]["role"] == "user"
        claims = decode_token(body["token"])
        assert claims["sub"] == body["user"]["id"]
        assert claims["company_id"] == body["user"]["company_id"]

    def test_duplicate_email_rejected(self, client):
        register(client, "dup@example.com")
        resp = client.post(
            f"{API}/auth/register",
            json={"name": "X", "email": "DUP@example.com", "password": "pw", "company_name": "Other"},
        )
        assert resp.status_code == 400

    def test_missing_fields_rejected(self, client):
        resp = client.post(f"{API}/auth/register", json={"email": "a@b.com"})
        assert resp.status_code == 400

    def test_invalid_email_rejected(self, client):
        resp = client.post(
            f"{API}/auth/register",
            json={"name": "X", "email": "not-an-email", "password": "pw", "company_name": "C"},
        )
        assert resp.status_code == 400


class TestLogin:

    def test_login_round_trip(self, client):
        registered = register(client, "erin@example.com", "Hooli", password="pw-123")
        resp = client.post(f"{API}/auth/login", json={"email": "ERIN@example.com", "password": "pw-123"})
        assert resp.status_code == 200
        body = resp.json()
        assert decode_token(body["token"])["company_id"] == registered["user"]["company_id"]
        assert body["user"]["id"] == registered["user"]["id"]

    def test_wrong_password(self, client):
        register(client, "frank@example.com", password="right")
        resp = client.post(f"{API}/auth/login", json={"email": "frank@example.com", "password": "wrong"})
        assert resp.status_code == 401

    def test_unknown_email(self, client):
        resp = client.post(f"{API}/auth/login", json={"email": "ghost@example.com", "password": "x"})
        assert resp.status_code == 401


# =============================================================================
# Bearer token checks
# =============================================================================


class TestTokens:

    def test_me(self, client):
        body = register(client, "gina@example.com", "Umbrella")
        resp = client.get(f"{API}/auth/me", headers=auth_headers(body["token"]))
        assert resp.status_code == 200
        me = resp.json()
        assert me["company_name"] == "Umbrella"
        assert me["company_id"] == body["user"]["company_id"]

    def test_missing_token(self, client):
        assert client.get(f"{API}/projects").status_code == 401

    def test_garbage_token(self, client):
        resp = client.get(f"{API}/projects", headers=auth_headers("not.a.jwt"))
        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"

    def test_expired_token(self, client):
        body = register(client, "hank@example.com")
        settings = get_settings()
        token = jwt.encode(
            {
                "sub": body["user"]["id"],
                "company_id": body["user"]["company_id"],
                "role": "user",
                "exp": datetime.now(timezone.utc) - timedelta(seconds=10),
            },
            settings.secret_key,
            algorithm=settings.algorithm,
        )
        assert client.get(f"{API}/projects", headers=auth_headers(token)).status_code == 401

    def test_token_without_company_claim(self, client):
        token = create_access_token({"sub": "someone"})
        assert client.get(f"{API}/projects", headers=auth_headers(token)).status_code == 401

    def test_health_needs_no_token(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_principal_carries_role_claim(self, client):
        body = register(client, "ivy@example.com")
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=body["token"])
        principal = asyncio.run(get_principal(credentials))
        assert principal.user_id == body["user"]["id"]
        assert principal.company_id == body["user"]["company_id"]
        assert principal.role == "user"
