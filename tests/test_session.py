"""Session cookie codec and middleware behaviour."""

import jwt
import pytest

from agent_portal.core.session import SESSION_VERSION, SessionStore
from agent_portal.schemas.auth import Role, SessionUser
from tests.helpers import login_admin

SECRET = "unit-test-secret"


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(SECRET, max_age_seconds=3600)


def test_round_trip_admin(store):
    token = store.encode(SessionUser(role=Role.ADMIN))
    user = store.decode(token)
    assert user is not None
    assert user.role is Role.ADMIN
    assert user.agent_id is None


def test_round_trip_agent_keeps_identity(store):
    token = store.encode(SessionUser(role=Role.AGENT, agent_id="a-1", agent_name="Sarah"))
    user = store.decode(token)
    assert user == SessionUser(role=Role.AGENT, agent_id="a-1", agent_name="Sarah")


def test_claims_are_versioned(store):
    token = store.encode(SessionUser(role=Role.ADMIN))
    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["v"] == SESSION_VERSION
    assert claims["role"] == "admin"
    assert claims["exp"] > claims["iat"]


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_unreadable_tokens_decode_to_none(store, token):
    assert store.decode(token) is None


def test_tampered_token_rejected(store):
    token = store.encode(SessionUser(role=Role.AGENT, agent_id="a-1"))
    header, payload, signature = token.split(".")
    forged = jwt.encode({"v": 1, "role": "admin"}, "other", algorithm="HS256").split(".")[1]
    assert store.decode(f"{header}.{forged}.{signature}") is None


def test_wrong_secret_rejected(store):
    token = SessionStore("another-secret").encode(SessionUser(role=Role.ADMIN))
    assert store.decode(token) is None


def test_expired_token_rejected(store):
    token = SessionStore(SECRET, max_age_seconds=-10).encode(SessionUser(role=Role.ADMIN))
    assert store.decode(token) is None


def test_unknown_version_rejected(store):
    token = jwt.encode({"v": 99, "role": "admin"}, SECRET, algorithm="HS256")
    assert store.decode(token) is None


def test_agent_claims_without_agent_id_rejected(store):
    token = jwt.encode({"v": SESSION_VERSION, "role": "agent"}, SECRET, algorithm="HS256")
    assert store.decode(token) is None


def test_unknown_role_rejected(store):
    token = jwt.encode({"v": SESSION_VERSION, "role": "root"}, SECRET, algorithm="HS256")
    assert store.decode(token) is None


async def test_login_sets_httponly_cookie(client, settings):
    resp = await login_admin(client)
    set_cookie = resp.headers["set-cookie"]
    assert set_cookie.startswith(f"{settings.session_cookie_name}=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()
    assert f"Max-Age={7 * 24 * 60 * 60}" in set_cookie
    # Secure only in production
    assert "Secure" not in set_cookie


async def test_invalid_cookie_is_anonymous_and_cleared(client, settings):
    client.cookies.set(settings.session_cookie_name, "not-a-jwt")
    resp = await client.get("/api/v1/auth/session")
    assert resp.status_code == 200
    assert resp.json() == {"isAuthenticated": False}
    set_cookie = resp.headers.get("set-cookie", "")
    assert set_cookie.startswith(f'{settings.session_cookie_name}=""') or "Max-Age=0" in set_cookie


async def test_invalid_cookie_on_protected_route_is_401(client, settings):
    client.cookies.set(settings.session_cookie_name, "not-a-jwt")
    resp = await client.get("/api/v1/agents")
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHORIZED"
