"""Login, logout, and session endpoints."""

import pytest

from tests.helpers import (
    ADMIN_PASSWORD,
    AGENT_PASSCODE,
    audit_entries,
    login_admin,
    login_agent,
    make_agent,
)

LOGIN = "/api/v1/auth/login"


async def test_admin_login(client, database):
    resp = await client.post(LOGIN, json={"role": "admin", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "user": {"role": "admin"}}

    [entry] = await audit_entries(database, action="LOGIN")
    assert entry.actor_role == "admin"
    assert entry.entity_type == "session"


async def test_admin_wrong_password(client, database):
    resp = await client.post(LOGIN, json={"role": "admin", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": {"code": "UNAUTHORIZED", "message": "Invalid password"}}
    assert "set-cookie" not in resp.headers
    assert await audit_entries(database, action="LOGIN") == []


async def test_admin_missing_password(client):
    resp = await client.post(LOGIN, json={"role": "admin"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Password is required for admin login"


async def test_agent_login_by_email_case_insensitive(client, database):
    agent = await make_agent(database, email="sarah.johnson@realty.com")
    resp = await client.post(
        LOGIN,
        json={"role": "agent", "agentId": "Sarah.Johnson@REALTY.com", "passcode": AGENT_PASSCODE},
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "user": {"role": "agent", "agentId": agent.id, "agentName": "Sarah Johnson"},
    }

    [entry] = await audit_entries(database, action="LOGIN")
    assert entry.actor_role == "agent"
    assert entry.actor_id == agent.id
    assert entry.entity_id == agent.id


async def test_agent_unknown_email(client):
    resp = await client.post(
        LOGIN, json={"role": "agent", "agentId": "ghost@example.com", "passcode": AGENT_PASSCODE}
    )
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Agent not found. Please check your email address."


async def test_agent_wrong_passcode(client, database):
    await make_agent(database)
    resp = await client.post(
        LOGIN, json={"role": "agent", "agentId": "sarah@example.com", "passcode": "wrong"}
    )
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid passcode"


async def test_agent_missing_credentials(client):
    resp = await client.post(LOGIN, json={"role": "agent", "agentId": "sarah@example.com"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Email and passcode are required"


@pytest.mark.parametrize(
    "body,message",
    [
        ({}, "Role is required"),
        ({"role": "superuser", "password": "x"}, "Invalid role"),
    ],
)
async def test_bad_role(client, body, message):
    resp = await client.post(LOGIN, json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": {"code": "VALIDATION_ERROR", "message": message}}


async def test_session_reflects_login_and_logout(client, database):
    agent = await make_agent(database)

    resp = await client.get("/api/v1/auth/session")
    assert resp.json() == {"isAuthenticated": False}

    await login_agent(client, agent.email)
    resp = await client.get("/api/v1/auth/session")
    assert resp.json() == {
        "isAuthenticated": True,
        "user": {"role": "agent", "agentId": agent.id, "agentName": agent.full_name},
    }

    resp = await client.post("/api/v1/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert "Max-Age=0" in resp.headers["set-cookie"]

    resp = await client.get("/api/v1/auth/session")
    assert resp.json() == {"isAuthenticated": False}

    [entry] = await audit_entries(database, action="LOGOUT")
    assert entry.actor_role == "agent"
    assert entry.actor_id == agent.id


async def test_logout_without_session_is_harmless(client, database):
    resp = await client.post("/api/v1/auth/logout")
    assert resp.status_code == 200
    assert await audit_entries(database, action="LOGOUT") == []


async def test_new_login_replaces_session(client, database):
    agent = await make_agent(database)
    await login_admin(client)
    await login_agent(client, agent.email)
    resp = await client.get("/api/v1/auth/session")
    assert resp.json()["user"]["role"] == "agent"


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
