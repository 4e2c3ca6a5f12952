"""Agent endpoints end to end: gating, scoping, audit, and cascade."""

from agent_portal.repositories.agent import AgentRepository
from agent_portal.repositories.audit import AuditLogRepository
from tests.helpers import (
    PDF_BYTES,
    audit_entries,
    login_agent,
    make_agent,
    make_inspection,
)

NEW_AGENT = {
    "fullName": "Michael Chen",
    "email": "michael.chen@homefinders.com",
    "phone": "(555) 234-5678",
    "brokerageName": "HomeFinders Inc.",
    "licenseNumber": "RE-2024-002",
}


async def test_admin_creates_agent(admin_client, database):
    resp = await admin_client.post("/api/v1/agents", json=NEW_AGENT)
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["fullName"] == "Michael Chen"
    assert data["status"] == "active"
    assert data["address"] is None
    assert {"id", "createdAt", "updatedAt"} <= data.keys()

    [entry] = await audit_entries(database, action="CREATE_AGENT")
    assert entry.entity_type == "agent"
    assert entry.entity_id == data["id"]
    assert entry.actor_role == "admin"
    assert entry.details == {"agentName": "Michael Chen", "email": NEW_AGENT["email"]}


async def test_duplicate_email_conflicts(admin_client, database):
    await make_agent(database, email="michael.chen@homefinders.com")
    resp = await admin_client.post("/api/v1/agents", json=NEW_AGENT)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"


async def test_missing_required_fields_is_400(admin_client):
    resp = await admin_client.post("/api/v1/agents", json={"fullName": "No Email"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_bad_status_is_400(admin_client):
    resp = await admin_client.post("/api/v1/agents", json={**NEW_AGENT, "status": "retired"})
    assert resp.status_code == 400


async def test_anonymous_is_401(client):
    assert (await client.get("/api/v1/agents")).status_code == 401
    assert (await client.post("/api/v1/agents", json=NEW_AGENT)).status_code == 401


async def test_admin_lists_with_filters(admin_client, database):
    await make_agent(database)
    await make_agent(
        database, full_name="Jennifer Williams", email="jen@coastal.com", status="inactive"
    )

    resp = await admin_client.get("/api/v1/agents")
    body = resp.json()
    assert body["total"] == 2
    # Newest first
    assert [a["fullName"] for a in body["data"]] == ["Jennifer Williams", "Sarah Johnson"]

    resp = await admin_client.get("/api/v1/agents", params={"status": "inactive"})
    assert [a["fullName"] for a in resp.json()["data"]] == ["Jennifer Williams"]

    resp = await admin_client.get("/api/v1/agents", params={"search": "sarah"})
    assert [a["fullName"] for a in resp.json()["data"]] == ["Sarah Johnson"]


async def test_agent_sees_only_self(client, database):
    me = await make_agent(database)
    other = await make_agent(database, full_name="Michael Chen", email="m@example.com")
    await login_agent(client, me.email)

    resp = await client.get("/api/v1/agents")
    assert resp.status_code == 200
    assert [a["id"] for a in resp.json()["data"]] == [me.id]

    assert (await client.get(f"/api/v1/agents/{me.id}")).status_code == 200

    resp = await client.get(f"/api/v1/agents/{other.id}")
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "FORBIDDEN"


async def test_agent_cannot_mutate(client, database):
    me = await make_agent(database)
    await login_agent(client, me.email)

    assert (await client.post("/api/v1/agents", json=NEW_AGENT)).status_code == 403
    assert (await client.put(f"/api/v1/agents/{me.id}", json={"phone": "1"})).status_code == 403
    assert (await client.delete(f"/api/v1/agents/{me.id}")).status_code == 403


async def test_get_unknown_agent_is_404(admin_client):
    resp = await admin_client.get("/api/v1/agents/nope")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


async def test_partial_update(admin_client, database):
    agent = await make_agent(database, address="1 Main St")
    resp = await admin_client.put(
        f"/api/v1/agents/{agent.id}", json={"phone": "555-9999", "status": "inactive"}
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["phone"] == "555-9999"
    assert data["status"] == "inactive"
    assert data["address"] == "1 Main St"
    assert data["fullName"] == agent.full_name

    [entry] = await audit_entries(database, action="UPDATE_AGENT")
    assert entry.details == {"updatedFields": ["phone", "status"]}


async def test_update_rejects_null_required_field(admin_client, database):
    agent = await make_agent(database)
    resp = await admin_client.put(f"/api/v1/agents/{agent.id}", json={"fullName": None})
    assert resp.status_code == 400


async def test_update_unknown_agent_is_404(admin_client):
    resp = await admin_client.put("/api/v1/agents/nope", json={"phone": "1"})
    assert resp.status_code == 404


async def test_update_to_taken_email_conflicts(admin_client, database):
    agent = await make_agent(database)
    await make_agent(database, email="taken@example.com")
    resp = await admin_client.put(f"/api/v1/agents/{agent.id}", json={"email": "taken@example.com"})
    assert resp.status_code == 409


async def test_delete_cascades_and_removes_blobs(admin_client, database, storage):
    agent = await make_agent(database)
    inspection = await make_inspection(database, agent.id)
    upload = await admin_client.post(
        "/api/v1/documents",
        data={"agentId": agent.id, "inspectionId": inspection.id, "title": "Report"},
        files={"file": ("report.pdf", PDF_BYTES, "application/pdf")},
    )
    assert upload.status_code == 201
    blob = storage.root / upload.json()["data"]["storagePath"]
    assert blob.exists()

    resp = await admin_client.delete(f"/api/v1/agents/{agent.id}")
    assert resp.status_code == 204

    assert (await admin_client.get(f"/api/v1/agents/{agent.id}")).status_code == 404
    assert (await admin_client.get(f"/api/v1/inspections/{inspection.id}")).status_code == 404
    assert (await admin_client.get("/api/v1/documents")).json()["total"] == 0
    assert not blob.exists()

    [entry] = await audit_entries(database, action="DELETE_AGENT")
    assert entry.entity_id == agent.id
    assert entry.details == {"agentName": agent.full_name}


async def test_delete_unknown_agent_is_404(admin_client):
    assert (await admin_client.delete("/api/v1/agents/nope")).status_code == 404


async def test_audit_failure_does_not_fail_the_request(admin_client, database, monkeypatch):
    async def boom(self, **kwargs):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(AuditLogRepository, "create", boom)
    resp = await admin_client.post("/api/v1/agents", json=NEW_AGENT)
    assert resp.status_code == 201

    monkeypatch.undo()
    listing = await admin_client.get("/api/v1/agents")
    assert listing.json()["total"] == 1
    assert await audit_entries(database, action="CREATE_AGENT") == []


async def test_email_is_stored_trimmed(admin_client, client, database):
    resp = await admin_client.post(
        "/api/v1/agents", json={**NEW_AGENT, "email": "  jane@example.com "}
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["email"] == "jane@example.com"

    login = await login_agent(client, "jane@example.com")
    assert login.json()["user"]["agentId"] == resp.json()["data"]["id"]

    resp = await admin_client.post(
        "/api/v1/agents", json={**NEW_AGENT, "email": "jane@example.com  "}
    )
    assert resp.status_code == 409


async def test_update_trims_email(admin_client, database):
    agent = await make_agent(database)
    resp = await admin_client.put(
        f"/api/v1/agents/{agent.id}", json={"email": " sarah.j@example.com "}
    )
    assert resp.json()["data"]["email"] == "sarah.j@example.com"


async def test_concurrent_email_update_conflicts(admin_client, database, monkeypatch):
    agent = await make_agent(database)
    await make_agent(database, email="taken@example.com")

    # Another request claims the email between the pre-check and the write
    async def not_found(self, email):
        return None

    monkeypatch.setattr(AgentRepository, "get_by_email", not_found)
    resp = await admin_client.put(f"/api/v1/agents/{agent.id}", json={"email": "taken@example.com"})
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"
    assert await audit_entries(database, action="UPDATE_AGENT") == []
