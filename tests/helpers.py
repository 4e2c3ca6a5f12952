"""Test helpers shared across modules: login shortcuts and direct-DB factories."""

from __future__ import annotations

from datetime import date
from typing import Any

import httpx
from sqlalchemy import select

from agent_portal.db.base import Database
from agent_portal.domain.audit import AuditLog
from agent_portal.repositories.agent import AgentRepository
from agent_portal.repositories.inspection import InspectionRepository

ADMIN_PASSWORD = "admin-test-pw"
AGENT_PASSCODE = "agent-test-pw"

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


async def login_admin(client: httpx.AsyncClient) -> httpx.Response:
    resp = await client.post(
        "/api/v1/auth/login", json={"role": "admin", "password": ADMIN_PASSWORD}
    )
    assert resp.status_code == 200, resp.text
    return resp


async def login_agent(client: httpx.AsyncClient, email: str) -> httpx.Response:
    resp = await client.post(
        "/api/v1/auth/login",
        json={"role": "agent", "agentId": email, "passcode": AGENT_PASSCODE},
    )
    assert resp.status_code == 200, resp.text
    return resp


async def make_agent(database: Database, **overrides: Any):
    fields = {
        "full_name": "Sarah Johnson",
        "email": "sarah@example.com",
        "phone": "555-0100",
        "brokerage_name": "Premier Realty",
    }
    fields.update(overrides)
    async with database.session_factory() as session:
        agent = await AgentRepository(session).create(**fields)
        await session.commit()
        return agent


async def make_inspection(database: Database, agent_id: str, **overrides: Any):
    fields = {
        "agent_id": agent_id,
        "inspection_date": date(2026, 3, 1),
        "property_address": "1 Main St",
        "inspector_name": "Robert Martinez",
    }
    fields.update(overrides)
    async with database.session_factory() as session:
        inspection = await InspectionRepository(session).create(**fields)
        await session.commit()
        return inspection


async def audit_entries(database: Database, **filters: Any) -> list[AuditLog]:
    async with database.session_factory() as session:
        q = select(AuditLog)
        for name, value in filters.items():
            q = q.where(getattr(AuditLog, name) == value)
        return list((await session.execute(q)).scalars().all())
