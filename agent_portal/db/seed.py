"""Demo data for local development (enabled with SEED_DEMO_DATA=true).

Seeding only happens into an empty ``agents`` table, so restarts are safe.
"""

from __future__ import annotations

import logging
from datetime import date

from agent_portal.db.base import Database
from agent_portal.repositories.agent import AgentRepository
from agent_portal.repositories.inspection import InspectionRepository

logger = logging.getLogger(__name__)

DEMO_AGENTS = [
    {
        "id": "a1b2c3d4-e5f6-4a5b-8c9d-0e1f2a3b4c5d",
        "full_name": "Sarah Johnson",
        "email": "sarah.johnson@realty.com",
        "phone": "(555) 123-4567",
        "brokerage_name": "Premier Realty Group",
        "license_number": "RE-2024-001",
        "address": "123 Main Street, Suite 100, New York, NY 10001",
        "status": "active",
    },
    {
        "id": "b2c3d4e5-f6a7-5b6c-9d0e-1f2a3b4c5d6e",
        "full_name": "Michael Chen",
        "email": "michael.chen@homefinders.com",
        "phone": "(555) 234-5678",
        "brokerage_name": "HomeFinders Inc.",
        "license_number": "RE-2024-002",
        "address": "456 Oak Avenue, Los Angeles, CA 90001",
        "status": "active",
    },
    {
        "id": "d4e5f6a7-b8c9-7d8e-1f2a-3b4c5d6e7f8a",
        "full_name": "David Thompson",
        "email": "david.thompson@cityproperties.com",
        "phone": "(555) 456-7890",
        "brokerage_name": "City Properties LLC",
        "license_number": "RE-2024-004",
        "address": "321 Urban Way, Chicago, IL 60601",
        "status": "active",
    },
    {
        "id": "e5f6a7b8-c9d0-8e9f-2a3b-4c5d6e7f8a9b",
        "full_name": "Jennifer Williams",
        "email": "jennifer.williams@coastalrealty.com",
        "phone": "(555) 567-8901",
        "brokerage_name": "Coastal Realty Partners",
        "license_number": "RE-2024-005",
        "address": "654 Beach Boulevard, San Diego, CA 92101",
        "status": "inactive",
    },
]

DEMO_INSPECTIONS = [
    {
        "agent_id": "a1b2c3d4-e5f6-4a5b-8c9d-0e1f2a3b4c5d",
        "inspection_date": date(2026, 1, 15),
        "property_address": "100 Park Avenue, Apt 5A, New York, NY 10017",
        "status": "scheduled",
        "inspector_name": "Robert Martinez",
        "notes": "Pre-purchase inspection for luxury condo",
    },
    {
        "agent_id": "a1b2c3d4-e5f6-4a5b-8c9d-0e1f2a3b4c5d",
        "inspection_date": date(2025, 12, 20),
        "property_address": "250 West 57th Street, Unit 12B, New York, NY 10019",
        "status": "completed",
        "inspector_name": "Lisa Anderson",
        "notes": "Inspection completed. Minor repairs needed.",
    },
    {
        "agent_id": "d4e5f6a7-b8c9-7d8e-1f2a-3b4c5d6e7f8a",
        "inspection_date": date(2026, 2, 1),
        "property_address": "333 North Michigan Avenue, Chicago, IL 60601",
        "status": "scheduled",
        "inspector_name": "Thomas Wright",
        "notes": "Commercial property inspection",
    },
]


async def seed_demo_data(database: Database) -> bool:
    """Insert demo agents and inspections. Returns False if data already exists."""
    async with database.session_factory() as session:
        agents = AgentRepository(session)
        if await agents.count() > 0:
            return False

        for row in DEMO_AGENTS:
            await agents.create(**row)
        inspections = InspectionRepository(session)
        for row in DEMO_INSPECTIONS:
            await inspections.create(**row)
        await session.commit()

    logger.info(
        "Seeded %d demo agents and %d inspections", len(DEMO_AGENTS), len(DEMO_INSPECTIONS)
    )
    return True
