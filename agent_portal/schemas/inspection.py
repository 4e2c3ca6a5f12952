"""Inspection Pydantic schemas."""


from datetime import date, datetime

from pydantic import Field, model_validator

from agent_portal.domain.inspection import InspectionStatus
from agent_portal.schemas.agent import AgentSummary
from agent_portal.schemas.common import CamelModel

class InspectionCreate(CamelModel):
    agent_id: str = Field(min_length=1)
    inspection_date: date
    property_address: str = Field(min_length=1)
    inspector_name: str = Field(min_length=1)
    status: InspectionStatus = "scheduled"
    notes: str | None = None

class InspectionUpdate(CamelModel):
    """Partial update; the owning agent cannot be changed."""

    inspection_date: date | None = None
    property_address: str | None = Field(default=None, min_length=1)
    inspector_name: str | None = Field(default=None, min_length=1)
    status: InspectionStatus | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> "InspectionUpdate":
        for name in ("inspection_date", "property_address", "inspector_name", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

class InspectionOut(CamelModel):
    id: str
    agent_id: str
    inspection_date: date
    property_address: str
    status: str
    inspector_name: str
    notes: str | None = None
    created_at: datetime
    agent: AgentSummary | None = None
