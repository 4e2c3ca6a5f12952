"""Agent Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field, field_validator, model_validator

from agent_portal.domain.agent import AgentStatus
from agent_portal.schemas.common import CamelModel


def _strip(value):
    return value.strip() if isinstance(value, str) else value

class AgentCreate(CamelModel):
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str = Field(min_length=1)
    brokerage_name: str = Field(min_length=1)
    license_number: str | None = None
    address: str | None = None
    status: AgentStatus = "active"

    _strip_email = field_validator("email", mode="before")(_strip)

class AgentUpdate(CamelModel):
    """Partial update: only fields present in the request body are written."""

    full_name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=3)
    phone: str | None = Field(default=None, min_length=1)
    brokerage_name: str | None = Field(default=None, min_length=1)
    license_number: str | None = None
    address: str | None = None
    status: AgentStatus | None = None

    _strip_email = field_validator("email", mode="before")(_strip)

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> "AgentUpdate":
        for name in ("full_name", "email", "phone", "brokerage_name", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

class AgentOut(CamelModel):
    id: str
    full_name: str
    email: str
    phone: str
    brokerage_name: str
    license_number: str | None = None
    address: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime

class AgentSummary(CamelModel):
    """Owning-agent snippet embedded in inspection responses."""

    full_name: str
    email: str
    phone: str
    brokerage_name: str
