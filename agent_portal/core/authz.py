"""Authorization gate: the single place role and ownership policy lives.

Routers and services never branch on roles themselves. Routers depend on
``agent_portal.core.deps.allow`` for policy rows that need no record; services
load the record and call :func:`authorize` with the owning agent id.

Policy (resource x action):

    =============  ========  ==============  ========  ========
    resource       create    read / list     update    delete
    =============  ========  ==============  ========  ========
    agent          admin     owner-or-admin  admin     admin
    inspection     admin     owner-or-admin  admin     denied
    document       admin     owner-or-admin  denied    admin
    audit_log      denied    admin           denied    denied
    dashboard      -         admin           -         -
    =============  ========  ==============  ========  ========

Listing under an owner-or-admin row never fails for agents: their results are
narrowed to their own ``agentId`` by :func:`scope_agent_id` instead.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from agent_portal.core.exceptions import ForbiddenError, UnauthorizedError
from agent_portal.schemas.auth import Role, SessionUser


class Access(str, Enum):
    ADMIN = "admin"
    OWNER_OR_ADMIN = "owner_or_admin"
    DENIED = "denied"


_A, _O, _D = Access.ADMIN, Access.OWNER_OR_ADMIN, Access.DENIED

POLICY: dict[str, dict[str, Access]] = {
    "agent": {"create": _A, "read": _O, "list": _O, "update": _A, "delete": _A},
    "inspection": {"create": _A, "read": _O, "list": _O, "update": _A, "delete": _D},
    "document": {"create": _A, "read": _O, "list": _O, "update": _D, "delete": _A},
    "audit_log": {"create": _D, "read": _A, "list": _A, "update": _D, "delete": _D},
    "dashboard": {"read": _A},
}


# ---------------------------------------------------------------------------
# Gate primitives
# ---------------------------------------------------------------------------

def require_auth(user: SessionUser | None) -> SessionUser:
    if user is None:
        raise UnauthorizedError()
    return user


def require_role(user: SessionUser | None, allowed: Iterable[Role]) -> SessionUser:
    user = require_auth(user)
    if user.role not in set(allowed):
        raise ForbiddenError("Insufficient permissions")
    return user


def require_owner_or_admin(
    user: SessionUser | None, resource_agent_id: str, resource: str = "agent"
) -> SessionUser:
    """Admins pass; agents pass only for records they own."""
    user = require_auth(user)
    if user.is_admin:
        return user
    if user.role is Role.AGENT and user.agent_id == resource_agent_id:
        return user
    raise ForbiddenError(f"You do not have access to this {resource}")


def scope_agent_id(user: SessionUser, requested: str | None) -> str | None:
    """Agents always see their own records; admins keep whatever filter they asked for."""
    if user.role is Role.AGENT:
        return user.agent_id
    return requested


def authorize(
    user: SessionUser | None,
    resource: str,
    action: str,
    *,
    owner_agent_id: str | None = None,
) -> SessionUser:
    """Apply the policy row for ``resource``/``action``.

    ``owner_agent_id`` is the agent owning the target record; leave it ``None``
    for list operations, which are scoped rather than rejected.
    """
    access = POLICY.get(resource, {}).get(action, Access.DENIED)
    if access is Access.ADMIN:
        return require_role(user, {Role.ADMIN})
    if access is Access.OWNER_OR_ADMIN:
        if owner_agent_id is None:
            return require_auth(user)
        return require_owner_or_admin(user, owner_agent_id, resource)
    require_auth(user)
    raise ForbiddenError(f"{action} is not permitted on {resource}")
