"""Pydantic schemas package.

Folder intent:
  common.py      CamelModel base + HealthResponse (all schemas inherit CamelModel)
  auth.py        Role, SessionUser claims, login / session payloads
  agent.py       agent DTOs and AgentSummary
  inspection.py  inspection DTOs
  document.py    document responses
  audit.py       audit entries and dashboard payloads
"""
