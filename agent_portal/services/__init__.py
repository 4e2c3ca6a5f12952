"""Services package: all business logic lives here, never in routers.

Files:
  agent.py       agent CRUD (delete cascades to inspections, documents, blobs)
  inspection.py  inspection create / read / update, owner-scoped listing
  document.py    PDF upload and deletion against blob storage
  auth.py        admin / agent login state machine
  audit.py       best-effort AuditRecorder + read-only AuditService
  dashboard.py   admin dashboard aggregates
  storage.py     local blob storage + PDF upload validation

Rule: routers call services, services call repositories, repositories call the DB.
      Every mutation: authorize → repository → commit → audit.
"""
