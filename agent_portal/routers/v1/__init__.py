"""v1 router package: all /api/v1/* endpoints live here.

Files:
  auth.py         login / logout / session
  agents.py       agent CRUD
  inspections.py  inspection create / read / update
  documents.py    PDF upload, listing, URL lookup, delete
  audit.py        audit trail + dashboard (admin only)

Rule: Routers only handle HTTP (request parsing, response shaping).
      Policy and business logic delegate to app services.
"""
