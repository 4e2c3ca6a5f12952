"""Agent Portal API: role-gated records for agents, inspections, documents and their audit trail."""
