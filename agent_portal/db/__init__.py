"""Database package: async SQLAlchemy Database handle, Base, and dependencies."""
from agent_portal.db.base import Base, Database, get_database, get_db

__all__ = ["Base", "Database", "get_database", "get_db"]
