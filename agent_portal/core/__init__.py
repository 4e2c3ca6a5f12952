"""Core package: settings, errors, sessions, authorization gate, and FastAPI dependencies."""
