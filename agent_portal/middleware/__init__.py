"""Middleware package: request-scoped session resolution."""
