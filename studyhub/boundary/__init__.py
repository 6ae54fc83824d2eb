"""Boundary adapters: database and completion service."""
