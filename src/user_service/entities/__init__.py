"""Entities organised by business concept.

Each entity package holds its domain model (entity.py) next to the
repository that persists it (repository.py).
"""

from .user import User, UserRepository

__all__ = ["User", "UserRepository"]
