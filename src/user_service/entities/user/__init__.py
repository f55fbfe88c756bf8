"""User entity module.

- User: Domain entity keyed by email
- UserRepository: DynamoDB data access layer
"""

from .entity import User
from .repository import PutCondition, UserRepository

__all__ = ["User", "UserRepository", "PutCondition"]
