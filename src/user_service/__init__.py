"""User store service.

CRUD over a single User entity backed by DynamoDB, reachable through a
FastAPI application, an AWS Lambda entry point, and an operator CLI.
"""

__version__ = "0.1.0"
