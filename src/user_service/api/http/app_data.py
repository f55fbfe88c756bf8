from dataclasses import dataclass

from botocore.client import BaseClient

from src.user_service.entities.user import UserRepository


@dataclass
class ApplicationDependencies:
    dynamodb_client: BaseClient
    user_repository: UserRepository
