"""User repository backed by a DynamoDB table."""

from __future__ import annotations

from enum import Enum
from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger
from pydantic import ValidationError

from src.user_service.core.errors import (
    ConditionFailedError,
    DecodeRecordError,
    DeleteItemError,
    FetchRecordError,
    MarshalItemError,
    PutItemError,
)
from src.user_service.entities.user.entity import User

KEY_ATTRIBUTE = "email"

_CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


class PutCondition(str, Enum):
    """Optional guard applied to a put."""

    NOT_EXISTS = f"attribute_not_exists({KEY_ATTRIBUTE})"
    EXISTS = f"attribute_exists({KEY_ATTRIBUTE})"


class UserRepository:
    """Data-access layer for users.

    Issues exactly one store call per method. Absent keys are not an error:
    ``get`` returns an empty ``User`` and ``delete`` succeeds silently.
    """

    def __init__(self, client: BaseClient, table_name: str) -> None:
        self._client = client
        self._table_name = table_name
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    @property
    def table_name(self) -> str:
        return self._table_name

    def get(self, email: str) -> User:
        try:
            result = self._client.get_item(
                TableName=self._table_name,
                Key={KEY_ATTRIBUTE: {"S": email}},
            )
        except (BotoCoreError, ClientError) as exc:
            logger.warning("GetItem failed for {}: {}", email, exc)
            raise FetchRecordError() from exc

        return self._to_user(result.get("Item") or {})

    def list_all(self) -> list[User]:
        """Scan the whole table, following continuation keys until exhausted."""
        users: list[User] = []
        scan_kwargs: dict[str, Any] = {"TableName": self._table_name}

        while True:
            try:
                page = self._client.scan(**scan_kwargs)
            except (BotoCoreError, ClientError) as exc:
                logger.warning("Scan of {} failed: {}", self._table_name, exc)
                raise FetchRecordError() from exc

            users.extend(self._to_user(item) for item in page.get("Items", []))

            last_key = page.get("LastEvaluatedKey")
            if not last_key:
                return users
            scan_kwargs["ExclusiveStartKey"] = last_key

    def put(self, user: User, condition: PutCondition | None = None) -> None:
        item = self._to_item(user)
        put_kwargs: dict[str, Any] = {"TableName": self._table_name, "Item": item}
        if condition is not None:
            put_kwargs["ConditionExpression"] = condition.value

        try:
            self._client.put_item(**put_kwargs)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == _CONDITIONAL_CHECK_FAILED:
                logger.info("Conditional put rejected for {}", user.email)
                raise ConditionFailedError() from exc
            logger.warning("PutItem failed for {}: {}", user.email, exc)
            raise PutItemError() from exc
        except BotoCoreError as exc:
            logger.warning("PutItem failed for {}: {}", user.email, exc)
            raise PutItemError() from exc

    def delete(self, email: str) -> None:
        try:
            self._client.delete_item(
                TableName=self._table_name,
                Key={KEY_ATTRIBUTE: {"S": email}},
            )
        except (BotoCoreError, ClientError) as exc:
            logger.warning("DeleteItem failed for {}: {}", email, exc)
            raise DeleteItemError() from exc

    def _to_item(self, user: User) -> dict[str, Any]:
        try:
            return {
                name: self._serializer.serialize(value)
                for name, value in user.to_payload().items()
            }
        except (TypeError, ValueError) as exc:
            raise MarshalItemError() from exc

    def _to_user(self, item: dict[str, Any]) -> User:
        try:
            data = {name: self._deserializer.deserialize(value) for name, value in item.items()}
            return User.model_validate(data)
        except (TypeError, ValueError, ValidationError) as exc:
            logger.warning("Could not decode item from {}: {}", self._table_name, exc)
            raise DecodeRecordError() from exc
