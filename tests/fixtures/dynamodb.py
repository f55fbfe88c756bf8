"""In-memory stand-in for the low-level DynamoDB client."""

from __future__ import annotations

import copy
from typing import Any

from botocore.exceptions import ClientError

_OPERATION_NAMES = {
    "get_item": "GetItem",
    "scan": "Scan",
    "put_item": "PutItem",
    "delete_item": "DeleteItem",
    "describe_table": "DescribeTable",
    "create_table": "CreateTable",
}


def client_error(code: str, operation: str, message: str = "simulated failure") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeDynamoDBClient:
    """Single-table fake keyed by the ``email`` string attribute.

    Records every call in ``calls`` and raises whatever was registered with
    ``fail`` for an operation.
    """

    def __init__(self, table_name: str = "users", page_size: int | None = None):
        self.table_name = table_name
        self.table_exists = True
        self.page_size = page_size
        self.items: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._failures: dict[str, Exception] = {}

    def fail(self, operation: str, exc: Exception | None = None) -> None:
        self._failures[operation] = exc or client_error(
            "InternalServerError", _OPERATION_NAMES[operation]
        )

    def calls_to(self, operation: str) -> list[dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == operation]

    def seed(self, email: str, firstname: str = "", lastname: str = "") -> None:
        self.items[email] = {
            "email": {"S": email},
            "firstname": {"S": firstname},
            "lastname": {"S": lastname},
        }

    def _enter(self, operation: str, kwargs: dict[str, Any]) -> None:
        self.calls.append((operation, kwargs))
        if operation in self._failures:
            raise self._failures[operation]

    def get_item(self, **kwargs: Any) -> dict[str, Any]:
        self._enter("get_item", kwargs)
        item = self.items.get(kwargs["Key"]["email"]["S"])
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        self._enter("scan", kwargs)
        keys = sorted(self.items)
        start = kwargs.get("ExclusiveStartKey")
        if start:
            keys = [key for key in keys if key > start["email"]["S"]]

        page = keys if self.page_size is None else keys[: self.page_size]
        result: dict[str, Any] = {
            "Items": [copy.deepcopy(self.items[key]) for key in page],
            "Count": len(page),
        }
        if len(page) < len(keys):
            result["LastEvaluatedKey"] = {"email": {"S": page[-1]}}
        return result

    def put_item(self, **kwargs: Any) -> dict[str, Any]:
        self._enter("put_item", kwargs)
        item = kwargs["Item"]
        key = item["email"]["S"]

        condition = kwargs.get("ConditionExpression")
        if condition == "attribute_not_exists(email)" and key in self.items:
            raise client_error("ConditionalCheckFailedException", "PutItem")
        if condition == "attribute_exists(email)" and key not in self.items:
            raise client_error("ConditionalCheckFailedException", "PutItem")

        self.items[key] = copy.deepcopy(item)
        return {}

    def delete_item(self, **kwargs: Any) -> dict[str, Any]:
        self._enter("delete_item", kwargs)
        self.items.pop(kwargs["Key"]["email"]["S"], None)
        return {}

    def describe_table(self, **kwargs: Any) -> dict[str, Any]:
        self._enter("describe_table", kwargs)
        if not self.table_exists or kwargs["TableName"] != self.table_name:
            raise client_error("ResourceNotFoundException", "DescribeTable")
        return {
            "Table": {
                "TableName": self.table_name,
                "TableStatus": "ACTIVE",
                "ItemCount": len(self.items),
            }
        }

    def create_table(self, **kwargs: Any) -> dict[str, Any]:
        self._enter("create_table", kwargs)
        if self.table_exists and kwargs["TableName"] == self.table_name:
            raise client_error("ResourceInUseException", "CreateTable")
        self.table_name = kwargs["TableName"]
        self.table_exists = True
        return {"TableDescription": {"TableName": self.table_name, "TableStatus": "CREATING"}}
