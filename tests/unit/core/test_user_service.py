"""Unit tests for UserService validation and existence checks."""

import json

import pytest

from src.user_service.core.errors import (
    InvalidEmailError,
    InvalidUserDataError,
    PutItemError,
    UserAlreadyExistsError,
    UserDoesNotExistError,
)
from src.user_service.entities.user import User


def _body(email="ann@example.com", firstname="Ann", lastname="Lee") -> str:
    return json.dumps({"email": email, "firstname": firstname, "lastname": lastname})


class TestCreateUser:
    def test_creates_new_user(self, fake_dynamodb, user_service):
        user = user_service.create_user(_body())

        assert user == User(email="ann@example.com", first_name="Ann", last_name="Lee")
        assert fake_dynamodb.items["ann@example.com"]["firstname"] == {"S": "Ann"}

    def test_invalid_json(self, fake_dynamodb, user_service):
        with pytest.raises(InvalidUserDataError) as exc_info:
            user_service.create_user("{not json")
        assert exc_info.value.message == "invalid user data"
        assert fake_dynamodb.calls == []

    def test_null_body_reports_invalid_email(self, fake_dynamodb, user_service):
        with pytest.raises(InvalidEmailError):
            user_service.create_user("null")
        assert fake_dynamodb.calls == []

    def test_capitalised_keys_are_accepted(self, fake_dynamodb, user_service):
        user = user_service.create_user(
            '{"Email": "ann@example.com", "FirstName": "Ann", "LastName": "Lee"}'
        )
        assert user == User(email="ann@example.com", first_name="Ann", last_name="Lee")
        assert fake_dynamodb.items["ann@example.com"]["lastname"] == {"S": "Lee"}

    def test_invalid_email_makes_no_store_calls(self, fake_dynamodb, user_service):
        with pytest.raises(InvalidEmailError) as exc_info:
            user_service.create_user(_body(email="not-an-email"))
        assert exc_info.value.message == "invalid email"
        assert fake_dynamodb.calls == []

    def test_existing_user_is_not_overwritten(self, fake_dynamodb, user_service):
        fake_dynamodb.seed("ann@example.com", "Original", "Owner")

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            user_service.create_user(_body())

        assert exc_info.value.message == "user already exists"
        assert fake_dynamodb.calls_to("put_item") == []
        assert fake_dynamodb.items["ann@example.com"]["firstname"] == {"S": "Original"}

    def test_failed_existence_check_still_writes(self, fake_dynamodb, user_service):
        fake_dynamodb.fail("get_item")

        user = user_service.create_user(_body())

        assert user.email == "ann@example.com"
        assert len(fake_dynamodb.calls_to("put_item")) == 1

    def test_put_failure(self, fake_dynamodb, user_service):
        fake_dynamodb.fail("put_item")
        with pytest.raises(PutItemError):
            user_service.create_user(_body())

    def test_unconditional_put_by_default(self, fake_dynamodb, user_service):
        user_service.create_user(_body())
        assert "ConditionExpression" not in fake_dynamodb.calls_to("put_item")[0]


class TestCreateUserConditional:
    """With conditional writes the put itself rejects a duplicate."""

    def test_condition_attached(self, fake_dynamodb, conditional_user_service):
        conditional_user_service.create_user(_body())
        assert (
            fake_dynamodb.calls_to("put_item")[0]["ConditionExpression"]
            == "attribute_not_exists(email)"
        )

    def test_racing_create_is_rejected(self, fake_dynamodb, conditional_user_service):
        # The existence check cannot see the record, as if written concurrently
        fake_dynamodb.fail("get_item")
        fake_dynamodb.seed("ann@example.com", "Racer")

        with pytest.raises(UserAlreadyExistsError):
            conditional_user_service.create_user(_body())

        assert fake_dynamodb.items["ann@example.com"]["firstname"] == {"S": "Racer"}


class TestUpdateUser:
    def test_replaces_existing_user(self, fake_dynamodb, user_service):
        fake_dynamodb.seed("ann@example.com", "Old", "Name")

        user = user_service.update_user(_body(firstname="New", lastname=""))

        assert user == User(email="ann@example.com", first_name="New", last_name="")
        assert fake_dynamodb.items["ann@example.com"]["lastname"] == {"S": ""}

    def test_decode_failure_reports_invalid_email(self, user_service):
        with pytest.raises(InvalidEmailError) as exc_info:
            user_service.update_user("[]")
        assert exc_info.value.message == "invalid email"

    def test_missing_user(self, fake_dynamodb, user_service):
        with pytest.raises(UserDoesNotExistError) as exc_info:
            user_service.update_user(_body())
        assert exc_info.value.message == "user doesn't exist"
        assert fake_dynamodb.calls_to("put_item") == []

    def test_email_format_not_checked(self, fake_dynamodb, user_service):
        fake_dynamodb.seed("legacy-id", "Old")
        user = user_service.update_user(_body(email="legacy-id", firstname="New"))
        assert user.first_name == "New"

    def test_failed_existence_check_still_writes(self, fake_dynamodb, user_service):
        fake_dynamodb.fail("get_item")
        user_service.update_user(_body())
        assert "ann@example.com" in fake_dynamodb.items

    def test_racing_delete_is_rejected(self, fake_dynamodb, conditional_user_service):
        fake_dynamodb.fail("get_item")

        with pytest.raises(UserDoesNotExistError):
            conditional_user_service.update_user(_body())

        assert fake_dynamodb.items == {}


class TestReadAndDelete:
    def test_get_user(self, fake_dynamodb, user_service):
        fake_dynamodb.seed("ann@example.com", "Ann", "Lee")
        assert user_service.get_user("ann@example.com").last_name == "Lee"

    def test_get_unknown_user_is_empty(self, user_service):
        assert user_service.get_user("nobody@example.com").is_empty

    def test_list_users(self, fake_dynamodb, user_service):
        fake_dynamodb.seed("ann@example.com")
        fake_dynamodb.seed("bob@example.com")
        assert {u.email for u in user_service.list_users()} == {
            "ann@example.com",
            "bob@example.com",
        }

    def test_delete_unknown_user(self, fake_dynamodb, user_service):
        user_service.delete_user("nobody@example.com")
        assert len(fake_dynamodb.calls_to("delete_item")) == 1

    def test_create_then_get_round_trip(self, user_service):
        created = user_service.create_user(_body())
        assert user_service.get_user(created.email) == created
