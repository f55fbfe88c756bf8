"""Unit tests for the User entity."""

import pytest
from pydantic import ValidationError

from src.user_service.entities.user import User


class TestUserDecoding:
    """JSON decoding of request bodies and store items."""

    def test_wire_names(self):
        user = User.model_validate_json(
            '{"email": "ann@example.com", "firstname": "Ann", "lastname": "Lee"}'
        )
        assert user.email == "ann@example.com"
        assert user.first_name == "Ann"
        assert user.last_name == "Lee"

    def test_camel_case_names(self):
        user = User.model_validate_json(
            '{"email": "ann@example.com", "firstName": "Ann", "lastName": "Lee"}'
        )
        assert (user.first_name, user.last_name) == ("Ann", "Lee")

    def test_python_field_names(self):
        user = User(email="ann@example.com", first_name="Ann", last_name="Lee")
        assert user.first_name == "Ann"

    def test_missing_and_null_fields_are_empty(self):
        user = User.model_validate_json('{"firstname": null}')
        assert user.to_payload() == {"email": "", "firstname": "", "lastname": ""}
        assert user.is_empty

    def test_keys_match_case_insensitively(self):
        user = User.model_validate_json(
            '{"Email": "ann@example.com", "FirstName": "Ann", "LASTNAME": "Lee"}'
        )
        assert user.to_payload() == {
            "email": "ann@example.com",
            "firstname": "Ann",
            "lastname": "Lee",
        }

    def test_null_body_is_empty_user(self):
        user = User.model_validate_json("null")
        assert user.is_empty
        assert user.to_payload() == {"email": "", "firstname": "", "lastname": ""}

    def test_unknown_keys_ignored(self):
        user = User.model_validate_json('{"email": "a@b.c", "age": 40}')
        assert user.email == "a@b.c"

    @pytest.mark.parametrize(
        "body",
        ["", "not json", "[]", '"a string"', '{"email": 42}', '{"firstname": ["x"]}'],
    )
    def test_invalid_bodies(self, body):
        with pytest.raises(ValidationError):
            User.model_validate_json(body)


class TestUserPayload:
    def test_payload_uses_wire_names(self):
        user = User(email="ann@example.com", first_name="Ann", last_name="Lee")
        assert user.to_payload() == {
            "email": "ann@example.com",
            "firstname": "Ann",
            "lastname": "Lee",
        }

    def test_is_empty_tracks_email(self):
        assert User(first_name="Ann").is_empty
        assert not User(email="ann@example.com").is_empty
