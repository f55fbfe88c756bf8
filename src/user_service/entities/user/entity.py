"""User domain entity."""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

# Request bodies match attribute names regardless of case ("Email", "FirstName")
_KNOWN_KEYS = {"email", "firstname", "lastname", "first_name", "last_name"}


class User(BaseModel):
    """User entity representing a person in the system.

    The email address is the primary key. On the wire and in the store the
    name fields are called ``firstname`` and ``lastname``.
    """

    email: str = Field(default="", description="User's email address")
    first_name: str = Field(
        default="",
        validation_alias=AliasChoices("firstname", "firstName", "first_name"),
        serialization_alias="firstname",
        description="User's first name",
    )
    last_name: str = Field(
        default="",
        validation_alias=AliasChoices("lastname", "lastName", "last_name"),
        serialization_alias="lastname",
        description="User's last name",
    )

    @model_validator(mode="before")
    @classmethod
    def _fold_key_case(cls, data: Any) -> Any:
        # A JSON null body decodes to the zero-valued user
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        folded: dict[str, Any] = {}
        for key, value in data.items():
            lowered = key.lower() if isinstance(key, str) else key
            folded[lowered if lowered in _KNOWN_KEYS else key] = value
        return folded

    @field_validator("email", "first_name", "last_name", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        # JSON null leaves the zero value in place
        return "" if value is None else value

    @property
    def is_empty(self) -> bool:
        """True when the record has no key, which is how absence is reported."""
        return not self.email

    def to_payload(self) -> dict[str, str]:
        """Return the JSON/store representation with wire attribute names."""
        return self.model_dump(by_alias=True)
