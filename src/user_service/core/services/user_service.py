from loguru import logger
from pydantic import ValidationError

from src.user_service.core.errors import (
    ConditionFailedError,
    InvalidEmailError,
    InvalidUserDataError,
    StoreError,
    UserAlreadyExistsError,
    UserDoesNotExistError,
)
from src.user_service.core.validators import is_email_valid
from src.user_service.entities.user import PutCondition, User, UserRepository


class UserService:
    """Validate, check and persist users.

    Each operation makes at most one read and one write against the
    repository. The existence checks in ``create_user`` and ``update_user``
    are read-then-write and not atomic unless ``conditional_writes`` is set,
    in which case the write itself carries the matching store condition.
    """

    def __init__(self, repository: UserRepository, conditional_writes: bool = False):
        self._repository = repository
        self._conditional_writes = conditional_writes

    @property
    def conditional_writes(self) -> bool:
        return self._conditional_writes

    def get_user(self, email: str) -> User:
        """Fetch one user; an unknown email yields an empty user."""
        return self._repository.get(email)

    def list_users(self) -> list[User]:
        """Fetch every user in the table."""
        return self._repository.list_all()

    def create_user(self, body: str | bytes) -> User:
        """Create a user from a JSON request body.

        Raises:
            InvalidUserDataError: body is not a JSON user
            InvalidEmailError: email fails validation
            UserAlreadyExistsError: a record with that email is present
            StoreError: marshalling or the put failed
        """
        try:
            new_user = User.model_validate_json(body)
        except ValidationError as exc:
            raise InvalidUserDataError() from exc

        if not is_email_valid(new_user.email):
            raise InvalidEmailError()

        current = self._fetch_for_existence_check(new_user.email)
        if current is not None and not current.is_empty:
            raise UserAlreadyExistsError()

        condition = PutCondition.NOT_EXISTS if self._conditional_writes else None
        try:
            self._repository.put(new_user, condition=condition)
        except ConditionFailedError as exc:
            raise UserAlreadyExistsError() from exc

        logger.info("Created user {}", new_user.email)
        return new_user

    def update_user(self, body: str | bytes) -> User:
        """Replace an existing user from a JSON request body.

        A decode failure reports "invalid email", kept for compatibility with
        existing clients.
        """
        try:
            new_user = User.model_validate_json(body)
        except ValidationError as exc:
            raise InvalidEmailError() from exc

        current = self._fetch_for_existence_check(new_user.email)
        if current is not None and current.is_empty:
            raise UserDoesNotExistError()

        condition = PutCondition.EXISTS if self._conditional_writes else None
        try:
            self._repository.put(new_user, condition=condition)
        except ConditionFailedError as exc:
            raise UserDoesNotExistError() from exc

        logger.info("Updated user {}", new_user.email)
        return new_user

    def delete_user(self, email: str) -> None:
        """Delete by key; deleting an unknown email is not an error."""
        self._repository.delete(email)
        logger.info("Deleted user {}", email)

    def _fetch_for_existence_check(self, email: str) -> User | None:
        # A failed lookup does not block the write
        try:
            return self._repository.get(email)
        except StoreError as exc:
            logger.warning("Existence check for {} failed, continuing: {}", email, exc)
            return None
