import logging
from typing import Any, Dict, Union
from pydantic import ValidationError as SchemaValidationError

from ..core import errors
from ..core.storage import DuplicateUsernameError, StorageAdapter
from ..schemas.user import RegisterRequest, UserOut
from ..utils.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)


class AuthHandler:
    """Login and registration against the storage adapter"""

    def __init__(self, storage: StorageAdapter):
        self.storage = storage

    def login(self, username: str, password: str) -> UserOut:
        username = (username or "").strip()
        if not username or not password:
            raise errors.BadRequest("Username and password are required")

        try:
            user = self.storage.get_user_by_username(username)
            valid = user is not None and verify_password(password, user.password_hash)
        except Exception as e:
            logger.exception(f"Login error: {e}")
            raise errors.InternalError("Login failed") from e

        if not valid:
            logger.warning(f"Failed login attempt for '{username}'")
            raise errors.InvalidCredentials()

        return UserOut.model_validate(user)

    def register(self, payload: Union[RegisterRequest, Dict[str, Any]]) -> UserOut:
        if not isinstance(payload, RegisterRequest):
            try:
                payload = RegisterRequest.model_validate(payload)
            except SchemaValidationError as e:
                raise errors.ValidationError(str(e)) from e

        try:
            if self.storage.get_user_by_username(payload.username):
                raise errors.Conflict("User already exists")

            data = payload.model_dump(exclude={"password"})
            data["password_hash"] = get_password_hash(payload.password)
            user = self.storage.create_user(data)
        except errors.AppError:
            raise
        except DuplicateUsernameError as e:
            raise errors.Conflict("User already exists") from e
        except Exception as e:
            logger.exception(f"Registration error: {e}")
            raise errors.InternalError("Registration failed") from e

        logger.info(f"Registered user {user.id}")
        return UserOut.model_validate(user)
