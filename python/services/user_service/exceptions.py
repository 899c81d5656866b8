"""Errors raised by the user service handlers."""

from __future__ import annotations


class UserServiceError(Exception):
    """Base exception for errors reported to API clients."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProfileFieldValidationError(UserServiceError):
    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[str]):
        super().__init__("profile fields are invalid: " + "; ".join(errors))
        self.errors = errors


class UserNotFoundError(UserServiceError):
    status_code = 404
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: int):
        super().__init__(f"user {user_id} not found")
        self.user_id = user_id
