"""
Custom exception classes and FastAPI exception handlers.

The account handler raises these domain errors without importing any HTTP
concepts. The handlers registered here are the single place where an error
becomes a status code and a JSON body, so every endpoint reports failures
the same way: {"detail": "...", "error_type": "..."}.

Exception hierarchy:
    UserAPIError (base)
    ├── UserNotFoundError         — requested user id doesn't exist
    ├── EmailAlreadyTakenError    — create/update with an email already in use
    ├── InvalidPasswordError      — confirmation mismatch or wrong old password
    └── UnprocessableEntityError  — the directory refused a write
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class UserAPIError(Exception):
    """Base exception for all User Account API domain errors."""

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class UserNotFoundError(UserAPIError):
    """Raised when a requested user does not exist."""

    status_code = 422
    error_type = "unknown_user"

    def __init__(self, detail: str = "Unknown user"):
        super().__init__(detail)


class EmailAlreadyTakenError(UserAPIError):
    """Raised when another record already uses the requested email."""

    status_code = 409  # Conflict: the email is taken
    error_type = "email_already_taken"

    def __init__(self, detail: str = "Email already taken"):
        super().__init__(detail)


class InvalidPasswordError(UserAPIError):
    """
    Raised when a password check fails.

    Covers both a password/confirmation mismatch and a wrong old password
    on the change-password flow.
    """

    status_code = 403
    error_type = "invalid_password"


class UnprocessableEntityError(UserAPIError):
    """Raised when the user directory rejects a create/update/delete."""

    status_code = 422  # Unprocessable Entity: valid request, but not applied
    error_type = "unprocessable_entity"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the domain exception handler with the FastAPI application.

    One handler covers the whole hierarchy: each subclass carries its own
    status_code and error_type. Called once during app startup in main.py.
    """

    @app.exception_handler(UserAPIError)
    async def user_api_error_handler(
        request: Request, exc: UserAPIError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "error_type": exc.error_type},
        )
