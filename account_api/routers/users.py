"""
Users router — account record management endpoints.

Endpoints:
  GET    /users                            — List all users
  GET    /users/{user_id}                  — Get one user
  POST   /users                            — Create a user
  PUT    /users/{user_id}                  — Update name and email
  PATCH  /users/{user_id}/change-password  — Change the password
  DELETE /users/{user_id}                  — Delete a user

Each route only unpacks the validated request body and delegates to the
AccountRequestHandler. Business-rule failures are raised by the handler
and rendered by the exception handlers in account_api.exceptions.

Plaintext passwords exist only in memory during request processing; the
directory hashes them before any write, and nothing here logs a body.
"""

import uuid

from fastapi import APIRouter, Depends

from account_api.dependencies import get_account_handler
from account_api.schemas.user import (
    ChangePasswordRequest,
    PasswordChangedResponse,
    UserCreateRequest,
    UserCreatedResponse,
    UserIdResponse,
    UserResponse,
    UserUpdateRequest,
)
from account_api.services.account_handler import AccountRequestHandler

router = APIRouter()


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List all users",
)
async def list_users(
    handler: AccountRequestHandler = Depends(get_account_handler),
):
    """Return every user record. Password hashes are never included."""
    return await handler.list_users()


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
)
async def get_user(
    user_id: uuid.UUID,
    handler: AccountRequestHandler = Depends(get_account_handler),
):
    """Return one user, or 422 "Unknown user" if the id doesn't exist."""
    return await handler.get_user(user_id)


@router.post(
    "",
    response_model=UserCreatedResponse,
    summary="Create a user",
)
async def create_user(
    request: UserCreateRequest,
    handler: AccountRequestHandler = Depends(get_account_handler),
):
    """
    Create a user account.

    - **email**: Must be a valid email and not already taken (409)
    - **password** / **confirm_password**: 6-32 characters, must match (403)

    Returns the name and email only.
    """
    return await handler.create_user(
        name=request.name,
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
    )


@router.put(
    "/{user_id}",
    response_model=UserIdResponse,
    summary="Update a user's name and email",
)
async def update_user(
    user_id: uuid.UUID,
    request: UserUpdateRequest,
    handler: AccountRequestHandler = Depends(get_account_handler),
):
    """
    Update name and email.

    The email must not belong to any existing record, the user's own
    included, otherwise the request fails with 409.
    """
    return await handler.update_user(
        user_id=user_id,
        name=request.name,
        email=request.email,
    )


@router.patch(
    "/{user_id}/change-password",
    response_model=PasswordChangedResponse,
    summary="Change a user's password",
)
async def change_password(
    user_id: uuid.UUID,
    request: ChangePasswordRequest,
    handler: AccountRequestHandler = Depends(get_account_handler),
):
    """
    Change the password after verifying the old one.

    - Unknown **email**: 422 "Not an user"
    - Wrong **old_password**: 403 "Old password is wrong"
    - **new_password** != **confirm_password**: 403
    """
    return await handler.change_password(
        user_id=user_id,
        name=request.name,
        email=request.email,
        old_password=request.old_password,
        new_password=request.new_password,
        confirm_password=request.confirm_password,
    )


@router.delete(
    "/{user_id}",
    response_model=UserIdResponse,
    summary="Delete a user",
)
async def delete_user(
    user_id: uuid.UUID,
    handler: AccountRequestHandler = Depends(get_account_handler),
):
    """Delete a user, or 422 "Failed to delete user" if it can't be removed."""
    return await handler.delete_user(user_id)
