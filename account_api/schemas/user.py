"""
Pydantic schemas for the /users endpoints.

Request models validate input shape before the account handler runs: a
missing field, a malformed email or an out-of-range password length is
rejected by FastAPI with 422 and never reaches the business rules.

Response models control what user data is exposed. The password hash is
NEVER included in any response schema.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class UserCreateRequest(BaseModel):
    """Request body for POST /users."""
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=32)
    confirm_password: str = Field(min_length=6, max_length=32)


class UserUpdateRequest(BaseModel):
    """Request body for PUT /users/{user_id}."""
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class ChangePasswordRequest(BaseModel):
    """Request body for PATCH /users/{user_id}/change-password."""
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=32)
    confirm_password: str = Field(min_length=6, max_length=32)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class UserResponse(BaseModel):
    """Public representation of a User (never includes the password hash)."""
    id: uuid.UUID
    name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UserCreatedResponse(BaseModel):
    """Response body for a successful create: echoes name and email only."""
    name: str
    email: str


class UserIdResponse(BaseModel):
    """Response body for update and delete."""
    id: uuid.UUID


class PasswordChangedResponse(BaseModel):
    """Response body for a successful password change."""
    id: uuid.UUID
    name: str
    email: str
