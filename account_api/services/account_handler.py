"""
Account request handler — business rules for the /users resource.

This module contains the account logic, separated from HTTP concerns. The
router parses request bodies, gets a handler built from injected
collaborators, and returns whatever the handler returns. Failures are raised
as domain errors (account_api.exceptions) and mapped to responses by the
registered exception handlers.

Collaborators:
  - directory: a UserDirectory (lookup, create, update, set-password, delete)
  - verifier: a SecretVerifier (plaintext vs. stored hash)

Every operation is a short chain of awaited calls that stops at the first
failing check. The handler holds no state beyond its collaborators.

Two behaviours are kept as they are:
  - update_user rejects any email that already exists, including the
    caller's own unchanged email.
  - change_password runs the verifier before checking whether the user
    exists, comparing against PLACEHOLDER_PASSWORD_HASH when there is no
    record, and only then reports "Not an user".
"""

import logging
import uuid
from typing import Sequence

from account_api.exceptions import (
    EmailAlreadyTakenError,
    InvalidPasswordError,
    UnprocessableEntityError,
    UserNotFoundError,
)
from account_api.models.user import User
from account_api.security import PLACEHOLDER_PASSWORD_HASH, SecretVerifier
from account_api.services.user_directory import UserDirectory


logger = logging.getLogger(__name__)

PASSWORD_MISMATCH = "Password and confirmation is not the same"


class AccountRequestHandler:
    """Runs the six /users operations against injected collaborators."""

    def __init__(
        self,
        directory: UserDirectory,
        verifier: SecretVerifier,
        placeholder_hash: str = PLACEHOLDER_PASSWORD_HASH,
    ):
        self.directory = directory
        self.verifier = verifier
        self.placeholder_hash = placeholder_hash

    async def list_users(self) -> Sequence[User]:
        """Return every user record, exactly as the directory returns it."""
        return await self.directory.list_all()

    async def get_user(self, user_id: uuid.UUID) -> User:
        """
        Return one user record.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        user = await self.directory.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError("Unknown user")
        return user

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> dict:
        """
        Create a user after the uniqueness and confirmation checks.

        The email check runs first: a taken email is reported even when the
        passwords also disagree.

        Returns:
            {"name", "email"}; the password is never echoed back.

        Raises:
            EmailAlreadyTakenError: If the email is already in use.
            InvalidPasswordError: If password and confirmation differ.
            UnprocessableEntityError: If the directory refuses the insert.
        """
        if await self.directory.get_by_email(email) is not None:
            logger.info("Create rejected: email already taken")
            raise EmailAlreadyTakenError("Email already taken")

        if password != confirm_password:
            raise InvalidPasswordError(PASSWORD_MISMATCH)

        if not await self.directory.create(name, email, password):
            raise UnprocessableEntityError("Failed to create user")

        logger.info("Created user record")
        return {"name": name, "email": email}

    async def update_user(self, user_id: uuid.UUID, name: str, email: str) -> dict:
        """
        Change a user's name and email.

        Any existing record with the new email blocks the update, the
        user's own record included.

        Raises:
            EmailAlreadyTakenError: If a record with this email exists.
            UnprocessableEntityError: If the directory refuses the update.
        """
        if await self.directory.get_by_email(email) is not None:
            logger.info("Update of user %s rejected: email already taken", user_id)
            raise EmailAlreadyTakenError("Email already taken")

        if not await self.directory.update(user_id, name, email):
            raise UnprocessableEntityError("Failed to update user")

        logger.info("Updated user %s", user_id)
        return {"id": user_id}

    async def change_password(
        self,
        user_id: uuid.UUID,
        name: str,
        email: str,
        old_password: str,
        new_password: str,
        confirm_password: str,
    ) -> dict:
        """
        Replace a user's password after verifying the old one.

        Order of checks:
          1. Look the user up by email.
          2. Verify old_password against the stored hash, or against the
             placeholder hash when nobody has that email. Always awaited.
          3. No user -> "Not an user", whatever step 2 returned.
          4. Verification failed -> "Old password is wrong".
          5. new_password != confirm_password -> confirmation mismatch.
          6. Store the new password.

        Raises:
            UnprocessableEntityError: If no user has this email, or the
                directory refuses the write.
            InvalidPasswordError: If the old password is wrong or the new
                password and confirmation differ.
        """
        user = await self.directory.get_by_email(email)
        stored_hash = user.password if user is not None else self.placeholder_hash

        password_checked = await self.verifier.matches(old_password, stored_hash)

        if user is None:
            raise UnprocessableEntityError("Not an user")

        if not password_checked:
            logger.warning("Password change for user %s rejected: old password is wrong", user_id)
            raise InvalidPasswordError("Old password is wrong")

        if new_password != confirm_password:
            raise InvalidPasswordError(PASSWORD_MISMATCH)

        if not await self.directory.set_password(user_id, new_password):
            raise UnprocessableEntityError("Failed to change password")

        logger.info("Changed password for user %s", user_id)
        return {"id": user_id, "name": name, "email": email}

    async def delete_user(self, user_id: uuid.UUID) -> dict:
        """
        Delete a user.

        Raises:
            UnprocessableEntityError: If the directory refuses the delete,
                an unknown id included.
        """
        if not await self.directory.delete(user_id):
            raise UnprocessableEntityError("Failed to delete user")

        logger.info("Deleted user %s", user_id)
        return {"id": user_id}
