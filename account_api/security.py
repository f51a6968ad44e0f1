"""
Security utilities: password hashing and secret verification.

PASSWORD HASHING (Argon2)
  - Passwords are never stored in plaintext
  - Argon2id is memory-hard and time-hard, which makes GPU brute-forcing
    expensive
  - passlib's CryptContext provides the high-level hash/verify API

SECRET VERIFIER
  The account handler never calls passlib directly. It depends on the
  SecretVerifier protocol (one async "does this plaintext match this hash"
  operation) so tests can substitute a recording fake. The production
  implementation runs the Argon2 check in the threadpool because it is
  CPU-bound and would otherwise stall the event loop.

PLACEHOLDER HASH
  When change-password is asked about an email nobody owns, the handler
  still runs the verifier, against PLACEHOLDER_PASSWORD_HASH. It is a real
  Argon2 hash (so the verifier accepts it and spends the same time on it)
  of a random secret generated once per process, so no caller can match it.
"""

import secrets
from typing import Protocol

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext


# "deprecated='auto'" lets passlib verify hashes from an older scheme while
# hashing new passwords with the active one.
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """
    Hash a plaintext password using Argon2id.

    Args:
        plain_password: The user's raw password input.

    Returns:
        An Argon2 hash string (e.g., "$argon2id$v=19$m=65536,t=3,p=4$...").
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored Argon2 hash.

    Args:
        plain_password: The password the user just typed.
        hashed_password: The hash stored in the database.

    Returns:
        True if the password matches, False otherwise.
    """
    return pwd_context.verify(plain_password, hashed_password)


PLACEHOLDER_PASSWORD_HASH = hash_password(secrets.token_urlsafe(32))


class SecretVerifier(Protocol):
    """Compares a plaintext secret against a stored hash."""

    async def matches(self, plaintext: str, stored_hash: str) -> bool:
        ...


class PasslibSecretVerifier:
    """SecretVerifier backed by the Argon2 CryptContext above."""

    async def matches(self, plaintext: str, stored_hash: str) -> bool:
        return await run_in_threadpool(verify_password, plaintext, stored_hash)
