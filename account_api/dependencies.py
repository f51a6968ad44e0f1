"""
FastAPI dependencies that assemble the account handler.

Dependencies are reusable functions that FastAPI injects into route
handlers. The chain for every /users endpoint is:

  get_db (AsyncSession)
      └── get_user_directory (SqlUserDirectory)
              └── get_account_handler (AccountRequestHandler)
  get_secret_verifier (PasslibSecretVerifier) ──┘

Tests swap any link with app.dependency_overrides, e.g. a recording
verifier in place of the Argon2 one.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from account_api.database import get_db
from account_api.security import PasslibSecretVerifier, SecretVerifier
from account_api.services.account_handler import AccountRequestHandler
from account_api.services.user_directory import SqlUserDirectory, UserDirectory


async def get_user_directory(
    db: AsyncSession = Depends(get_db),
) -> UserDirectory:
    """Directory bound to this request's database session."""
    return SqlUserDirectory(db)


async def get_secret_verifier() -> SecretVerifier:
    return PasslibSecretVerifier()


async def get_account_handler(
    directory: UserDirectory = Depends(get_user_directory),
    verifier: SecretVerifier = Depends(get_secret_verifier),
) -> AccountRequestHandler:
    return AccountRequestHandler(directory=directory, verifier=verifier)
