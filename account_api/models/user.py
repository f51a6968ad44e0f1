"""
User model — the account record managed by the user directory.

The password column holds an Argon2id hash, never the plaintext. Hashing
happens inside the directory (services/user_directory.py) right before a
write, so no other layer ever handles a hash it produced itself.

Email is unique at the storage level as well; the account handler's
lookup-by-email check runs first and reports the friendly "Email already
taken" error, while the index catches the rare race between check and write.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from account_api.database import Base


class User(Base):
    __tablename__ = "users"

    # UUID primary key: globally unique without sequential guessing
    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    # Argon2id hash of the password
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
