"""
SQLAlchemy ORM models package.

All models are imported here so that Base.metadata knows about every table
before create_all() runs in the app lifespan.
"""

from account_api.models.user import User  # noqa: F401
