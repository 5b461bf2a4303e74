"""
Base class and portable column types for SeaTrust ORM models.
"""

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class TrustBase(DeclarativeBase):
    """Base class for all SeaTrust models."""

    pass
