"""
Base model shared by all kernel tables.
"""

from sqlalchemy import BigInteger
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    # Host timestamps are block heights or Unix seconds
    type_annotation_map = {
        int: BigInteger(),
    }
