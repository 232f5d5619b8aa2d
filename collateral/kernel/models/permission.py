"""
Permission models for document access control.
"""

from enum import IntEnum

from sqlalchemy import ForeignKeyConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from collateral.kernel.models.base import Base


class PermissionLevel(IntEnum):
    """Permission levels, totally ordered: higher levels include all lower levels."""
    NONE = 0
    VIEW = 1
    MANAGE = 2
    ADMIN = 3
    OWNER = 4


# Levels a caller may hand out through a grant. OWNER is reserved for the
# creation grant and NONE is represented by the absence of a grant.
GRANTABLE_LEVELS = frozenset({PermissionLevel.VIEW, PermissionLevel.MANAGE, PermissionLevel.ADMIN})


class PermissionGrant(Base):
    """
    Stored permission for one user on one document.

    At most one row per (entity, document, user); granting overwrites it and
    revoking deletes it.
    """

    __tablename__ = "permission_grants"

    entity_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    document_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user: Mapped[str] = mapped_column(String(128), primary_key=True)

    level: Mapped[PermissionLevel] = mapped_column(Integer, nullable=False)
    granted_by: Mapped[str] = mapped_column(String(128), nullable=False)
    granted_at: Mapped[int] = mapped_column(nullable=False)

    __table_args__ = (
        ForeignKeyConstraint(
            ["entity_id", "document_id"],
            ["documents.entity_id", "documents.document_id"],
        ),
    )

    def __repr__(self) -> str:
        return f"<PermissionGrant {self.entity_id}/{self.document_id} user={self.user} level={self.level}>"
