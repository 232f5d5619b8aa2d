"""
Immutable audit log for document activity.

Entries are append-only and numbered per (entity, document) by a counter row
that is written in the same transaction as the entry.
"""

from enum import Enum

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from collateral.kernel.models.base import Base


class AuditAction(str, Enum):
    """Actions recorded in the audit log."""
    CREATE = "CREATE"
    VIEW = "VIEW"
    UPDATE = "UPDATE"
    SHARE = "SHARE"
    DELETE = "DELETE"


class AuditEntry(Base):
    """
    Immutable audit entry.

    This table is append-only - no updates or deletes allowed.
    """

    __tablename__ = "audit_entries"

    entity_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    document_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    log_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    user: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    action: Mapped[AuditAction] = mapped_column(String(16), nullable=False)
    timestamp: Mapped[int] = mapped_column(nullable=False)
    details: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<AuditEntry {self.entity_id}/{self.document_id}#{self.log_id} {self.action}>"


class AuditCounter(Base):
    """Next log id to assign for one (entity, document) pair."""

    __tablename__ = "audit_counters"

    entity_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    document_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    next_log_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
