"""
Kernel Data Models

SQLAlchemy tables backing the five registry maps: entities, documents,
permission grants, audit entries and audit counters.
"""

from collateral.kernel.models.base import Base
from collateral.kernel.models.entity import Entity
from collateral.kernel.models.document import Document, CONTENT_HASH_SIZE
from collateral.kernel.models.permission import PermissionGrant, PermissionLevel, GRANTABLE_LEVELS
from collateral.kernel.models.audit import AuditEntry, AuditCounter, AuditAction

__all__ = [
    "Base",
    # Entities
    "Entity",
    # Documents
    "Document",
    "CONTENT_HASH_SIZE",
    # Permissions
    "PermissionGrant",
    "PermissionLevel",
    "GRANTABLE_LEVELS",
    # Audit
    "AuditEntry",
    "AuditCounter",
    "AuditAction",
]
