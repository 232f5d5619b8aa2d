"""
Stores - explicit get/put/delete access to the registry maps.
"""

from collateral.kernel.stores.entity_store import EntityStore
from collateral.kernel.stores.document_store import DocumentStore
from collateral.kernel.stores.permission_store import PermissionStore
from collateral.kernel.stores.audit_store import AuditStore

__all__ = [
    "EntityStore",
    "DocumentStore",
    "PermissionStore",
    "AuditStore",
]
