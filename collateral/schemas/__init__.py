"""
Pydantic schemas for kernel inputs and API request/response validation.
"""

from collateral.schemas.common import ErrorResponse, HealthResponse
from collateral.schemas.entity import EntityRegister, EntityInfo
from collateral.schemas.document import (
    DocumentFields,
    DocumentPayload,
    DocumentCreate,
    DocumentInfo,
    DocumentListResponse,
)
from collateral.schemas.permission import (
    PermissionGrantRequest,
    UserPermission,
    GrantInfo,
    GrantListResponse,
)
from collateral.schemas.audit import AuditEntryInfo, AuditTrailResponse

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Entities
    "EntityRegister",
    "EntityInfo",
    # Documents
    "DocumentFields",
    "DocumentPayload",
    "DocumentCreate",
    "DocumentInfo",
    "DocumentListResponse",
    # Permissions
    "PermissionGrantRequest",
    "UserPermission",
    "GrantInfo",
    "GrantListResponse",
    # Audit
    "AuditEntryInfo",
    "AuditTrailResponse",
]
