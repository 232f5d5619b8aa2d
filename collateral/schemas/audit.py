"""
Audit log schemas.
"""

from typing import List

from pydantic import BaseModel, ConfigDict

from collateral.kernel.models.audit import AuditAction


class AuditEntryInfo(BaseModel):
    """Single audit entry."""

    model_config = ConfigDict(from_attributes=True)

    entity_id: str
    document_id: str
    log_id: int
    user: str
    action: AuditAction
    timestamp: int
    details: str


class AuditTrailResponse(BaseModel):
    """Page of a document's audit trail, oldest first."""

    entity_id: str
    document_id: str
    total: int
    items: List[AuditEntryInfo]
