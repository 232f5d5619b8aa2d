"""
Audit trail endpoints. Read-only.
"""

from fastapi import APIRouter, HTTPException, Path, Query, status

from collateral.api.deps import DocumentIdPath, EntityIdPath, Ledger
from collateral.schemas.audit import AuditEntryInfo, AuditTrailResponse

router = APIRouter()


@router.get("/{entity_id}/documents/{document_id}/audit", response_model=AuditTrailResponse)
async def get_audit_trail(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    ledger: Ledger,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    """Audit entries for a document, oldest first."""
    return await ledger.get_audit_trail(entity_id, document_id, limit=limit, offset=offset)


@router.get("/{entity_id}/documents/{document_id}/audit/{log_id}", response_model=AuditEntryInfo)
async def get_audit_log_entry(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    ledger: Ledger,
    log_id: int = Path(ge=1),
):
    """Single audit entry by log id."""
    entry = await ledger.get_audit_log_entry(entity_id, document_id, log_id)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Audit entry not found",
        )
    return entry
