"""
Document endpoints.

GET on a document is the free, unlogged lookup; POST .../access is the
gated read that lands in the audit trail.
"""

from fastapi import APIRouter, HTTPException, status

from collateral.api.deps import CurrentCaller, DocumentIdPath, EntityIdPath, Ledger, ensure_ok
from collateral.kernel.errors import OperationResult
from collateral.schemas.document import DocumentInfo, DocumentPayload

router = APIRouter()


@router.get("/{entity_id}/documents/{document_id}", response_model=DocumentInfo)
async def get_document_info(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    ledger: Ledger,
):
    """Look up document metadata. Unauthenticated and not audited."""
    document = await ledger.get_document_info(entity_id, document_id)
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )
    return document


@router.put("/{entity_id}/documents/{document_id}", response_model=OperationResult)
async def update_document(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    data: DocumentPayload,
    caller: CurrentCaller,
    ledger: Ledger,
):
    """Replace document fields (MANAGE or above). Bumps the version."""
    result = await ledger.update_document(entity_id, document_id, data.to_fields(), caller=caller)
    return ensure_ok(result)


@router.delete("/{entity_id}/documents/{document_id}", response_model=OperationResult)
async def delete_document(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    caller: CurrentCaller,
    ledger: Ledger,
):
    """Soft-delete a document (ADMIN or above)."""
    result = await ledger.delete_document(entity_id, document_id, caller=caller)
    return ensure_ok(result)


@router.post("/{entity_id}/documents/{document_id}/access", response_model=OperationResult)
async def access_document(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    caller: CurrentCaller,
    ledger: Ledger,
):
    """Record an audited read of a document (VIEW or above)."""
    result = await ledger.access_document(entity_id, document_id, caller=caller)
    return ensure_ok(result)
