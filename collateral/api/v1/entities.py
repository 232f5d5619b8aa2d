"""
Entity endpoints - registration, lookup and document origination.
"""

from fastapi import APIRouter, HTTPException, Query, status

from collateral.api.deps import CurrentCaller, EntityIdPath, Ledger, ensure_ok
from collateral.kernel.errors import OperationResult
from collateral.schemas.document import DocumentCreate, DocumentListResponse
from collateral.schemas.entity import EntityInfo, EntityRegister

router = APIRouter()


@router.post("", response_model=OperationResult, status_code=status.HTTP_201_CREATED)
async def register_entity(
    data: EntityRegister,
    caller: CurrentCaller,
    ledger: Ledger,
):
    """Register a collateral entity owned by the caller."""
    result = await ledger.register_entity(data.entity_id, data.name, caller=caller)
    return ensure_ok(result)


@router.get("/{entity_id}", response_model=EntityInfo)
async def get_entity_info(
    entity_id: EntityIdPath,
    ledger: Ledger,
):
    """Look up an entity. Unauthenticated."""
    entity = await ledger.get_entity_info(entity_id)
    if entity is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Entity not found",
        )
    return entity


@router.post(
    "/{entity_id}/documents",
    response_model=OperationResult,
    status_code=status.HTTP_201_CREATED,
)
async def add_document(
    entity_id: EntityIdPath,
    data: DocumentCreate,
    caller: CurrentCaller,
    ledger: Ledger,
):
    """Add a document under an entity. Only the entity owner may do this."""
    result = await ledger.add_document(
        entity_id,
        data.document_id,
        data.to_fields(),
        caller=caller,
    )
    return ensure_ok(result)


@router.get("/{entity_id}/documents", response_model=DocumentListResponse)
async def list_documents(
    entity_id: EntityIdPath,
    ledger: Ledger,
    include_inactive: bool = Query(False, description="Include soft-deleted documents"),
):
    """List documents registered under an entity. Unauthenticated."""
    items = await ledger.list_documents(entity_id, include_inactive=include_inactive)
    return DocumentListResponse(entity_id=entity_id, items=items)
