"""
Permission endpoints - grants, revocations and effective levels.
"""

from fastapi import APIRouter

from collateral.api.deps import (
    CurrentCaller,
    DocumentIdPath,
    EntityIdPath,
    Ledger,
    UserPath,
    ensure_ok,
)
from collateral.kernel.errors import OperationResult
from collateral.schemas.permission import GrantListResponse, PermissionGrantRequest, UserPermission

router = APIRouter()


@router.get("/{entity_id}/documents/{document_id}/permissions", response_model=GrantListResponse)
async def list_grants(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    ledger: Ledger,
):
    """List stored grants on a document."""
    items = await ledger.list_grants(entity_id, document_id)
    return GrantListResponse(entity_id=entity_id, document_id=document_id, items=items)


@router.get("/{entity_id}/documents/{document_id}/permissions/{user}", response_model=UserPermission)
async def get_user_permission(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    user: UserPath,
    ledger: Ledger,
):
    """Effective level of a user on a document. Never fails; NONE when nothing applies."""
    level = await ledger.get_user_permission(entity_id, document_id, user)
    return UserPermission(entity_id=entity_id, document_id=document_id, user=user, level=level)


@router.put("/{entity_id}/documents/{document_id}/permissions/{user}", response_model=OperationResult)
async def grant_permission(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    user: UserPath,
    data: PermissionGrantRequest,
    caller: CurrentCaller,
    ledger: Ledger,
):
    """Grant VIEW (1), MANAGE (2) or ADMIN (3) to a user (caller needs ADMIN)."""
    result = await ledger.grant_permission(entity_id, document_id, user, data.level, caller=caller)
    return ensure_ok(result)


@router.delete("/{entity_id}/documents/{document_id}/permissions/{user}", response_model=OperationResult)
async def revoke_permission(
    entity_id: EntityIdPath,
    document_id: DocumentIdPath,
    user: UserPath,
    caller: CurrentCaller,
    ledger: Ledger,
):
    """Remove a user's grant (caller needs ADMIN)."""
    result = await ledger.revoke_permission(entity_id, document_id, user, caller=caller)
    return ensure_ok(result)
