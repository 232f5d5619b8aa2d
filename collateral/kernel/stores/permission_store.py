"""
Permission store - the grants map, keyed by (entity_id, document_id, user).
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from collateral.kernel.models.permission import PermissionGrant, PermissionLevel


class PermissionStore:
    """Get/put/delete access to permission grants within one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, entity_id: str, document_id: str, user: str) -> Optional[PermissionGrant]:
        return await self.session.get(PermissionGrant, (entity_id, document_id, user))

    async def put(
        self,
        entity_id: str,
        document_id: str,
        user: str,
        level: PermissionLevel,
        granted_by: str,
        granted_at: int,
    ) -> PermissionGrant:
        """Store a grant, overwriting any existing grant for the same user."""
        grant = await self.get(entity_id, document_id, user)
        if grant is None:
            grant = PermissionGrant(
                entity_id=entity_id,
                document_id=document_id,
                user=user,
            )
            self.session.add(grant)

        grant.level = int(level)
        grant.granted_by = granted_by
        grant.granted_at = granted_at
        await self.session.flush()
        return grant

    async def delete(self, entity_id: str, document_id: str, user: str) -> bool:
        """
        Remove a user's grant.

        Returns:
            True if a grant was removed, False if none existed
        """
        grant = await self.get(entity_id, document_id, user)
        if grant is None:
            return False

        await self.session.delete(grant)
        await self.session.flush()
        return True

    async def list_for_document(self, entity_id: str, document_id: str) -> List[PermissionGrant]:
        query = (
            select(PermissionGrant)
            .where(
                PermissionGrant.entity_id == entity_id,
                PermissionGrant.document_id == document_id,
            )
            .order_by(PermissionGrant.user)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
