"""
Entity store - the entities map.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from collateral.kernel.models.entity import Entity


class EntityStore:
    """Get/put access to entity records within one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, entity_id: str) -> Optional[Entity]:
        return await self.session.get(Entity, entity_id)

    async def exists(self, entity_id: str) -> bool:
        return await self.get(entity_id) is not None

    async def put(self, entity: Entity) -> Entity:
        self.session.add(entity)
        await self.session.flush()
        return entity
