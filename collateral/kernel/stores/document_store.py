"""
Document store - the documents map, keyed by (entity_id, document_id).
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from collateral.kernel.models.document import Document


class DocumentStore:
    """Get/put access to document records within one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, entity_id: str, document_id: str) -> Optional[Document]:
        return await self.session.get(Document, (entity_id, document_id))

    async def exists(self, entity_id: str, document_id: str) -> bool:
        return await self.get(entity_id, document_id) is not None

    async def put(self, document: Document) -> Document:
        self.session.add(document)
        await self.session.flush()
        return document

    async def list_for_entity(
        self,
        entity_id: str,
        include_inactive: bool = False,
    ) -> List[Document]:
        """
        List documents registered under an entity, ordered by document id.

        Args:
            entity_id: Parent entity
            include_inactive: Whether to include soft-deleted documents

        Returns:
            List of Document records
        """
        query = select(Document).where(Document.entity_id == entity_id)
        if not include_inactive:
            query = query.where(Document.active.is_(True))
        query = query.order_by(Document.document_id)

        result = await self.session.execute(query)
        return list(result.scalars().all())
