"""
Audit store - the audit entries map and the per-document counters map.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from collateral.kernel.models.audit import AuditCounter, AuditEntry


class AuditStore:
    """
    Raw access to audit entries and counters within one session.

    Entries can be inserted and read, never updated or deleted. Numbering
    rules live in AuditLog.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_entry(self, entity_id: str, document_id: str, log_id: int) -> Optional[AuditEntry]:
        return await self.session.get(AuditEntry, (entity_id, document_id, log_id))

    async def put_entry(self, entry: AuditEntry) -> AuditEntry:
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_counter(self, entity_id: str, document_id: str) -> Optional[AuditCounter]:
        return await self.session.get(AuditCounter, (entity_id, document_id))

    async def put_counter(self, entity_id: str, document_id: str, next_log_id: int) -> AuditCounter:
        counter = await self.get_counter(entity_id, document_id)
        if counter is None:
            counter = AuditCounter(entity_id=entity_id, document_id=document_id)
            self.session.add(counter)
        counter.next_log_id = next_log_id
        await self.session.flush()
        return counter

    async def list_entries(
        self,
        entity_id: str,
        document_id: str,
        limit: int = 100,
        offset: int = 0,
    ) -> List[AuditEntry]:
        query = (
            select(AuditEntry)
            .where(
                AuditEntry.entity_id == entity_id,
                AuditEntry.document_id == document_id,
            )
            .order_by(AuditEntry.log_id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
