"""
Audit log service for append-only document activity.

Every accepted document operation appends exactly one entry here inside the
same transaction as its state change.
"""

from typing import List, Optional

from collateral.kernel.models.audit import AuditAction, AuditEntry
from collateral.kernel.stores.audit_store import AuditStore

FIRST_LOG_ID = 1
MAX_DETAILS_LENGTH = 500


class AuditLog:
    """
    Numbers and stores audit entries per (entity, document) pair.

    Log ids start at 1 and the counter always holds the id of the next
    entry, so an entry at id N implies a counter of N + 1.

    Usage:
        audit_log = AuditLog(AuditStore(session))
        log_id = await audit_log.append(
            entity_id, document_id, caller, AuditAction.UPDATE, "Document updated", timestamp
        )
    """

    def __init__(self, store: AuditStore):
        self.store = store

    async def next_log_id(self, entity_id: str, document_id: str) -> int:
        counter = await self.store.get_counter(entity_id, document_id)
        return counter.next_log_id if counter else FIRST_LOG_ID

    async def append(
        self,
        entity_id: str,
        document_id: str,
        user: str,
        action: AuditAction,
        details: str,
        timestamp: int,
    ) -> int:
        """
        Append an entry and advance the pair's counter.

        Must run inside the transaction of the change being logged.

        Args:
            entity_id: Parent entity
            document_id: Document acted on
            user: Caller who performed the action
            action: What was done
            details: Free-form description
            timestamp: Host timestamp of the operation

        Returns:
            The log id assigned to the entry
        """
        if len(details) > MAX_DETAILS_LENGTH:
            raise ValueError(f"Audit details exceed {MAX_DETAILS_LENGTH} characters")

        log_id = await self.next_log_id(entity_id, document_id)

        await self.store.put_entry(
            AuditEntry(
                entity_id=entity_id,
                document_id=document_id,
                log_id=log_id,
                user=user,
                action=action.value,
                timestamp=timestamp,
                details=details,
            )
        )
        await self.store.put_counter(entity_id, document_id, log_id + 1)
        return log_id

    async def get_entry(self, entity_id: str, document_id: str, log_id: int) -> Optional[AuditEntry]:
        return await self.store.get_entry(entity_id, document_id, log_id)

    async def count(self, entity_id: str, document_id: str) -> int:
        return await self.next_log_id(entity_id, document_id) - FIRST_LOG_ID

    async def history(
        self,
        entity_id: str,
        document_id: str,
        limit: int = 100,
        offset: int = 0,
    ) -> List[AuditEntry]:
        """Entries for a document in ascending log id order."""
        return await self.store.list_entries(entity_id, document_id, limit=limit, offset=offset)
