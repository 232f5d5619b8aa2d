"""
Collateral ledger - the public registry operations.

Every mutating operation runs under the lock for its key space inside one
database transaction. A failed precondition raises OperationError, the
transaction rolls back, and the caller receives a failed OperationResult;
nothing is written and no audit entry is appended. Accepted document
operations end with exactly one audit entry.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from collateral.kernel.audit.audit_log import AuditLog
from collateral.kernel.errors import ErrorCode, OperationError, OperationResult
from collateral.kernel.host import Clock, KeyedLocks
from collateral.kernel.models.audit import AuditAction
from collateral.kernel.models.document import Document
from collateral.kernel.models.entity import Entity
from collateral.kernel.models.permission import GRANTABLE_LEVELS, PermissionLevel
from collateral.kernel.permissions.access_evaluator import AccessEvaluator, is_entity_owner
from collateral.kernel.stores import AuditStore, DocumentStore, EntityStore, PermissionStore
from collateral.logging_config import get_logger
from collateral.schemas.audit import AuditEntryInfo, AuditTrailResponse
from collateral.schemas.document import DocumentFields, DocumentInfo
from collateral.schemas.entity import EntityInfo
from collateral.schemas.permission import GrantInfo
from collateral.schemas.types import ascii_name_adapter, identifier_adapter, principal_adapter

logger = get_logger(__name__)


def entity_key(entity_id: str) -> tuple:
    return ("entity", entity_id)


def document_key(entity_id: str, document_id: str) -> tuple:
    """Lock key covering a document row, its grants and its audit counter."""
    return ("document", entity_id, document_id)


class UnitOfWork:
    """Stores and services bound to one session, plus the operation's timestamp."""

    def __init__(self, session: AsyncSession, timestamp: int):
        self.session = session
        self.timestamp = timestamp
        self.entities = EntityStore(session)
        self.documents = DocumentStore(session)
        self.permissions = PermissionStore(session)
        self.audit = AuditLog(AuditStore(session))
        self.evaluator = AccessEvaluator(self.entities, self.permissions)

    async def require_document(self, entity_id: str, document_id: str) -> Document:
        document = await self.documents.get(entity_id, document_id)
        if document is None:
            raise OperationError(ErrorCode.DOCUMENT_NOT_FOUND)
        return document

    async def require_level(
        self,
        entity_id: str,
        document_id: str,
        caller: str,
        required: PermissionLevel,
        denied: ErrorCode = ErrorCode.NOT_AUTHORIZED,
    ) -> None:
        if not await self.evaluator.has_permission(entity_id, document_id, caller, required):
            raise OperationError(denied)


Operation = Callable[..., Awaitable[Optional[int]]]


class CollateralLedger:
    """
    Entity registry, document store, permission table and audit log behind
    one operation surface.

    Usage:
        ledger = CollateralLedger(async_session_maker, LogicalClock())
        result = await ledger.register_entity("e1", "Acme", caller="alice")
        if not result.ok:
            ...  # result.error is an ErrorCode
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Clock,
        locks: Optional[KeyedLocks] = None,
    ):
        self.session_factory = session_factory
        self.clock = clock
        self.locks = locks or KeyedLocks()

    # Execution

    @asynccontextmanager
    async def _unit_of_work(self, key: tuple) -> AsyncIterator[UnitOfWork]:
        async with self.locks.hold(key):
            async with self.session_factory() as session:
                async with session.begin():
                    yield UnitOfWork(session, self.clock.now())

    async def _run(self, name: str, key: tuple, caller: str, operation: Operation, *args) -> OperationResult:
        context = {"operation": name, "lock_key": "/".join(key), "caller": caller}
        try:
            async with self._unit_of_work(key) as uow:
                log_id = await operation(uow, *args)
        except OperationError as exc:
            logger.warning("Operation rejected", extra={**context, "error": exc.code.label})
            return OperationResult.failure(exc.code)

        logger.info("Operation accepted", extra={**context, "log_id": log_id})
        return OperationResult.success(log_id)

    # Entity registry

    async def register_entity(self, entity_id: str, name: str, caller: str) -> OperationResult:
        """
        Register a new entity owned by the caller.

        Errors:
            EntityAlreadyExists - the id is taken, whatever the name
        """
        entity_id = identifier_adapter.validate_python(entity_id)
        name = ascii_name_adapter.validate_python(name)
        caller = principal_adapter.validate_python(caller)
        return await self._run(
            "register_entity", entity_key(entity_id), caller,
            self._register_entity, entity_id, name, caller,
        )

    async def _register_entity(self, uow: UnitOfWork, entity_id: str, name: str, caller: str) -> None:
        if await uow.entities.exists(entity_id):
            raise OperationError(ErrorCode.ENTITY_ALREADY_EXISTS)

        await uow.entities.put(
            Entity(
                id=entity_id,
                owner=caller,
                name=name,
                registered_at=uow.timestamp,
                active=True,
            )
        )
        return None

    # Document store

    async def add_document(
        self,
        entity_id: str,
        document_id: str,
        fields: DocumentFields,
        caller: str,
    ) -> OperationResult:
        """
        Add a document at version 1 and grant the caller OWNER on it.

        Only the entity owner may add documents.

        Errors (checked in this order):
            EntityNotFound, NotAuthorized, DocumentAlreadyRegistered
        """
        entity_id, document_id, caller = self._validate_keys(entity_id, document_id, caller)
        fields = DocumentFields.model_validate(fields)
        return await self._run(
            "add_document", document_key(entity_id, document_id), caller,
            self._add_document, entity_id, document_id, fields, caller,
        )

    async def _add_document(
        self,
        uow: UnitOfWork,
        entity_id: str,
        document_id: str,
        fields: DocumentFields,
        caller: str,
    ) -> int:
        entity = await uow.entities.get(entity_id)
        if entity is None:
            raise OperationError(ErrorCode.ENTITY_NOT_FOUND)
        if not is_entity_owner(entity, caller):
            raise OperationError(ErrorCode.NOT_AUTHORIZED)
        if await uow.documents.exists(entity_id, document_id):
            raise OperationError(ErrorCode.DOCUMENT_ALREADY_REGISTERED)

        await uow.documents.put(
            Document(
                entity_id=entity_id,
                document_id=document_id,
                name=fields.name,
                description=fields.description,
                content_hash=fields.content_hash,
                doc_type=fields.doc_type,
                created_at=uow.timestamp,
                last_modified_at=uow.timestamp,
                version=1,
                active=True,
            )
        )
        await uow.permissions.put(
            entity_id, document_id, caller,
            PermissionLevel.OWNER,
            granted_by=caller,
            granted_at=uow.timestamp,
        )
        return await uow.audit.append(
            entity_id, document_id, caller, AuditAction.CREATE,
            f"Document created: {fields.name}", uow.timestamp,
        )

    async def update_document(
        self,
        entity_id: str,
        document_id: str,
        fields: DocumentFields,
        caller: str,
    ) -> OperationResult:
        """
        Replace a document's fields and bump its version by one.

        Soft-deleted documents can still be updated; the update does not
        reactivate them.

        Errors (checked in this order):
            DocumentNotFound, NotAuthorized (below MANAGE)
        """
        entity_id, document_id, caller = self._validate_keys(entity_id, document_id, caller)
        fields = DocumentFields.model_validate(fields)
        return await self._run(
            "update_document", document_key(entity_id, document_id), caller,
            self._update_document, entity_id, document_id, fields, caller,
        )

    async def _update_document(
        self,
        uow: UnitOfWork,
        entity_id: str,
        document_id: str,
        fields: DocumentFields,
        caller: str,
    ) -> int:
        document = await uow.require_document(entity_id, document_id)
        await uow.require_level(entity_id, document_id, caller, PermissionLevel.MANAGE)

        document.name = fields.name
        document.description = fields.description
        document.content_hash = fields.content_hash
        document.doc_type = fields.doc_type
        document.version += 1
        document.last_modified_at = uow.timestamp
        await uow.documents.put(document)

        return await uow.audit.append(
            entity_id, document_id, caller, AuditAction.UPDATE,
            f"Document updated to version {document.version}", uow.timestamp,
        )

    async def delete_document(self, entity_id: str, document_id: str, caller: str) -> OperationResult:
        """
        Soft-delete a document. Its history and grants are kept.

        Errors (checked in this order):
            DocumentNotFound, NotAuthorized (below ADMIN)
        """
        entity_id, document_id, caller = self._validate_keys(entity_id, document_id, caller)
        return await self._run(
            "delete_document", document_key(entity_id, document_id), caller,
            self._delete_document, entity_id, document_id, caller,
        )

    async def _delete_document(self, uow: UnitOfWork, entity_id: str, document_id: str, caller: str) -> int:
        document = await uow.require_document(entity_id, document_id)
        await uow.require_level(entity_id, document_id, caller, PermissionLevel.ADMIN)

        document.active = False
        await uow.documents.put(document)

        return await uow.audit.append(
            entity_id, document_id, caller, AuditAction.DELETE,
            "Document deleted", uow.timestamp,
        )

    # Permission table

    async def grant_permission(
        self,
        entity_id: str,
        document_id: str,
        user: str,
        level: int,
        caller: str,
    ) -> OperationResult:
        """
        Grant VIEW, MANAGE or ADMIN to a user, replacing any previous grant.

        Errors (checked in this order):
            DocumentNotFound, NotAuthorized (below ADMIN),
            InvalidPermissionLevel (outside VIEW..ADMIN)
        """
        entity_id, document_id, caller = self._validate_keys(entity_id, document_id, caller)
        user = principal_adapter.validate_python(user)
        return await self._run(
            "grant_permission", document_key(entity_id, document_id), caller,
            self._grant_permission, entity_id, document_id, user, level, caller,
        )

    async def _grant_permission(
        self,
        uow: UnitOfWork,
        entity_id: str,
        document_id: str,
        user: str,
        level: int,
        caller: str,
    ) -> int:
        await uow.require_document(entity_id, document_id)
        await uow.require_level(entity_id, document_id, caller, PermissionLevel.ADMIN)
        if isinstance(level, bool) or level not in GRANTABLE_LEVELS:
            raise OperationError(ErrorCode.INVALID_PERMISSION_LEVEL)

        granted = PermissionLevel(level)
        await uow.permissions.put(
            entity_id, document_id, user, granted,
            granted_by=caller,
            granted_at=uow.timestamp,
        )
        return await uow.audit.append(
            entity_id, document_id, caller, AuditAction.SHARE,
            f"Granted {granted.name} to {user}", uow.timestamp,
        )

    async def revoke_permission(
        self,
        entity_id: str,
        document_id: str,
        user: str,
        caller: str,
    ) -> OperationResult:
        """
        Remove a user's grant. Revoking a missing grant succeeds and is logged.

        Errors (checked in this order):
            DocumentNotFound, NotAuthorized (below ADMIN)
        """
        entity_id, document_id, caller = self._validate_keys(entity_id, document_id, caller)
        user = principal_adapter.validate_python(user)
        return await self._run(
            "revoke_permission", document_key(entity_id, document_id), caller,
            self._revoke_permission, entity_id, document_id, user, caller,
        )

    async def _revoke_permission(
        self,
        uow: UnitOfWork,
        entity_id: str,
        document_id: str,
        user: str,
        caller: str,
    ) -> int:
        await uow.require_document(entity_id, document_id)
        await uow.require_level(entity_id, document_id, caller, PermissionLevel.ADMIN)

        removed = await uow.permissions.delete(entity_id, document_id, user)
        details = f"Revoked permission from {user}"
        if not removed:
            details += " (no grant held)"

        return await uow.audit.append(
            entity_id, document_id, caller, AuditAction.SHARE,
            details, uow.timestamp,
        )

    async def access_document(self, entity_id: str, document_id: str, caller: str) -> OperationResult:
        """
        Record a gated read of a document. Changes nothing but the audit log.

        Errors (checked in this order):
            DocumentNotFound, NoAccess (below VIEW)
        """
        entity_id, document_id, caller = self._validate_keys(entity_id, document_id, caller)
        return await self._run(
            "access_document", document_key(entity_id, document_id), caller,
            self._access_document, entity_id, document_id, caller,
        )

    async def _access_document(self, uow: UnitOfWork, entity_id: str, document_id: str, caller: str) -> int:
        await uow.require_document(entity_id, document_id)
        await uow.require_level(
            entity_id, document_id, caller, PermissionLevel.VIEW, denied=ErrorCode.NO_ACCESS,
        )
        return await uow.audit.append(
            entity_id, document_id, caller, AuditAction.VIEW,
            "Document accessed", uow.timestamp,
        )

    # Read-only queries: no authorization, no audit entry

    @asynccontextmanager
    async def _reader(self) -> AsyncIterator[UnitOfWork]:
        async with self.session_factory() as session:
            yield UnitOfWork(session, timestamp=0)

    async def get_entity_info(self, entity_id: str) -> Optional[EntityInfo]:
        async with self._reader() as uow:
            entity = await uow.entities.get(entity_id)
            return EntityInfo.model_validate(entity) if entity else None

    async def get_document_info(self, entity_id: str, document_id: str) -> Optional[DocumentInfo]:
        async with self._reader() as uow:
            document = await uow.documents.get(entity_id, document_id)
            return DocumentInfo.model_validate(document) if document else None

    async def list_documents(self, entity_id: str, include_inactive: bool = False) -> List[DocumentInfo]:
        async with self._reader() as uow:
            documents = await uow.documents.list_for_entity(entity_id, include_inactive=include_inactive)
            return [DocumentInfo.model_validate(d) for d in documents]

    async def get_user_permission(self, entity_id: str, document_id: str, user: str) -> PermissionLevel:
        """Effective level of a user on a document; NONE when nothing applies."""
        async with self._reader() as uow:
            return await uow.evaluator.effective_level(entity_id, document_id, user)

    async def has_permission(
        self,
        entity_id: str,
        document_id: str,
        user: str,
        required: PermissionLevel,
    ) -> bool:
        async with self._reader() as uow:
            return await uow.evaluator.has_permission(entity_id, document_id, user, required)

    async def list_grants(self, entity_id: str, document_id: str) -> List[GrantInfo]:
        async with self._reader() as uow:
            grants = await uow.permissions.list_for_document(entity_id, document_id)
            return [GrantInfo.model_validate(g) for g in grants]

    async def get_audit_log_entry(self, entity_id: str, document_id: str, log_id: int) -> Optional[AuditEntryInfo]:
        async with self._reader() as uow:
            entry = await uow.audit.get_entry(entity_id, document_id, log_id)
            return AuditEntryInfo.model_validate(entry) if entry else None

    async def get_audit_trail(
        self,
        entity_id: str,
        document_id: str,
        limit: int = 100,
        offset: int = 0,
    ) -> AuditTrailResponse:
        async with self._reader() as uow:
            total = await uow.audit.count(entity_id, document_id)
            entries = await uow.audit.history(entity_id, document_id, limit=limit, offset=offset)
            return AuditTrailResponse(
                entity_id=entity_id,
                document_id=document_id,
                total=total,
                items=[AuditEntryInfo.model_validate(e) for e in entries],
            )

    # Helpers

    @staticmethod
    def _validate_keys(entity_id: str, document_id: str, caller: str) -> tuple[str, str, str]:
        return (
            identifier_adapter.validate_python(entity_id),
            identifier_adapter.validate_python(document_id),
            principal_adapter.validate_python(caller),
        )
