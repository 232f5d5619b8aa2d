"""
Access evaluator - decides whether a user may act on a document.

The entity owner has full access to every document under the entity without
holding a stored grant; everyone else needs a grant at or above the
required level.
"""

from typing import Optional

from collateral.kernel.models.entity import Entity
from collateral.kernel.models.permission import PermissionGrant, PermissionLevel
from collateral.kernel.stores.entity_store import EntityStore
from collateral.kernel.stores.permission_store import PermissionStore


def is_entity_owner(entity: Optional[Entity], user: str) -> bool:
    return entity is not None and user == entity.owner


def effective_level(
    entity: Optional[Entity],
    grant: Optional[PermissionGrant],
    user: str,
) -> PermissionLevel:
    """
    Effective permission level of a user on a document.

    Permission sources (in order of precedence):
    1. Entity owner - OWNER, evaluated dynamically
    2. Stored grant - the grant's level

    Args:
        entity: The parent entity, or None if it does not exist
        grant: The user's stored grant on the document, if any
        user: The user to evaluate

    Returns:
        The effective level; NONE when the entity or grant is absent
    """
    if entity is None:
        return PermissionLevel.NONE

    if is_entity_owner(entity, user):
        return PermissionLevel.OWNER

    if grant is None:
        return PermissionLevel.NONE

    return PermissionLevel(grant.level)


def has_permission(
    entity: Optional[Entity],
    grant: Optional[PermissionGrant],
    user: str,
    required: PermissionLevel,
) -> bool:
    """Check that the user's effective level is at least `required`."""
    return effective_level(entity, grant, user) >= required


class AccessEvaluator:
    """
    Loads the entity and grant for a (document, user) pair and applies the
    access rules above.

    Usage:
        evaluator = AccessEvaluator(EntityStore(session), PermissionStore(session))
        if await evaluator.has_permission(entity_id, document_id, caller, PermissionLevel.MANAGE):
            ...
    """

    def __init__(self, entities: EntityStore, permissions: PermissionStore):
        self.entities = entities
        self.permissions = permissions

    async def effective_level(self, entity_id: str, document_id: str, user: str) -> PermissionLevel:
        entity = await self.entities.get(entity_id)
        grant = None
        if entity is not None:
            grant = await self.permissions.get(entity_id, document_id, user)
        return effective_level(entity, grant, user)

    async def has_permission(
        self,
        entity_id: str,
        document_id: str,
        user: str,
        required: PermissionLevel,
    ) -> bool:
        level = await self.effective_level(entity_id, document_id, user)
        return level >= required
