"""Unit tests for the access evaluator."""

import pytest
from sqlalchemy.exc import IntegrityError

from collateral.kernel.models.document import Document
from collateral.kernel.models.entity import Entity
from collateral.kernel.models.permission import PermissionGrant, PermissionLevel
from collateral.kernel.permissions.access_evaluator import (
    AccessEvaluator,
    effective_level,
    has_permission,
    is_entity_owner,
)
from collateral.kernel.stores import EntityStore, PermissionStore


def _entity(owner: str = "SP-owner") -> Entity:
    return Entity(id="e1", owner=owner, name="Acme", registered_at=1, active=True)


def _document() -> Document:
    return Document(
        entity_id="e1",
        document_id="d1",
        name="deed",
        description="",
        content_hash=b"\x00" * 32,
        doc_type="deed",
        created_at=1,
        last_modified_at=1,
        version=1,
        active=True,
    )


def _grant(user: str, level: PermissionLevel) -> PermissionGrant:
    return PermissionGrant(
        entity_id="e1",
        document_id="d1",
        user=user,
        level=int(level),
        granted_by="SP-owner",
        granted_at=1,
    )


class TestPermissionLevel:
    """Levels form a total order."""

    def test_ordering(self):
        assert (
            PermissionLevel.NONE
            < PermissionLevel.VIEW
            < PermissionLevel.MANAGE
            < PermissionLevel.ADMIN
            < PermissionLevel.OWNER
        )

    def test_numeric_values(self):
        assert [int(level) for level in PermissionLevel] == [0, 1, 2, 3, 4]


class TestEffectiveLevel:
    """Tests for the pure evaluation rules."""

    def test_owner_without_grant_is_owner(self):
        assert effective_level(_entity(), None, "SP-owner") == PermissionLevel.OWNER

    def test_owner_with_lower_grant_is_still_owner(self):
        grant = _grant("SP-owner", PermissionLevel.VIEW)
        assert effective_level(_entity(), grant, "SP-owner") == PermissionLevel.OWNER

    def test_grant_level_applies(self):
        grant = _grant("SP-alice", PermissionLevel.MANAGE)
        assert effective_level(_entity(), grant, "SP-alice") == PermissionLevel.MANAGE

    def test_no_grant_is_none(self):
        assert effective_level(_entity(), None, "SP-alice") == PermissionLevel.NONE

    def test_missing_entity_is_none_even_with_grant(self):
        grant = _grant("SP-alice", PermissionLevel.ADMIN)
        assert effective_level(None, grant, "SP-alice") == PermissionLevel.NONE

    def test_is_entity_owner(self):
        assert is_entity_owner(_entity(), "SP-owner") is True
        assert is_entity_owner(_entity(), "SP-alice") is False
        assert is_entity_owner(None, "SP-owner") is False


class TestHasPermission:
    """Authorization is always 'at least', never an exact match."""

    @pytest.mark.parametrize(
        "held,required,expected",
        [
            (PermissionLevel.VIEW, PermissionLevel.VIEW, True),
            (PermissionLevel.VIEW, PermissionLevel.MANAGE, False),
            (PermissionLevel.MANAGE, PermissionLevel.VIEW, True),
            (PermissionLevel.ADMIN, PermissionLevel.MANAGE, True),
            (PermissionLevel.ADMIN, PermissionLevel.OWNER, False),
            (PermissionLevel.OWNER, PermissionLevel.ADMIN, True),
        ],
    )
    def test_at_least_semantics(self, held, required, expected):
        grant = _grant("SP-alice", held)
        assert has_permission(_entity(), grant, "SP-alice", required) is expected

    def test_owner_passes_every_level(self):
        for required in PermissionLevel:
            assert has_permission(_entity(), None, "SP-owner", required) is True


class TestAccessEvaluatorWithStores:
    """The store-backed evaluator applies the same rules."""

    @pytest.mark.asyncio
    async def test_reads_entity_and_grant(self, db_session):
        db_session.add(_entity())
        await db_session.flush()

        permissions = PermissionStore(db_session)
        evaluator = AccessEvaluator(EntityStore(db_session), permissions)

        assert await evaluator.effective_level("e1", "d1", "SP-owner") == PermissionLevel.OWNER
        assert await evaluator.effective_level("e1", "d1", "SP-alice") == PermissionLevel.NONE
        assert await evaluator.effective_level("missing", "d1", "SP-owner") == PermissionLevel.NONE

    @pytest.mark.asyncio
    async def test_stored_grant_is_honoured(self, db_session):
        db_session.add(_entity())
        await db_session.flush()
        db_session.add(_document())
        await db_session.flush()
        db_session.add(_grant("SP-alice", PermissionLevel.MANAGE))
        await db_session.flush()

        evaluator = AccessEvaluator(EntityStore(db_session), PermissionStore(db_session))

        assert await evaluator.has_permission("e1", "d1", "SP-alice", PermissionLevel.MANAGE) is True
        assert await evaluator.has_permission("e1", "d1", "SP-alice", PermissionLevel.ADMIN) is False

    @pytest.mark.asyncio
    async def test_grant_requires_existing_document(self, db_session):
        db_session.add(_entity())
        await db_session.flush()
        db_session.add(_grant("SP-alice", PermissionLevel.VIEW))

        with pytest.raises(IntegrityError):
            await db_session.flush()
