"""Unit tests for audit log numbering."""

import pytest

from collateral.kernel.audit.audit_log import AuditLog
from collateral.kernel.models.audit import AuditAction
from collateral.kernel.stores import AuditStore


@pytest.fixture
def audit_log(db_session) -> AuditLog:
    return AuditLog(AuditStore(db_session))


class TestAuditLog:

    @pytest.mark.asyncio
    async def test_ids_start_at_one_and_increase(self, audit_log: AuditLog):
        ids = [
            await audit_log.append("e1", "d1", "SP-owner", action, "", timestamp=10 + i)
            for i, action in enumerate([AuditAction.CREATE, AuditAction.SHARE, AuditAction.VIEW])
        ]

        assert ids == [1, 2, 3]
        assert await audit_log.next_log_id("e1", "d1") == 4
        assert await audit_log.count("e1", "d1") == 3

    @pytest.mark.asyncio
    async def test_counters_are_per_document(self, audit_log: AuditLog):
        await audit_log.append("e1", "d1", "SP-owner", AuditAction.CREATE, "", timestamp=1)
        await audit_log.append("e1", "d1", "SP-owner", AuditAction.UPDATE, "", timestamp=2)

        assert await audit_log.append("e1", "d2", "SP-owner", AuditAction.CREATE, "", timestamp=3) == 1
        assert await audit_log.append("e2", "d1", "SP-owner", AuditAction.CREATE, "", timestamp=4) == 1
        assert await audit_log.next_log_id("e1", "d1") == 3

    @pytest.mark.asyncio
    async def test_entry_fields_are_stored(self, audit_log: AuditLog):
        log_id = await audit_log.append(
            "e1", "d1", "SP-alice", AuditAction.VIEW, "Dokument geöffnet", timestamp=42,
        )

        entry = await audit_log.get_entry("e1", "d1", log_id)
        assert entry.user == "SP-alice"
        assert entry.action == AuditAction.VIEW.value
        assert entry.timestamp == 42
        assert entry.details == "Dokument geöffnet"
        assert await audit_log.get_entry("e1", "d1", log_id + 1) is None

    @pytest.mark.asyncio
    async def test_history_is_ascending_and_paged(self, audit_log: AuditLog):
        for i in range(5):
            await audit_log.append("e1", "d1", "SP-owner", AuditAction.VIEW, f"read {i}", timestamp=i)

        page = await audit_log.history("e1", "d1", limit=2, offset=1)
        assert [entry.log_id for entry in page] == [2, 3]

    @pytest.mark.asyncio
    async def test_overlong_details_rejected_without_consuming_an_id(self, audit_log: AuditLog):
        with pytest.raises(ValueError):
            await audit_log.append("e1", "d1", "SP-owner", AuditAction.VIEW, "x" * 501, timestamp=1)

        assert await audit_log.next_log_id("e1", "d1") == 1
