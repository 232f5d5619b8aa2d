"""
Pytest fixtures for collateral registry tests.
"""

import hashlib
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from collateral.database import build_engine, build_session_maker, init_db
from collateral.kernel.host import KeyedLocks, LogicalClock
from collateral.kernel.ledger import CollateralLedger
from collateral.schemas.document import DocumentFields


OWNER = "SP-owner"


def compute_content_hash(content: bytes) -> bytes:
    return hashlib.sha256(content).digest()


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """File-backed SQLite with the application's pragmas, shared by every session in a test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}")
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(db_engine)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def clock() -> LogicalClock:
    return LogicalClock(start=100)


@pytest.fixture
def ledger(session_maker, clock) -> CollateralLedger:
    return CollateralLedger(session_maker, clock, KeyedLocks())


@pytest.fixture
def deed_fields() -> DocumentFields:
    """Fields of a sample property deed."""
    return DocumentFields(
        name="Test Property Deed",
        description="Commercial real estate collateral document",
        content_hash=bytes([1]) * 32,
        doc_type="real-estate",
    )


@pytest.fixture
def revised_fields() -> DocumentFields:
    return DocumentFields(
        name="Test Property Deed (amended)",
        description="Amended after survey: Grundstücksgrenze korrigiert",
        content_hash=compute_content_hash(b"amended deed"),
        doc_type="real-estate",
    )


@pytest_asyncio.fixture
async def registered_document(ledger: CollateralLedger, deed_fields: DocumentFields) -> tuple[str, str]:
    """Entity e1 owned by OWNER with document d1 (audit log id 1 written)."""
    assert (await ledger.register_entity("e1", "Acme", caller=OWNER)).ok
    assert (await ledger.add_document("e1", "d1", deed_fields, caller=OWNER)).ok
    return "e1", "d1"
