"""
Test configuration and fixtures for the ledger service tests.
"""
import pytest
from typing import AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from httpx import AsyncClient, ASGITransport

from app.core.database import Base, get_db, get_session_factory
from app.core.health import reset_ledger_health
from app.core.money import Cents
from app.modules.accounts.models import Account
from main import app


# ============================================================
# Database Fixtures
# ============================================================

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create a fresh test database for each test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    """
    File-backed test database with one connection per session.

    Concurrent transfers against it really run in separate transactions,
    serialized by SQLite's write lock.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        poolclass=NullPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(autouse=True)
def ledger_health():
    """Every test starts with a consistent ledger"""
    reset_ledger_health()
    yield
    reset_ledger_health()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    """Session factory bound to the test database"""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for each test"""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database overrides"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================
# Account Fixtures
# ============================================================

@pytest.fixture
async def accounts(session_factory) -> Dict[str, Account]:
    """Seed accounts A (USD 100.00), B (USD 10.00) and C (EUR 50.00)"""
    seeded = {
        "A": Account(identifier="A", currency="USD", balance=Cents(10000)),
        "B": Account(identifier="B", currency="USD", balance=Cents(1000)),
        "C": Account(identifier="C", currency="EUR", balance=Cents(5000)),
    }
    async with session_factory() as session:
        session.add_all(seeded.values())
        await session.commit()
    return seeded


@pytest.fixture
def read_balances(session_factory):
    """Return a coroutine function reading current balances straight from storage"""
    from app.modules.accounts.services import AccountService

    async def _read(*identifiers: str) -> Dict[str, int]:
        async with session_factory() as session:
            found = await AccountService.get_accounts(session, identifiers)
            return {account.identifier: int(account.balance) for account in found}

    return _read
