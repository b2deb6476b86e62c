import socket
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bookstore.core.config import settings
from bookstore.core.tokens import SigningKeyPair, TokenIssuer
from bookstore.models import Base, Book

# Use separate test database
TEST_DATABASE_URL = settings.database_url.replace(
    settings.database_name, f"{settings.database_name}_test"
)

# Test-only Ed25519 seed. Production reads BOOKSTORE_AUTH_KEY from env.
TEST_AUTH_KEY = "64D4D1E3ABE3C7A2EB09305A1C8A7B896110674735C671E5586D968ED0561415"  # nosec B105  # gitleaks:allow

TEST_EMAIL = "budi@example.com"
TEST_PASSWORD = "password1"  # nosec B105


def _is_postgres_available() -> bool:
    """Check if PostgreSQL is accepting connections.

    Returns:
        True if PostgreSQL is reachable on the configured port, False otherwise.
    """
    try:
        with socket.create_connection(
            (settings.database_host, settings.database_port), timeout=1
        ):
            return True
    except OSError:
        return False


# Check once at module load time
_POSTGRES_AVAILABLE = _is_postgres_available()


def _sqlite_engine(path: Path) -> AsyncEngine:
    """File-backed SQLite engine with foreign key enforcement.

    Each session gets its own connection, so commits and rollbacks behave
    like they do against PostgreSQL.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}", echo=False)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine.

    Uses the PostgreSQL test database when it is reachable, otherwise an
    SQLite file under tmp_path.
    """
    if _POSTGRES_AVAILABLE:
        engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    else:
        engine = _sqlite_engine(tmp_path / "bookstore_test.db")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def books(
    session_factory: async_sessionmaker[AsyncSession],
) -> list[Book]:
    """Seed the catalog with two committed books.

    Committed through its own session so services under test see the rows.
    """
    async with session_factory() as session:
        seeded = [
            Book(title="Laskar Pelangi", author="Andrea Hirata"),
            Book(title="Bumi Manusia", author="Pramoedya Ananta Toer"),
        ]
        session.add_all(seeded)
        await session.commit()
    return seeded


@pytest.fixture
def key_pair() -> SigningKeyPair:
    """Signing key pair from the fixed test seed."""
    return SigningKeyPair.from_seed_hex(TEST_AUTH_KEY)


@pytest.fixture
def token_issuer(key_pair: SigningKeyPair) -> TokenIssuer:
    """Token issuer using the real clock."""
    return TokenIssuer(key_pair)


# =============================================================================
# API Test Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    books,  # noqa: ARG001 - ensures catalog exists
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against an app built with the test signing key.

    Sets up:
    - Test database connection via dependency override
    - Signing key from TEST_AUTH_KEY (no environment lookup)
    - httpx.AsyncClient with ASGI transport

    Yields:
        AsyncClient with no credentials attached.
    """
    from bookstore.core.database import get_db, transaction
    from bookstore.core.secrets_provider import FixedSecrets
    from bookstore.main import create_app

    app = create_app(FixedSecrets(TEST_AUTH_KEY))

    # Same unit of work as get_db, bound to the test engine
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session, transaction(session):
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Register TEST_EMAIL, log in, and return a Bearer header."""
    response = await client.post(
        "/v1/users", json={"email": TEST_EMAIL, "password": TEST_PASSWORD}
    )
    assert response.status_code == 201

    response = await client.post("/v1/login", auth=(TEST_EMAIL, TEST_PASSWORD))
    assert response.status_code == 200
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
