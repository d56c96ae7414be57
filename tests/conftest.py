"""Pytest configuration and fixtures for storefront.

Environment is set before the app is imported: a throwaway SQLite file
(aiosqlite), local storage under a temp dir, cheap bcrypt rounds and no
shipping credentials. HTTP tests use storefront.main:app over ASGI.
"""

import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="storefront-tests-"))

os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdef"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP / 'storefront.db'}"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["STORAGE_ROOT"] = str(_TMP / "storage")
os.environ["STORAGE_BASE_URL"] = "http://test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["REDIS_ENABLED"] = "false"
os.environ.pop("RAJAONGKIR_API_KEY", None)
os.environ.pop("RAJAONGKIR_BASE_URL", None)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from storefront.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from storefront.core.limiter import limiter  # noqa: E402
from storefront.domain.enums import UserRole  # noqa: E402
from storefront.infrastructure.persistence import database as db_module  # noqa: E402
from storefront.infrastructure.persistence import models  # noqa: E402, F401
from storefront.infrastructure.persistence.database import Base  # noqa: E402
from storefront.infrastructure.persistence.repositories import UserRepository  # noqa: E402
from storefront.infrastructure.security.jwt import create_access_token  # noqa: E402
from storefront.main import app  # noqa: E402
from tests.fakes import ADMIN_PASSWORD, USER_PASSWORD  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    limiter.reset()


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def database() -> AsyncIterator[None]:
    """Fresh schema in the test SQLite file; engine disposed afterwards."""
    db_module.get_session_factory()
    async with db_module.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await db_module.dispose_engine()


@pytest.fixture
async def db_session(database: None) -> AsyncIterator[AsyncSession]:
    """Session for repository tests. Tests open their own transactions."""
    async with db_module.get_session_factory()() as session:
        yield session


async def _create_user(email: str, password: str, role: UserRole) -> dict[str, str]:
    async with db_module.get_session_factory()() as session:
        async with session.begin():
            user = await UserRepository(session).create_user(
                email, password, name=email.split("@")[0], role=role.value
            )
    token = create_access_token(
        data={"sub": user.id, "role": user.role, "email": user.email, "name": user.name}
    )
    return {"id": user.id, "email": user.email, "token": token}


@pytest.fixture
async def admin(database: None) -> dict[str, str]:
    """Admin user row plus a signed session token."""
    return await _create_user("admin@example.com", ADMIN_PASSWORD, UserRole.ADMIN)


@pytest.fixture
async def customer(database: None) -> dict[str, str]:
    """Regular (non-admin) user row plus a signed session token."""
    return await _create_user("customer@example.com", USER_PASSWORD, UserRole.USER)


@pytest.fixture
def admin_headers(admin: dict[str, str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin['token']}"}


@pytest.fixture
def customer_headers(customer: dict[str, str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {customer['token']}"}
