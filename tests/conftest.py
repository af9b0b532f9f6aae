import os

# before any handbook import: settings and the bcrypt context read these
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from handbook.db.base import Base  # noqa: E402
from handbook.db.session import get_db  # noqa: E402
from handbook.main import app  # noqa: E402
from handbook.services import auth as auth_service  # noqa: E402

USERNAME = "z1234567@ad.unsw.edu.au"
OTHER_USERNAME = "z7654321@ad.unsw.edu.au"
PASSWORD = "Passw0rdX"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Register a user through the service, with a freshly issued code."""

    async def _make_user(username: str = USERNAME, password: str = PASSWORD):
        code = await auth_service.send_verification_code(db, username)
        return await auth_service.register(db, username, password, code)

    return _make_user
