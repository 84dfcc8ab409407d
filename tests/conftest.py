import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.security import hash_password
from app.database.session import enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models import Base, User

CENTER = (-6.2087634, 106.845599)
DEFAULT_PASSWORD = "password123"
DEFAULT_PASSWORD_HASH = hash_password(DEFAULT_PASSWORD)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


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
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    async def _make_user(username, latitude=CENTER[0], longitude=CENTER[1], **fields) -> User:
        user = User(
            username=username,
            name=fields.pop("name", username.title()),
            email=fields.pop("email", f"{username}@example.com"),
            password=DEFAULT_PASSWORD_HASH,
            dob=fields.pop("dob", date(1990, 1, 1)),
            address=fields.pop("address", f"{username} address"),
            description=fields.pop("description", f"{username} description"),
            latitude=latitude,
            longitude=longitude,
            **fields,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user
    return _make_user


@pytest.fixture
async def test_user(make_user):
    return await make_user("testuser", latitude=-6.208763, longitude=106.845599)


@pytest.fixture
def login(client):
    async def _login(username, password=DEFAULT_PASSWORD) -> dict:
        response = await client.post("/users/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": response.json()["data"]["token"]}
    return _login


@pytest.fixture
async def auth_headers(test_user, login):
    return await login("testuser")
