"""
Test fixtures - in-memory SQLite database + HTTP clients bound to the app
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from asset_manager.database import Base, get_db, enable_sqlite_foreign_keys
from asset_manager.main import app
from asset_manager.models.category import Category
from asset_manager.client.api_client import AssetManagerClient


@pytest_asyncio.fixture()
async def db_session():
    """Create a fresh in-memory SQLite database for each test"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture()
async def seed_data(db_session):
    """Insert baseline categories: IT + Furniture"""
    it = Category(name="IT", description="Computers and peripherals")
    furniture = Category(name="Furniture")

    db_session.add_all([it, furniture])
    await db_session.commit()
    await db_session.refresh(it)
    await db_session.refresh(furniture)

    return {"it": it, "furniture": furniture}


@pytest_asyncio.fixture()
async def client(db_session):
    """httpx AsyncClient bound to the FastAPI app"""

    async def override_get_db():
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def api(tmp_path):
    """AssetManagerClient talking to the app in-process.

    Backed by a SQLite file with a session per request, so the concurrent
    requests issued by AssetStore.load() get separate connections the way
    they would against a real server.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'assets.db'}", echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AssetManagerClient(
        base_url="http://test", transport=ASGITransport(app=app)
    ) as api_client:
        yield api_client

    app.dependency_overrides.clear()
    await engine.dispose()
