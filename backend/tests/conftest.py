import os
import tempfile

# Keep the app's module-level engine and uploads directory away from the working tree
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="cocktail-uploads-"))

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from main import app
from db.database import Base, get_async_session
from routers.uploads import get_image_storage, image_storage as app_image_storage


@pytest_asyncio.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def image_storage():
    return app_image_storage


@pytest_asyncio.fixture
async def client(session_maker, image_storage):
    async def override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    app.dependency_overrides[get_image_storage] = lambda: image_storage
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def margarita():
    return {
        "theCock": "Margarita",
        "theIngredients": "Tequila, Triple sec, Lime juice",
        "theRecipe": "Shake with ice, strain into a salt-rimmed glass",
        "theJpeg": "https://example.com/margarita.jpg",
        "theComment": "Classic",
    }
