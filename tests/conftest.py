import os

os.environ.setdefault("STREAMHUB_DB_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import streamhub.models.models  # noqa: F401
from streamhub.core.database import Base, get_db
from streamhub.main import app
from streamhub.services.media.storage import MediaStorageError, UploadedMedia, get_media_storage

API = "/api/v1"


class FakeMediaStorage:
    """In-memory stand-in for the MinIO client."""

    def __init__(self):
        self.uploaded = []
        self.deleted = []
        self.fail_folders = set()

    async def upload(self, upload, folder, probe=False):
        if folder in self.fail_folders:
            raise MediaStorageError(f"{folder} bucket unavailable")
        await upload.read()
        key = f"{folder}/{len(self.uploaded)}-{upload.filename}"
        self.uploaded.append(key)
        return UploadedMedia(url=f"http://media.test/{key}", key=key, duration=42.5 if probe else None)

    async def delete(self, url):
        self.deleted.append(url)


class StatementCounter:
    def __init__(self):
        self.count = 0

    def __call__(self, *args, **kwargs):
        self.count += 1


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def statements(engine):
    counter = StatementCounter()
    event.listen(engine.sync_engine, "before_cursor_execute", counter)
    yield counter
    event.remove(engine.sync_engine, "before_cursor_execute", counter)


@pytest.fixture
def media():
    return FakeMediaStorage()


@pytest_asyncio.fixture
async def client(session_factory, media):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_storage] = lambda: media
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def auth(user):
    return {"X-User-Id": user["id"]}


@pytest.fixture
def create_user(client):
    async def _create(username, avatar=None):
        resp = await client.post(f"{API}/users", json={"username": username, "avatar": avatar})
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _create


@pytest.fixture
def publish_video(client):
    async def _publish(user, title="A video", description="Some description", publish=True):
        resp = await client.post(
            f"{API}/videos",
            data={"title": title, "description": description},
            files={
                "video_file": ("clip.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4"),
                "thumbnail": ("thumb.jpg", b"\xff\xd8\xff\xe0", "image/jpeg"),
            },
            headers=auth(user),
        )
        assert resp.status_code == 201, resp.text
        video = resp.json()["data"]
        if not publish:
            toggled = await client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=auth(user))
            assert toggled.json()["data"] == {"is_published": False}
            video["is_published"] = False
        return video
    return _publish
