"""Shared fixtures: a throwaway SQLite database, blob folder and HTTP client."""

import base64
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix='files_manager_tests_')
os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{_TMP_DIR}/test.db'
os.environ['FOLDER_PATH'] = os.path.join(_TMP_DIR, 'blobs')
os.environ['BCRYPT_ROUNDS'] = '4'

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.database import async_session, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base  # noqa: E402
from app.services import file_manager, identity  # noqa: E402

PASSWORD = 'toto1234!'


def _b64(text: str) -> str:
    """Base64 payload as clients send it in POST /files."""
    return base64.b64encode(text.encode()).decode()


@pytest_asyncio.fixture(autouse=True)
async def reset_db():
    """Recreate all tables for every test.

    Yields:
        Nothing; tables are empty when the test starts.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def db():
    """Open a database session.

    Yields:
        AsyncSession bound to the test database.
    """
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def client():
    """HTTP client talking to the app in-process.

    Yields:
        httpx.AsyncClient with base_url http://test.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as c:
        yield c


@pytest_asyncio.fixture
async def user(db):
    """Create test user."""
    return await identity.register_user(db, 'bob@dylan.com', PASSWORD)


@pytest_asyncio.fixture
async def other_user(db):
    """Create second test user for isolation tests."""
    return await identity.register_user(db, 'bobby@dylan.com', PASSWORD)


@pytest_asyncio.fixture
async def token(db, user):
    """Session token for `user`."""
    return await identity.issue_token(db, user.email, PASSWORD)


@pytest_asyncio.fixture
async def other_token(db, other_user):
    """Session token for `other_user`."""
    return await identity.issue_token(db, other_user.email, PASSWORD)


@pytest_asyncio.fixture
async def folder(db, user):
    """Private root folder owned by `user`."""
    return await file_manager.create_file(db, user.id, name='music', type='folder')


@pytest_asyncio.fixture
async def text_file(db, user, folder):
    """Private text file inside `folder`."""
    return await file_manager.create_file(
        db,
        user.id,
        name='hello.txt',
        type='file',
        parent_id=str(folder.id),
        data=_b64('Hello Webstack!\n'),
    )


@pytest.fixture
def blob_dir():
    """Directory where the blob store writes."""
    return os.environ['FOLDER_PATH']
