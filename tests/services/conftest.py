"""Service test fixtures — async DB, fake external services, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for the readiness probe, which bypasses get_db
    - Google, Cloudinary and SMTP are replaced by in-memory fakes

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - StaticPool: one shared connection, so every session sees the same database
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from einfo.api.dependencies import get_identity_verifier, get_mailer, get_media_store
from einfo.core.domain_types import AdminRole
from einfo.core.errors import AuthenticationError
from einfo.db.base import Base
from einfo.infrastructure.database import get_db, DatabaseSessionManager
from einfo.infrastructure.google_identity import GoogleIdentity
from einfo.infrastructure.media_store import StoredMedia
from einfo.infrastructure.security import (
    create_admin_token, create_user_token, hash_password,
)
from einfo.models.admin import Admin
from einfo.models.user import User
from einfo.models.user_profile import UserProfile
import einfo.infrastructure.database as db_module
from einfo.main import app

ADMIN_PASSWORD = "Secret123"


class FakeVerifier:
    """Accepts tokens registered in `identities`, rejects everything else."""

    def __init__(self):
        self.identities: dict[str, GoogleIdentity] = {}

    async def verify(self, token: str) -> GoogleIdentity:
        if token not in self.identities:
            raise AuthenticationError("Invalid Google token")
        return self.identities[token]


class FakeMediaStore:
    def __init__(self):
        self.uploads: list[dict] = []
        self.destroyed: list[tuple[str, str]] = []
        self.destroy_result = "ok"

    async def upload(
        self, data, folder, public_id, resource_type="image", file_format=None,
    ) -> StoredMedia:
        self.uploads.append({
            "data": data, "folder": folder, "public_id": public_id,
            "resource_type": resource_type, "format": file_format,
        })
        full_id = f"{folder}/{public_id}"
        return StoredMedia(
            url=f"https://res.cloudinary.com/test/{resource_type}/upload/{full_id}",
            public_id=full_id,
        )

    async def destroy(self, public_id, resource_type="image") -> str:
        self.destroyed.append((public_id, resource_type))
        return self.destroy_result


class FakeMailer:
    def __init__(self):
        self.sent = []

    async def send(self, msg) -> None:
        self.sent.append(msg)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
async def client(test_engine, test_session_factory, verifier, media_store, mailer):
    """FastAPI test client with DB and external services overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    app.dependency_overrides[get_media_store] = lambda: media_store
    app.dependency_overrides[get_mailer] = lambda: mailer

    # The readiness probe talks to db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def make_user(db: AsyncSession, username: str = "janedoe", **fields) -> User:
    """Insert an active user with an empty profile row."""
    profile_fields = fields.pop("profile", {})
    user = User(
        email=fields.pop("email", f"{username}@example.com"),
        username=username,
        name=fields.pop("name", "Jane Doe"),
        google_id=fields.pop("google_id", f"google-{username}"),
        is_active=fields.pop("is_active", True),
        profile=UserProfile(skills=profile_fields.pop("skills", []), **profile_fields),
        **fields,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
def user_factory(test_db):
    """Async factory: await user_factory("alice", profile={"bio": "..."})."""
    async def factory(username: str = "janedoe", **fields) -> User:
        return await make_user(test_db, username, **fields)
    return factory


@pytest.fixture
async def user(user_factory):
    return await user_factory()


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


async def make_admin(
    db: AsyncSession, username: str = "root", role: AdminRole = AdminRole.SUPER_ADMIN,
) -> Admin:
    admin = Admin(
        email=f"{username}@e-info.me",
        username=username,
        name="Root Admin",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=role.value,
        is_active=True,
    )
    db.add(admin)
    await db.commit()
    return admin


@pytest.fixture
def admin_factory(test_db):
    async def factory(username: str = "root", role: AdminRole = AdminRole.SUPER_ADMIN) -> Admin:
        return await make_admin(test_db, username, role)
    return factory


@pytest.fixture
async def super_admin(admin_factory):
    return await admin_factory()


@pytest.fixture
def admin_headers(super_admin):
    return {"Authorization": f"Bearer {create_admin_token(super_admin)}"}


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD
