"""Admin Activity Log — append-and-prune semantics, and the maintenance scripts."""

from einfo.core.domain_types import AdminAction, AdminRole
from einfo.schemas.admin import CreateAdmin
from einfo.scripts.create_super_admin import create_super_admin
from einfo.scripts.prune_admin_activity import prune
from einfo.services.admin_activity import count_activity, record_activity


async def test_record_keeps_newest(test_db, super_admin):
    for i in range(5):
        await record_activity(
            test_db, super_admin.id, AdminAction.VIEW_USERS, cap=3,
            details={"page": i},
        )
    await test_db.commit()
    assert await count_activity(test_db) == 3


async def test_record_adds_timestamp(test_db, super_admin):
    entry = await record_activity(
        test_db, super_admin.id, AdminAction.LOGIN, cap=10, details={"k": "v"},
    )
    assert entry.details["k"] == "v"
    assert "timestamp" in entry.details
    assert entry.ip_address is None


async def test_prune_script(test_session_factory, test_db, super_admin):
    for _ in range(6):
        await record_activity(test_db, super_admin.id, AdminAction.LOGIN, cap=100)
    await test_db.commit()

    before, deleted = await prune(test_session_factory, keep=4)
    assert (before, deleted) == (6, 2)
    assert await prune(test_session_factory, keep=4) == (4, 0)


async def test_create_super_admin_once(test_session_factory):
    body = CreateAdmin(
        email="boss@e-info.me", username="boss", name="The Boss",
        password="Sup3rSecret", role=AdminRole.SUPER_ADMIN,
    )
    admin = await create_super_admin(test_session_factory, body)
    assert admin is not None
    assert admin.role == "super_admin"
    assert admin.password_hash != "Sup3rSecret"

    assert await create_super_admin(test_session_factory, body) is None
