"""Domain Types — verifies enum vocabularies and section defaults."""

from einfo.core.domain_types import (
    DEFAULT_ICONS, AdminAction, AdminRole, EducationType, ResourceKind, TokenType,
)


def test_every_section_has_a_default_icon():
    assert set(DEFAULT_ICONS) == set(ResourceKind)


def test_enums_serialize_to_strings():
    assert EducationType.DEGREE == "degree"
    assert AdminRole.SUPER_ADMIN.value == "super_admin"
    assert TokenType.ADMIN.value == "admin"


def test_admin_actions_cover_status_changes():
    assert {AdminAction.ACTIVATE_USER, AdminAction.DEACTIVATE_USER} <= set(AdminAction)
