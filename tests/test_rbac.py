import pytest

from playschool.models.user import UserRole
from playschool.rbac import SYSTEM_MODULES, has_permission


@pytest.mark.parametrize("module", [m["key"] for m in SYSTEM_MODULES])
def test_admin_has_everything(module):
    for action in ("view", "add", "edit", "delete"):
        assert has_permission(UserRole.ADMIN, module, action)


def test_teacher_permissions():
    assert has_permission(UserRole.TEACHER, "attendance", "add")
    assert has_permission(UserRole.TEACHER, "notices", "add")
    assert has_permission(UserRole.TEACHER, "students", "view")
    assert not has_permission(UserRole.TEACHER, "students", "edit")
    assert not has_permission(UserRole.TEACHER, "fees", "view")
    assert not has_permission(UserRole.TEACHER, "users", "view")


def test_parent_permissions():
    assert has_permission("PARENT", "fees", "add")
    assert has_permission("PARENT", "notices", "edit")
    assert not has_permission("PARENT", "fees", "delete")
    assert not has_permission("PARENT", "notices", "add")
    assert not has_permission("PARENT", "admissions", "view")


def test_unknown_role_or_module():
    assert not has_permission(None, "fees", "view")
    assert not has_permission("JANITOR", "fees", "view")
    assert not has_permission(UserRole.ADMIN, "cctv", "view")
