"""RBAC module/action registry and per-role permissions."""
from __future__ import annotations

from typing import Literal

from playschool.models.user import UserRole

PermissionAction = Literal["view", "add", "edit", "delete"]

ACTION_BY_METHOD: dict[str, PermissionAction] = {
    "GET": "view",
    "HEAD": "view",
    "OPTIONS": "view",
    "POST": "add",
    "PUT": "edit",
    "PATCH": "edit",
    "DELETE": "delete",
}

SYSTEM_MODULES: list[dict[str, str]] = [
    {"key": "dashboard", "name": "Dashboard"},
    {"key": "students", "name": "Students"},
    {"key": "batches", "name": "Batches"},
    {"key": "teachers", "name": "Teachers"},
    {"key": "users", "name": "Users"},
    {"key": "admissions", "name": "Admissions"},
    {"key": "attendance", "name": "Attendance"},
    {"key": "homework", "name": "Homework"},
    {"key": "notices", "name": "Notices"},
    {"key": "fees", "name": "Fees"},
    {"key": "landing", "name": "Landing Page"},
]


def _full_permissions() -> dict[str, bool]:
    return {"view": True, "add": True, "edit": True, "delete": True}


def _view_only() -> dict[str, bool]:
    return {"view": True, "add": False, "edit": False, "delete": False}


def _module_defaults(fill: dict[str, bool]) -> dict[str, dict[str, bool]]:
    return {module["key"]: dict(fill) for module in SYSTEM_MODULES}


ROLE_PERMISSIONS: dict[UserRole, dict[str, dict[str, bool]]] = {
    UserRole.ADMIN: _module_defaults(_full_permissions()),
    UserRole.TEACHER: {
        **_module_defaults({"view": False, "add": False, "edit": False, "delete": False}),
        "dashboard": _view_only(),
        "students": _view_only(),
        "batches": _view_only(),
        "attendance": {"view": True, "add": True, "edit": True, "delete": False},
        "homework": {"view": True, "add": True, "edit": True, "delete": False},
        "notices": {"view": True, "add": True, "edit": True, "delete": False},
    },
    UserRole.PARENT: {
        **_module_defaults({"view": False, "add": False, "edit": False, "delete": False}),
        "dashboard": _view_only(),
        "students": _view_only(),
        "batches": _view_only(),
        "attendance": _view_only(),
        "homework": _view_only(),
        # marking a notice as read is a PUT
        "notices": {"view": True, "add": False, "edit": True, "delete": False},
        # paying submits a POST/PUT; status overrides and deletes stay admin-only
        "fees": {"view": True, "add": True, "edit": True, "delete": False},
    },
}


def has_permission(role: UserRole | str | None, module: str, action: str) -> bool:
    if not role:
        return False
    try:
        permissions = ROLE_PERMISSIONS[UserRole(role)]
    except ValueError:
        return False
    permission = permissions.get(module)
    if not permission:
        return False
    return bool(permission.get(action, False))
