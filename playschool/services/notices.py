"""Notice visibility, ordering and serialization helpers."""
from __future__ import annotations

from typing import Iterable

from playschool.models.notice import NoticePriority, NoticeVisibility
from playschool.models.user import UserRole

# Audiences each role can read besides public notices; admins read everything.
_ROLE_AUDIENCES: dict[UserRole, set[NoticeVisibility]] = {
    UserRole.PARENT: {NoticeVisibility.PARENTS},
    UserRole.TEACHER: {NoticeVisibility.TEACHERS, NoticeVisibility.PARENTS},
}

_PRIORITY_RANK = {
    NoticePriority.URGENT: 0,
    NoticePriority.HIGH: 1,
    NoticePriority.NORMAL: 2,
}


def is_notice_visible(visibility: NoticeVisibility | str, role: UserRole | str | None) -> bool:
    visibility = NoticeVisibility(visibility)
    if visibility == NoticeVisibility.PUBLIC:
        return True
    if not role:
        return False
    role = UserRole(role)
    if role == UserRole.ADMIN:
        return True
    return visibility in _ROLE_AUDIENCES.get(role, set())


def visible_notices(notices: Iterable, role: UserRole | str | None) -> list:
    """Notices the role may read, newest first; urgent ones lead within a day."""
    visible = [n for n in notices if is_notice_visible(n.visibility, role)]
    visible.sort(key=lambda n: _PRIORITY_RANK.get(n.priority, len(_PRIORITY_RANK)))
    visible.sort(key=lambda n: n.date, reverse=True)
    return visible


def notice_to_dict(notice, user_id: str | None = None) -> dict:
    return {
        "id": str(notice.id),
        "title": notice.title,
        "content": notice.content,
        "date": notice.date.isoformat(),
        "visibility": notice.visibility,
        "priority": notice.priority,
        "category": notice.category,
        "is_read": bool(user_id) and user_id in (notice.read_by or []),
    }
