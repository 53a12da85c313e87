from datetime import date
from types import SimpleNamespace

import pytest

from playschool.models.notice import NoticePriority, NoticeVisibility
from playschool.models.user import UserRole
from playschool.services.notices import is_notice_visible, notice_to_dict, visible_notices


@pytest.mark.parametrize(
    "visibility, role, expected",
    [
        (NoticeVisibility.PUBLIC, None, True),
        (NoticeVisibility.PUBLIC, UserRole.PARENT, True),
        (NoticeVisibility.PARENTS, UserRole.PARENT, True),
        (NoticeVisibility.TEACHERS, UserRole.PARENT, False),
        (NoticeVisibility.PARENTS, UserRole.TEACHER, True),
        (NoticeVisibility.TEACHERS, UserRole.TEACHER, True),
        (NoticeVisibility.TEACHERS, UserRole.ADMIN, True),
        (NoticeVisibility.PARENTS, None, False),
    ],
)
def test_visibility(visibility, role, expected):
    assert is_notice_visible(visibility, role) is expected


def _notice(title, day, visibility=NoticeVisibility.PUBLIC, priority=NoticePriority.NORMAL, read_by=()):
    return SimpleNamespace(
        id=title,
        title=title,
        content="...",
        date=day,
        visibility=visibility,
        priority=priority,
        category="General",
        read_by=list(read_by),
    )


def test_visible_notices_order_and_filter():
    notices = [
        _notice("old", date(2024, 4, 1)),
        _notice("staff", date(2024, 4, 3), visibility=NoticeVisibility.TEACHERS),
        _notice("normal", date(2024, 4, 2)),
        _notice("urgent", date(2024, 4, 2), priority=NoticePriority.URGENT),
    ]

    assert [n.title for n in visible_notices(notices, UserRole.PARENT)] == ["urgent", "normal", "old"]
    assert [n.title for n in visible_notices(notices, UserRole.TEACHER)][0] == "staff"


def test_notice_read_flag():
    notice = _notice("fees", date(2024, 4, 2), read_by=["u1"])

    assert notice_to_dict(notice, "u1")["is_read"] is True
    assert notice_to_dict(notice, "u2")["is_read"] is False
    assert notice_to_dict(notice)["date"] == "2024-04-02"
