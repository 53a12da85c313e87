"""Notice board posts with role-based visibility."""
import datetime
from enum import Enum

from beanie import Document
from pydantic import BaseModel, Field


class NoticeVisibility(str, Enum):
    PUBLIC = "public"
    PARENTS = "parents"
    TEACHERS = "teachers"


class NoticePriority(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class NoticeCategory(str, Enum):
    GENERAL = "General"
    ACADEMIC = "Academic"
    HOLIDAY = "Holiday"
    EVENT = "Event"
    EMERGENCY = "Emergency"
    FEE_REMINDER = "Fee Reminder"


class Notice(Document):
    title: str
    content: str
    date: datetime.date = Field(default_factory=datetime.date.today)
    visibility: NoticeVisibility = NoticeVisibility.PUBLIC
    priority: NoticePriority = NoticePriority.NORMAL
    category: NoticeCategory = NoticeCategory.GENERAL
    read_by: list[str] = Field(default_factory=list)  # user ids

    class Settings:
        name = "notices"
        use_state_management = True


class NoticeCreate(BaseModel):
    title: str
    content: str
    visibility: NoticeVisibility = NoticeVisibility.PUBLIC
    priority: NoticePriority = NoticePriority.NORMAL
    category: NoticeCategory = NoticeCategory.GENERAL
