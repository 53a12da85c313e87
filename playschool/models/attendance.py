from datetime import date, datetime
from enum import Enum
from typing import Optional

import pymongo
from beanie import Document, Indexed
from pydantic import BaseModel, Field
from pymongo import IndexModel


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    HALF_DAY = "HALF_DAY"


class AttendanceRecord(Document):
    """Attendance of one student on one date (unique per student and date)."""
    student_id: Indexed(str)
    date: date
    status: AttendanceStatus
    remarks: Optional[str] = None
    marked_by: Optional[str] = None  # user_id
    marked_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "attendance"
        use_state_management = True
        indexes = [
            IndexModel(
                [("student_id", pymongo.ASCENDING), ("date", pymongo.ASCENDING)],
                unique=True,
            ),
        ]


class AttendanceEntry(BaseModel):
    student_id: str
    status: AttendanceStatus
    remarks: Optional[str] = None


class AttendanceMarkRequest(BaseModel):
    date: date
    records: list[AttendanceEntry]
