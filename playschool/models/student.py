"""Enrolled children, their batch and selected fee plan."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class FeePlan(str, Enum):
    ANNUAL = "ANNUAL"
    QUARTERLY = "QUARTERLY"
    MONTHLY = "MONTHLY"


class Student(Document):
    """Student document. `student_code` is the school-facing ID (e.g. STUD123456)."""

    student_code: Indexed(str, unique=True)
    name: str
    batch: Indexed(str)  # batch name
    parent_id: Indexed(str)  # user id of the parent account
    enrollment_date: date
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    profile_picture: Optional[str] = None
    fee_plan: Optional[FeePlan] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "students"
        use_state_management = True


class StudentOut(BaseModel):
    id: str
    student_code: str
    name: str
    batch: str
    parent_id: str
    enrollment_date: date
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    profile_picture: Optional[str] = None
    fee_plan: Optional[FeePlan] = None


class StudentUpdate(BaseModel):
    """All fields optional for PUT; student_code and parent_id are not updatable."""
    name: Optional[str] = None
    batch: Optional[str] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    profile_picture: Optional[str] = None
    fee_plan: Optional[FeePlan] = None
