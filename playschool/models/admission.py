"""Admission enquiries (quick form) and full admission applications."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import BaseModel, EmailStr, Field


class AdmissionStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    SCHEDULED_VISIT = "scheduled_visit"
    ACCEPTED = "accepted"
    ENROLLED = "enrolled"
    REJECTED = "rejected"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class AdmissionEnquiry(Document):
    """Quick enquiry from the landing page."""

    child_name: str
    parent_name: str
    parent_email: EmailStr
    notes: Optional[str] = None
    status: AdmissionStatus = AdmissionStatus.NEW
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "admission_enquiries"
        use_state_management = True


class AdmissionApplication(Document):
    """Full admission form."""

    child_name: str
    dob: date
    gender: Optional[Gender] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    father_phone: Optional[str] = None
    mother_phone: Optional[str] = None
    email: EmailStr
    address: Optional[str] = None
    status: AdmissionStatus = AdmissionStatus.NEW
    assigned_student_id: Optional[str] = None  # optional manual student code
    submitted_date: date = Field(default_factory=date.today)

    class Settings:
        name = "admission_applications"
        use_state_management = True


class EnquiryCreate(BaseModel):
    child_name: str
    parent_name: str
    parent_email: EmailStr
    notes: Optional[str] = None


class ApplicationCreate(BaseModel):
    child_name: str
    dob: date
    gender: Optional[Gender] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    father_phone: Optional[str] = None
    mother_phone: Optional[str] = None
    email: EmailStr
    address: Optional[str] = None
    assigned_student_id: Optional[str] = None


class AdmissionStatusUpdate(BaseModel):
    status: AdmissionStatus


class EnrollmentSource(str, Enum):
    ENQUIRY = "enquiry"
    APPLICATION = "application"


class EnrollRequest(BaseModel):
    admission_id: str
    source: EnrollmentSource = EnrollmentSource.ENQUIRY
