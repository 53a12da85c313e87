"""Beanie document models and Pydantic schemas."""
from playschool.models.user import User, UserRole, TeacherCreate, UserOut, UserWithPassword
from playschool.models.student import Student, StudentOut, StudentUpdate, FeePlan
from playschool.models.batch import Batch, BatchOut, BatchCreate, BatchUpdate
from playschool.models.fee import (
    FeeInvoice,
    FeeInvoiceOut,
    FeeInvoiceCreate,
    FeeStatus,
    FeeType,
    FeePeriod,
    FeeRow,
    FeePlanView,
)
from playschool.models.admission import (
    AdmissionEnquiry,
    AdmissionApplication,
    AdmissionStatus,
    EnquiryCreate,
    ApplicationCreate,
)
from playschool.models.attendance import AttendanceRecord, AttendanceStatus
from playschool.models.notice import Notice, NoticeCreate, NoticeVisibility
from playschool.models.homework import Homework, HomeworkCreate
from playschool.models.landing import LandingConfig, LandingConfigUpdate

__all__ = [
    "User",
    "UserRole",
    "TeacherCreate",
    "UserOut",
    "UserWithPassword",
    "Student",
    "StudentOut",
    "StudentUpdate",
    "FeePlan",
    "Batch",
    "BatchOut",
    "BatchCreate",
    "BatchUpdate",
    "FeeInvoice",
    "FeeInvoiceOut",
    "FeeInvoiceCreate",
    "FeeStatus",
    "FeeType",
    "FeePeriod",
    "FeeRow",
    "FeePlanView",
    "AdmissionEnquiry",
    "AdmissionApplication",
    "AdmissionStatus",
    "EnquiryCreate",
    "ApplicationCreate",
    "AttendanceRecord",
    "AttendanceStatus",
    "Notice",
    "NoticeCreate",
    "NoticeVisibility",
    "Homework",
    "HomeworkCreate",
    "LandingConfig",
    "LandingConfigUpdate",
]
