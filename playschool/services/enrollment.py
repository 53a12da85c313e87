"""Turning an admission enquiry or application into a parent account and a student."""
import logging
import random
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from playschool.api.deps import generate_password, get_password_hash
from playschool.config import settings
from playschool.models.admission import (
    AdmissionApplication,
    AdmissionEnquiry,
    AdmissionStatus,
    EnrollmentSource,
)
from playschool.models.student import Student, StudentOut
from playschool.models.user import User, UserOut, UserRole
from playschool.repositories import safe_object_id
from playschool.services.accounts import find_user_by_email

logger = logging.getLogger(__name__)

STUDENT_CODE_PREFIX = "STUD"


class EnrollmentError(Exception):
    status_code = 400

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        if status_code:
            self.status_code = status_code


@dataclass
class EnrollmentDetails:
    child_name: str
    parent_name: str
    email: str
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    student_code: Optional[str] = None


def details_from_enquiry(enquiry) -> EnrollmentDetails:
    return EnrollmentDetails(
        child_name=enquiry.child_name,
        parent_name=enquiry.parent_name,
        email=enquiry.parent_email,
    )


def details_from_application(application) -> EnrollmentDetails:
    parent_name = application.father_name or application.mother_name or "Parent"
    return EnrollmentDetails(
        child_name=application.child_name,
        parent_name=parent_name,
        email=application.email,
        father_name=application.father_name,
        mother_name=application.mother_name,
        contact_number=application.father_phone or application.mother_phone,
        address=application.address,
        student_code=(application.assigned_student_id or "").strip() or None,
    )


async def student_code_taken(code: str) -> bool:
    pattern = f"^{re.escape(code.strip())}$"
    return await Student.find_one({"student_code": {"$regex": pattern, "$options": "i"}}) is not None


def generate_student_code(rng: random.Random | None = None) -> str:
    rng = rng or random.SystemRandom()
    return f"{STUDENT_CODE_PREFIX}{rng.randint(0, 999999):06d}"


async def _unique_student_code() -> str:
    while True:
        code = generate_student_code()
        if not await student_code_taken(code):
            return code


async def _load_source(admission_id: str, source: EnrollmentSource):
    oid = safe_object_id(admission_id)
    document = AdmissionEnquiry if source == EnrollmentSource.ENQUIRY else AdmissionApplication
    record = await document.get(oid) if oid else None
    if not record:
        raise EnrollmentError(f"{source.value.capitalize()} not found", status_code=404)
    if record.status == AdmissionStatus.ENROLLED:
        raise EnrollmentError("Already enrolled")
    return record


async def enroll(admission_id: str, source: EnrollmentSource, today: date) -> dict:
    """
    Enroll the child from an enquiry or application.

    Reuses an existing parent account with the same email, otherwise creates
    one; the generated password is returned only in that case.
    """
    record = await _load_source(admission_id, source)
    details = details_from_enquiry(record) if source == EnrollmentSource.ENQUIRY else details_from_application(record)

    if details.student_code:
        if await student_code_taken(details.student_code):
            raise EnrollmentError(f"Student ID {details.student_code} is already taken")
        code = details.student_code
    else:
        code = await _unique_student_code()

    parent = await find_user_by_email(details.email)
    password = None
    if parent and parent.role != UserRole.PARENT:
        raise EnrollmentError("Email belongs to a staff account")
    if not parent:
        password = generate_password()
        parent = User(
            email=details.email,
            hashed_password=get_password_hash(password),
            role=UserRole.PARENT,
            name=details.parent_name,
            phone=details.contact_number,
            address=details.address,
        )
        await parent.insert()
        logger.info(f"Created parent account {parent.email}")

    student = Student(
        student_code=code,
        name=details.child_name,
        batch=settings.default_batch_name,
        parent_id=str(parent.id),
        enrollment_date=today,
        father_name=details.father_name,
        mother_name=details.mother_name,
        contact_number=details.contact_number,
        address=details.address,
    )
    await student.insert()

    record.status = AdmissionStatus.ENROLLED
    await record.save()
    logger.info(f"Enrolled {student.name} as {code} from {source.value} {admission_id}")

    return {
        "student": StudentOut.model_validate({**student.model_dump(exclude={"id", "revision_id"}), "id": str(student.id)}),
        "parent": UserOut.from_user(parent),
        "generated_password": password,
        "enrolled_at": datetime.utcnow(),
    }
