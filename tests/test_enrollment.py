import random
import re
from types import SimpleNamespace

from playschool.services.enrollment import (
    details_from_application,
    details_from_enquiry,
    generate_student_code,
)


def test_student_code_format():
    rng = random.Random(7)
    codes = {generate_student_code(rng) for _ in range(20)}

    assert all(re.fullmatch(r"STUD\d{6}", code) for code in codes)
    assert len(codes) > 1


def test_details_from_enquiry():
    enquiry = SimpleNamespace(child_name="Mira", parent_name="Kavya", parent_email="kavya@example.com")
    details = details_from_enquiry(enquiry)

    assert details.child_name == "Mira"
    assert details.parent_name == "Kavya"
    assert details.email == "kavya@example.com"
    assert details.student_code is None


def test_details_from_application_prefers_father_then_mother():
    application = SimpleNamespace(
        child_name="Ishaan",
        father_name=None,
        mother_name="Nisha",
        father_phone=None,
        mother_phone="9876543210",
        email="nisha@example.com",
        address="12 MG Road",
        assigned_student_id="  STUD123456 ",
    )
    details = details_from_application(application)

    assert details.parent_name == "Nisha"
    assert details.contact_number == "9876543210"
    assert details.student_code == "STUD123456"


def test_blank_assigned_code_means_generated():
    application = SimpleNamespace(
        child_name="Ishaan",
        father_name="Rahul",
        mother_name=None,
        father_phone="9000000000",
        mother_phone=None,
        email="rahul@example.com",
        address=None,
        assigned_student_id="   ",
    )

    assert details_from_application(application).student_code is None
