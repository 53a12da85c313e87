import os

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from datetime import date  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402

from playschool.models.batch import BatchOut  # noqa: E402
from playschool.models.fee import FeeInvoiceOut, FeePeriod, FeeStatus, FeeType  # noqa: E402
from playschool.models.student import StudentOut  # noqa: E402
from playschool.models.user import UserRole  # noqa: E402
from playschool.repositories import MemoryRepository  # noqa: E402
from playschool.services.invoices import FeeStore  # noqa: E402

PARENT_ID = "650000000000000000000001"
OTHER_PARENT_ID = "650000000000000000000002"
ADMIN_ID = "650000000000000000000003"
STUDENT_ID = "660000000000000000000001"
OTHER_STUDENT_ID = "660000000000000000000002"


@pytest.fixture
def anyio_backend():
    return "asyncio"


def make_invoice(
    title: str,
    due_date: date,
    *,
    fee_type: FeeType,
    status: FeeStatus = FeeStatus.PENDING,
    period: FeePeriod | None = None,
    amount: float = 1000,
    student_id: str = STUDENT_ID,
    invoice_id: str | None = None,
    payment_date: date | None = None,
) -> FeeInvoiceOut:
    return FeeInvoiceOut(
        id=invoice_id or f"inv-{title}-{due_date.isoformat()}",
        student_id=student_id,
        title=title,
        amount=amount,
        due_date=due_date,
        status=status,
        type=fee_type,
        period=period,
        payment_date=payment_date,
    )


def make_student(student_id: str = STUDENT_ID, parent_id: str = PARENT_ID, batch: str = "Playgroup") -> StudentOut:
    return StudentOut(
        id=student_id,
        student_code=f"STUD{student_id[-6:]}",
        name="Aarav" if student_id == STUDENT_ID else "Diya",
        batch=batch,
        parent_id=parent_id,
        enrollment_date=date(2024, 4, 1),
    )


@pytest.fixture
def store() -> FeeStore:
    return FeeStore(
        invoices=MemoryRepository(FeeInvoiceOut),
        students=MemoryRepository(
            StudentOut,
            [make_student(), make_student(OTHER_STUDENT_ID, OTHER_PARENT_ID, batch="LKG")],
        ),
        batches=MemoryRepository(
            BatchOut,
            [
                BatchOut(id="b-playgroup", name="Playgroup", fee_amount=15000),
                BatchOut(id="b-lkg", name="LKG", fee_amount=18000),
            ],
        ),
    )


@pytest.fixture
def parent_user():
    return SimpleNamespace(id=PARENT_ID, role=UserRole.PARENT, is_active=True)


@pytest.fixture
def admin_user():
    return SimpleNamespace(id=ADMIN_ID, role=UserRole.ADMIN, is_active=True)
