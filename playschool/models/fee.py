"""Fee invoices: amount, due date, payment status and the period they cover."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field, model_validator

from playschool.models.student import FeePlan


class FeeStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class FeeType(str, Enum):
    ANNUAL = "ANNUAL"
    QUARTERLY = "QUARTERLY"
    MONTHLY = "MONTHLY"
    OTHER = "OTHER"


class FeePeriod(str, Enum):
    """Period of the academic session an invoice covers."""

    ANNUAL = "ANNUAL"
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
    APR = "APR"
    MAY = "MAY"
    JUN = "JUN"
    JUL = "JUL"
    AUG = "AUG"
    SEP = "SEP"
    OCT = "OCT"
    NOV = "NOV"
    DEC = "DEC"
    JAN = "JAN"
    FEB = "FEB"
    MAR = "MAR"


ACTIVE_STATUSES = frozenset({FeeStatus.PAID, FeeStatus.PROCESSING})
UNPAID_STATUSES = frozenset({FeeStatus.PENDING, FeeStatus.OVERDUE})

# Periods an invoice of each type may cover
PERIODS_BY_TYPE: dict[FeeType, frozenset[FeePeriod]] = {
    FeeType.ANNUAL: frozenset({FeePeriod.ANNUAL}),
    FeeType.QUARTERLY: frozenset({FeePeriod.Q1, FeePeriod.Q2, FeePeriod.Q3, FeePeriod.Q4}),
    FeeType.MONTHLY: frozenset(
        {
            FeePeriod.APR, FeePeriod.MAY, FeePeriod.JUN, FeePeriod.JUL, FeePeriod.AUG, FeePeriod.SEP,
            FeePeriod.OCT, FeePeriod.NOV, FeePeriod.DEC, FeePeriod.JAN, FeePeriod.FEB, FeePeriod.MAR,
        }
    ),
    FeeType.OTHER: frozenset(),
}


class FeeInvoice(Document):
    """Persisted invoice. Never deleted except by an explicit admin action."""

    student_id: Indexed(str)
    title: str
    amount: float
    due_date: date
    status: FeeStatus = FeeStatus.PENDING
    payment_date: Optional[date] = None
    transaction_id: Optional[str] = None
    type: FeeType = FeeType.OTHER
    period: Optional[FeePeriod] = None  # None for OTHER invoices and legacy records
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "fee_invoices"
        use_state_management = True


class FeeInvoiceOut(BaseModel):
    id: str
    student_id: str
    title: str
    amount: float
    due_date: date
    status: FeeStatus = FeeStatus.PENDING
    payment_date: Optional[date] = None
    transaction_id: Optional[str] = None
    type: FeeType = FeeType.OTHER
    period: Optional[FeePeriod] = None


class FeeInvoiceCreate(BaseModel):
    student_id: str
    title: str
    amount: float = Field(ge=0)
    due_date: date
    type: FeeType = FeeType.OTHER
    period: Optional[FeePeriod] = None

    @model_validator(mode="after")
    def _period_matches_type(self):
        if self.period is not None and self.period not in PERIODS_BY_TYPE[self.type]:
            raise ValueError(f"Period {self.period.value} does not belong to a {self.type.value} invoice")
        return self


class FeeStatusUpdate(BaseModel):
    status: FeeStatus


class PayPeriodRequest(BaseModel):
    plan: FeePlan
    period: FeePeriod


class FeeRow(BaseModel):
    """One displayable line of a fee plan: a persisted invoice or a virtual one."""

    id: Optional[str] = None
    virtual_id: Optional[str] = None
    student_id: str
    title: str
    amount: float
    due_date: date
    status: FeeStatus
    type: FeeType
    period: Optional[FeePeriod] = None
    payment_date: Optional[date] = None
    transaction_id: Optional[str] = None
    is_virtual: bool = False
    blocked_reason: Optional[str] = None

    @property
    def is_payable(self) -> bool:
        return self.status in UNPAID_STATUSES and not self.blocked_reason


class SessionOut(BaseModel):
    start_year: int
    end_year: int
    start: date
    end: date
    label: str


class FeePlanView(BaseModel):
    session: SessionOut
    plan: FeePlan
    rows: list[FeeRow] = Field(default_factory=list)
    outstanding_total: float = 0
    last_payment: Optional[FeeInvoiceOut] = None
    paid_history: list[FeeInvoiceOut] = Field(default_factory=list)
