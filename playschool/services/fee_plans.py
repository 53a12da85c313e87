"""Fee plan derivation: payable rows per plan and conflict blocking between plans."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Protocol

from playschool.models.fee import (
    ACTIVE_STATUSES,
    UNPAID_STATUSES,
    FeePeriod,
    FeeRow,
    FeeStatus,
    FeeType,
)
from playschool.models.student import FeePlan
from playschool.services.session import Session, end_of_month, session_for

DUE_DAY = 10

# Session months in order: (period, display abbreviation, calendar month)
SESSION_MONTHS: list[tuple[FeePeriod, str, int]] = [
    (FeePeriod.APR, "Apr", 4),
    (FeePeriod.MAY, "May", 5),
    (FeePeriod.JUN, "Jun", 6),
    (FeePeriod.JUL, "Jul", 7),
    (FeePeriod.AUG, "Aug", 8),
    (FeePeriod.SEP, "Sep", 9),
    (FeePeriod.OCT, "Oct", 10),
    (FeePeriod.NOV, "Nov", 11),
    (FeePeriod.DEC, "Dec", 12),
    (FeePeriod.JAN, "Jan", 1),
    (FeePeriod.FEB, "Feb", 2),
    (FeePeriod.MAR, "Mar", 3),
]
MONTH_ABBR: dict[FeePeriod, str] = {period: abbr for period, abbr, _ in SESSION_MONTHS}

# Quarter -> (label, first calendar month, months covered)
QUARTERS: dict[FeePeriod, tuple[str, int, tuple[FeePeriod, ...]]] = {
    FeePeriod.Q1: ("Q1 (Apr-Jun)", 4, (FeePeriod.APR, FeePeriod.MAY, FeePeriod.JUN)),
    FeePeriod.Q2: ("Q2 (Jul-Sep)", 7, (FeePeriod.JUL, FeePeriod.AUG, FeePeriod.SEP)),
    FeePeriod.Q3: ("Q3 (Oct-Dec)", 10, (FeePeriod.OCT, FeePeriod.NOV, FeePeriod.DEC)),
    FeePeriod.Q4: ("Q4 (Jan-Mar)", 1, (FeePeriod.JAN, FeePeriod.FEB, FeePeriod.MAR)),
}

PLAN_FEE_TYPE: dict[FeePlan, FeeType] = {
    FeePlan.ANNUAL: FeeType.ANNUAL,
    FeePlan.QUARTERLY: FeeType.QUARTERLY,
    FeePlan.MONTHLY: FeeType.MONTHLY,
}

ANNUAL_SETTLED_REASON = "Full session paid via Annual Plan."
PARTIAL_PAYMENT_REASON = "Partial payment already made via Monthly/Quarterly plan."


class InvoiceLike(Protocol):
    id: str
    student_id: str
    title: str
    amount: float
    due_date: date
    status: FeeStatus
    type: FeeType
    period: Optional[FeePeriod]
    payment_date: Optional[date]
    transaction_id: Optional[str]


def quarter_of(month: FeePeriod) -> FeePeriod:
    for quarter, (_, _, months) in QUARTERS.items():
        if month in months:
            return quarter
    raise ValueError(f"{month} is not a month period")


def quarterly_amount(annual_fee: float) -> float:
    return annual_fee / 4


def monthly_amount(annual_fee: float) -> int:
    # half-up, so 1250.5 -> 1251
    return math.floor(annual_fee / 12 + 0.5)


def infer_period(invoice: InvoiceLike) -> Optional[FeePeriod]:
    """
    Period an invoice covers.

    Uses the explicit `period` field; records written before it existed fall
    back to the title ("Tuition Fee - Q2 (Jul-Sep)", "Tuition Fee - Apr 2024").
    """
    if invoice.period:
        return FeePeriod(invoice.period)
    if invoice.type == FeeType.ANNUAL:
        return FeePeriod.ANNUAL
    title = invoice.title or ""
    if invoice.type == FeeType.QUARTERLY:
        for quarter in QUARTERS:
            if quarter.value in title:
                return quarter
    if invoice.type == FeeType.MONTHLY:
        for period, abbr, _ in SESSION_MONTHS:
            if f" {abbr} " in f"{title} ":
                return period
    return None


@dataclass
class PaymentAnalysis:
    """What the student has already paid (or submitted) in a session."""

    annual_settled: bool = False
    paid_quarters: set[FeePeriod] = field(default_factory=set)
    paid_months: set[FeePeriod] = field(default_factory=set)

    @property
    def has_partial_payment(self) -> bool:
        return bool(self.paid_quarters or self.paid_months)

    @property
    def has_any_payment(self) -> bool:
        return self.annual_settled or self.has_partial_payment


def analyse_payments(invoices: Iterable[InvoiceLike], session: Session) -> PaymentAnalysis:
    analysis = PaymentAnalysis()
    for inv in invoices:
        if inv.status not in ACTIVE_STATUSES or not session.contains(inv.due_date):
            continue
        period = infer_period(inv)
        if inv.type == FeeType.ANNUAL:
            analysis.annual_settled = True
        elif inv.type == FeeType.QUARTERLY and period in QUARTERS:
            analysis.paid_quarters.add(period)
        elif inv.type == FeeType.MONTHLY and period in MONTH_ABBR:
            analysis.paid_months.add(period)
    return analysis


def block_reason(fee_type: FeeType, period: Optional[FeePeriod], analysis: PaymentAnalysis) -> Optional[str]:
    """Why a row of `fee_type`/`period` cannot be paid, or None when it can."""
    if fee_type == FeeType.ANNUAL:
        if analysis.has_partial_payment:
            return PARTIAL_PAYMENT_REASON
        return None
    if fee_type == FeeType.QUARTERLY:
        if analysis.annual_settled:
            return ANNUAL_SETTLED_REASON
        if period in QUARTERS:
            for month in QUARTERS[period][2]:
                if month in analysis.paid_months:
                    return f"Conflict: {MONTH_ABBR[month]} is already paid via Monthly Plan."
        return None
    if fee_type == FeeType.MONTHLY:
        if analysis.annual_settled:
            return ANNUAL_SETTLED_REASON
        if period in MONTH_ABBR:
            quarter = quarter_of(period)
            if quarter in analysis.paid_quarters:
                return f"Conflict: {quarter.value} is already paid via Quarterly Plan."
        return None
    return None


def _row_from_invoice(inv: InvoiceLike) -> FeeRow:
    return FeeRow(
        id=str(inv.id),
        student_id=inv.student_id,
        title=inv.title,
        amount=inv.amount,
        due_date=inv.due_date,
        status=inv.status,
        type=inv.type,
        period=infer_period(inv),
        payment_date=inv.payment_date,
        transaction_id=inv.transaction_id,
    )


def _theoretical_rows(student_id: str, annual_fee: float, plan: FeePlan, session: Session) -> list[FeeRow]:
    """Every period of the plan for the session, as unpaid virtual rows."""
    sy, ey = session.start_year, session.end_year
    if plan == FeePlan.ANNUAL:
        return [
            FeeRow(
                virtual_id=f"virt-annual-{sy}",
                student_id=student_id,
                title=f"Annual Fee {session.label}",
                amount=annual_fee,
                due_date=date(sy, 4, DUE_DAY),
                status=FeeStatus.PENDING,
                type=FeeType.ANNUAL,
                period=FeePeriod.ANNUAL,
                is_virtual=True,
            )
        ]
    if plan == FeePlan.QUARTERLY:
        rows = []
        for quarter, (label, first_month, _) in QUARTERS.items():
            year = ey if first_month < 4 else sy
            rows.append(
                FeeRow(
                    virtual_id=f"virt-{quarter.value}-{sy}",
                    student_id=student_id,
                    title=f"Tuition Fee - {label}",
                    amount=quarterly_amount(annual_fee),
                    due_date=date(year, first_month, DUE_DAY),
                    status=FeeStatus.PENDING,
                    type=FeeType.QUARTERLY,
                    period=quarter,
                    is_virtual=True,
                )
            )
        return rows
    rows = []
    for period, abbr, month in SESSION_MONTHS:
        year = ey if month < 4 else sy
        rows.append(
            FeeRow(
                virtual_id=f"virt-{abbr}-{year}",
                student_id=student_id,
                title=f"Tuition Fee - {abbr} {year}",
                amount=monthly_amount(annual_fee),
                due_date=date(year, month, DUE_DAY),
                status=FeeStatus.PENDING,
                type=FeeType.MONTHLY,
                period=period,
                is_virtual=True,
            )
        )
    return rows


def derive_fee_plan(
    student_id: str,
    annual_fee: float,
    invoices: Iterable[InvoiceLike],
    plan: FeePlan,
    today: date,
) -> list[FeeRow]:
    """
    Rows to show for `plan`: the student's real invoices of that type in the
    current session plus virtual rows for periods not invoiced yet.

    Unpaid rows competing with a payment already made under another plan carry
    a `blocked_reason`. Future monthly/quarterly periods are hidden until their
    month comes, unless they are already paid, overdue or blocked.
    """
    invoices = list(invoices)
    session = session_for(today)
    analysis = analyse_payments(invoices, session)
    fee_type = PLAN_FEE_TYPE[plan]

    real_rows = [
        _row_from_invoice(inv)
        for inv in invoices
        if inv.type == fee_type and session.contains(inv.due_date)
    ]
    covered = {row.period for row in real_rows if row.period}
    for row in real_rows:
        if row.status in UNPAID_STATUSES:
            row.blocked_reason = block_reason(row.type, row.period, analysis)

    rows = list(real_rows)
    for row in _theoretical_rows(student_id, annual_fee, plan, session):
        if row.period in covered:
            continue
        row.blocked_reason = block_reason(row.type, row.period, analysis)
        rows.append(row)

    if plan in (FeePlan.MONTHLY, FeePlan.QUARTERLY):
        cutoff = end_of_month(today)
        rows = [
            row
            for row in rows
            if row.status != FeeStatus.PENDING or row.blocked_reason or row.due_date <= cutoff
        ]

    return sorted(rows, key=lambda r: (0 if r.status in ACTIVE_STATUSES else 1, r.due_date))


def outstanding_total(rows: Iterable[FeeRow]) -> float:
    return sum(row.amount for row in rows if row.is_payable)


def last_payment(invoices: Iterable[InvoiceLike]) -> Optional[InvoiceLike]:
    active = [inv for inv in invoices if inv.status in ACTIVE_STATUSES]
    if not active:
        return None
    return max(active, key=lambda inv: inv.payment_date or inv.due_date)


def paid_history(invoices: Iterable[InvoiceLike]) -> list[InvoiceLike]:
    paid = [inv for inv in invoices if inv.status == FeeStatus.PAID]
    return sorted(paid, key=lambda inv: inv.payment_date or date.min, reverse=True)
