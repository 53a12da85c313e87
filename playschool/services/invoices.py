"""Invoice lifecycle: creation, payment submission, admin status overrides.

PENDING/OVERDUE -> PROCESSING when the parent pays, PROCESSING -> PAID when
an admin approves. Admins may also force any status; moving back to
PENDING/OVERDUE clears the payment details.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from playschool.models.batch import BatchOut
from playschool.models.fee import (
    ACTIVE_STATUSES,
    PERIODS_BY_TYPE,
    UNPAID_STATUSES,
    FeeInvoiceCreate,
    FeeInvoiceOut,
    FeePeriod,
    FeePlanView,
    FeeStatus,
    FeeType,
    SessionOut,
)
from playschool.models.student import FeePlan, StudentOut
from playschool.repositories import Repository
from playschool.services.fee_plans import (
    PLAN_FEE_TYPE,
    analyse_payments,
    block_reason,
    derive_fee_plan,
    infer_period,
    last_payment,
    outstanding_total,
    paid_history,
)
from playschool.services.session import session_for

logger = logging.getLogger(__name__)


class FeeError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvoiceNotFound(FeeError):
    status_code = 404


class StudentNotFound(FeeError):
    status_code = 404


class PaymentBlocked(FeeError):
    status_code = 409


class InvalidTransition(FeeError):
    status_code = 409


@dataclass
class FeeStore:
    invoices: Repository[FeeInvoiceOut]
    students: Repository[StudentOut]
    batches: Repository[BatchOut]


def transaction_id(prefix: str, now: datetime) -> str:
    return f"{prefix}{int(now.timestamp() * 1000)}"


def pay_changes(invoice: FeeInvoiceOut, today: date, now: datetime) -> dict:
    if invoice.status not in UNPAID_STATUSES:
        raise InvalidTransition(f"Invoice is already {invoice.status.value}")
    return {
        "status": FeeStatus.PROCESSING,
        "payment_date": today,
        "transaction_id": transaction_id("TXN", now),
    }


def status_override_changes(invoice: FeeInvoiceOut, status: FeeStatus, today: date, now: datetime) -> dict:
    changes: dict = {"status": status}
    if status in UNPAID_STATUSES:
        changes["payment_date"] = None
        changes["transaction_id"] = None
    elif status in ACTIVE_STATUSES and not invoice.payment_date:
        changes["payment_date"] = today
        changes["transaction_id"] = transaction_id("MANUAL-", now)
    return changes


async def get_student(store: FeeStore, student_id: str) -> StudentOut:
    student = await store.students.get(student_id)
    if not student:
        raise StudentNotFound("Student not found")
    return student


async def annual_fee_for(store: FeeStore, student: StudentOut) -> Optional[float]:
    batch = await store.batches.find_one(name=student.batch)
    return batch.fee_amount if batch else None


async def build_plan_view(store: FeeStore, student: StudentOut, plan: FeePlan, today: date) -> FeePlanView:
    session = session_for(today)
    invoices = await store.invoices.find(student_id=student.id)
    annual_fee = await annual_fee_for(store, student)
    rows = [] if annual_fee is None else derive_fee_plan(student.id, annual_fee, invoices, plan, today)
    return FeePlanView(
        session=SessionOut(**session.as_dict()),
        plan=plan,
        rows=rows,
        outstanding_total=outstanding_total(rows),
        last_payment=last_payment(invoices),
        paid_history=paid_history(invoices),
    )


async def create_invoice(store: FeeStore, data: FeeInvoiceCreate) -> FeeInvoiceOut:
    payload = data.model_dump()
    payload["status"] = FeeStatus.PENDING
    if payload.get("period") is None and data.type != FeeType.OTHER:
        payload["period"] = infer_period(FeeInvoiceOut(id="", **payload))
    return await store.invoices.insert(payload)


async def _conflict_for(store: FeeStore, invoice: FeeInvoiceOut) -> Optional[str]:
    if invoice.type == FeeType.OTHER:
        return None
    session = session_for(invoice.due_date)
    others = [inv for inv in await store.invoices.find(student_id=invoice.student_id) if inv.id != invoice.id]
    return block_reason(invoice.type, infer_period(invoice), analyse_payments(others, session))


async def pay_invoice(store: FeeStore, invoice_id: str, today: date, now: datetime) -> FeeInvoiceOut:
    invoice = await store.invoices.get(invoice_id)
    if not invoice:
        raise InvoiceNotFound("Invoice not found")
    changes = pay_changes(invoice, today, now)
    reason = await _conflict_for(store, invoice)
    if reason:
        logger.warning(f"Rejected payment for invoice {invoice_id}: {reason}")
        raise PaymentBlocked(reason)
    updated = await store.invoices.update(invoice_id, changes)
    logger.info(f"Payment submitted for invoice {invoice_id} ({updated.transaction_id})")
    return updated


async def pay_period(
    store: FeeStore,
    student: StudentOut,
    plan: FeePlan,
    period: FeePeriod,
    today: date,
    now: datetime,
) -> FeeInvoiceOut:
    """Pay one period of a plan, persisting its virtual row first when needed."""
    if period not in PERIODS_BY_TYPE[PLAN_FEE_TYPE[plan]]:
        raise FeeError(f"{period.value} is not a period of the {plan.value.lower()} plan")
    view = await build_plan_view(store, student, plan, today)
    row = next((r for r in view.rows if r.period == period), None)
    if row is None:
        raise InvoiceNotFound(f"{period.value} is not payable under the {plan.value.lower()} plan yet")
    if row.blocked_reason:
        logger.warning(f"Rejected payment for {student.id} {period.value}: {row.blocked_reason}")
        raise PaymentBlocked(row.blocked_reason)
    invoice_id = row.id
    if row.is_virtual:
        created = await store.invoices.insert(
            {
                "student_id": student.id,
                "title": row.title,
                "amount": row.amount,
                "due_date": row.due_date,
                "status": FeeStatus.PENDING,
                "type": row.type,
                "period": row.period,
            }
        )
        invoice_id = created.id
    return await pay_invoice(store, invoice_id, today, now)


async def update_status(
    store: FeeStore, invoice_id: str, status: FeeStatus, today: date, now: datetime
) -> FeeInvoiceOut:
    invoice = await store.invoices.get(invoice_id)
    if not invoice:
        raise InvoiceNotFound("Invoice not found")
    updated = await store.invoices.update(invoice_id, status_override_changes(invoice, status, today, now))
    logger.info(f"Invoice {invoice_id} status {invoice.status.value} -> {status.value}")
    return updated


async def delete_invoice(store: FeeStore, invoice_id: str) -> None:
    if not await store.invoices.delete(invoice_id):
        raise InvoiceNotFound("Invoice not found")
