"""Fee invoices, derived plan view and payments."""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException

from playschool.api.deps import AdminOnly, CurrentUser, Fees, Today
from playschool.models.fee import (
    FeeInvoiceCreate,
    FeeInvoiceOut,
    FeePlanView,
    FeeStatusUpdate,
    PayPeriodRequest,
)
from playschool.models.student import FeePlan, StudentOut
from playschool.models.user import UserRole
from playschool.services import invoices as invoice_service

router = APIRouter()


def _ensure_own_child(user, student: StudentOut) -> None:
    if user.role == UserRole.PARENT and student.parent_id != str(user.id):
        raise HTTPException(status_code=403, detail="Not your child")


@router.get("/", response_model=list[FeeInvoiceOut])
async def list_fees(user: CurrentUser, store: Fees):
    if user.role != UserRole.PARENT:
        return await store.invoices.find()
    children = await store.students.find(parent_id=str(user.id))
    result: list[FeeInvoiceOut] = []
    for child in children:
        result.extend(await store.invoices.find(student_id=child.id))
    return result


@router.get("/student/{student_id}", response_model=list[FeeInvoiceOut])
async def list_student_fees(student_id: str, user: CurrentUser, store: Fees):
    student = await invoice_service.get_student(store, student_id)
    _ensure_own_child(user, student)
    invoices = await store.invoices.find(student_id=student_id)
    return sorted(invoices, key=lambda inv: inv.due_date)


@router.get("/student/{student_id}/plan", response_model=FeePlanView)
async def get_fee_plan(
    student_id: str,
    user: CurrentUser,
    store: Fees,
    today: Today,
    plan: Optional[FeePlan] = None,
):
    """Payable rows for the student's current session under `plan` (defaults to the student's chosen plan)."""
    student = await invoice_service.get_student(store, student_id)
    _ensure_own_child(user, student)
    return await invoice_service.build_plan_view(store, student, plan or student.fee_plan or FeePlan.MONTHLY, today)


@router.post("/student/{student_id}/pay-period", response_model=FeeInvoiceOut)
async def pay_fee_period(
    student_id: str,
    data: PayPeriodRequest,
    user: CurrentUser,
    store: Fees,
    today: Today,
):
    student = await invoice_service.get_student(store, student_id)
    _ensure_own_child(user, student)
    return await invoice_service.pay_period(store, student, data.plan, data.period, today, datetime.now(timezone.utc))


@router.post("/", response_model=FeeInvoiceOut, status_code=201)
async def create_fee(data: FeeInvoiceCreate, admin: AdminOnly, store: Fees):
    await invoice_service.get_student(store, data.student_id)
    return await invoice_service.create_invoice(store, data)


@router.put("/{invoice_id}/pay", response_model=FeeInvoiceOut)
async def pay_fee(invoice_id: str, user: CurrentUser, store: Fees, today: Today):
    invoice = await store.invoices.get(invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    if user.role == UserRole.PARENT:
        student = await invoice_service.get_student(store, invoice.student_id)
        _ensure_own_child(user, student)
    return await invoice_service.pay_invoice(store, invoice_id, today, datetime.now(timezone.utc))


@router.put("/{invoice_id}/status", response_model=FeeInvoiceOut)
async def update_fee_status(
    invoice_id: str,
    data: FeeStatusUpdate,
    admin: AdminOnly,
    store: Fees,
    today: Today,
):
    return await invoice_service.update_status(store, invoice_id, data.status, today, datetime.now(timezone.utc))


@router.delete("/{invoice_id}")
async def delete_fee(invoice_id: str, admin: AdminOnly, store: Fees):
    await invoice_service.delete_invoice(store, invoice_id)
    return {"message": "Invoice deleted"}
