"""Student records: listing, updates (incl. fee plan choice), removal."""
import logging

from fastapi import APIRouter, HTTPException

from playschool.api.deps import AdminOnly, CurrentUser
from playschool.models.attendance import AttendanceRecord
from playschool.models.batch import Batch
from playschool.models.fee import FeeInvoice
from playschool.models.student import Student, StudentOut, StudentUpdate
from playschool.models.user import UserRole
from playschool.repositories import DocumentRepository
from playschool.services.enrollment import student_code_taken

logger = logging.getLogger(__name__)

router = APIRouter()
public_router = APIRouter()

students = DocumentRepository(Student, StudentOut)


@public_router.get("/check-id/{code}")
async def check_student_code(code: str):
    """Whether a manual student code is still free (case-insensitive)."""
    return {"code": code, "available": not await student_code_taken(code)}


@router.get("/", response_model=list[StudentOut])
async def list_students(user: CurrentUser, batch: str | None = None):
    filters = {}
    if user.role == UserRole.PARENT:
        filters["parent_id"] = str(user.id)
    if batch:
        filters["batch"] = batch
    found = await students.find(**filters)
    return sorted(found, key=lambda s: s.name.lower())


@router.get("/{student_id}", response_model=StudentOut)
async def get_student(student_id: str, user: CurrentUser):
    s = await students.get(student_id)
    if not s:
        raise HTTPException(status_code=404, detail="Student not found")
    if user.role == UserRole.PARENT and s.parent_id != str(user.id):
        raise HTTPException(status_code=403, detail="Not your child")
    return s


@router.put("/{student_id}", response_model=StudentOut)
async def update_student(student_id: str, data: StudentUpdate, admin: AdminOnly):
    changes = data.model_dump(exclude_unset=True)
    if changes.get("batch") and not await Batch.find_one(Batch.name == changes["batch"]):
        raise HTTPException(status_code=400, detail=f"Unknown batch {changes['batch']}")
    s = await students.update(student_id, changes)
    if not s:
        raise HTTPException(status_code=404, detail="Student not found")
    return s


@router.delete("/{student_id}")
async def delete_student(student_id: str, admin: AdminOnly):
    if not await students.delete(student_id):
        raise HTTPException(status_code=404, detail="Student not found")
    await FeeInvoice.find(FeeInvoice.student_id == student_id).delete()
    await AttendanceRecord.find(AttendanceRecord.student_id == student_id).delete()
    logger.info(f"Deleted student {student_id} with their invoices and attendance")
    return {"message": "Student deleted"}
