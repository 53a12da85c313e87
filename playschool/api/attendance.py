import io
import logging
from datetime import date, datetime

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse

from playschool.api.deps import CurrentUser, StaffOnly
from playschool.models.attendance import AttendanceMarkRequest, AttendanceRecord
from playschool.models.student import Student
from playschool.models.user import UserRole
from playschool.repositories import safe_object_id
from playschool.services.attendance import render_report, report_frame

logger = logging.getLogger(__name__)

router = APIRouter()


def _record_out(r: AttendanceRecord) -> dict:
    return {
        "id": str(r.id),
        "student_id": r.student_id,
        "date": r.date.isoformat(),
        "status": r.status,
        "remarks": r.remarks,
        "marked_by": r.marked_by,
    }


@router.get("/report")
async def download_attendance_report(
    batch: str,
    from_date: date,
    to_date: date,
    user: StaffOnly,
    format: str = Query("csv", enum=["csv", "excel"]),
):
    """Download attendance report for a batch and date range."""
    if from_date > to_date:
        raise HTTPException(status_code=400, detail="from_date must not be after to_date")
    students = await Student.find(Student.batch == batch).to_list()
    records = await AttendanceRecord.find(
        {
            "student_id": {"$in": [str(s.id) for s in students]},
            "date": {"$gte": from_date, "$lte": to_date},
        }
    ).to_list()
    if not records:
        raise HTTPException(status_code=404, detail="No records found for the given criteria")

    content, media_type, ext = render_report(report_frame(records, students), format)
    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename=attendance_{batch}_{from_date}_{to_date}.{ext}"},
    )


@router.get("/{student_id}")
async def get_student_attendance(
    student_id: str,
    user: CurrentUser,
    from_date: date | None = None,
    to_date: date | None = None,
):
    """Attendance history of one student, most recent first."""
    oid = safe_object_id(student_id)
    student = await Student.get(oid) if oid else None
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    if user.role == UserRole.PARENT and student.parent_id != str(user.id):
        raise HTTPException(status_code=403, detail="Not your child")

    query: dict = {"student_id": student_id}
    date_range = {}
    if from_date:
        date_range["$gte"] = from_date
    if to_date:
        date_range["$lte"] = to_date
    if date_range:
        query["date"] = date_range
    records = await AttendanceRecord.find(query).sort("-date").to_list()
    return [_record_out(r) for r in records]


@router.post("/")
async def mark_attendance(data: AttendanceMarkRequest, user: StaffOnly):
    """Upsert one record per student for the given date."""
    saved = []
    for entry in data.records:
        record = await AttendanceRecord.find_one(
            AttendanceRecord.student_id == entry.student_id,
            AttendanceRecord.date == data.date,
        )
        if record:
            record.status = entry.status
            record.remarks = entry.remarks
            record.marked_by = str(user.id)
            record.marked_at = datetime.utcnow()
            await record.save()
        else:
            record = AttendanceRecord(
                student_id=entry.student_id,
                date=data.date,
                status=entry.status,
                remarks=entry.remarks,
                marked_by=str(user.id),
            )
            await record.insert()
        saved.append(_record_out(record))
    logger.info(f"Attendance for {data.date} saved for {len(saved)} students by {user.id}")
    return saved
