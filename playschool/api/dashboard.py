from datetime import date
from typing import Any, Awaitable, Callable, Dict

from fastapi import APIRouter

from playschool.api.deps import CurrentUser, Fees, Today
from playschool.models.admission import AdmissionApplication, AdmissionEnquiry, AdmissionStatus
from playschool.models.attendance import AttendanceRecord, AttendanceStatus
from playschool.models.batch import Batch
from playschool.models.fee import FeeInvoice, FeeStatus
from playschool.models.notice import Notice
from playschool.models.student import FeePlan, Student
from playschool.models.user import User, UserRole
from playschool.services.invoices import FeeStore, build_plan_view
from playschool.services.notices import notice_to_dict, visible_notices

router = APIRouter()

RECENT_NOTICES = 5
RECENT_ATTENDANCE = 7

DashboardHandler = Callable[[User, FeeStore, date], Awaitable[Dict[str, Any]]]


async def admin_dashboard(user: User, store: FeeStore, today: date) -> Dict[str, Any]:
    new_enquiries = await AdmissionEnquiry.find(AdmissionEnquiry.status == AdmissionStatus.NEW).count()
    new_applications = await AdmissionApplication.find(AdmissionApplication.status == AdmissionStatus.NEW).count()
    return {
        "role": UserRole.ADMIN.value,
        "counts": {
            "students": await Student.count(),
            "active_teachers": await User.find(User.role == UserRole.TEACHER, User.is_active == True).count(),  # noqa: E712
            "pending_approvals": await FeeInvoice.find(FeeInvoice.status == FeeStatus.PROCESSING).count(),
            "new_admissions": new_enquiries + new_applications,
        },
    }


async def teacher_dashboard(user: User, store: FeeStore, today: date) -> Dict[str, Any]:
    batches = await Batch.find_all().sort("fee_amount").to_list()
    records = await AttendanceRecord.find(AttendanceRecord.date == today).to_list()
    summary = {status.value: 0 for status in AttendanceStatus}
    for record in records:
        summary[record.status.value] += 1
    notices = visible_notices(await Notice.find_all().to_list(), user.role)[:RECENT_NOTICES]
    return {
        "role": UserRole.TEACHER.value,
        "batches": [
            {"name": b.name, "students": await Student.find(Student.batch == b.name).count(), "capacity": b.capacity}
            for b in batches
        ],
        "attendance_today": {"date": today.isoformat(), "marked": len(records), **summary},
        "notices": [notice_to_dict(n, str(user.id)) for n in notices],
    }


async def parent_dashboard(user: User, store: FeeStore, today: date) -> Dict[str, Any]:
    children = []
    for child in await store.students.find(parent_id=str(user.id)):
        view = await build_plan_view(store, child, child.fee_plan or FeePlan.MONTHLY, today)
        attendance = (
            await AttendanceRecord.find(AttendanceRecord.student_id == child.id)
            .sort("-date")
            .limit(RECENT_ATTENDANCE)
            .to_list()
        )
        children.append(
            {
                "id": child.id,
                "name": child.name,
                "batch": child.batch,
                "fee_plan": view.plan,
                "outstanding_fees": view.outstanding_total,
                "recent_attendance": [{"date": a.date.isoformat(), "status": a.status} for a in attendance],
            }
        )
    notices = visible_notices(await Notice.find_all().to_list(), user.role)[:RECENT_NOTICES]
    return {
        "role": UserRole.PARENT.value,
        "children": children,
        "notices": [notice_to_dict(n, str(user.id)) for n in notices],
    }


DASHBOARD_HANDLERS: Dict[UserRole, DashboardHandler] = {
    UserRole.ADMIN: admin_dashboard,
    UserRole.TEACHER: teacher_dashboard,
    UserRole.PARENT: parent_dashboard,
}


@router.get("/")
async def get_dashboard(user: CurrentUser, store: Fees, today: Today) -> Dict[str, Any]:
    """Summary for the signed-in user's role."""
    return await DASHBOARD_HANDLERS[UserRole(user.role)](user, store, today)
