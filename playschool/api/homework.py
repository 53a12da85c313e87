from fastapi import APIRouter

from playschool.api.deps import CurrentUser, StaffOnly
from playschool.models.homework import Homework, HomeworkCreate
from playschool.models.student import Student
from playschool.models.user import UserRole

router = APIRouter()


def _homework_out(h: Homework) -> dict:
    return {
        "id": str(h.id),
        "title": h.title,
        "description": h.description,
        "due_date": h.due_date.isoformat(),
        "batch": h.batch,
        "submitted_by": h.submitted_by,
    }


@router.get("/")
async def list_homework(user: CurrentUser, batch: str | None = None):
    """Homework, newest due date first. Parents only see their children's batches."""
    query: dict = {}
    if user.role == UserRole.PARENT:
        children = await Student.find(Student.parent_id == str(user.id)).to_list()
        batches = {c.batch for c in children}
        if batch:
            batches &= {batch}
        query["batch"] = {"$in": sorted(batches)}
    elif batch:
        query["batch"] = batch
    items = await Homework.find(query).sort("-due_date").to_list()
    return [_homework_out(h) for h in items]


@router.post("/", status_code=201)
async def create_homework(data: HomeworkCreate, user: StaffOnly):
    h = Homework(**data.model_dump())
    await h.insert()
    return _homework_out(h)
