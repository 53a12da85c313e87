"""Teacher accounts created by the school."""
import logging

from fastapi import APIRouter, HTTPException

from playschool.api.deps import AdminOnly, generate_password, get_password_hash
from playschool.models.user import TeacherCreate, User, UserOut, UserRole, UserWithPassword
from playschool.services.accounts import find_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=list[UserOut])
async def list_teachers(admin: AdminOnly):
    teachers = await User.find(User.role == UserRole.TEACHER).sort("name").to_list()
    return [UserOut.from_user(t) for t in teachers]


@router.post("/", response_model=UserWithPassword, status_code=201)
async def create_teacher(data: TeacherCreate, admin: AdminOnly):
    """Create a teacher login; the generated password is only returned here."""
    if await find_user_by_email(data.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    password = generate_password()
    teacher = User(
        email=data.email,
        hashed_password=get_password_hash(password),
        role=UserRole.TEACHER,
        name=data.name,
        phone=data.phone,
        address=data.address,
    )
    await teacher.insert()
    logger.info(f"Created teacher account {teacher.email}")
    return UserWithPassword(**UserOut.from_user(teacher).model_dump(), password=password)
