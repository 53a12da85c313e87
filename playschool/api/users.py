"""User accounts: activation and credentials (admin-only)."""
from datetime import datetime

from fastapi import APIRouter, HTTPException

from playschool.api.deps import AdminOnly, get_password_hash
from playschool.models.user import CredentialsUpdate, User, UserOut, UserRole, UserStatusUpdate
from playschool.repositories import safe_object_id
from playschool.services.accounts import find_user_by_email

router = APIRouter()


async def _get_user_or_404(user_id: str) -> User:
    oid = safe_object_id(user_id)
    u = await User.get(oid) if oid else None
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    return u


@router.get("/", response_model=list[UserOut])
async def list_users(admin: AdminOnly, role: UserRole | None = None):
    query = {"role": role.value} if role else {}
    users = await User.find(query).to_list()
    return [UserOut.from_user(u) for u in users]


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: str, admin: AdminOnly):
    return UserOut.from_user(await _get_user_or_404(user_id))


@router.put("/{user_id}/status", response_model=UserOut)
async def update_user_status(user_id: str, data: UserStatusUpdate, admin: AdminOnly):
    """Activate or deactivate an account; inactive users cannot log in."""
    u = await _get_user_or_404(user_id)
    if str(u.id) == str(admin.id) and not data.is_active:
        raise HTTPException(status_code=400, detail="You cannot deactivate your own account")
    u.is_active = data.is_active
    u.updated_at = datetime.utcnow()
    await u.save()
    return UserOut.from_user(u)


@router.put("/{user_id}/credentials", response_model=UserOut)
async def update_user_credentials(user_id: str, data: CredentialsUpdate, admin: AdminOnly):
    u = await _get_user_or_404(user_id)
    existing = await find_user_by_email(data.email)
    if existing and existing.id != u.id:
        raise HTTPException(status_code=400, detail="Email already registered")
    u.email = data.email
    u.hashed_password = get_password_hash(data.password)
    u.updated_at = datetime.utcnow()
    await u.save()
    return UserOut.from_user(u)
