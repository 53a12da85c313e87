"""Notice board: role-filtered list, posting, read marks."""
import logging

from fastapi import APIRouter, HTTPException

from playschool.api.deps import AdminOnly, CurrentUser, StaffOnly
from playschool.models.notice import Notice, NoticeCreate
from playschool.repositories import safe_object_id
from playschool.services.notices import is_notice_visible, notice_to_dict, visible_notices

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_notice_or_404(notice_id: str) -> Notice:
    oid = safe_object_id(notice_id)
    notice = await Notice.get(oid) if oid else None
    if not notice:
        raise HTTPException(status_code=404, detail="Notice not found")
    return notice


@router.get("/")
async def list_notices(user: CurrentUser):
    notices = await Notice.find_all().to_list()
    return [notice_to_dict(n, str(user.id)) for n in visible_notices(notices, user.role)]


@router.post("/", status_code=201)
async def create_notice(data: NoticeCreate, user: StaffOnly):
    notice = Notice(**data.model_dump())
    await notice.insert()
    logger.info(f"Notice '{notice.title}' posted for {notice.visibility.value} by {user.id}")
    return notice_to_dict(notice, str(user.id))


@router.put("/{notice_id}/read")
async def mark_notice_read(notice_id: str, user: CurrentUser):
    notice = await _get_notice_or_404(notice_id)
    if not is_notice_visible(notice.visibility, user.role):
        raise HTTPException(status_code=404, detail="Notice not found")
    uid = str(user.id)
    if uid not in notice.read_by:
        notice.read_by.append(uid)
        await notice.save()
    return notice_to_dict(notice, uid)


@router.delete("/{notice_id}")
async def delete_notice(notice_id: str, admin: AdminOnly):
    notice = await _get_notice_or_404(notice_id)
    await notice.delete()
    return {"message": "Notice deleted"}
