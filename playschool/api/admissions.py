"""Admission enquiries, applications and enrollment."""
from fastapi import APIRouter, HTTPException

from playschool.api.deps import AdminOnly, Today
from playschool.models.admission import (
    AdmissionApplication,
    AdmissionEnquiry,
    AdmissionStatusUpdate,
    ApplicationCreate,
    EnquiryCreate,
    EnrollRequest,
)
from playschool.repositories import safe_object_id
from playschool.services import enrollment as enrollment_service

router = APIRouter()
public_router = APIRouter()
enroll_router = APIRouter()


def _out(record) -> dict:
    return {"id": str(record.id), **record.model_dump(exclude={"id", "revision_id"})}


async def _get_or_404(document, record_id: str, label: str):
    oid = safe_object_id(record_id)
    record = await document.get(oid) if oid else None
    if not record:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return record


# Enquiries

@public_router.post("/enquiries", status_code=201)
async def create_enquiry(data: EnquiryCreate):
    enquiry = AdmissionEnquiry(**data.model_dump())
    await enquiry.insert()
    return _out(enquiry)


@router.get("/enquiries")
async def list_enquiries(admin: AdminOnly):
    items = await AdmissionEnquiry.find_all().sort("-created_at").to_list()
    return [_out(e) for e in items]


@router.put("/enquiries/{enquiry_id}/status")
async def update_enquiry_status(enquiry_id: str, data: AdmissionStatusUpdate, admin: AdminOnly):
    enquiry = await _get_or_404(AdmissionEnquiry, enquiry_id, "Enquiry")
    enquiry.status = data.status
    await enquiry.save()
    return _out(enquiry)


# Applications

@public_router.post("/applications", status_code=201)
async def create_application(data: ApplicationCreate):
    application = AdmissionApplication(**data.model_dump())
    await application.insert()
    return _out(application)


@router.get("/applications")
async def list_applications(admin: AdminOnly):
    items = await AdmissionApplication.find_all().sort("-submitted_date").to_list()
    return [_out(a) for a in items]


@router.put("/applications/{application_id}/status")
async def update_application_status(application_id: str, data: AdmissionStatusUpdate, admin: AdminOnly):
    application = await _get_or_404(AdmissionApplication, application_id, "Application")
    application.status = data.status
    await application.save()
    return _out(application)


@enroll_router.post("/enroll", status_code=201)
async def enroll(data: EnrollRequest, admin: AdminOnly, today: Today):
    """Create the student (and parent account if new) from an enquiry or application."""
    return await enrollment_service.enroll(data.admission_id, data.source, today)
