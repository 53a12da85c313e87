"""Tiny Toddlers Playschool - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import ServerSelectionTimeoutError

from playschool.api import (
    admissions,
    attendance,
    auth,
    batches,
    dashboard,
    fees,
    homework,
    landing,
    notices,
    students,
    teachers,
    users,
)
from playschool.api.deps import require_module_permission
from playschool.config import settings
from playschool.db import db_shutdown, db_startup
from playschool.seed import seed_admin, seed_batches, seed_landing
from playschool.services.enrollment import EnrollmentError
from playschool.services.invoices import FeeError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await db_startup()
        await seed_admin()
        await seed_batches()
        await seed_landing()
    except ServerSelectionTimeoutError as e:
        logger.error(
            "MongoDB is not running. Start it with: docker compose up -d (from project root)"
        )
        raise RuntimeError(
            "MongoDB connection failed. Start MongoDB (e.g. docker compose up -d)."
        ) from e
    yield
    await db_shutdown()


app = FastAPI(
    title=settings.app_name,
    description="Playschool administration: admissions, students, attendance, notices and fee plans",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(errors)},
    )


@app.exception_handler(FeeError)
async def fee_exception_handler(request: Request, exc: FeeError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(EnrollmentError)
async def enrollment_exception_handler(request: Request, exc: EnrollmentError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Public routes (landing page, admission forms, batch list, student ID check)
app.include_router(landing.public_router, prefix="/api/landing-config", tags=["Landing Page"])
app.include_router(admissions.public_router, prefix="/api/admissions", tags=["Admissions"])
app.include_router(batches.public_router, prefix="/api/batches", tags=["Batches"])
app.include_router(students.public_router, prefix="/api/students", tags=["Students"])

# API routes
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"], dependencies=[Depends(require_module_permission("dashboard"))])
app.include_router(students.router, prefix="/api/students", tags=["Students"], dependencies=[Depends(require_module_permission("students"))])
app.include_router(batches.router, prefix="/api/batches", tags=["Batches"], dependencies=[Depends(require_module_permission("batches"))])
app.include_router(teachers.router, prefix="/api/teachers", tags=["Teachers"], dependencies=[Depends(require_module_permission("teachers"))])
app.include_router(users.router, prefix="/api/users", tags=["Users"], dependencies=[Depends(require_module_permission("users"))])
app.include_router(admissions.router, prefix="/api/admissions", tags=["Admissions"], dependencies=[Depends(require_module_permission("admissions"))])
app.include_router(admissions.enroll_router, prefix="/api", tags=["Admissions"], dependencies=[Depends(require_module_permission("admissions"))])
app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"], dependencies=[Depends(require_module_permission("attendance"))])
app.include_router(homework.router, prefix="/api/homework", tags=["Homework"], dependencies=[Depends(require_module_permission("homework"))])
app.include_router(notices.router, prefix="/api/notices", tags=["Notices"], dependencies=[Depends(require_module_permission("notices"))])
app.include_router(fees.router, prefix="/api/fees", tags=["Fees"], dependencies=[Depends(require_module_permission("fees"))])
app.include_router(landing.router, prefix="/api/landing-config", tags=["Landing Page"], dependencies=[Depends(require_module_permission("landing"))])


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.app_name}
