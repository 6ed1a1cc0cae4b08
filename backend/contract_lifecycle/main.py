"""FastAPI 애플리케이션 진입점. 미들웨어, 예외 처리기, API 라우터를 등록합니다.

실행:
    uvicorn contract_lifecycle.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contract_lifecycle.config import settings
from contract_lifecycle.database import Base, SessionLocal, engine
from contract_lifecycle.exceptions import ContractLifecycleError
from contract_lifecycle.logging_config import configure_logging
import contract_lifecycle.models  # noqa: F401 - 모델 import로 metadata 등록
from contract_lifecycle.repositories.sqlalchemy_repository import SqlAlchemyContractRepository
from contract_lifecycle.routers import activity, approvals, auth, contracts, dashboard, templates, users
from contract_lifecycle.services import seed_service

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Contract Lifecycle Management",
    description="계약서 작성, 버전 이력, 다중 승인, 체결, 만료를 관리하는 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ContractLifecycleError)
def handle_lifecycle_error(request: Request, exc: ContractLifecycleError):
    logger.warning("%s %s rejected: %s (%s)", request.method, request.url.path, exc.detail, type(exc).__name__)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Register all routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(templates.router)
app.include_router(contracts.router)
app.include_router(approvals.router)
app.include_router(activity.router)
app.include_router(dashboard.router)


@app.on_event("startup")
def ensure_schema():
    configure_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    if not settings.SEED_DEFAULTS:
        return
    db = SessionLocal()
    try:
        seed_service.seed_defaults(SqlAlchemyContractRepository(db))
    finally:
        db.close()


@app.get("/api/health")
def health():
    return {"status": "ok"}
