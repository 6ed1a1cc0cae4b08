"""대시보드 집계 API 라우터입니다."""

from fastapi import APIRouter, Depends

from contract_lifecycle.dependencies import get_clock, get_repo
from contract_lifecycle.middleware.auth_middleware import get_current_actor
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.schemas.activity import DashboardStats
from contract_lifecycle.services import dashboard_service
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.utils.clock import Clock

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    repo: ContractRepository = Depends(get_repo),
    clock: Clock = Depends(get_clock),
    _actor: Actor = Depends(get_current_actor),
):
    return dashboard_service.get_stats(repo, clock)
