"""활동 로그/대시보드 응답 스키마입니다."""

from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import datetime

from contract_lifecycle.schemas.contract import ContractBrief
from contract_lifecycle.schemas.user import UserBrief


class ActivityLogOut(BaseModel):
    log_id: int
    contract_id: Optional[int] = None
    user_id: int
    action: str
    details: Optional[str] = None
    timestamp: datetime
    user: Optional[UserBrief] = None
    contract: Optional[ContractBrief] = None

    model_config = {"from_attributes": True}


class DashboardStats(BaseModel):
    status_counts: Dict[str, int]
    expiring_soon: int
    recent_activities: List[ActivityLogOut]
