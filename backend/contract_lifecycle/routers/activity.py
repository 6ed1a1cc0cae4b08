"""활동 로그 조회 API 라우터입니다."""

from fastapi import APIRouter, Depends
from typing import List, Optional

from contract_lifecycle.config import settings
from contract_lifecycle.dependencies import get_engine
from contract_lifecycle.middleware.auth_middleware import get_current_actor
from contract_lifecycle.schemas.activity import ActivityLogOut
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.services.lifecycle_service import LifecycleEngine

router = APIRouter(prefix="/api/activity", tags=["activity"])


@router.get("", response_model=List[ActivityLogOut])
def recent_activity(
    limit: Optional[int] = None,
    user_id: Optional[int] = None,
    engine: LifecycleEngine = Depends(get_engine),
    _actor: Actor = Depends(get_current_actor),
):
    if user_id is not None:
        return engine.activity.by_user(user_id)
    return engine.activity.recent(limit or settings.ACTIVITY_FEED_LIMIT)
