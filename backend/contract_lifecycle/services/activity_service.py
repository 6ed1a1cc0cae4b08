"""Activity Logger 도메인 서비스입니다. 상태 변경마다 append-only 활동 기록을 남깁니다."""

import logging
from typing import List, Optional

from contract_lifecycle.models import ActivityLog
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

ACTION_CREATED = "Contract created"
ACTION_UPDATED = "Contract updated"
ACTION_SUBMITTED = "Contract submitted for approval"
ACTION_APPROVED = "Contract approved"
ACTION_REJECTED = "Contract rejected"
ACTION_CONSENSUS = "Approval consensus reached"
ACTION_EXECUTED = "Contract executed"
ACTION_EXPIRED = "Contract expired"


class ActivityLogger:
    """Appends activity entries inside the caller's transaction.

    A failed append raises, so the surrounding transition is rolled back rather
    than committed without its log entry.
    """

    def __init__(self, repo: ContractRepository, clock: Clock | None = None):
        self.repo = repo
        self.clock = clock or SystemClock()

    def record(
        self,
        contract_id: Optional[int],
        actor_id: int,
        action: str,
        details: Optional[str] = None,
    ) -> ActivityLog:
        entry = self.repo.add_activity(
            ActivityLog(
                contract_id=contract_id,
                user_id=actor_id,
                action=action,
                details=details,
                timestamp=self.clock.now(),
            )
        )
        logger.info("activity contract=%s user=%s action=%s", contract_id, actor_id, action)
        return entry

    def recent(self, limit: int = 10) -> List[ActivityLog]:
        return self.repo.list_recent_activity(max(1, limit))

    def by_contract(self, contract_id: int) -> List[ActivityLog]:
        return self.repo.list_activity_by_contract(contract_id)

    def by_user(self, user_id: int) -> List[ActivityLog]:
        return self.repo.list_activity_by_user(user_id)
