"""대시보드 집계(상태별 건수, 만료 임박, 최근 활동) 서비스입니다."""

from datetime import timedelta
from typing import Any, Dict

from contract_lifecycle.config import settings
from contract_lifecycle.models import ContractStatus
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.utils.clock import Clock, SystemClock


def get_stats(repo: ContractRepository, clock: Clock | None = None) -> Dict[str, Any]:
    today = (clock or SystemClock()).today()
    horizon = today + timedelta(days=settings.EXPIRING_SOON_DAYS)

    contracts = repo.list_contracts()
    status_counts = {status.value: 0 for status in ContractStatus}
    for contract in contracts:
        status_counts[ContractStatus(contract.status).value] += 1

    expiring_soon = sum(
        1
        for c in contracts
        if c.status == ContractStatus.EXECUTED
        and c.expiry_date is not None
        and today < c.expiry_date < horizon
    )
    return {
        "status_counts": status_counts,
        "expiring_soon": expiring_soon,
        "recent_activities": repo.list_recent_activity(settings.DASHBOARD_ACTIVITY_LIMIT),
    }
