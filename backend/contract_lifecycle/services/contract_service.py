"""계약 조회 전용 서비스입니다. 상태 변경은 LifecycleEngine 을 통해서만 이루어집니다."""

from typing import List, Optional

from contract_lifecycle.exceptions import NotFoundError
from contract_lifecycle.models import Contract, ContractStatus
from contract_lifecycle.repositories.base import ContractRepository


def get_contract(repo: ContractRepository, contract_id: int) -> Contract:
    contract = repo.get_contract(contract_id)
    if not contract:
        raise NotFoundError("계약을 찾을 수 없습니다.")
    return contract


def list_contracts(
    repo: ContractRepository,
    *,
    status: Optional[ContractStatus] = None,
    created_by: Optional[int] = None,
    query: Optional[str] = None,
) -> List[Contract]:
    return repo.list_contracts(status=status, created_by=created_by, query=query)
