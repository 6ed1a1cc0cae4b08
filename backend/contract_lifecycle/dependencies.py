"""라우터가 공유하는 FastAPI 의존성(저장소, 시계, 코어 서비스)입니다."""

from fastapi import Depends
from sqlalchemy.orm import Session

from contract_lifecycle.database import get_db
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.repositories.sqlalchemy_repository import SqlAlchemyContractRepository
from contract_lifecycle.services.approval_service import ApprovalCoordinator
from contract_lifecycle.services.lifecycle_service import LifecycleEngine
from contract_lifecycle.utils.clock import Clock, SystemClock

_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


def get_repo(db: Session = Depends(get_db)) -> ContractRepository:
    return SqlAlchemyContractRepository(db)


def get_engine(
    repo: ContractRepository = Depends(get_repo),
    clock: Clock = Depends(get_clock),
) -> LifecycleEngine:
    return LifecycleEngine(repo, clock)


def get_coordinator(engine: LifecycleEngine = Depends(get_engine)) -> ApprovalCoordinator:
    return engine.approvals
