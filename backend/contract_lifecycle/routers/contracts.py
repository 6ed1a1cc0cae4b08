"""Contracts 기능 API 라우터입니다. 요청을 검증하고 LifecycleEngine 으로 상태 전이를 위임합니다."""

from fastapi import APIRouter, Depends
from typing import List, Optional

from contract_lifecycle.dependencies import get_engine, get_repo
from contract_lifecycle.middleware.auth_middleware import get_current_actor
from contract_lifecycle.models.enums import ContractStatus
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.schemas.activity import ActivityLogOut
from contract_lifecycle.schemas.contract import (
    DETAIL_FIELDS,
    ContractApprovalOut,
    ContractCreate,
    ContractOut,
    ContractUpdate,
    ContractVersionOut,
    ExpirationResult,
    MessageResponse,
)
from contract_lifecycle.services import contract_service
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.services.lifecycle_service import LifecycleEngine

router = APIRouter(prefix="/api/contracts", tags=["contracts"])


@router.get("", response_model=List[ContractOut])
def list_contracts(
    status: Optional[ContractStatus] = None,
    mine: bool = False,
    q: Optional[str] = None,
    repo: ContractRepository = Depends(get_repo),
    actor: Actor = Depends(get_current_actor),
):
    return contract_service.list_contracts(
        repo,
        status=status,
        created_by=actor.user_id if mine else None,
        query=q,
    )


@router.post("", response_model=ContractOut, status_code=201)
def create_contract(
    data: ContractCreate,
    engine: LifecycleEngine = Depends(get_engine),
    actor: Actor = Depends(get_current_actor),
):
    return engine.create_contract(actor, data)


@router.post("/check-expirations", response_model=ExpirationResult)
def check_expirations(
    engine: LifecycleEngine = Depends(get_engine),
    actor: Actor = Depends(get_current_actor),
):
    expired = engine.check_expirations(actor)
    return ExpirationResult(message="Expiration check complete", expired_contract_ids=expired)


@router.get("/{contract_id}", response_model=ContractOut)
def get_contract(
    contract_id: int,
    repo: ContractRepository = Depends(get_repo),
    _actor: Actor = Depends(get_current_actor),
):
    return contract_service.get_contract(repo, contract_id)


@router.put("/{contract_id}", response_model=ContractOut)
def update_contract(
    contract_id: int,
    data: ContractUpdate,
    engine: LifecycleEngine = Depends(get_engine),
    actor: Actor = Depends(get_current_actor),
):
    with engine.repo.transaction():
        contract = None
        if data.model_fields_set & set(DETAIL_FIELDS):
            # 본문도 바뀌면 활동 기록은 record_edit 가 한 번만 남긴다.
            contract = engine.update_details(
                contract_id, actor, data, record_activity=data.content is None
            )
        if data.content is not None:
            contract = engine.record_edit(contract_id, actor, data.content, data.change_description)
        if contract is None:
            contract = contract_service.get_contract(engine.repo, contract_id)
    return contract


@router.post("/{contract_id}/submit", response_model=MessageResponse)
def submit_contract(
    contract_id: int,
    engine: LifecycleEngine = Depends(get_engine),
    actor: Actor = Depends(get_current_actor),
):
    engine.submit(contract_id, actor)
    return MessageResponse(message="Contract submitted for approval")


@router.post("/{contract_id}/execute", response_model=MessageResponse)
def execute_contract(
    contract_id: int,
    engine: LifecycleEngine = Depends(get_engine),
    actor: Actor = Depends(get_current_actor),
):
    engine.execute(contract_id, actor)
    return MessageResponse(message="Contract executed successfully")


@router.get("/{contract_id}/versions", response_model=List[ContractVersionOut])
def list_versions(
    contract_id: int,
    engine: LifecycleEngine = Depends(get_engine),
    _actor: Actor = Depends(get_current_actor),
):
    return engine.versions.list_versions(contract_id)


@router.post("/{contract_id}/restore/{version_id}", response_model=ContractOut)
def restore_version(
    contract_id: int,
    version_id: int,
    engine: LifecycleEngine = Depends(get_engine),
    actor: Actor = Depends(get_current_actor),
):
    return engine.versions.restore(contract_id, actor, version_id)


@router.get("/{contract_id}/approvals", response_model=List[ContractApprovalOut])
def list_approvals(
    contract_id: int,
    engine: LifecycleEngine = Depends(get_engine),
    _actor: Actor = Depends(get_current_actor),
):
    return engine.approvals.list_approvals(contract_id)


@router.get("/{contract_id}/activity", response_model=List[ActivityLogOut])
def list_contract_activity(
    contract_id: int,
    engine: LifecycleEngine = Depends(get_engine),
    _actor: Actor = Depends(get_current_actor),
):
    contract_service.get_contract(engine.repo, contract_id)
    return engine.activity.by_contract(contract_id)
