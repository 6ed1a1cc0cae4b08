"""Approvals 기능 API 라우터입니다. 승인 대기 목록과 검토 처리를 ApprovalCoordinator 로 위임합니다."""

from fastapi import APIRouter, Depends
from typing import List

from contract_lifecycle.dependencies import get_coordinator
from contract_lifecycle.middleware.auth_middleware import require_roles
from contract_lifecycle.models.enums import UserRole
from contract_lifecycle.models.user import User
from contract_lifecycle.schemas.contract import (
    ContractApprovalOut,
    ContractOut,
    PendingReviewOut,
    ReviewRequest,
)
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.services.approval_service import ApprovalCoordinator

router = APIRouter(prefix="/api/approvals", tags=["approvals"])


@router.get("", response_model=List[PendingReviewOut])
def list_pending(
    coordinator: ApprovalCoordinator = Depends(get_coordinator),
    current_user: User = Depends(require_roles(UserRole.APPROVER)),
):
    return [
        PendingReviewOut(
            contract=ContractOut.model_validate(item.contract),
            approval=ContractApprovalOut.model_validate(item.approval),
            approvals=[ContractApprovalOut.model_validate(row) for row in item.roster],
        )
        for item in coordinator.list_pending_for_approver(current_user.user_id)
    ]


@router.post("/{approval_id}/review", response_model=ContractApprovalOut)
def review(
    approval_id: int,
    data: ReviewRequest,
    coordinator: ApprovalCoordinator = Depends(get_coordinator),
    current_user: User = Depends(require_roles(UserRole.APPROVER)),
):
    return coordinator.review(approval_id, Actor.from_user(current_user), data.status, data.feedback)
