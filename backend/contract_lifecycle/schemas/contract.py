"""Contract 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime

from contract_lifecycle.models.enums import ApprovalStatus, ContractStatus
from contract_lifecycle.schemas.user import UserBrief

# update_details 로 변경 가능한 메타데이터 필드
DETAIL_FIELDS = ("name", "description", "parties", "effective_date", "expiry_date", "contract_value")


class ContractBase(BaseModel):
    name: str
    description: Optional[str] = None
    parties: str
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None
    contract_value: Optional[int] = Field(default=None, ge=0)


class ContractCreate(ContractBase):
    content: Optional[str] = None
    template_id: Optional[int] = None


class ContractDetailsUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    parties: Optional[str] = None
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None
    contract_value: Optional[int] = Field(default=None, ge=0)


class ContractUpdate(ContractDetailsUpdate):
    content: Optional[str] = None
    change_description: Optional[str] = None


class ContractOut(ContractBase):
    contract_id: int
    status: ContractStatus
    content: str
    created_by: int
    created_at: datetime
    template_id: Optional[int] = None
    approval_round: int
    creator: Optional[UserBrief] = None

    model_config = {"from_attributes": True}


class ContractBrief(BaseModel):
    contract_id: int
    name: str

    model_config = {"from_attributes": True}


class ContractVersionOut(BaseModel):
    version_id: int
    contract_id: int
    content: str
    changed_by: int
    changed_at: datetime
    change_description: Optional[str] = None

    model_config = {"from_attributes": True}


class ContractApprovalOut(BaseModel):
    approval_id: int
    contract_id: int
    approver_id: int
    approval_round: int
    status: ApprovalStatus
    feedback: Optional[str] = None
    requested_at: datetime
    action_date: Optional[datetime] = None
    approver: Optional[UserBrief] = None

    model_config = {"from_attributes": True}


class ReviewRequest(BaseModel):
    status: str
    feedback: Optional[str] = None


class PendingReviewOut(BaseModel):
    contract: ContractOut
    approval: ContractApprovalOut
    approvals: List[ContractApprovalOut]


class ExpirationResult(BaseModel):
    message: str
    expired_contract_ids: List[int]


class MessageResponse(BaseModel):
    message: str
