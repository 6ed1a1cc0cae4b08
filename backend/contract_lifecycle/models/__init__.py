"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from contract_lifecycle.models.enums import UserRole, ContractStatus, ApprovalStatus
from contract_lifecycle.models.user import User
from contract_lifecycle.models.template import ContractTemplate
from contract_lifecycle.models.contract import Contract, ContractVersion, ContractApproval
from contract_lifecycle.models.activity_log import ActivityLog

__all__ = [
    "UserRole", "ContractStatus", "ApprovalStatus",
    "User",
    "ContractTemplate",
    "Contract", "ContractVersion", "ContractApproval",
    "ActivityLog",
]
