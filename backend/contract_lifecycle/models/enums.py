"""사용자 역할, 계약 상태, 승인 상태 열거형입니다. 값은 저장소에 그대로 기록됩니다."""

import enum


class UserRole(str, enum.Enum):
    AUTHOR = "Author"
    APPROVER = "Approver"


class ContractStatus(str, enum.Enum):
    DRAFT = "Draft"
    PENDING_APPROVAL = "Pending Approval"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    EXECUTED = "Executed"
    EXPIRED = "Expired"


class ApprovalStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    # CLOSE_PENDING_ON_FINALIZE 설정이 켜진 경우에만 기록된다.
    CANCELLED = "Cancelled"


def enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]
