"""계약 상태 전이 규칙과 가드입니다.

- Stateless: storage, clock and transport free; callers pass in the loaded rows.
- Every guard either returns normally or raises one of the typed errors in
  ``contract_lifecycle.exceptions``.
- The transition table is small and explicit; anything not listed is illegal.
"""

from datetime import date, datetime, time
from typing import Iterable, Optional

from contract_lifecycle.exceptions import (
    ForbiddenError,
    InvalidStateError,
    PreconditionError,
    ValidationError,
)
from contract_lifecycle.models import ApprovalStatus, Contract, ContractApproval, ContractStatus
from contract_lifecycle.services.actor import Actor

ALLOWED_TRANSITIONS = {
    ContractStatus.DRAFT: {ContractStatus.PENDING_APPROVAL},
    ContractStatus.REJECTED: {ContractStatus.PENDING_APPROVAL},
    ContractStatus.PENDING_APPROVAL: {ContractStatus.APPROVED, ContractStatus.REJECTED},
    ContractStatus.APPROVED: {ContractStatus.EXECUTED},
    ContractStatus.EXECUTED: {ContractStatus.EXPIRED},
    ContractStatus.EXPIRED: set(),
}

SUBMITTABLE_STATUSES = {ContractStatus.DRAFT, ContractStatus.REJECTED}
REVIEW_DECISIONS = {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}


def can_transition(current: ContractStatus, target: ContractStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(ContractStatus(current), set())


def ensure_transition(contract: Contract, target: ContractStatus) -> None:
    if not can_transition(contract.status, target):
        raise InvalidStateError(
            f"계약 상태를 '{ContractStatus(contract.status).value}'에서 '{target.value}'(으)로 변경할 수 없습니다."
        )


def ensure_creator(contract: Contract, actor: Actor, action: str) -> None:
    if contract.created_by != actor.user_id:
        raise ForbiddenError(f"계약 작성자만 {action}할 수 있습니다.")


def ensure_can_create(actor: Actor) -> None:
    if not actor.is_author:
        raise ForbiddenError("계약 작성은 Author 역할만 가능합니다.")


def ensure_can_edit(contract: Contract, actor: Actor) -> None:
    # 작성자 외에도 승인자는 협업 교정을 위해 수정할 수 있다.
    if contract.created_by != actor.user_id and not actor.is_approver:
        raise ForbiddenError("이 계약을 수정할 권한이 없습니다.")


def ensure_can_submit(contract: Contract, actor: Actor, approver_count: int) -> None:
    ensure_creator(contract, actor, "승인 요청")
    if contract.status not in SUBMITTABLE_STATUSES:
        raise InvalidStateError(
            f"'{ContractStatus(contract.status).value}' 상태의 계약은 승인 요청할 수 없습니다."
        )
    if approver_count < 1:
        raise PreconditionError("시스템에 등록된 승인자가 없습니다.")


def ensure_can_execute(contract: Contract, actor: Actor) -> None:
    if contract.status != ContractStatus.APPROVED:
        raise InvalidStateError("승인된 계약만 체결할 수 있습니다.")
    ensure_creator(contract, actor, "체결")


def ensure_can_restore(contract: Contract) -> None:
    if contract.status != ContractStatus.DRAFT:
        raise InvalidStateError("초안(Draft) 상태에서만 이전 버전을 복원할 수 있습니다.")


def normalize_decision(decision) -> ApprovalStatus:
    try:
        value = ApprovalStatus(decision)
    except ValueError:
        value = None
    if value not in REVIEW_DECISIONS:
        raise ValidationError("검토 결과는 'Approved' 또는 'Rejected'여야 합니다.")
    return value


def ensure_can_review(
    approval: ContractApproval,
    contract: Contract,
    actor: Actor,
    decision,
    feedback: Optional[str],
) -> ApprovalStatus:
    if approval.approver_id != actor.user_id:
        raise ForbiddenError("이 승인 요청을 검토할 권한이 없습니다.")
    value = normalize_decision(decision)
    if approval.status != ApprovalStatus.PENDING:
        raise InvalidStateError("이미 처리된 승인 요청입니다.")
    if contract.status != ContractStatus.PENDING_APPROVAL or approval.approval_round != contract.approval_round:
        raise InvalidStateError("승인 절차가 이미 종료된 계약입니다.")
    if value == ApprovalStatus.REJECTED and not (feedback or "").strip():
        raise ValidationError("반려 시에는 피드백을 입력해야 합니다.")
    return value


def compute_consensus(statuses: Iterable[ApprovalStatus]) -> ContractStatus:
    """Aggregate one approval round into the contract status it implies.

    Any rejection finalizes the round; otherwise every row must be approved
    (and at least one row must exist) for the contract to be approved.
    """
    values = [ApprovalStatus(s) for s in statuses]
    if any(s == ApprovalStatus.REJECTED for s in values):
        return ContractStatus.REJECTED
    if values and all(s == ApprovalStatus.APPROVED for s in values):
        return ContractStatus.APPROVED
    return ContractStatus.PENDING_APPROVAL


def is_past_expiry(expiry_date: Optional[date], now: datetime) -> bool:
    # 만료일 00:00 이 지나면 만료로 본다.
    if expiry_date is None:
        return False
    return datetime.combine(expiry_date, time.min) < now


def ensure_date_order(effective_date: Optional[date], expiry_date: Optional[date]) -> None:
    if effective_date and expiry_date and expiry_date < effective_date:
        raise ValidationError("만료일은 발효일보다 빠를 수 없습니다.")
