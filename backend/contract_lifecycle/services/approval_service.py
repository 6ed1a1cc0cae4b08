"""Approval Coordinator 도메인 서비스입니다. 승인 요청 생성, 검토 기록, 합의 판정을 담당합니다."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from contract_lifecycle.config import settings
from contract_lifecycle.exceptions import NotFoundError
from contract_lifecycle.models import (
    ApprovalStatus,
    Contract,
    ContractApproval,
    ContractStatus,
    User,
)
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.services import transition_rules
from contract_lifecycle.services.activity_service import (
    ACTION_APPROVED,
    ACTION_CONSENSUS,
    ACTION_REJECTED,
    ActivityLogger,
)
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


@dataclass
class PendingReview:
    contract: Contract
    approval: ContractApproval
    roster: List[ContractApproval] = field(default_factory=list)


class ApprovalCoordinator:

    def __init__(
        self,
        repo: ContractRepository,
        clock: Clock | None = None,
        activity: ActivityLogger | None = None,
        close_pending_on_finalize: bool | None = None,
    ):
        self.repo = repo
        self.clock = clock or SystemClock()
        self.activity = activity or ActivityLogger(repo, self.clock)
        if close_pending_on_finalize is None:
            close_pending_on_finalize = settings.CLOSE_PENDING_ON_FINALIZE
        self.close_pending_on_finalize = close_pending_on_finalize

    def open_round(self, contract: Contract, approvers: List[User]) -> List[ContractApproval]:
        """Fan out one Pending row per approver for the contract's current round.

        Must run inside the caller's transaction, after ``approval_round`` was bumped.
        """
        requested_at = self.clock.now()
        return [
            self.repo.add_approval(
                ContractApproval(
                    contract_id=contract.contract_id,
                    approver_id=approver.user_id,
                    approval_round=contract.approval_round,
                    status=ApprovalStatus.PENDING,
                    requested_at=requested_at,
                )
            )
            for approver in approvers
        ]

    def review(
        self,
        approval_id: int,
        actor: Actor,
        decision,
        feedback: Optional[str] = None,
    ) -> ContractApproval:
        with self.repo.transaction():
            approval = self.repo.get_approval(approval_id, for_update=True)
            if approval is None:
                raise NotFoundError("승인 요청을 찾을 수 없습니다.")
            contract = self.repo.get_contract(approval.contract_id, for_update=True)
            if contract is None:
                raise NotFoundError("계약을 찾을 수 없습니다.")
            value = transition_rules.ensure_can_review(approval, contract, actor, decision, feedback)

            approval.status = value
            approval.feedback = (feedback or "").strip() or None
            approval.action_date = self.clock.now()
            self.repo.save(approval)

            action = ACTION_APPROVED if value == ApprovalStatus.APPROVED else ACTION_REJECTED
            details = f'{value.value} contract "{contract.name}"'
            if approval.feedback:
                details += f" with feedback: {approval.feedback}"
            self.activity.record(contract.contract_id, actor.user_id, action, details)

            self._apply_consensus(contract, actor)
        return approval

    def _apply_consensus(self, contract: Contract, actor: Actor) -> ContractStatus:
        # 캐시가 아닌 저장소에서 현재 라운드 행을 다시 읽어 판정한다.
        rows = self.repo.list_approvals(contract.contract_id, contract.approval_round, fresh=True)
        outcome = transition_rules.compute_consensus(row.status for row in rows)
        if outcome == ContractStatus.PENDING_APPROVAL:
            return outcome

        transition_rules.ensure_transition(contract, outcome)
        contract.status = outcome
        self.repo.save(contract)
        self.activity.record(
            contract.contract_id,
            actor.user_id,
            ACTION_CONSENSUS,
            f'Contract "{contract.name}" is now {outcome.value}',
        )
        logger.info("contract=%s round=%s consensus=%s", contract.contract_id, contract.approval_round, outcome.value)

        if outcome == ContractStatus.REJECTED and self.close_pending_on_finalize:
            self._close_outstanding(rows)
        return outcome

    def _close_outstanding(self, rows: List[ContractApproval]) -> None:
        closed_at = self.clock.now()
        for row in rows:
            if row.status == ApprovalStatus.PENDING:
                row.status = ApprovalStatus.CANCELLED
                row.action_date = closed_at
                self.repo.save(row)

    def list_pending_for_approver(self, approver_id: int) -> List[PendingReview]:
        """One entry per contract on which ``approver_id`` still holds a Pending row.

        Rows left Pending after a rejection stay listed until the setting
        ``CLOSE_PENDING_ON_FINALIZE`` cancels them; reviewing such a row raises
        ``InvalidStateError``. The roster is always the contract's current round.
        """
        pending: Dict[int, PendingReview] = {}
        for approval in self.repo.list_open_approvals_for_approver(approver_id):
            if approval.contract_id in pending:
                continue
            contract = self.repo.get_contract(approval.contract_id)
            pending[approval.contract_id] = PendingReview(
                contract=contract,
                approval=approval,
                roster=self.repo.list_approvals(contract.contract_id, contract.approval_round),
            )
        return list(pending.values())

    def list_approvals(self, contract_id: int) -> List[ContractApproval]:
        if self.repo.get_contract(contract_id) is None:
            raise NotFoundError("계약을 찾을 수 없습니다.")
        return self.repo.list_approvals(contract_id)
