"""Lifecycle Engine 도메인 서비스입니다. 계약 상태 전이의 유일한 진입점입니다.

모든 작업은 저장소 트랜잭션 하나 안에서 검증 → 변경 → 활동 기록 순으로 수행되며,
중간에 실패하면 활동 기록을 포함한 모든 변경이 롤백된다.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from contract_lifecycle.exceptions import NotFoundError, ValidationError
from contract_lifecycle.models import Contract, ContractStatus, UserRole
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.schemas.contract import DETAIL_FIELDS, ContractCreate, ContractDetailsUpdate
from contract_lifecycle.services import transition_rules
from contract_lifecycle.services.activity_service import (
    ACTION_CREATED,
    ACTION_EXECUTED,
    ACTION_EXPIRED,
    ACTION_SUBMITTED,
    ACTION_UPDATED,
    ActivityLogger,
)
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.services.approval_service import ApprovalCoordinator
from contract_lifecycle.services.version_service import VersionTracker
from contract_lifecycle.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


class LifecycleEngine:

    def __init__(
        self,
        repo: ContractRepository,
        clock: Clock | None = None,
        approvals: ApprovalCoordinator | None = None,
    ):
        self.repo = repo
        self.clock = clock or SystemClock()
        self.activity = ActivityLogger(repo, self.clock)
        self.approvals = approvals or ApprovalCoordinator(repo, self.clock, self.activity)
        self.versions = VersionTracker(repo, self.clock, record_edit=self.record_edit)

    def _load(self, contract_id: int, for_update: bool = False) -> Contract:
        contract = self.repo.get_contract(contract_id, for_update=for_update)
        if contract is None:
            raise NotFoundError("계약을 찾을 수 없습니다.")
        return contract

    def _set_status(self, contract: Contract, target: ContractStatus) -> None:
        transition_rules.ensure_transition(contract, target)
        previous = ContractStatus(contract.status)
        contract.status = target
        self.repo.save(contract)
        logger.info("contract=%s status %s -> %s", contract.contract_id, previous.value, target.value)

    # ------------------------------------------------------------ creation
    def create_contract(self, actor: Actor, data: ContractCreate) -> Contract:
        transition_rules.ensure_can_create(actor)
        name = (data.name or "").strip()
        parties = (data.parties or "").strip()
        if not name or not parties:
            raise ValidationError("계약명과 당사자는 필수 입력 항목입니다.")
        transition_rules.ensure_date_order(data.effective_date, data.expiry_date)

        with self.repo.transaction():
            template = None
            if data.template_id is not None:
                template = self.repo.get_template(data.template_id)
                if template is None:
                    raise NotFoundError("템플릿을 찾을 수 없습니다.")
            content = data.content if data.content is not None else (template.content if template else None)
            if content is None:
                raise ValidationError("계약 본문 또는 템플릿을 지정해야 합니다.")

            contract = self.repo.add_contract(
                Contract(
                    name=name,
                    description=data.description,
                    parties=parties,
                    effective_date=data.effective_date,
                    expiry_date=data.expiry_date,
                    contract_value=data.contract_value,
                    status=ContractStatus.DRAFT,
                    content=content,
                    created_by=actor.user_id,
                    created_at=self.clock.now(),
                    template_id=template.template_id if template else None,
                    approval_round=0,
                )
            )
            source = template.name if template else "scratch"
            self.activity.record(
                contract.contract_id,
                actor.user_id,
                ACTION_CREATED,
                f'Created contract "{contract.name}" from {source}',
            )
        return contract

    # ------------------------------------------------------------- editing
    def record_edit(
        self,
        contract_id: int,
        actor: Actor,
        new_content: str,
        change_description: Optional[str] = None,
    ) -> Contract:
        with self.repo.transaction():
            contract = self._load(contract_id)
            transition_rules.ensure_can_edit(contract, actor)
            if new_content != contract.content:
                # 덮어쓰기 전에 수정 전 본문을 먼저 보관한다.
                self.versions.snapshot(
                    contract.contract_id,
                    actor.user_id,
                    contract.content,
                    change_description or "Updated contract",
                )
                contract.content = new_content
                self.repo.save(contract)
            self.activity.record(
                contract.contract_id,
                actor.user_id,
                ACTION_UPDATED,
                f'Updated contract "{contract.name}"',
            )
        return contract

    def update_details(
        self,
        contract_id: int,
        actor: Actor,
        changes: ContractDetailsUpdate,
        record_activity: bool = True,
    ) -> Contract:
        """Edit metadata fields only. Content and status are left untouched.

        ``record_activity=False`` lets a caller that follows up with
        :meth:`record_edit` in the same transaction log the update once.
        """
        payload: Dict[str, Any] = changes.model_dump(exclude_unset=True, include=set(DETAIL_FIELDS))
        with self.repo.transaction():
            contract = self._load(contract_id)
            transition_rules.ensure_can_edit(contract, actor)
            for key in ("name", "parties"):
                if key in payload:
                    payload[key] = (payload[key] or "").strip()
                    if not payload[key]:
                        raise ValidationError("계약명과 당사자는 비워둘 수 없습니다.")
            transition_rules.ensure_date_order(
                payload.get("effective_date", contract.effective_date),
                payload.get("expiry_date", contract.expiry_date),
            )
            for key, value in payload.items():
                setattr(contract, key, value)
            self.repo.save(contract)
            if record_activity:
                self.activity.record(
                    contract.contract_id,
                    actor.user_id,
                    ACTION_UPDATED,
                    f'Updated contract "{contract.name}"',
                )
        return contract

    # --------------------------------------------------------- transitions
    def submit(self, contract_id: int, actor: Actor) -> Contract:
        with self.repo.transaction():
            contract = self._load(contract_id, for_update=True)
            approvers = self.repo.list_users(role=UserRole.APPROVER)
            transition_rules.ensure_can_submit(contract, actor, len(approvers))

            contract.approval_round = (contract.approval_round or 0) + 1
            self._set_status(contract, ContractStatus.PENDING_APPROVAL)
            rows = self.approvals.open_round(contract, approvers)
            self.activity.record(
                contract.contract_id,
                actor.user_id,
                ACTION_SUBMITTED,
                f'Submitted contract "{contract.name}" for approval',
            )
        logger.info(
            "contract=%s submitted round=%s approvers=%s",
            contract.contract_id, contract.approval_round, len(rows),
        )
        return contract

    def execute(self, contract_id: int, actor: Actor) -> Contract:
        with self.repo.transaction():
            contract = self._load(contract_id, for_update=True)
            transition_rules.ensure_can_execute(contract, actor)
            self._set_status(contract, ContractStatus.EXECUTED)
            self.activity.record(
                contract.contract_id,
                actor.user_id,
                ACTION_EXECUTED,
                f'Executed contract "{contract.name}"',
            )
        return contract

    def check_expirations(self, actor: Actor, now: datetime | None = None) -> List[int]:
        """Move every Executed contract whose expiry date has passed to Expired.

        Safe to re-run at any cadence: contracts already Expired are no longer
        Executed and are never selected again.
        """
        now = now or self.clock.now()
        if now.tzinfo is not None:
            # 만료 판정은 SystemClock 과 같은 naive UTC 기준으로 한다.
            now = now.astimezone(timezone.utc).replace(tzinfo=None)
        expired: List[int] = []
        with self.repo.transaction():
            candidates = self.repo.list_executed_expiring_before(now.date() + timedelta(days=1))
            for contract in candidates:
                if not transition_rules.is_past_expiry(contract.expiry_date, now):
                    continue
                self._set_status(contract, ContractStatus.EXPIRED)
                self.activity.record(
                    contract.contract_id,
                    actor.user_id,
                    ACTION_EXPIRED,
                    f'Contract "{contract.name}" marked as expired',
                )
                expired.append(contract.contract_id)
        if expired:
            logger.info("expiration sweep at %s expired=%s", now.isoformat(), expired)
        return expired
