"""SQLAlchemy 세션 기반 ContractRepository 구현체입니다."""

from datetime import date
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from contract_lifecycle.models import (
    ActivityLog,
    ApprovalStatus,
    Contract,
    ContractApproval,
    ContractStatus,
    ContractTemplate,
    ContractVersion,
    User,
    UserRole,
)
from contract_lifecycle.repositories.base import ContractRepository


class SqlAlchemyContractRepository(ContractRepository):

    def __init__(self, db: Session):
        super().__init__()
        self.db = db

    def _commit(self) -> None:
        self.db.commit()

    def _rollback(self) -> None:
        self.db.rollback()

    def _add(self, entity):
        self.db.add(entity)
        self.db.flush()
        return entity

    def save(self, entity) -> None:
        self._add(entity)

    # users
    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(func.lower(User.username) == (username or "").strip().lower())
            .first()
        )

    def add_user(self, user: User) -> User:
        return self._add(user)

    def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        q = self.db.query(User)
        if role is not None:
            q = q.filter(User.role == role)
        return q.order_by(User.user_id).all()

    # templates
    def get_template(self, template_id: int) -> Optional[ContractTemplate]:
        return self.db.get(ContractTemplate, template_id)

    def get_template_by_name(self, name: str) -> Optional[ContractTemplate]:
        return (
            self.db.query(ContractTemplate)
            .filter(func.lower(ContractTemplate.name) == (name or "").strip().lower())
            .first()
        )

    def add_template(self, template: ContractTemplate) -> ContractTemplate:
        return self._add(template)

    def list_templates(self) -> List[ContractTemplate]:
        return self.db.query(ContractTemplate).order_by(ContractTemplate.template_id).all()

    # contracts
    def get_contract(self, contract_id: int, for_update: bool = False) -> Optional[Contract]:
        q = self.db.query(Contract).filter(Contract.contract_id == contract_id)
        if for_update:
            q = q.with_for_update().populate_existing()
        return q.first()

    def add_contract(self, contract: Contract) -> Contract:
        return self._add(contract)

    def list_contracts(
        self,
        *,
        status: Optional[ContractStatus] = None,
        created_by: Optional[int] = None,
        query: Optional[str] = None,
    ) -> List[Contract]:
        q = self.db.query(Contract)
        if status is not None:
            q = q.filter(Contract.status == status)
        if created_by is not None:
            q = q.filter(Contract.created_by == created_by)
        keyword = (query or "").strip()
        if keyword:
            pattern = f"%{keyword}%"
            q = q.filter(
                or_(
                    Contract.name.ilike(pattern),
                    Contract.description.ilike(pattern),
                    Contract.parties.ilike(pattern),
                )
            )
        return q.order_by(Contract.created_at.desc(), Contract.contract_id.desc()).all()

    def list_executed_expiring_before(self, cutoff: date) -> List[Contract]:
        return (
            self.db.query(Contract)
            .filter(
                Contract.status == ContractStatus.EXECUTED,
                Contract.expiry_date.isnot(None),
                Contract.expiry_date < cutoff,
            )
            .order_by(Contract.contract_id)
            .all()
        )

    # versions
    def add_version(self, version: ContractVersion) -> ContractVersion:
        return self._add(version)

    def get_version(self, version_id: int) -> Optional[ContractVersion]:
        return self.db.get(ContractVersion, version_id)

    def list_versions(self, contract_id: int) -> List[ContractVersion]:
        return (
            self.db.query(ContractVersion)
            .filter(ContractVersion.contract_id == contract_id)
            .order_by(ContractVersion.changed_at.desc(), ContractVersion.version_id.desc())
            .all()
        )

    # approvals
    def add_approval(self, approval: ContractApproval) -> ContractApproval:
        return self._add(approval)

    def get_approval(self, approval_id: int, for_update: bool = False) -> Optional[ContractApproval]:
        q = self.db.query(ContractApproval).filter(ContractApproval.approval_id == approval_id)
        if for_update:
            q = q.with_for_update().populate_existing()
        return q.first()

    def list_approvals(
        self,
        contract_id: int,
        approval_round: Optional[int] = None,
        fresh: bool = False,
    ) -> List[ContractApproval]:
        q = self.db.query(ContractApproval).filter(ContractApproval.contract_id == contract_id)
        if approval_round is not None:
            q = q.filter(ContractApproval.approval_round == approval_round)
        if fresh:
            q = q.populate_existing()
        return q.order_by(ContractApproval.approval_round.desc(), ContractApproval.approval_id).all()

    def list_open_approvals_for_approver(self, approver_id: int) -> List[ContractApproval]:
        return (
            self.db.query(ContractApproval)
            .filter(
                ContractApproval.approver_id == approver_id,
                ContractApproval.status == ApprovalStatus.PENDING,
            )
            .order_by(
                ContractApproval.requested_at.desc(),
                ContractApproval.approval_round.desc(),
                ContractApproval.approval_id.desc(),
            )
            .all()
        )

    # activity
    def add_activity(self, entry: ActivityLog) -> ActivityLog:
        return self._add(entry)

    def _activity_query(self):
        return self.db.query(ActivityLog).order_by(ActivityLog.timestamp.desc(), ActivityLog.log_id.desc())

    def list_recent_activity(self, limit: int) -> List[ActivityLog]:
        return self._activity_query().limit(limit).all()

    def list_activity_by_contract(self, contract_id: int) -> List[ActivityLog]:
        return self._activity_query().filter(ActivityLog.contract_id == contract_id).all()

    def list_activity_by_user(self, user_id: int) -> List[ActivityLog]:
        return self._activity_query().filter(ActivityLog.user_id == user_id).all()
