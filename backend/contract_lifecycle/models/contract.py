"""계약서, 계약 버전, 승인 요청의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import (
    Column, Integer, String, Text, Date, DateTime, Enum, ForeignKey, Index, CheckConstraint,
)
from sqlalchemy.orm import relationship
from contract_lifecycle.database import Base
from contract_lifecycle.models.enums import ApprovalStatus, ContractStatus, enum_values


class Contract(Base):
    __tablename__ = "contracts"

    contract_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    parties = Column(Text, nullable=False)
    effective_date = Column(Date)
    expiry_date = Column(Date)
    contract_value = Column(Integer)
    status = Column(
        Enum(ContractStatus, native_enum=False, values_callable=enum_values, length=30),
        nullable=False,
        default=ContractStatus.DRAFT,
    )
    content = Column(Text, nullable=False)
    created_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, nullable=False)
    template_id = Column(Integer, ForeignKey("contract_templates.template_id"))
    # 상신할 때마다 1씩 증가한다. 합의 판정은 현재 라운드의 승인 행만 본다.
    approval_round = Column(Integer, nullable=False, default=0)

    creator = relationship("User", back_populates="contracts")
    template = relationship("ContractTemplate")
    versions = relationship(
        "ContractVersion",
        back_populates="contract",
        cascade="all, delete-orphan",
        order_by="desc(ContractVersion.version_id)",
    )
    approvals = relationship(
        "ContractApproval",
        back_populates="contract",
        cascade="all, delete-orphan",
        order_by="ContractApproval.approval_id",
    )

    __table_args__ = (
        Index("idx_contract_status", "status"),
        Index("idx_contract_creator", "created_by"),
    )


class ContractVersion(Base):
    __tablename__ = "contract_versions"

    version_id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.contract_id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)  # 수정 전 본문
    changed_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    changed_at = Column(DateTime, nullable=False)
    change_description = Column(Text)

    contract = relationship("Contract", back_populates="versions")
    author = relationship("User")

    __table_args__ = (
        Index("idx_contract_version_contract", "contract_id", "changed_at"),
    )


class ContractApproval(Base):
    __tablename__ = "contract_approvals"

    approval_id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.contract_id", ondelete="CASCADE"), nullable=False)
    approver_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    approval_round = Column(Integer, nullable=False)
    status = Column(
        Enum(ApprovalStatus, native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    feedback = Column(Text)
    requested_at = Column(DateTime, nullable=False)
    action_date = Column(DateTime)

    contract = relationship("Contract", back_populates="approvals")
    approver = relationship("User", back_populates="approvals")

    __table_args__ = (
        Index("idx_approval_contract_round", "contract_id", "approval_round"),
        Index("idx_approval_approver", "approver_id", "status"),
        CheckConstraint(
            "(status = 'Pending' AND action_date IS NULL) OR (status != 'Pending' AND action_date IS NOT NULL)",
            name="ck_approval_action_date",
        ),
    )
