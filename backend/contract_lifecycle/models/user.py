"""User 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.orm import relationship
from contract_lifecycle.database import Base
from contract_lifecycle.models.enums import UserRole, enum_values


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    full_name = Column(String(100), nullable=False)
    initials = Column(String(10), nullable=False)
    role = Column(
        Enum(UserRole, native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
    )
    created_at = Column(DateTime, nullable=False)

    # Relationships
    contracts = relationship("Contract", back_populates="creator")
    approvals = relationship("ContractApproval", back_populates="approver")
