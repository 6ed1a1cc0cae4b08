"""활동 로그(append-only) SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from contract_lifecycle.database import Base


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    log_id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.contract_id"))
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    action = Column(String(100), nullable=False)
    details = Column(Text)
    timestamp = Column(DateTime, nullable=False)

    user = relationship("User")
    contract = relationship("Contract")

    __table_args__ = (
        Index("idx_activity_timestamp", "timestamp", "log_id"),
        Index("idx_activity_contract", "contract_id"),
        Index("idx_activity_user", "user_id"),
    )
