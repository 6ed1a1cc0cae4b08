"""계약서 템플릿 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text
from contract_lifecycle.database import Base


class ContractTemplate(Base):
    __tablename__ = "contract_templates"

    template_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
