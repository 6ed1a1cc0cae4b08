"""계약 도메인 저장소 인터페이스와 구현체입니다."""

from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.repositories.sqlalchemy_repository import SqlAlchemyContractRepository

__all__ = ["ContractRepository", "SqlAlchemyContractRepository"]
