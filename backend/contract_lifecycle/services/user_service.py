"""User Service 도메인 서비스 레이어입니다. 사용자 등록과 조회를 담당합니다."""

import logging
from typing import List, Optional

from contract_lifecycle.exceptions import ValidationError
from contract_lifecycle.models import User, UserRole
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.schemas.user import UserCreate
from contract_lifecycle.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


def derive_initials(full_name: str) -> str:
    parts = [p for p in (full_name or "").split() if p]
    if not parts:
        return "?"
    if len(parts) == 1:
        return parts[0][:2].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def register_user(repo: ContractRepository, data: UserCreate, clock: Clock | None = None) -> User:
    username = (data.username or "").strip()
    full_name = (data.full_name or "").strip()
    if not username or not full_name:
        raise ValidationError("아이디와 이름은 필수 입력 항목입니다.")
    with repo.transaction():
        if repo.get_user_by_username(username):
            raise ValidationError(f"이미 사용 중인 아이디입니다: {username}")
        user = repo.add_user(
            User(
                username=username,
                full_name=full_name,
                initials=(data.initials or "").strip().upper() or derive_initials(full_name),
                role=UserRole(data.role),
                created_at=(clock or SystemClock()).now(),
            )
        )
    logger.info("registered user=%s role=%s", user.user_id, user.role.value)
    return user


def list_users(repo: ContractRepository, role: Optional[UserRole] = None) -> List[User]:
    return repo.list_users(role=role)
