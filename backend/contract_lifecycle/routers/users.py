"""Users 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, status
from typing import List, Optional

from contract_lifecycle.dependencies import get_clock, get_repo
from contract_lifecycle.middleware.auth_middleware import get_current_user
from contract_lifecycle.models.enums import UserRole
from contract_lifecycle.models.user import User
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.schemas.user import UserCreate, UserOut
from contract_lifecycle.services import user_service
from contract_lifecycle.utils.clock import Clock

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserOut])
def list_users(
    role: Optional[UserRole] = None,
    repo: ContractRepository = Depends(get_repo),
    _current_user: User = Depends(get_current_user),
):
    return user_service.list_users(repo, role=role)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(
    data: UserCreate,
    repo: ContractRepository = Depends(get_repo),
    clock: Clock = Depends(get_clock),
):
    return user_service.register_user(repo, data, clock)
