"""Auth Service 도메인 서비스 레이어입니다. 사용자명 기반 모의 SSO 로그인과 토큰 발급을 담당합니다."""

from datetime import datetime, timedelta
from jose import jwt
from fastapi import HTTPException, status

from contract_lifecycle.config import settings
from contract_lifecycle.models import User
from contract_lifecycle.repositories.base import ContractRepository

ALGORITHM = "HS256"


def create_access_token(user_id: int) -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def mock_sso_login(repo: ContractRepository, username: str) -> User:
    user = repo.get_user_by_username(username)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"아이디 '{username}'에 해당하는 사용자를 찾을 수 없습니다.",
        )
    return user
