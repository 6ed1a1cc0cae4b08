"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./contract_lifecycle.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Activity feed / dashboard
    ACTIVITY_FEED_LIMIT: int = 10
    DASHBOARD_ACTIVITY_LIMIT: int = 5
    EXPIRING_SOON_DAYS: int = 30

    # 반려로 종료된 라운드의 남은 Pending 승인 행을 Cancelled 로 닫을지 여부.
    # 기본값은 원래 동작(Pending 유지)이다.
    CLOSE_PENDING_ON_FINALIZE: bool = False

    # 기동 시 기본 사용자/템플릿 시드
    SEED_DEFAULTS: bool = True

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
