"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./portfolio.db"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # File upload
    UPLOAD_DIR: str = "uploads"
    UPLOAD_PUBLIC_URL: str = "/uploads"
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10 MB, paths without a dedicated rule
    # 참조 조회가 하나라도 실패하면 삭제를 거부한다 (기본값은 기존 동작 유지).
    UPLOAD_DELETE_REQUIRES_COMPLETE_SCAN: bool = False

    def upload_mount_path(self) -> str:
        return (self.UPLOAD_PUBLIC_URL or "").rstrip("/")

    def upload_url_for(self, relative_path: str) -> str:
        return f"{self.upload_mount_path()}/{relative_path}"

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
