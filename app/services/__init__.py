"""서비스 레이어 패키지 초기화 모듈입니다."""

from app.services import orphan_upload_service
