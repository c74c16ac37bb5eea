"""Admin Uploads 기능 API 라우터입니다. 업로드 파일 현황 조회와 미참조 파일 삭제를 서비스 레이어로 위임합니다."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.upload import (
    CategorizedFileOut,
    UploadCleanupOut,
    UploadCleanupResponse,
    UploadDeleteResponse,
    UploadInventoryOut,
    UploadInventoryResponse,
    UploadStatsOut,
)
from app.services import orphan_upload_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/uploads", tags=["admin-uploads"])


@router.get("", response_model=UploadInventoryResponse)
def list_uploads(db: Session = Depends(get_db)):
    try:
        inventory = orphan_upload_service.build_inventory(db)
    except HTTPException:
        raise
    except Exception:
        logger.exception("[uploads] failed to fetch uploads")
        raise HTTPException(status_code=500, detail="Failed to fetch uploads")
    return UploadInventoryResponse(data=_inventory_to_out(inventory))


@router.delete("", response_model=UploadDeleteResponse)
def delete_upload(
    path: str | None = Query(None),
    db: Session = Depends(get_db),
):
    if not path:
        raise HTTPException(status_code=400, detail="File path is required")
    try:
        orphan_upload_service.delete_upload(db, path)
    except HTTPException:
        raise
    except Exception:
        logger.exception("[uploads] failed to delete %s", path)
        raise HTTPException(status_code=500, detail="Failed to delete file")
    return UploadDeleteResponse(message="File deleted successfully")


@router.post("/cleanup", response_model=UploadCleanupResponse)
def cleanup_uploads(dry_run: bool = True, db: Session = Depends(get_db)):
    try:
        result = orphan_upload_service.cleanup_orphan_uploads(db, dry_run=dry_run)
    except HTTPException:
        raise
    except Exception:
        logger.exception("[uploads] orphan cleanup failed")
        raise HTTPException(status_code=500, detail="Failed to clean up uploads")
    return UploadCleanupResponse(data=UploadCleanupOut(**result))


def _inventory_to_out(inventory: dict) -> UploadInventoryOut:
    return UploadInventoryOut(
        files=[CategorizedFileOut(**asdict(item), can_delete=item.can_delete) for item in inventory["files"]],
        stats=UploadStatsOut(**inventory["stats"]),
        failed_sources=inventory["failed_sources"],
    )
