"""Uploads 기능 API 라우터입니다. 요청을 검증하고 파일 저장을 헬퍼로 위임합니다."""

import logging

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from app.schemas.upload import UploadedFileOut, UploadedFileResponse
from app.utils.helpers import save_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["uploads"])


@router.post("", response_model=UploadedFileResponse)
async def upload_file(
    file: UploadFile = File(...),
    path: str = Form("general"),
    generate_unique_name: bool = Form(True, alias="generateUniqueName"),
    filename_prefix: str = Form("", alias="filenamePrefix"),
):
    subfolder = (path or "").strip().strip("/") or "general"
    try:
        saved = await save_upload(
            file,
            subfolder=subfolder,
            generate_unique_name=generate_unique_name,
            filename_prefix=filename_prefix,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("[uploads] failed to store upload under %s", subfolder)
        raise HTTPException(status_code=500, detail="Failed to upload file")
    logger.info("[uploads] stored %s", saved["url"])
    return UploadedFileResponse(message="File uploaded successfully", data=UploadedFileOut(**saved))
