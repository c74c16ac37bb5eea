"""Upload 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UploadedFileOut(CamelModel):
    filename: str
    original_name: str
    size: int
    mime_type: str
    path: str
    url: str


class UploadedFileResponse(CamelModel):
    success: bool = True
    message: str
    data: UploadedFileOut


class CategorizedFileOut(CamelModel):
    filename: str
    relative_path: str
    url: str
    size: int
    created_at: datetime
    modified_at: datetime
    extension: str
    is_referenced: bool
    category: str
    can_delete: bool


class CategoryStatsOut(CamelModel):
    total: int = 0
    referenced: int = 0
    orphaned: int = 0


class UploadStatsOut(CamelModel):
    total: int
    referenced: int
    orphaned: int
    by_category: Dict[str, CategoryStatsOut]


class UploadInventoryOut(CamelModel):
    files: List[CategorizedFileOut]
    stats: UploadStatsOut
    failed_sources: List[str] = []


class UploadInventoryResponse(CamelModel):
    success: bool = True
    data: UploadInventoryOut


class UploadDeleteResponse(CamelModel):
    success: bool = True
    message: str


class UploadCleanupOut(CamelModel):
    dry_run: bool
    referenced_count: int
    existing_count: int
    orphan_count: int
    deleted_count: int
    orphan_urls: List[str]


class UploadCleanupResponse(CamelModel):
    success: bool = True
    data: UploadCleanupOut
