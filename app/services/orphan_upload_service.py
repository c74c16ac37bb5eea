"""Orphan Upload Service 도메인 서비스 레이어입니다. 업로드 파일과 DB 참조 URL을 대조하고 삭제를 보호합니다."""

import logging
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Collection, Iterable

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.about import Anime, Book, Game, Youtuber
from app.models.blog import BlogPost
from app.models.project import Project
from app.models.testimonial import Testimonial
from app.models.user import User
from app.utils.helpers import resolve_upload_path, to_relative_url_path

logger = logging.getLogger(__name__)

# 업로드 URL을 저장하는 컬럼 목록. 소스 간 조회 순서에는 의미가 없다.
REFERENCE_SOURCES = (
    ("projects", (Project.image, Project.video_url)),
    ("blog_posts", (BlogPost.featured_image,)),
    ("testimonials", (Testimonial.avatar,)),
    ("users", (User.avatar,)),
    ("youtubers", (Youtuber.profile_image,)),
    ("anime_list", (Anime.cover_image,)),
    ("book_list", (Book.cover_image,)),
    ("games", (Game.cover_image,)),
)


@dataclass
class StoredFile:
    filename: str
    relative_path: str
    url: str
    size: int
    created_at: datetime
    modified_at: datetime
    extension: str


@dataclass
class CategorizedFile(StoredFile):
    is_referenced: bool = False
    category: str = "general"

    @property
    def can_delete(self) -> bool:
        return not self.is_referenced


@dataclass
class ReferenceScan:
    urls: set[str] = field(default_factory=set)
    failed_sources: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed_sources


def list_stored_files(upload_dir: str | None = None) -> list[StoredFile]:
    root = os.path.abspath(upload_dir or settings.UPLOAD_DIR)
    if not os.path.isdir(root):
        return []
    return _walk(root, root)


def _walk(directory: str, root: str) -> list[StoredFile]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        logger.warning("[uploads] failed to read directory %s: %s", directory, exc)
        return []

    files: list[StoredFile] = []
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            files.extend(_walk(entry.path, root))
        elif entry.is_file(follow_symlinks=False) and not entry.name.startswith("."):
            stored = _to_stored_file(entry, root)
            if stored is not None:
                files.append(stored)
    return files


def _to_stored_file(entry: os.DirEntry, root: str) -> StoredFile | None:
    try:
        stat = entry.stat(follow_symlinks=False)
    except OSError as exc:
        logger.warning("[uploads] failed to stat %s: %s", entry.path, exc)
        return None

    relative_path = to_relative_url_path(entry.path, root)
    # st_birthtime은 Linux에서 제공되지 않는다.
    created = getattr(stat, "st_birthtime", stat.st_ctime)
    return StoredFile(
        filename=entry.name,
        relative_path=relative_path,
        url=settings.upload_url_for(relative_path),
        size=stat.st_size,
        created_at=datetime.fromtimestamp(created, tz=timezone.utc),
        modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        extension=os.path.splitext(entry.name)[1].lower(),
    )


def collect_referenced_urls(db: Session) -> ReferenceScan:
    """모든 참조 컬럼의 URL을 모은다. 실패한 소스는 건너뛰고 failed_sources에 기록한다."""
    scan = ReferenceScan()
    for source, columns in REFERENCE_SOURCES:
        try:
            rows = db.query(*columns).all()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("[uploads] reference lookup failed for %s: %s", source, exc)
            scan.failed_sources.append(source)
            continue
        for row in rows:
            scan.urls.update(value for value in row if value)
    return scan


def file_category(relative_path: str) -> str:
    parts = relative_path.split("/")
    if len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return parts[0] or "general"


def reconcile(
    files: Iterable[StoredFile], referenced_urls: Collection[str]
) -> tuple[list[CategorizedFile], dict]:
    categorized = [
        CategorizedFile(
            **asdict(stored),
            is_referenced=stored.url in referenced_urls,
            category=file_category(stored.relative_path),
        )
        for stored in files
    ]

    by_category: dict[str, dict[str, int]] = {}
    for item in categorized:
        bucket = by_category.setdefault(item.category, {"total": 0, "referenced": 0, "orphaned": 0})
        bucket["total"] += 1
        bucket["referenced" if item.is_referenced else "orphaned"] += 1

    referenced = sum(1 for item in categorized if item.is_referenced)
    stats = {
        "total": len(categorized),
        "referenced": referenced,
        "orphaned": len(categorized) - referenced,
        "by_category": by_category,
    }
    return categorized, stats


def build_inventory(db: Session, upload_dir: str | None = None) -> dict:
    files = list_stored_files(upload_dir)
    scan = collect_referenced_urls(db)
    categorized, stats = reconcile(files, scan.urls)
    return {
        "files": categorized,
        "stats": stats,
        "failed_sources": scan.failed_sources,
    }


def _ensure_scan_allows_delete(scan: ReferenceScan) -> None:
    if settings.UPLOAD_DELETE_REQUIRES_COMPLETE_SCAN and not scan.complete:
        raise HTTPException(
            status_code=503,
            detail=f"Reference lookup failed for: {', '.join(scan.failed_sources)}",
        )


def delete_upload(db: Session, relative_path: str, upload_dir: str | None = None) -> str:
    """경로 검사 -> 존재 확인 -> 참조 재확인 순서로 검증한 뒤 파일 하나를 삭제한다.

    검사와 삭제 사이에 새 참조가 생기는 경우는 막지 않는다.
    """
    upload_dir = upload_dir or settings.UPLOAD_DIR
    target = resolve_upload_path(upload_dir, relative_path)
    if not os.path.isfile(target):
        raise HTTPException(status_code=404, detail="File not found")

    url = settings.upload_url_for(to_relative_url_path(target, upload_dir))
    scan = collect_referenced_urls(db)
    _ensure_scan_allows_delete(scan)
    if url in scan.urls:
        raise HTTPException(status_code=400, detail="Cannot delete file that is referenced in database")

    try:
        os.remove(target)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    logger.info("[uploads] deleted %s", url)
    return url


def cleanup_orphan_uploads(db: Session, dry_run: bool = True, upload_dir: str | None = None) -> dict:
    upload_dir = upload_dir or settings.UPLOAD_DIR
    files = list_stored_files(upload_dir)
    scan = collect_referenced_urls(db)
    categorized, _ = reconcile(files, scan.urls)
    orphans = sorted((item for item in categorized if item.can_delete), key=lambda item: item.url)

    deleted_count = 0
    if not dry_run:
        _ensure_scan_allows_delete(scan)
        for item in orphans:
            abs_path = resolve_upload_path(upload_dir, item.relative_path)
            try:
                os.remove(abs_path)
            except FileNotFoundError:
                continue
            deleted_count += 1
        _remove_empty_dirs(os.path.abspath(upload_dir))
        logger.info("[uploads] cleanup removed %d orphan file(s)", deleted_count)

    return {
        "dry_run": dry_run,
        "referenced_count": len(scan.urls),
        "existing_count": len(files),
        "orphan_count": len(orphans),
        "deleted_count": deleted_count,
        "orphan_urls": [item.url for item in orphans],
    }


def _remove_empty_dirs(root: str):
    if not os.path.isdir(root):
        return
    for dirpath, _, _ in os.walk(root, topdown=False):
        if dirpath == root:
            continue
        try:
            if not os.listdir(dirpath):
                os.rmdir(dirpath)
        except OSError as exc:
            logger.warning("[uploads] failed to remove empty directory %s: %s", dirpath, exc)
