import mimetypes
import os
import uuid
from fastapi import UploadFile, HTTPException
from app.config import settings

MB = 1024 * 1024

# 업로드 경로별 크기/형식 제한. 정의되지 않은 경로는 DEFAULT_UPLOAD_RULE을 따른다.
UPLOAD_RULES = {
    "projects/images": {
        "max_size": 5 * MB,
        "extensions": {"jpg", "jpeg", "png", "webp"},
        "mime_types": {"image/jpeg", "image/png", "image/webp"},
    },
    "projects/videos": {
        "max_size": 50 * MB,
        "extensions": {"mp4", "webm", "mov", "avi"},
        "mime_types": {"video/mp4", "video/webm", "video/quicktime", "video/x-msvideo"},
    },
    "projects/documents": {
        "max_size": 20 * MB,
        "extensions": {"pdf", "doc", "docx", "txt", "md"},
        "mime_types": {
            "application/pdf",
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "text/plain",
            "text/markdown",
        },
    },
    "blog/images": {
        "max_size": 3 * MB,
        "extensions": {"jpg", "jpeg", "png", "gif", "webp"},
        "mime_types": {"image/jpeg", "image/png", "image/gif", "image/webp"},
    },
    "blog/attachments": {
        "max_size": 10 * MB,
        "extensions": {"pdf", "zip", "rar", "txt", "md"},
        "mime_types": {
            "application/pdf",
            "application/zip",
            "application/x-rar-compressed",
            "text/plain",
            "text/markdown",
        },
    },
}

DEFAULT_UPLOAD_RULE = {
    "extensions": {"jpg", "jpeg", "png", "gif", "webp", "pdf", "txt", "md"},
    "mime_types": {
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/pdf",
        "text/plain",
        "text/markdown",
    },
}


def get_upload_rule(subfolder: str) -> dict:
    rule = UPLOAD_RULES.get(subfolder)
    if rule is not None:
        return rule
    return {"max_size": settings.MAX_UPLOAD_SIZE, **DEFAULT_UPLOAD_RULE}


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def resolve_upload_path(upload_dir: str, relative_path: str) -> str:
    """업로드 루트 기준으로 경로를 해석하고, 루트 밖이면 403을 발생시킨다.

    심볼릭 링크를 따라간 실제 경로도 루트 안에 있어야 한다. 반환값은 링크를 풀지 않은 경로다.
    """
    root = os.path.abspath(upload_dir)
    target = os.path.abspath(os.path.join(root, relative_path))
    real_root = os.path.realpath(root)
    real_target = os.path.realpath(target)
    if not _is_within(target, root) or not _is_within(real_target, real_root):
        raise HTTPException(status_code=403, detail="Access denied")
    return target


def _is_within(path: str, root: str) -> bool:
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)


def validate_filename_prefix(prefix: str) -> str:
    if "/" in prefix or "\\" in prefix or ".." in prefix:
        raise HTTPException(status_code=400, detail="Filename prefix must not contain path separators")
    return prefix


def to_relative_url_path(abs_path: str, upload_dir: str) -> str:
    return os.path.relpath(abs_path, os.path.abspath(upload_dir)).replace(os.sep, "/").replace("\\", "/")


def validate_file(filename: str, content_type: str | None, rule: dict) -> None:
    ext = file_extension(filename)
    if ext not in rule["extensions"]:
        raise HTTPException(
            status_code=400,
            detail=f"File type '{ext}' not allowed. Allowed: {', '.join(sorted(rule['extensions']))}",
        )
    if content_type and content_type not in rule["mime_types"]:
        raise HTTPException(status_code=400, detail=f"MIME type '{content_type}' not allowed")


async def save_upload(
    file: UploadFile,
    subfolder: str = "general",
    generate_unique_name: bool = True,
    filename_prefix: str = "",
) -> dict:
    filename_prefix = validate_filename_prefix(filename_prefix or "")
    original_name = os.path.basename((file.filename or "").replace("\\", "/"))
    rule = get_upload_rule(subfolder)
    validate_file(original_name, file.content_type, rule)

    content = await file.read()
    if len(content) > rule["max_size"]:
        raise HTTPException(
            status_code=400,
            detail=f"File size exceeds maximum allowed size of {rule['max_size']} bytes",
        )

    folder = resolve_upload_path(settings.UPLOAD_DIR, subfolder)
    os.makedirs(folder, exist_ok=True)

    if generate_unique_name:
        filename = f"{filename_prefix}{uuid.uuid4().hex}.{file_extension(original_name)}"
    else:
        filename = f"{filename_prefix}{original_name}"
    path = resolve_upload_path(settings.UPLOAD_DIR, os.path.join(subfolder, filename))

    with open(path, "wb") as f:
        f.write(content)

    relative_path = to_relative_url_path(path, settings.UPLOAD_DIR)
    return {
        "filename": filename,
        "original_name": original_name,
        "size": len(content),
        "mime_type": mimetypes.guess_type(filename)[0] or "application/octet-stream",
        "path": relative_path,
        "url": settings.upload_url_for(relative_path),
    }
