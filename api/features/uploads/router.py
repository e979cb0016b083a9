"""
Upload API (feature router) - images for logos, project thumbnails and the avatar.

- POST /api/upload stores a file (admin)
- GET /uploads/{file_name} serves it back from the current UPLOAD_DIR
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from starlette.requests import Request
from starlette.responses import FileResponse

from api.platform.auth import require_admin
from api.platform.env import UPLOAD_URL_PREFIX
from api.platform.observability.request_logging import http_context
from api.platform.observability.smart_logger import SmartLogger
from api.platform.upload_store import resolve_upload, store_upload

router = APIRouter(tags=["uploads"])


@router.post("/api/upload", dependencies=[Depends(require_admin)])
async def upload_image(request: Request, file: Optional[UploadFile] = File(None)) -> dict[str, Any]:
    if file is None:
        SmartLogger.log(
            "WARNING",
            "Upload rejected: multipart body had no 'file' field.",
            category="api.uploads.missing",
            params=http_context(request),
        )
        raise HTTPException(status_code=400, detail="No file provided")

    data = await file.read()
    SmartLogger.log(
        "INFO",
        "Upload received.",
        category="api.uploads.request",
        params={
            **http_context(request),
            "file": {"filename": file.filename, "content_type": file.content_type, "bytes": len(data)},
        },
    )
    try:
        url = store_upload(file.filename or "", data)
    except OSError as e:
        SmartLogger.log(
            "ERROR",
            "Upload failed: file could not be written.",
            category="api.uploads.error",
            params={**http_context(request), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        raise HTTPException(status_code=500, detail="Upload failed") from e
    return {"url": url}


@router.get(UPLOAD_URL_PREFIX + "/{file_name}")
async def serve_upload(file_name: str, request: Request) -> FileResponse:
    path = resolve_upload(file_name)
    if path is None:
        SmartLogger.log(
            "WARNING",
            "Uploaded file not found.",
            category="api.uploads.not_found",
            params={**http_context(request), "file_name": file_name},
        )
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path)
