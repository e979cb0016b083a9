"""
Image upload storage: bytes in, public URL out.

Files land in `UPLOAD_DIR` as `<name>-<epoch ms><ext>` and are served under
`/uploads`. Content is not inspected.
"""

from __future__ import annotations

import re
import time
from pathlib import Path
from typing import Optional

from api.platform.env import UPLOAD_URL_PREFIX, get_upload_dir
from api.platform.observability.request_logging import sha256_bytes
from api.platform.observability.smart_logger import SmartLogger

DEFAULT_EXTENSION = ".png"

_WHITESPACE = re.compile(r"\s+")


def upload_file_name(original: str, now_ms: int | None = None) -> str:
    # Only the final path component is used, so "../x.png" stays inside UPLOAD_DIR.
    name = Path(original or "").name
    ext = Path(name).suffix or DEFAULT_EXTENSION
    base = name[: -len(Path(name).suffix)] if Path(name).suffix else name
    base = _WHITESPACE.sub("-", base) or "upload"
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{base}-{stamp}{ext}"


def store_upload(original_name: str, data: bytes) -> str:
    """Write the bytes and return the URL the page can use."""
    upload_dir = get_upload_dir()
    upload_dir.mkdir(parents=True, exist_ok=True)
    file_name = upload_file_name(original_name)
    (upload_dir / file_name).write_bytes(data)

    url = f"{UPLOAD_URL_PREFIX}/{file_name}"
    SmartLogger.log(
        "INFO",
        "Upload stored.",
        category="platform.uploads.store",
        params={"file_name": file_name, "bytes": len(data), "sha256": sha256_bytes(data), "url": url},
    )
    return url


def resolve_upload(file_name: str) -> Optional[Path]:
    """Stored file for a served name, or None. Only the final path component is honored."""
    name = Path(file_name).name
    if not name or name.startswith("."):
        return None
    path = get_upload_dir() / name
    return path if path.is_file() else None
