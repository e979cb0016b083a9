"""
File-backed content document shared across features.

The whole presentation lives in one JSON file (`CONTENT_FILE`). Reads parse the
full document; writes replace it in one step (temp file + rename) so a failed
save never leaves a half-written document behind. Single operator, so the last
write wins.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from presentation.content import PresentationContent

from api.platform.env import get_content_file
from api.platform.observability.request_logging import RequestTimer
from api.platform.observability.smart_logger import SmartLogger


class ContentStoreError(Exception):
    """Reading or writing the content document failed."""


def content_path() -> Path:
    return get_content_file()


def load_raw() -> dict[str, Any]:
    path = content_path()
    timer = RequestTimer()
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        SmartLogger.log(
            "ERROR",
            "Content document could not be read.",
            category="platform.content.load.error",
            params={"path": str(path), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        raise ContentStoreError(f"Failed to read {path}") from e
    SmartLogger.log(
        "INFO",
        "Content document read.",
        category="platform.content.load",
        params={"path": str(path), "duration_ms": timer.ms()},
    )
    return data


def load_content() -> PresentationContent:
    return PresentationContent.from_json_data(load_raw())


def save_content(content: PresentationContent) -> int:
    """Overwrite the stored document. Returns the number of bytes written."""
    path = content_path()
    payload = json.dumps(content.to_json_data(), indent=2, ensure_ascii=False)
    timer = RequestTimer()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".content-", suffix=".json", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        SmartLogger.log(
            "ERROR",
            "Content document could not be written.",
            category="platform.content.save.error",
            params={"path": str(path), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        raise ContentStoreError(f"Failed to write {path}") from e

    size = len(payload.encode("utf-8"))
    SmartLogger.log(
        "INFO",
        "Content document written.",
        category="platform.content.save",
        params={"path": str(path), "bytes": size, "duration_ms": timer.ms()},
    )
    return size
