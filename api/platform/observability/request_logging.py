from __future__ import annotations

import contextvars
import hashlib
import time
import uuid
from typing import Any, Mapping, Sequence

from starlette.requests import Request

_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def new_request_id(prefix: str = "req") -> str:
    """Short request id for log correlation."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def set_request_id(request_id: str | None) -> None:
    _request_id_var.set(request_id)


def get_request_id() -> str | None:
    return _request_id_var.get()


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def summarize_for_log(value: Any, *, max_depth: int = 4, max_str: int = 300, max_list: int = 20) -> Any:
    """
    Shrink payloads before they reach the log:
    - long strings keep their length and a preview
    - long lists/dicts are cut with a count of what was dropped
    """
    if max_depth <= 0:
        return {"__truncated__": True, "__type__": type(value).__name__}
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        if len(value) <= max_str:
            return value
        return {"__len__": len(value), "__preview__": value[:max_str]}
    if isinstance(value, (bytes, bytearray)):
        return {"__type__": type(value).__name__, "__len__": len(value)}
    if isinstance(value, Mapping):
        items = list(value.items())
        out: dict[str, Any] = {
            str(k): summarize_for_log(v, max_depth=max_depth - 1, max_str=max_str, max_list=max_list)
            for k, v in items[:max_list]
        }
        if len(items) > max_list:
            out["__truncated_items__"] = len(items) - max_list
        return out
    if isinstance(value, Sequence):
        seq = list(value)
        out_list = [
            summarize_for_log(x, max_depth=max_depth - 1, max_str=max_str, max_list=max_list)
            for x in seq[:max_list]
        ]
        if len(seq) > max_list:
            out_list.append({"__truncated_items__": len(seq) - max_list})
        return out_list
    return {"__type__": type(value).__name__, "__repr__": repr(value)[:max_str]}


def http_context(request: Request) -> dict[str, Any]:
    """
    Common request context for API logs.
    Headers and cookies are left out: the admin cookie carries the shared secret.
    """
    client_host = getattr(getattr(request, "client", None), "host", None)
    return {
        "request_id": get_request_id(),
        "http": {
            "method": request.method,
            "path": request.url.path,
            "query": dict(request.query_params),
            "client_host": client_host,
        },
    }


class RequestTimer:
    """Duration helper for middleware and store calls."""

    def __init__(self) -> None:
        self._t0 = time.perf_counter()

    def ms(self) -> int:
        return int((time.perf_counter() - self._t0) * 1000)
