from __future__ import annotations

import importlib
import importlib.util
import json
import logging
import os
import traceback
from pathlib import Path
from typing import Protocol


class _SmartLoggerLike(Protocol):
    @classmethod
    def log(
        cls,
        level: str,
        message: str,
        category: str | None = None,
        params: dict | None = None,
        max_inline_chars: int = 100,
    ) -> None: ...


def _load_smart_logger_from_file(py_file: Path) -> type[_SmartLoggerLike]:
    spec = importlib.util.spec_from_file_location("private_smart_logger", str(py_file))
    if spec is None or spec.loader is None:
        raise ImportError(f"Failed to create import spec from file: {py_file}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[call-arg]
    return _checked(getattr(module, "SmartLogger", None), str(py_file))


def _load_smart_logger_from_module(module_path: str) -> type[_SmartLoggerLike]:
    module = importlib.import_module(module_path)
    return _checked(getattr(module, "SmartLogger", None), module_path)


def _checked(cls, source: str) -> type[_SmartLoggerLike]:
    if cls is None:
        raise ImportError(f"`SmartLogger` not found in {source}")
    if not callable(getattr(cls, "log", None)):
        raise TypeError(f"`SmartLogger.log` missing or not callable in {source}")
    return cls


class _StdlibLogger:
    """
    Default sink: the `portfolio` stdlib logger, one line per event.

        INFO [api.content.save.done] Content saved. {"bytes": 5120}
    """

    _logger = logging.getLogger("portfolio")

    @classmethod
    def configure(cls) -> None:
        if cls._logger.handlers:
            return
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
        cls._logger.addHandler(handler)
        level = (os.getenv("SMART_LOGGER_MIN_LEVEL") or "INFO").strip().upper()
        cls._logger.setLevel(getattr(logging, level, logging.INFO))
        cls._logger.propagate = False

    @classmethod
    def log(
        cls,
        level: str,
        message: str,
        category: str | None = None,
        params: dict | None = None,
        max_inline_chars: int = 100,
    ) -> None:
        lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)
        if not cls._logger.isEnabledFor(lvl):
            return
        line = f"{level.upper()} [{category}] {message}" if category else f"{level.upper()} {message}"
        if params:
            rendered = json.dumps(params, ensure_ascii=False, default=str)
            if len(rendered) > max_inline_chars * 20:
                rendered = rendered[: max_inline_chars * 20] + "...(truncated)"
            line = f"{line} {rendered}"
        cls._logger.log(lvl, line)


def _resolve_impl() -> tuple[type[_SmartLoggerLike], str]:
    """
    Returns (SmartLoggerClass, source_description)
    """
    private = (os.getenv("PRIVATE_LOGGER_PATH") or "").strip()
    if private:
        p = Path(private)
        if p.exists() and p.is_file():
            return _load_smart_logger_from_file(p), f"PRIVATE_LOGGER_PATH(file)={p}"
        return _load_smart_logger_from_module(private), f"PRIVATE_LOGGER_PATH(module)={private}"

    _StdlibLogger.configure()
    return _StdlibLogger, "stdlib(logging:portfolio)"


_IMPL, _IMPL_SOURCE = _resolve_impl()


class SmartLogger:
    """
    Project-wide logger entry point.

    Always import and use this class:
        from api.platform.observability.smart_logger import SmartLogger
        SmartLogger.log("INFO", "message", category="...", params={...})
    """

    impl_source: str = _IMPL_SOURCE

    @classmethod
    def log(
        cls,
        level: str,
        message: str,
        category: str | None = None,
        params: dict | None = None,
        max_inline_chars: int = 200,
    ) -> None:
        try:
            _IMPL.log(level, message, category=category, params=params, max_inline_chars=max_inline_chars)
        except Exception:
            # Logging must never take a request down with it.
            err = traceback.format_exc()
            cat = f"[{category}] " if category else ""
            print(f"{level}: {cat}{message}")
            print(f"LOGGER_ERROR: {err}")
