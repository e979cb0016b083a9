"""
Shared environment variable helpers and the settings read from them.

Getters read the environment on every call, so a test (or a reloaded `.env`)
sees the current value instead of whatever was set at import time.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_ADMIN_SECRET = "change-me-in-production"


def env_str(key: str, default: str | None = None, *, strip: bool = True) -> str | None:
    """Read an environment variable as string with optional stripping."""
    val = os.getenv(key)
    if val is None:
        return default
    if strip:
        val = val.strip()
    return val if val != "" else default


def env_first(keys: Iterable[str], default: str | None = None, *, strip: bool = True) -> str | None:
    """Return the first non-empty environment variable value from keys."""
    for key in keys:
        val = env_str(key, None, strip=strip)
        if val is not None:
            return val
    return default


def env_int(key: str, default: int) -> int:
    try:
        return int(env_str(key, None) or default)
    except ValueError:
        return default


def _project_path(raw: str) -> Path:
    p = Path(raw).expanduser()
    return p if p.is_absolute() else PROJECT_ROOT / p


# =============================================================================
# Admin auth
# =============================================================================

def get_admin_secret() -> str:
    return env_str("ADMIN_SECRET", DEFAULT_ADMIN_SECRET) or DEFAULT_ADMIN_SECRET


def get_admin_password() -> str:
    """Empty string means admin login is not configured."""
    return env_str("ADMIN_PASSWORD", "", strip=False) or ""


def is_production() -> bool:
    return (env_first(["APP_ENV", "ENV"], "development") or "").lower() == "production"


# =============================================================================
# Storage
# =============================================================================

def get_content_file() -> Path:
    return _project_path(env_str("CONTENT_FILE", "data/content.json") or "data/content.json")


def get_upload_dir() -> Path:
    return _project_path(env_str("UPLOAD_DIR", "public/uploads") or "public/uploads")


UPLOAD_URL_PREFIX = "/uploads"


# =============================================================================
# Server
# =============================================================================

def get_api_host(default: str = "0.0.0.0") -> str:
    return env_str("API_HOST", default) or default


def get_api_port(default: int = 8000) -> int:
    return env_int("API_PORT", default)


def get_cors_origins() -> list[str]:
    raw = env_str("CORS_ALLOW_ORIGINS", "*") or "*"
    return [x.strip() for x in raw.split(",") if x.strip()]
