"""
Auth Contracts (DTOs)
"""

from __future__ import annotations

from pydantic import BaseModel


class LoginRequest(BaseModel):
    password: str = ""


class SessionStatus(BaseModel):
    admin: bool
