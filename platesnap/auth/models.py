"""Pydantic models for admin accounts and dashboard sessions."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel

from platesnap.registry.models import DocumentModel


class AdminUser(DocumentModel):
    """Admin account as returned to callers; ``passwordHash`` is never included."""

    id: str = ""
    username: str
    email: str = ""
    display_name: str = ""
    role: Literal["admin", "superadmin"] = "admin"
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class AdminDraft(DocumentModel):
    username: str
    email: str = ""
    display_name: str = ""
    role: Literal["admin", "superadmin"] = "admin"


class SessionState(StrEnum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class StoredSession(DocumentModel):
    """Session payload persisted by a session store (``expiresAt`` in epoch ms)."""

    user: AdminUser
    expires_at: int


class LoginResult(BaseModel):
    """Outcome of a login attempt."""

    success: bool
    error: str = ""
