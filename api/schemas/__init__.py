"""Pydantic schemas for API request/response models."""

from __future__ import annotations
import uuid
from datetime import datetime
from pydantic import BaseModel, Field


# ── User ───────────────────────────────────────────────────

class UserCreate(BaseModel):
    telegram_id: int
    full_name: str = Field(..., min_length=1, max_length=255)
    telegram_username: str | None = None


class UserResponse(BaseModel):
    id: uuid.UUID
    telegram_id: int
    telegram_username: str | None
    full_name: str
    status: str
    is_onboarded: bool
    created_at: datetime

    class Config:
        from_attributes = True
