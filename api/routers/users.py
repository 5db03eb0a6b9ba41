"""User management API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.db.database import get_db
from api.models.user import User
from api.schemas import UserCreate, UserResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=UserResponse)
async def create_or_get_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Create a new user or return existing one (by telegram_id)."""
    result = await db.execute(
        select(User).where(User.telegram_id == data.telegram_id)
    )
    existing = result.scalar_one_or_none()
    if existing:
        return existing

    user = User(
        telegram_id=data.telegram_id,
        full_name=data.full_name,
        telegram_username=data.telegram_username,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("User created: telegram_id=%s", data.telegram_id)
    return user


@router.get("/{telegram_id}", response_model=UserResponse)
async def get_user_by_telegram(telegram_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(User).where(User.telegram_id == telegram_id)
    )
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
