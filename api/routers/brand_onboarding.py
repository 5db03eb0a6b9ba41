"""Brand onboarding API endpoints."""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.db.database import get_db
from api.schemas.brand_onboarding import (
    BrandOnboardingCreate,
    BrandOnboardingResponse,
    OnboardingStatusResponse,
)
from api.services.brand_onboarding import (
    complete_onboarding,
    get_brand_for_user,
    get_user,
    validate_submission,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def current_telegram_id(x_telegram_id: str | None = Header(None)) -> int:
    """The submitting Telegram user, as forwarded by the bot."""
    if not x_telegram_id or not x_telegram_id.strip().isdigit():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return int(x_telegram_id)


@router.post("", response_model=BrandOnboardingResponse, status_code=201)
async def submit_onboarding(
    data: BrandOnboardingCreate,
    telegram_id: int = Depends(current_telegram_id),
    db: AsyncSession = Depends(get_db),
):
    """Create the brand profile from a completed onboarding wizard."""
    error = validate_submission(data)
    if error:
        logger.info("Onboarding rejected: telegram_id=%s, error=%s", telegram_id, error)
        raise HTTPException(status_code=400, detail=error)

    brand = await complete_onboarding(db, telegram_id, data)
    return BrandOnboardingResponse(brand_id=brand.id)


@router.get("/{telegram_id}", response_model=OnboardingStatusResponse)
async def onboarding_status(telegram_id: int, db: AsyncSession = Depends(get_db)):
    """Whether this Telegram user already has a brand profile."""
    user = await get_user(db, telegram_id)
    brand = await get_brand_for_user(db, user.id)
    return OnboardingStatusResponse(
        is_onboarded=bool(user.is_onboarded and brand),
        brand_id=brand.id if brand else None,
    )
