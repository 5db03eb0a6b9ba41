"""
Brand Onboarding Service — server-side checks and persistence for a
completed onboarding wizard.

A submission creates, in one transaction:
  - the Brand profile
  - its primary BrandContact
  - one TeamInvitation per invited team member
and marks the submitting user ACTIVE and onboarded.
"""

import logging
import re
import uuid

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.models.brand import Brand, BrandContact, TeamInvitation
from api.models.user import User
from api.schemas.brand_onboarding import BrandOnboardingCreate, BudgetOption
from api.services import bot_notifier

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS = (
    "company_name", "website", "industry", "company_size",
    "description", "annual_budget", "preferred_niches",
    "target_regions", "brand_contact_name", "brand_contact_role",
    "brand_contact_email",
)

# Wizard budget options → stored budget ranges
BUDGET_MAPPING = {
    BudgetOption.UNDER_10K.value: "0-10k",
    BudgetOption.FROM_10K.value: "10k-25k",
    BudgetOption.FROM_25K.value: "25k-50k",
    BudgetOption.FROM_50K.value: "50k-100k",
    BudgetOption.FROM_100K.value: "100k-250k",
    BudgetOption.FROM_250K.value: "250k-500k",
    BudgetOption.OVER_500K.value: "500k+",
}


def map_budget(value: str) -> str:
    return BUDGET_MAPPING.get(value, value)


def normalize_website(url: str) -> str:
    url = url.strip()
    if url and not url.startswith("http"):
        return f"https://{url}"
    return url


def validate_submission(data: BrandOnboardingCreate) -> str | None:
    """First problem with the submission, or None when it can be stored."""
    for field in REQUIRED_FIELDS:
        value = getattr(data, field)
        if isinstance(value, str):
            value = value.strip()
        if not value:
            return f"Missing required field: {field}"

    if len(data.company_name.strip()) < 2:
        return "Company name must be at least 2 characters long"

    if len(data.description.strip()) < 10:
        return "Company description must be at least 10 characters long"

    if not EMAIL_RE.match(data.brand_contact_email.strip()):
        return "Invalid email format"

    if not any(n.strip() for n in data.preferred_niches):
        return "At least one content niche must be selected"

    if not any(r.strip() for r in data.target_regions):
        return "At least one target region must be selected"

    team = data.team_emails()
    for email in team:
        if not EMAIL_RE.match(email):
            return f"Invalid team member email: {email}"
    if len({e.lower() for e in team}) != len(team):
        return "Team member emails must be unique"

    return None


def _optional(value: str) -> str | None:
    value = value.strip()
    return value or None


def _yes_no(value: str) -> bool | None:
    if value == "yes":
        return True
    if value == "no":
        return False
    return None


async def get_user(db: AsyncSession, telegram_id: int) -> User:
    result = await db.execute(select(User).where(User.telegram_id == telegram_id))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


async def get_brand_for_user(db: AsyncSession, user_id: uuid.UUID) -> Brand | None:
    result = await db.execute(select(Brand).where(Brand.user_id == user_id))
    return result.scalar_one_or_none()


async def complete_onboarding(
    db: AsyncSession,
    telegram_id: int,
    data: BrandOnboardingCreate,
) -> Brand:
    """Store an already-validated submission. Raises HTTPException on conflicts."""
    user = await get_user(db, telegram_id)

    if await get_brand_for_user(db, user.id):
        raise HTTPException(
            status_code=409,
            detail="Brand onboarding has already been completed for this user",
        )

    contact_name = data.brand_contact_name.strip()
    brand = Brand(
        id=uuid.uuid4(),
        user_id=user.id,
        company_name=data.company_name.strip(),
        industry=data.industry,
        website_url=normalize_website(data.website),
        company_size=data.company_size,
        annual_budget_range=map_budget(data.annual_budget),
        preferred_niches=[n for n in data.preferred_niches if n.strip()],
        preferred_regions=[r for r in data.target_regions if r.strip()],
        description=data.description.strip(),
        logo_url=_optional(data.logo_url),
        primary_region=_optional(data.primary_region),
        campaign_objective=_optional(data.campaign_objective),
        product_service_type=_optional(data.product_service_type),
        preferred_contact_method=_optional(data.preferred_contact_method),
        proactive_suggestions=_yes_no(data.proactive_suggestions),
        stride_contact_name=_optional(data.stride_contact_name),
    )
    db.add(brand)

    db.add(BrandContact(
        brand_id=brand.id,
        name=contact_name,
        email=data.brand_contact_email.strip(),
        phone=_optional(data.brand_contact_phone),
        role=data.brand_contact_role.strip(),
        is_primary=True,
        notes=f"Company description: {brand.description}",
    ))

    team = data.team_emails()
    for email in team:
        db.add(TeamInvitation(brand_id=brand.id, email=email, invited_by=user.id))

    user.status = "ACTIVE"
    user.is_onboarded = True

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("Brand onboarding conflict: telegram_id=%s", telegram_id)
        raise HTTPException(
            status_code=409,
            detail="Brand onboarding has already been completed for this user",
        )

    logger.info(
        "Brand onboarded: telegram_id=%s, brand_id=%s, company=%s, invites=%d",
        telegram_id, brand.id, brand.company_name, len(team),
    )

    # Fire-and-forget notifications
    await bot_notifier.notify_onboarding_completed(telegram_id, brand.company_name)
    await bot_notifier.notify_admin_new_brand(brand.company_name, contact_name)

    return brand
