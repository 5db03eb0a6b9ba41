"""Pydantic schemas for the brand onboarding endpoints."""

from __future__ import annotations
import uuid
from enum import Enum
from pydantic import BaseModel, Field


class BudgetOption(str, Enum):
    UNDER_10K = "under-10k"
    FROM_10K = "10k-25k"
    FROM_25K = "25k-50k"
    FROM_50K = "50k-100k"
    FROM_100K = "100k-250k"
    FROM_250K = "250k-500k"
    OVER_500K = "500k+"


class BrandOnboardingCreate(BaseModel):
    """
    The wizard's complete FormState, as submitted by the bot.

    Every field defaults to empty so that missing answers are reported by
    the onboarding service with a field-specific message instead of a
    generic schema error.
    """
    company_name: str = ""
    website: str = ""
    industry: str = ""
    company_size: str = ""
    description: str = ""
    logo_url: str = ""
    annual_budget: str = ""
    preferred_niches: list[str] = Field(default_factory=list)
    target_regions: list[str] = Field(default_factory=list)
    brand_contact_name: str = ""
    brand_contact_role: str = ""
    brand_contact_email: str = ""
    brand_contact_phone: str = ""
    primary_region: str = ""
    campaign_objective: str = ""
    product_service_type: str = ""
    preferred_contact_method: str = ""
    proactive_suggestions: str = ""
    invite_team_members: str = ""
    team_member_1_email: str = ""
    team_member_2_email: str = ""
    stride_contact_name: str = ""

    def team_emails(self) -> list[str]:
        if self.invite_team_members != "yes":
            return []
        return [
            e.strip() for e in (self.team_member_1_email, self.team_member_2_email)
            if e and e.strip()
        ]


class BrandOnboardingResponse(BaseModel):
    success: bool = True
    message: str = "Brand onboarding completed successfully"
    brand_id: uuid.UUID


class OnboardingStatusResponse(BaseModel):
    is_onboarded: bool
    brand_id: uuid.UUID | None = None
