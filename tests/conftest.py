"""Shared fixtures: an in-memory Redis stand-in and a complete submission."""

import pytest


class FakeRedis:
    """The handful of redis.asyncio calls the bot makes, backed by a dict."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttl: dict[str, int | None] = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttl[key] = ex
        return True

    async def delete(self, key):
        self.ttl.pop(key, None)
        return 1 if self.store.pop(key, None) is not None else 0


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def complete_form():
    """A FormState that passes every required step."""
    return {
        "company_name": "Glow Labs",
        "website": "glowlabs.example",
        "industry": "Beauty & Cosmetics",
        "company_size": "11-50",
        "description": "Clean skincare for sensitive skin.",
        "logo_url": "",
        "annual_budget": "under-10k",
        "preferred_niches": ["Beauty", "Skincare"],
        "target_regions": ["United Kingdom"],
        "brand_contact_name": "Ada Lovelace",
        "brand_contact_role": "Marketing Lead",
        "brand_contact_email": "ada@glowlabs.example",
        "brand_contact_phone": "+44 20 7946 0000",
        "primary_region": "",
        "campaign_objective": "Product Launch",
        "product_service_type": "",
        "preferred_contact_method": "email",
        "proactive_suggestions": "yes",
        "invite_team_members": "no",
        "team_member_1_email": "",
        "team_member_2_email": "",
        "stride_contact_name": "",
    }
