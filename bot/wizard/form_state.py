"""FormState defaults, pre-filled from the authenticated user's identity."""

from dataclasses import dataclass
from typing import Any

FormState = dict[str, Any]

LIST_FIELDS = ("preferred_niches", "target_regions")

FORM_FIELDS = (
    "company_name",
    "website",
    "industry",
    "company_size",
    "description",
    "logo_url",
    "annual_budget",
    "preferred_niches",
    "target_regions",
    # Brand contact
    "brand_contact_name",
    "brand_contact_role",
    "brand_contact_email",
    "brand_contact_phone",
    # Optional profile
    "primary_region",
    "campaign_objective",
    "product_service_type",
    "preferred_contact_method",
    "proactive_suggestions",
    # Team invitations
    "invite_team_members",
    "team_member_1_email",
    "team_member_2_email",
    # Stride Social contact
    "stride_contact_name",
)


@dataclass(frozen=True)
class UserIdentity:
    """Who is filling in the wizard."""
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None

    @property
    def full_name(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return ""


def create_initial_form_state(current_user: UserIdentity | None) -> FormState:
    """Fresh FormState with every field at its default."""
    form: FormState = {
        name: [] if name in LIST_FIELDS else ""
        for name in FORM_FIELDS
    }
    if current_user is not None:
        form["brand_contact_name"] = current_user.full_name
        form["brand_contact_email"] = current_user.email or ""
    return form


def fill_identity_defaults(form: FormState, current_user: UserIdentity | None) -> FormState:
    """
    Backfill identity fields the user has not answered yet.

    Used after rehydrating a persisted snapshot, so fields that were empty
    when the snapshot was taken pick up the identity. Answers already given
    are never overwritten. Missing keys are restored to their defaults.
    """
    merged = create_initial_form_state(None)
    merged.update(form)
    if current_user is None:
        return merged
    if not merged.get("brand_contact_email") and current_user.email:
        merged["brand_contact_email"] = current_user.email
    if not merged.get("brand_contact_name") and current_user.full_name:
        merged["brand_contact_name"] = current_user.full_name
    return merged
