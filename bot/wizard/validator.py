"""
Step Validator — may the wizard advance past a step?

Rules live in one table keyed by step id so they can be audited together.
Invalid input is reported through ValidationResult, never raised.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from bot.wizard.form_state import FormState
from bot.wizard.steps import (
    BUDGET_OPTIONS,
    COMPANY_SIZE_OPTIONS,
    INDUSTRY_OPTIONS,
)

EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None


VALID = ValidationResult(True)

Validator = Callable[[FormState], ValidationResult]


# ── Field helpers ──────────────────────────────────────────

def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str) or not email:
        return False
    return bool(EMAIL_RE.match(email.strip()))


def has_duplicate_emails(emails: Iterable[str]) -> bool:
    """Case- and whitespace-insensitive duplicate check; blanks are ignored."""
    normalized = [e.strip().lower() for e in emails if e and e.strip()]
    return len(set(normalized)) != len(normalized)


def normalize_url(url: str) -> str:
    """Prefix `https://` when the scheme is missing."""
    trimmed = url.strip()
    if trimmed.startswith(("http://", "https://")):
        return trimmed
    return f"https://{trimmed}"


# ── Rule builders ──────────────────────────────────────────

def required_text(field: str, label: str) -> Validator:
    def check(form: FormState) -> ValidationResult:
        if _text(form.get(field)).strip():
            return VALID
        return ValidationResult(False, f"{label} is required")
    return check


def required_choice(field: str, options: Iterable[tuple[str, str]], message: str) -> Validator:
    allowed = frozenset(value for value, _ in options)

    def check(form: FormState) -> ValidationResult:
        value = _text(form.get(field))
        if value and value in allowed:
            return VALID
        return ValidationResult(False, message)
    return check


def required_multi(field: str, message: str) -> Validator:
    def check(form: FormState) -> ValidationResult:
        value = form.get(field)
        if isinstance(value, (list, tuple)) and len(value) > 0:
            return VALID
        return ValidationResult(False, message)
    return check


def required_email(field: str, label: str) -> Validator:
    def check(form: FormState) -> ValidationResult:
        value = _text(form.get(field)).strip()
        if not value:
            return ValidationResult(False, f"{label} is required")
        if not is_valid_email(value):
            return ValidationResult(False, "Please enter a valid email address")
        return VALID
    return check


def always_valid(form: FormState) -> ValidationResult:
    return VALID


STEP_VALIDATORS: dict[str, Validator] = {
    "company_name": required_text("company_name", "Company name"),
    "website": required_text("website", "Website"),
    "industry": required_choice("industry", INDUSTRY_OPTIONS, "Please select an industry"),
    "company_size": required_choice("company_size", COMPANY_SIZE_OPTIONS, "Please select your team size"),
    "description": required_text("description", "Company description"),
    "logo_url": always_valid,  # file checks happen when the file is picked
    "annual_budget": required_choice("annual_budget", BUDGET_OPTIONS, "Please select an annual budget"),
    "preferred_niches": required_multi("preferred_niches", "Please select at least one content niche"),
    "target_regions": required_multi("target_regions", "Please select at least one target region"),
    "primary_region": always_valid,
    "campaign_objective": always_valid,
    "product_service_type": always_valid,
    "preferred_contact_method": always_valid,
    "proactive_suggestions": always_valid,
    "invite_team_members": always_valid,
    "team_invitations": always_valid,
    "brand_contact_name": required_text("brand_contact_name", "Contact name"),
    "brand_contact_role": required_text("brand_contact_role", "Contact role"),
    "brand_contact_email": required_email("brand_contact_email", "Contact email"),
    "brand_contact_phone": required_text("brand_contact_phone", "Contact phone number"),
    "stride_contact_name": always_valid,
    "review": always_valid,
}


def validate_step(step_id: str, form: FormState, optional: bool = False) -> ValidationResult:
    """Check whether the wizard may advance past `step_id`."""
    if optional:
        return VALID
    rule = STEP_VALIDATORS.get(step_id)
    if rule is None:
        return ValidationResult(False, f"Unknown step: {step_id}")
    return rule(form)
