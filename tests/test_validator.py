"""Tests for per-step validation rules."""

import pytest

from bot.wizard.form_state import create_initial_form_state
from bot.wizard.steps import BRAND_ONBOARDING_STEPS
from bot.wizard.validator import (
    STEP_VALIDATORS,
    has_duplicate_emails,
    is_valid_email,
    normalize_url,
    validate_step,
)


def test_every_step_has_a_rule():
    assert {s.id for s in BRAND_ONBOARDING_STEPS} == set(STEP_VALIDATORS)


def test_optional_steps_never_block():
    empty = create_initial_form_state(None)
    for step in BRAND_ONBOARDING_STEPS:
        if step.optional:
            assert validate_step(step.id, empty, step.optional).valid, step.id


def test_optional_flag_short_circuits_required_rule():
    assert validate_step("company_name", {}, optional=True).valid


@pytest.mark.parametrize("value", ["", "   ", None])
def test_required_text_rejects_blank(value):
    result = validate_step("company_name", {"company_name": value})
    assert not result.valid
    assert result.error == "Company name is required"


def test_required_text_accepts_content():
    assert validate_step("company_name", {"company_name": " Acme "}).valid


def test_required_email_messages():
    assert validate_step("brand_contact_email", {"brand_contact_email": ""}).error == (
        "Contact email is required"
    )
    assert validate_step("brand_contact_email", {"brand_contact_email": "a@b"}).error == (
        "Please enter a valid email address"
    )
    assert validate_step("brand_contact_email", {"brand_contact_email": "a@b.co"}).valid


@pytest.mark.parametrize("email, ok", [
    ("ada@example.com", True),
    ("first.last+tag@sub.example.co.uk", True),
    ("  ada@example.com  ", True),
    ("ada@example", False),
    ("ada example@x.com", False),
    ("@example.com", False),
    ("ada@-example.com", False),
    ("", False),
    (None, False),
])
def test_is_valid_email(email, ok):
    assert is_valid_email(email) is ok


def test_multiselect_needs_one_entry():
    assert validate_step("preferred_niches", {"preferred_niches": []}).error == (
        "Please select at least one content niche"
    )
    assert validate_step("target_regions", {"target_regions": "Global"}).error == (
        "Please select at least one target region"
    )
    assert validate_step("preferred_niches", {"preferred_niches": ["Beauty"]}).valid


def test_choice_must_be_a_listed_option():
    assert validate_step("industry", {"industry": "Technology"}).valid
    assert validate_step("industry", {"industry": "Mining"}).error == "Please select an industry"
    assert validate_step("annual_budget", {"annual_budget": "under-10k"}).valid
    assert not validate_step("company_size", {"company_size": ""}).valid


def test_unknown_step():
    result = validate_step("favourite_colour", {})
    assert not result.valid
    assert result.error == "Unknown step: favourite_colour"


def test_has_duplicate_emails():
    assert has_duplicate_emails(["a@x.com", " A@X.com "])
    assert not has_duplicate_emails(["a@x.com", "b@x.com", ""])
    assert not has_duplicate_emails(["", "  "])


def test_normalize_url():
    assert normalize_url("acme.com") == "https://acme.com"
    assert normalize_url(" http://acme.com ") == "http://acme.com"
    assert normalize_url("https://acme.com") == "https://acme.com"
