"""
Brand Onboarding Bot Handler — guided multi-step brand setup.

Flow:
  Company → Website → Industry → Team Size → Description → Logo (optional)
  → Budget → Niches → Regions → Profile extras (optional)
  → Team Invitations (optional, skipped on "no") → Brand Contact
  → Stride Contact (optional) → Review & Submit

FormState and the step index live in FSM data; every change is mirrored
to Redis so a restarted bot can pick up where the user left off.
"""

import asyncio
import logging
import re
from functools import partial

from aiogram import Router, F, html
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery, InlineKeyboardMarkup, User

from bot.keyboards.onboarding_kb import (
    step_keyboard, review_keyboard, retry_keyboard, resume_keyboard,
)
from bot.services.onboarding_api import (
    fetch_onboarding_status, register_user, submit_onboarding,
)
from bot.services.persistence import FormPersistenceGuard
from bot.states.brand_onboarding import BrandOnboarding
from bot.wizard.form_state import (
    FormState, UserIdentity, create_initial_form_state, fill_identity_defaults,
)
from bot.wizard.session import OnboardingWizard, NavigationOutcome
from bot.wizard.steps import (
    STEP_INDEX, BRAND_ONBOARDING_STEPS, StepType, Step,
    TEXT_INPUT_TYPES, CHOICE_TYPES, TEAM_MEMBER_FIELDS,
    MAX_LOGO_FILE_SIZE_MB, ALLOWED_LOGO_MIME_TYPES,
)
from bot.wizard.validator import is_valid_email, has_duplicate_emails, normalize_url

router = Router()
logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 300
MAX_LOGO_BYTES = MAX_LOGO_FILE_SIZE_MB * 1024 * 1024
EMAIL_SPLIT_RE = re.compile(r"[,;\s]+")
BUSY_TEXT = "Already submitting, please wait..."

# One submission at a time per Telegram user
_submission_locks: dict[int, asyncio.Lock] = {}

STEP_HINTS = {
    StepType.TEXT: "Type your answer below.",
    StepType.URL: "Send your website address, e.g. <code>https://www.yourcompany.com</code>",
    StepType.TEXTAREA: f"Describe your brand in a sentence or two (max {MAX_DESCRIPTION_LENGTH} characters).",
    StepType.EMAIL: "Send an email address.",
    StepType.TEL: "Send a phone number, with country code.",
    StepType.UPLOAD: f"Send your logo as a photo or image file (max {MAX_LOGO_FILE_SIZE_MB} MB).",
    StepType.COMPOSITE: "Send up to <b>2</b> email addresses, separated by commas or new lines.",
    StepType.SELECT: "Pick one option below.",
    StepType.RADIO: "Pick one option below.",
    StepType.MULTISELECT: "Pick all that apply, then tap <b>Done</b>.",
}

REVIEW_FIELDS = (
    ("company_name", "🏢", "Company"),
    ("industry", "🏷️", "Industry"),
    ("website", "🌐", "Website"),
    ("company_size", "👥", "Team size"),
    ("description", "📝", "Description"),
    ("logo_url", "🖼️", "Logo"),
    ("annual_budget", "💰", "Budget"),
    ("preferred_niches", "🎯", "Niches"),
    ("target_regions", "📍", "Regions"),
    ("primary_region", "🗺️", "Primary region"),
    ("campaign_objective", "🚀", "Objective"),
    ("product_service_type", "📦", "Offering"),
    ("preferred_contact_method", "☎️", "Contact via"),
    ("proactive_suggestions", "💡", "Creator suggestions"),
    ("brand_contact_name", "👤", "Contact"),
    ("brand_contact_role", "💼", "Role"),
    ("brand_contact_email", "📧", "Email"),
    ("brand_contact_phone", "📱", "Phone"),
    ("stride_contact_name", "🤝", "Stride contact"),
)


# ── Session helpers ──────────────────────────────────────

def _identity(user: User) -> UserIdentity:
    return UserIdentity(first_name=user.first_name, last_name=user.last_name)


def _wizard(telegram_id: int, form_data: FormState, current_index: int, initialized: bool = True) -> OnboardingWizard:
    return OnboardingWizard(
        form_data=form_data,
        current_index=current_index,
        guard=FormPersistenceGuard(telegram_id, initialized=initialized),
        submitter=partial(submit_onboarding, telegram_id),
    )


async def _load(state: FSMContext, telegram_id: int) -> OnboardingWizard | None:
    data = await state.get_data()
    if "form_data" not in data:
        return None
    return _wizard(telegram_id, data["form_data"], data.get("current_index", 0))


async def _store(state: FSMContext, wizard: OnboardingWizard) -> None:
    await state.update_data(form_data=wizard.form_data, current_index=wizard.current_index)


def submission_lock(telegram_id: int) -> asyncio.Lock:
    return _submission_locks.setdefault(telegram_id, asyncio.Lock())


async def safe_edit(message: Message, text: str, **kwargs):
    """Edit message, silently ignoring 'message not modified' errors."""
    try:
        await message.edit_text(text, **kwargs)
    except TelegramBadRequest as e:
        if "message is not modified" not in str(e):
            raise


# ── Rendering ────────────────────────────────────────────

def _progress_bar(percent: float, width: int = 10) -> str:
    filled = round(percent / 100 * width)
    return "▓" * filled + "░" * (width - filled)


def _display_value(step: Step | None, value) -> str:
    if isinstance(value, list):
        return ", ".join(html.quote(str(v)) for v in value) if value else ""
    if not value:
        return ""
    if step is not None and step.type == StepType.UPLOAD:
        return "✅ Uploaded"
    if step is not None and step.options:
        return html.quote(step.option_label(value))
    return html.quote(str(value))


def review_summary(form: FormState) -> str:
    """Summary shown on the review step."""
    lines = [
        "━━━━━━━━━━━━━━━━━━━━━━",
        "📋 <b>Final step: review your details</b>",
        "━━━━━━━━━━━━━━━━━━━━━━",
        "",
    ]
    for field, emoji, label in REVIEW_FIELDS:
        step = BRAND_ONBOARDING_STEPS[STEP_INDEX[field]]
        shown = _display_value(step, form.get(field))
        if not shown and step.optional:
            continue
        lines.append(f"{emoji} <b>{label}:</b> {shown or '—'}")

    if form.get("invite_team_members") == "yes":
        invites = [form.get(f) for f in TEAM_MEMBER_FIELDS if form.get(f)]
        lines.append(f"✉️ <b>Team invites:</b> {', '.join(html.quote(e) for e in invites) or 'None'}")

    lines.extend(["", "Tap a field to edit it, or submit when everything looks right."])
    return "\n".join(lines)


def render_step(wizard: OnboardingWizard) -> tuple[str, InlineKeyboardMarkup | None]:
    step = wizard.current_step
    if step.type == StepType.REVIEW:
        text = review_summary(wizard.form_data)
        if wizard.validation_error:
            text += f"\n\n⚠️ {html.quote(wizard.validation_error)}"
        return text, review_keyboard()

    position, total = wizard.visible_position()
    value = wizard.form_data.get(step.id)
    lines = [
        f"{_progress_bar(wizard.progress)} {wizard.progress:.0f}%",
        f"<b>Step {position}/{total}:</b> {html.quote(step.title)}",
    ]
    if step.optional:
        lines.append("<i>Optional</i>")
    lines.extend(["", STEP_HINTS.get(step.type, "")])

    if step.type in TEXT_INPUT_TYPES and value:
        lines.append(f"\nCurrent: <code>{_display_value(step, value)}</code>")
    elif step.type == StepType.UPLOAD and value:
        lines.append("\nCurrent: ✅ Logo uploaded")
    elif step.type == StepType.COMPOSITE:
        invites = [wizard.form_data.get(f) for f in TEAM_MEMBER_FIELDS if wizard.form_data.get(f)]
        if invites:
            lines.append(f"\nCurrent: {', '.join(html.quote(e) for e in invites)}")

    if wizard.validation_error:
        lines.append(f"\n⚠️ {html.quote(wizard.validation_error)}")

    keyboard_value = value
    if step.type == StepType.COMPOSITE:
        keyboard_value = any(wizard.form_data.get(f) for f in TEAM_MEMBER_FIELDS)
    return "\n".join(lines), step_keyboard(step, keyboard_value, can_go_back=not wizard.is_first_step)


async def _show(target: Message, wizard: OnboardingWizard, edit: bool) -> None:
    text, kb = render_step(wizard)
    if edit:
        await safe_edit(target, text, reply_markup=kb)
    else:
        await target.answer(text, reply_markup=kb)


async def _next(target: Message, state: FSMContext, wizard: OnboardingWizard, edit: bool) -> None:
    """handle_next plus rendering of whatever happened."""
    submitting = wizard.is_last_step
    if submitting:
        await state.set_state(BrandOnboarding.submitting)

    outcome = await wizard.handle_next()

    if outcome == NavigationOutcome.COMPLETED:
        await state.clear()
        text = (
            "━━━━━━━━━━━━━━━━━━━━━━\n"
            "🎉 <b>Welcome to Stride Social!</b>\n"
            "━━━━━━━━━━━━━━━━━━━━━━\n\n"
            "Your brand profile is set up.\n"
            "Our team will be in touch about your first campaign. 🔔"
        )
        if edit:
            await safe_edit(target, text)
        else:
            await target.answer(text)
        logger.info("Brand onboarding completed: chat_id=%s", target.chat.id)
        return

    if submitting and await state.get_state() != BrandOnboarding.submitting.state:
        # Session was closed or restarted while the request was out.
        logger.warning("Stale submission result dropped: chat_id=%s", target.chat.id)
        return

    await state.set_state(BrandOnboarding.answering)
    await _store(state, wizard)

    if outcome == NavigationOutcome.FAILED:
        text = (
            "⚠️ <b>Submission Failed</b>\n\n"
            f"{html.quote(wizard.submission_error or 'Onboarding failed')}\n\n"
            "Your answers are saved. Please try again or edit your details."
        )
        if edit:
            await safe_edit(target, text, reply_markup=retry_keyboard())
        else:
            await target.answer(text, reply_markup=retry_keyboard())
        return

    await _show(target, wizard, edit)


# ── Entry Point ──────────────────────────────────────────

async def _begin(message: Message, user: User, state: FSMContext) -> None:
    """Start a session, resuming a persisted one when present."""
    if await register_user(user.id, user.full_name, user.username) is None:
        await message.answer("⚠️ We couldn't reach Stride Social right now. Please try /onboard again shortly.")
        return

    status = await fetch_onboarding_status(user.id)
    if status and status.get("is_onboarded"):
        await message.answer(
            "✅ <b>Your brand is already set up!</b>\n\n"
            "Head to your campaigns to get started."
        )
        return

    identity = _identity(user)
    wizard = _wizard(user.id, create_initial_form_state(identity), 0, initialized=False)
    resumed = await wizard.resume()
    wizard.form_data = fill_identity_defaults(wizard.form_data, identity)

    await state.clear()
    await state.set_state(BrandOnboarding.answering)
    await _store(state, wizard)

    if resumed:
        await message.answer(
            "👋 <b>Welcome back!</b> Picking up where you left off.",
            reply_markup=resume_keyboard(),
        )
    else:
        await message.answer(
            "━━━━━━━━━━━━━━━━━━━━━━\n"
            "🏢 <b>Brand Setup</b>\n"
            "━━━━━━━━━━━━━━━━━━━━━━\n\n"
            "Let's get your brand set up on Stride Social!\n"
            "This takes about 3 minutes."
        )
    await _show(message, wizard, edit=False)


@router.message(Command("onboard"))
async def cmd_onboard(message: Message, state: FSMContext):
    await _begin(message, message.from_user, state)


@router.callback_query(F.data == "start_brand_onboarding")
async def start_brand_onboarding(callback: CallbackQuery, state: FSMContext):
    await callback.answer()
    await _begin(callback.message, callback.from_user, state)


@router.callback_query(F.data == "onb_restart", BrandOnboarding.answering)
async def restart_onboarding(callback: CallbackQuery, state: FSMContext):
    """Throw away saved answers and start from step 1."""
    await callback.answer("Starting over")
    guard = FormPersistenceGuard(callback.from_user.id, initialized=True)
    await guard.clear()
    wizard = _wizard(callback.from_user.id, create_initial_form_state(_identity(callback.from_user)), 0)
    await _store(state, wizard)
    await _show(callback.message, wizard, edit=False)


# ── Free-form answers ────────────────────────────────────

def _parse_team_emails(text: str) -> tuple[list[str], str | None]:
    emails = [e for e in EMAIL_SPLIT_RE.split(text.strip()) if e]
    if len(emails) > len(TEAM_MEMBER_FIELDS):
        return emails, f"You can invite up to {len(TEAM_MEMBER_FIELDS)} team members"
    for email in emails:
        if not is_valid_email(email):
            return emails, f"Please enter a valid email address: {email}"
    if has_duplicate_emails(emails):
        return emails, "Team member emails must be different"
    return emails, None


@router.message(BrandOnboarding.answering, F.text)
async def process_text_answer(message: Message, state: FSMContext):
    wizard = await _load(state, message.from_user.id)
    if wizard is None:
        return
    step = wizard.current_step
    text = message.text.strip()

    if step.type in TEXT_INPUT_TYPES:
        if step.type == StepType.TEXTAREA and len(text) > MAX_DESCRIPTION_LENGTH:
            wizard.validation_error = f"Please keep it under {MAX_DESCRIPTION_LENGTH} characters"
            await _show(message, wizard, edit=False)
            return
        if step.type == StepType.URL and text:
            text = normalize_url(text)
        await wizard.update_field(step.id, text)
        await _next(message, state, wizard, edit=False)
        return

    if step.type == StepType.COMPOSITE:
        emails, error = _parse_team_emails(text)
        if error:
            wizard.validation_error = error
            await _show(message, wizard, edit=False)
            return
        for i, field in enumerate(TEAM_MEMBER_FIELDS):
            await wizard.update_field(field, emails[i] if i < len(emails) else "")
        await _next(message, state, wizard, edit=False)
        return

    wizard.validation_error = "Please use the buttons below to answer."
    await _show(message, wizard, edit=False)


async def _accept_logo(
    message: Message,
    state: FSMContext,
    file_id: str,
    file_size: int | None,
    mime_type: str | None = None,
) -> None:
    wizard = await _load(state, message.from_user.id)
    if wizard is None:
        return
    if wizard.current_step.type != StepType.UPLOAD:
        wizard.validation_error = "Please answer this step with text or the buttons below."
        await _show(message, wizard, edit=False)
        return
    if mime_type is not None and mime_type not in ALLOWED_LOGO_MIME_TYPES:
        wizard.validation_error = "Please upload a valid image file (JPEG, PNG, GIF, or WebP)"
        await _show(message, wizard, edit=False)
        return
    if file_size and file_size > MAX_LOGO_BYTES:
        wizard.validation_error = f"File size must be less than {MAX_LOGO_FILE_SIZE_MB}MB"
        await _show(message, wizard, edit=False)
        return
    await wizard.update_field("logo_url", file_id)
    await _next(message, state, wizard, edit=False)


@router.message(BrandOnboarding.answering, F.photo)
async def process_logo_photo(message: Message, state: FSMContext):
    photo = message.photo[-1]  # Largest size
    await _accept_logo(message, state, photo.file_id, photo.file_size)


@router.message(BrandOnboarding.answering, F.document)
async def process_logo_document(message: Message, state: FSMContext):
    document = message.document
    await _accept_logo(
        message, state, document.file_id, document.file_size, document.mime_type or "",
    )


@router.message(BrandOnboarding.answering)
async def unsupported_answer(message: Message, state: FSMContext):
    await message.answer("⚠️ Please reply with text, a photo, or the buttons above.")


# ── Buttons ──────────────────────────────────────────────

@router.callback_query(F.data.startswith("onb_opt_"), BrandOnboarding.answering)
async def process_option(callback: CallbackQuery, state: FSMContext):
    """Single choice: store and move on."""
    await callback.answer()
    wizard = await _load(state, callback.from_user.id)
    if wizard is None:
        return
    step = wizard.current_step
    index = int(callback.data.removeprefix("onb_opt_"))
    if step.type not in CHOICE_TYPES or not 0 <= index < len(step.options):
        await _show(callback.message, wizard, edit=True)
        return
    await wizard.update_field(step.id, step.options[index][0])
    await _next(callback.message, state, wizard, edit=True)


@router.callback_query(F.data.startswith("onb_toggle_"), BrandOnboarding.answering)
async def process_toggle(callback: CallbackQuery, state: FSMContext):
    """Multi choice: flip one option and redraw."""
    await callback.answer()
    wizard = await _load(state, callback.from_user.id)
    if wizard is None:
        return
    step = wizard.current_step
    index = int(callback.data.removeprefix("onb_toggle_"))
    if step.type != StepType.MULTISELECT or not 0 <= index < len(step.options):
        await _show(callback.message, wizard, edit=True)
        return
    value = step.options[index][0]
    selected = list(wizard.form_data.get(step.id) or [])
    if value in selected:
        selected.remove(value)
    else:
        selected.append(value)
    await wizard.update_field(step.id, selected)
    await _store(state, wizard)
    await _show(callback.message, wizard, edit=True)


@router.callback_query(F.data == "onb_next", BrandOnboarding.answering)
async def process_next(callback: CallbackQuery, state: FSMContext):
    lock = submission_lock(callback.from_user.id)
    if lock.locked():
        await callback.answer(BUSY_TEXT)
        return
    async with lock:
        await callback.answer()
        wizard = await _load(state, callback.from_user.id)
        if wizard is None:
            return
        await _next(callback.message, state, wizard, edit=True)


@router.callback_query(F.data == "onb_back", BrandOnboarding.answering)
async def process_back(callback: CallbackQuery, state: FSMContext):
    await callback.answer()
    wizard = await _load(state, callback.from_user.id)
    if wizard is None:
        return
    await wizard.handle_prev()
    await _store(state, wizard)
    await _show(callback.message, wizard, edit=True)


@router.callback_query(F.data.startswith("onb_edit_"), BrandOnboarding.answering)
async def process_edit(callback: CallbackQuery, state: FSMContext):
    """Deep link from the review screen back into a step."""
    await callback.answer()
    wizard = await _load(state, callback.from_user.id)
    if wizard is None:
        return
    step_id = callback.data.removeprefix("onb_edit_")
    if step_id not in wizard.step_index:
        return
    await wizard.go_to_step_id(step_id)
    await _store(state, wizard)
    await _show(callback.message, wizard, edit=True)


@router.callback_query(F.data == "onb_submit", BrandOnboarding.answering)
async def process_submit(callback: CallbackQuery, state: FSMContext):
    lock = submission_lock(callback.from_user.id)
    if lock.locked():
        await callback.answer(BUSY_TEXT)
        return
    # Held from the FSM read until the outcome is stored
    async with lock:
        await callback.answer("Submitting...")
        wizard = await _load(state, callback.from_user.id)
        if wizard is None:
            return
        if not wizard.is_last_step:
            await _show(callback.message, wizard, edit=True)
            return
        await _next(callback.message, state, wizard, edit=True)


@router.callback_query(BrandOnboarding.submitting)
async def submission_in_progress(callback: CallbackQuery):
    await callback.answer(BUSY_TEXT)
