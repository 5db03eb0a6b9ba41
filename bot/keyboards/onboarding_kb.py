"""Inline keyboard builders for the brand onboarding wizard."""

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from bot.wizard.steps import Step, StepType, CHOICE_TYPES, TEXT_INPUT_TYPES

# Review screen: (step id, button label)
REVIEW_EDIT_TARGETS = (
    ("company_name", "Company"),
    ("industry", "Industry"),
    ("website", "Website"),
    ("company_size", "Team size"),
    ("description", "Description"),
    ("annual_budget", "Budget"),
    ("preferred_niches", "Niches"),
    ("target_regions", "Regions"),
    ("brand_contact_name", "Contact"),
    ("brand_contact_role", "Role"),
    ("brand_contact_email", "Email"),
    ("brand_contact_phone", "Phone"),
)


def _rows(buttons: list[InlineKeyboardButton], per_row: int) -> list[list[InlineKeyboardButton]]:
    return [buttons[i:i + per_row] for i in range(0, len(buttons), per_row)]


def _nav_row(step: Step, has_value: bool, can_go_back: bool) -> list[InlineKeyboardButton]:
    row = []
    if can_go_back:
        row.append(InlineKeyboardButton(text="◀️ Back", callback_data="onb_back"))
    if step.type == StepType.MULTISELECT:
        row.append(InlineKeyboardButton(text="✔️ Done", callback_data="onb_next"))
    elif has_value and step.type in TEXT_INPUT_TYPES:
        row.append(InlineKeyboardButton(text="➡️ Keep current", callback_data="onb_next"))
    elif has_value and step.type in CHOICE_TYPES:
        row.append(InlineKeyboardButton(text="➡️ Next", callback_data="onb_next"))
    elif step.optional:
        row.append(InlineKeyboardButton(text="⏩ Skip", callback_data="onb_next"))
    return row


def step_keyboard(step: Step, value, can_go_back: bool) -> InlineKeyboardMarkup | None:
    """Option buttons (if any) plus the Back / Next / Skip row."""
    buttons: list[list[InlineKeyboardButton]] = []

    if step.type in CHOICE_TYPES:
        options = [
            InlineKeyboardButton(
                text=f"✅ {label}" if value == option_value else label,
                callback_data=f"onb_opt_{i}",
            )
            for i, (option_value, label) in enumerate(step.options)
        ]
        buttons.extend(_rows(options, 2 if len(options) > 6 else 1))

    elif step.type == StepType.MULTISELECT:
        selected = set(value or [])
        options = [
            InlineKeyboardButton(
                text=f"✅ {label}" if option_value in selected else label,
                callback_data=f"onb_toggle_{i}",
            )
            for i, (option_value, label) in enumerate(step.options)
        ]
        buttons.extend(_rows(options, 2))

    nav = _nav_row(step, bool(value), can_go_back)
    if nav:
        buttons.append(nav)
    if not buttons:
        return None
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def review_keyboard() -> InlineKeyboardMarkup:
    """Per-field edit links, then Back / Submit."""
    edits = [
        InlineKeyboardButton(text=f"✏️ {label}", callback_data=f"onb_edit_{step_id}")
        for step_id, label in REVIEW_EDIT_TARGETS
    ]
    buttons = _rows(edits, 3)
    buttons.append([
        InlineKeyboardButton(text="◀️ Back", callback_data="onb_back"),
        InlineKeyboardButton(text="✅ Submit", callback_data="onb_submit"),
    ])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def retry_keyboard() -> InlineKeyboardMarkup:
    """Shown after a failed submission."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🔄 Try Again", callback_data="onb_submit")],
        [InlineKeyboardButton(text="✏️ Edit Details", callback_data="onb_edit_company_name")],
    ])


def resume_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🔄 Start Over", callback_data="onb_restart")],
    ])


def start_onboarding_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🚀 Set Up My Brand", callback_data="start_brand_onboarding")],
    ])
