"""
/start — register the Telegram user with the backend and route them into
brand onboarding, or tell them their brand is already set up.
"""

import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from bot.keyboards.onboarding_kb import start_onboarding_keyboard
from bot.services.onboarding_api import register_user, fetch_onboarding_status

router = Router()
logger = logging.getLogger(__name__)


@router.message(Command("start"))
async def cmd_start(message: Message, state: FSMContext):
    """Handle /start — register or welcome back."""
    await state.clear()
    user = message.from_user

    created = await register_user(user.id, user.full_name, user.username)
    if created is None:
        await message.answer("⚠️ We couldn't reach Stride Social right now. Please try /start again shortly.")
        return

    status = await fetch_onboarding_status(user.id)
    if status and status.get("is_onboarded"):
        await message.answer(
            f"Welcome back <b>{user.first_name}</b>! 👋\n\n"
            "Your brand is all set up on Stride Social."
        )
        return

    logger.info("Onboarding offered: telegram_id=%s", user.id)
    await message.answer(
        "━━━━━━━━━━━━━━━━━━━━━━\n"
        "✨ <b>Stride Social</b>\n"
        "━━━━━━━━━━━━━━━━━━━━━━\n\n"
        f"Hi <b>{user.first_name}</b>! 👋\n\n"
        "Connect your brand with the right creators.\n"
        "Let's set up your brand profile first.",
        reply_markup=start_onboarding_keyboard(),
    )
