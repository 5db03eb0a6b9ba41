"""FSM states for the brand onboarding wizard."""

from aiogram.fsm.state import StatesGroup, State


class BrandOnboarding(StatesGroup):
    """Brand onboarding session. Step position lives in FSM data, not in states."""
    answering = State()
    submitting = State()
