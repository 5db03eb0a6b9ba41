"""
Onboarding Wizard session — the validated, skip-aware navigation calls.

Each user action runs to completion before the next one: validate the
active step, move through the sequencer, mirror the result to storage.
"""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Sequence

from bot.services.onboarding_api import SubmissionError
from bot.services.persistence import FormPersistenceGuard
from bot.wizard.form_state import FormState, create_initial_form_state
from bot.wizard.sequencer import StepSequencer, SkipRule, DEFAULT_SKIP_RULES
from bot.wizard.steps import BRAND_ONBOARDING_STEPS, Step, build_step_index
from bot.wizard.validator import ValidationResult, validate_step

logger = logging.getLogger(__name__)

Submitter = Callable[[FormState], Awaitable[Any]]


class NavigationOutcome(str, Enum):
    ADVANCED = "advanced"
    RETREATED = "retreated"
    STAYED = "stayed"
    BLOCKED = "blocked"      # current step failed validation
    COMPLETED = "completed"  # submission accepted
    FAILED = "failed"        # submission rejected; still on the last step
    BUSY = "busy"            # a submission is already in flight


class OnboardingWizard:
    """FormState + NavigationState for one wizard session."""

    def __init__(
        self,
        steps: Sequence[Step] = BRAND_ONBOARDING_STEPS,
        form_data: FormState | None = None,
        current_index: int = 0,
        *,
        skip_rules: Sequence[SkipRule] = DEFAULT_SKIP_RULES,
        guard: FormPersistenceGuard | None = None,
        submitter: Submitter | None = None,
    ):
        if not steps:
            raise ValueError("A wizard needs at least one step")
        self.sequencer = StepSequencer(steps, skip_rules)
        self.step_index = build_step_index(self.sequencer.steps)
        self.form_data: FormState = form_data if form_data is not None else create_initial_form_state(None)
        self.current_index = self._clamp(current_index)
        self.validation_error: str | None = None
        self.submission_error: str | None = None
        self.guard = guard
        self.submitter = submitter
        self.is_submitting = False
        self.is_completed = False

    # ── Derived state ─────────────────────────────────────

    @property
    def steps(self) -> tuple[Step, ...]:
        return self.sequencer.steps

    @property
    def current_step(self) -> Step:
        return self.steps[self.current_index]

    @property
    def is_first_step(self) -> bool:
        return self.current_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.current_index == len(self.steps) - 1

    @property
    def progress(self) -> float:
        return self.sequencer.progress(self.current_index)

    def visible_position(self) -> tuple[int, int]:
        """1-based position and total, counting only steps not skipped."""
        visible = [
            i for i in range(len(self.steps))
            if not self.sequencer.is_skipped(i, self.form_data)
        ]
        position = sum(1 for i in visible if i <= self.current_index)
        return position, len(visible)

    def validate_current(self) -> ValidationResult:
        step = self.current_step
        return validate_step(step.id, self.form_data, step.optional)

    def _clamp(self, index: int) -> int:
        return max(0, min(index, len(self.steps) - 1))

    # ── Persistence ───────────────────────────────────────

    async def resume(self) -> bool:
        """Rehydrate from the persisted snapshot. True when one was found."""
        if self.guard is None:
            return False
        snapshot = await self.guard.load()
        if snapshot is None:
            return False
        merged = dict(self.form_data)
        merged.update(snapshot.form_data)
        self.form_data = merged
        self.current_index = self._clamp(snapshot.current_step)
        logger.info(
            "Onboarding resumed: telegram_id=%s, step=%s",
            self.guard.telegram_id, self.current_step.id,
        )
        return True

    async def _persist(self) -> None:
        if self.guard is not None and not self.is_completed:
            await self.guard.save(self.form_data, self.current_index)

    # ── Entry points ──────────────────────────────────────

    async def update_field(self, field: str, value: Any) -> None:
        self.form_data[field] = value
        self.validation_error = None
        await self._persist()

    async def handle_next(self) -> NavigationOutcome:
        result = self.validate_current()
        if not result.valid:
            self.validation_error = result.error
            return NavigationOutcome.BLOCKED
        self.validation_error = None

        if self.is_last_step:
            return await self.submit()

        target = self.sequencer.next_index(self.current_index, self.form_data)
        if target >= len(self.steps):
            # Only skipped steps remain ahead.
            logger.error("No visitable step after index %s", self.current_index)
            return NavigationOutcome.STAYED
        self.current_index = target
        await self._persist()
        return NavigationOutcome.ADVANCED

    async def handle_prev(self) -> NavigationOutcome:
        if self.is_first_step:
            return NavigationOutcome.STAYED
        target = self.sequencer.prev_index(self.current_index, self.form_data)
        if target < 0:
            return NavigationOutcome.STAYED
        self.current_index = target
        self.validation_error = None
        await self._persist()
        return NavigationOutcome.RETREATED

    async def go_to_step(self, index: int) -> None:
        """Direct jump, e.g. from the review screen. No validation on entry."""
        if not 0 <= index < len(self.steps):
            raise ValueError(f"Step index out of range: {index}")
        self.current_index = index
        self.validation_error = None
        await self._persist()

    async def go_to_step_id(self, step_id: str) -> None:
        if step_id not in self.step_index:
            raise ValueError(f"Unknown step: {step_id}")
        await self.go_to_step(self.step_index[step_id])

    async def submit(self) -> NavigationOutcome:
        if self.is_submitting:
            return NavigationOutcome.BUSY
        if self.submitter is None:
            raise RuntimeError("No submitter configured for this wizard")

        self.is_submitting = True
        self.submission_error = None
        try:
            await self.submitter(dict(self.form_data))
        except SubmissionError as e:
            self.submission_error = str(e)
            return NavigationOutcome.FAILED
        finally:
            self.is_submitting = False

        self.is_completed = True
        if self.guard is not None:
            await self.guard.mark_completed()
        return NavigationOutcome.COMPLETED
