"""
Step Sequencer — skip-aware navigation over the ordered step list.

Skip rules are evaluated in order; a step is bypassed when any rule naming
its id has a predicate that holds for the current form state.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from bot.wizard.form_state import FormState
from bot.wizard.steps import Step, TEAM_INVITATIONS_STEP_ID


@dataclass(frozen=True)
class SkipRule:
    """Bypass `step_id` whenever `predicate(form_state)` is true."""
    step_id: str
    predicate: Callable[[FormState], bool]


def _declined_team_invitations(form: FormState) -> bool:
    return form.get("invite_team_members") == "no"


DEFAULT_SKIP_RULES: tuple[SkipRule, ...] = (
    SkipRule(TEAM_INVITATIONS_STEP_ID, _declined_team_invitations),
)


def progress_percent(current: int, total: int) -> float:
    """Completion percentage; 100 only at the last index."""
    return (current + 1) / total * 100


class StepSequencer:
    """Computes the next/previous visitable step index."""

    def __init__(
        self,
        steps: Sequence[Step],
        skip_rules: Sequence[SkipRule] = DEFAULT_SKIP_RULES,
    ):
        self.steps = tuple(steps)
        self.skip_rules = tuple(skip_rules)

    def __len__(self) -> int:
        return len(self.steps)

    def is_skipped(self, index: int, form: FormState) -> bool:
        """Whether the step at `index` is bypassed for this form state."""
        if not 0 <= index < len(self.steps):
            return False
        step_id = self.steps[index].id
        return any(
            rule.step_id == step_id and rule.predicate(form)
            for rule in self.skip_rules
        )

    def next_index(self, current: int, form: FormState) -> int:
        index = current + 1
        while self.is_skipped(index, form):
            index += 1
        return index

    def prev_index(self, current: int, form: FormState) -> int:
        # Index 0 is guarded by the caller; no clamping here.
        index = current - 1
        while self.is_skipped(index, form):
            index -= 1
        return index

    def progress(self, current: int) -> float:
        return progress_percent(current, len(self.steps))
