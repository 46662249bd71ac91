"""
Onboarding Step Sequencer.

Finite-state machine over the step table. The current index only ever moves by
one step: forward on advance() or skip(), backward on retreat(). Advancing past
the last step submits the draft instead.
"""

import logging
from typing import Any, Awaitable, Callable, Literal

from .errors import (
    OnboardingComplete,
    StepNotSkippable,
    SubmissionInProgress,
    ValidationFailed,
)
from .forms import VALIDATION_RULES, ValidationRule, validate_step
from .state import ProfileDraft
from .steps import STEP_TABLE, Step, StepMetadata

logger = logging.getLogger(__name__)


SubmitFn = Callable[[ProfileDraft], Awaitable[dict[str, Any]]]
StepState = Literal["done", "current", "pending"]


class StepSequencer:
    """
    Drives one onboarding session.

    Owns the current step and the submission lifecycle for a single draft. While
    a submission is in flight every transition raises SubmissionInProgress, so
    at most one submission per draft is outstanding.
    """

    def __init__(
        self,
        draft: ProfileDraft,
        submit: SubmitFn,
        steps: tuple[StepMetadata, ...] = STEP_TABLE,
        rules: dict[Step, ValidationRule] = VALIDATION_RULES,
    ):
        if not steps:
            raise ValueError("Step table is empty")
        self.draft = draft
        self._submit = submit
        self._steps = steps
        self._rules = rules
        self._index = 0
        self.submitting = False
        self.completed = False
        self.result: dict[str, Any] | None = None

    # -------------------------------------------------------------------------
    # Position
    # -------------------------------------------------------------------------

    @property
    def current_step(self) -> Step:
        return self._steps[self._index].step

    @property
    def metadata(self) -> StepMetadata:
        return self._steps[self._index]

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return len(self._steps)

    @property
    def is_first(self) -> bool:
        return self._index == 0

    @property
    def is_last(self) -> bool:
        return self._index == len(self._steps) - 1

    @property
    def advance_label(self) -> str:
        return "Complete" if self.is_last else "Next"

    def progress(self) -> list[tuple[Step, StepState]]:
        """Per-step state for a step indicator."""
        states: list[tuple[Step, StepState]] = []
        for i, meta in enumerate(self._steps):
            if i < self._index:
                states.append((meta.step, "done"))
            elif i == self._index:
                states.append((meta.step, "current"))
            else:
                states.append((meta.step, "pending"))
        return states

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _check_controls(self) -> None:
        if self.completed:
            raise OnboardingComplete("Profile has already been submitted")
        if self.submitting:
            raise SubmissionInProgress("Profile submission is in progress")

    async def advance(self) -> Step:
        """
        Validate the current step and move forward.

        On the last step a passing validation submits the draft instead. A
        failed submission re-raises the submitter's error with the draft and
        step untouched, so the caller can retry.

        Raises:
            ValidationFailed: the current step's rule rejected the draft.
        """
        self._check_controls()

        step = self.current_step
        message = validate_step(step, self.draft, self._rules)
        if message is not None:
            raise ValidationFailed(step, message)

        if not self.is_last:
            self._index += 1
            return self.current_step

        self.submitting = True
        try:
            self.result = await self._submit(self.draft)
        finally:
            self.submitting = False

        self.completed = True
        logger.info("Onboarding profile submitted")
        return self.current_step

    def retreat(self) -> Step:
        """Move back one step without validation. No-op on the first step."""
        self._check_controls()
        if self._index > 0:
            self._index -= 1
        return self.current_step

    def skip(self) -> Step:
        """
        Move forward without validation.

        Raises:
            StepNotSkippable: the current step is required.
        """
        self._check_controls()
        if self.metadata.required:
            raise StepNotSkippable(self.current_step)
        if not self.is_last:
            self._index += 1
        return self.current_step
