"""
Onboarding step table.

The order of the wizard and each step's metadata live in STEP_TABLE. Adding or
reordering a step is an edit to this table; the sequencer has no per-step
branches.
"""

from dataclasses import dataclass
from enum import Enum


class Step(Enum):
    """Onboarding steps."""
    NAME = "name"
    GOAL = "goal"
    RESTRICTIONS = "restrictions"
    FAVORITES = "favorites"
    AVOID = "avoid"


@dataclass(frozen=True)
class StepMetadata:
    """Display and gating metadata for one step."""
    step: Step
    required: bool
    label: str
    icon: str
    title: str = ""
    subtitle: str = ""


STEP_TABLE: tuple[StepMetadata, ...] = (
    StepMetadata(
        step=Step.NAME,
        required=True,
        label="Name",
        icon="👋",
        title="What's your name?",
        subtitle="We'll use this to personalize your experience",
    ),
    StepMetadata(
        step=Step.GOAL,
        required=False,
        label="Goal",
        icon="🎯",
        title="What's your goal?",
        subtitle="This helps us recommend the right meals for you",
    ),
    StepMetadata(
        step=Step.RESTRICTIONS,
        required=False,
        label="Restrictions",
        icon="🥗",
        title="Any dietary restrictions?",
        subtitle="Select all that apply",
    ),
    StepMetadata(
        step=Step.FAVORITES,
        required=False,
        label="Favorites",
        icon="❤️",
        title="What are your favorite ingredients?",
        subtitle="We'll include these in your meal suggestions",
    ),
    StepMetadata(
        step=Step.AVOID,
        required=False,
        label="Avoid",
        icon="🚫",
        title="Any ingredients to avoid?",
        subtitle="We'll exclude these from your meal suggestions",
    ),
)


def step_order(table: tuple[StepMetadata, ...] = STEP_TABLE) -> list[Step]:
    """Steps in wizard order."""
    return [meta.step for meta in table]


def get_metadata(step: Step, table: tuple[StepMetadata, ...] = STEP_TABLE) -> StepMetadata:
    for meta in table:
        if meta.step == step:
            return meta
    raise KeyError(f"Step {step.value} is not in the step table")


def can_skip_step(step: Step, table: tuple[StepMetadata, ...] = STEP_TABLE) -> bool:
    """Check if a step can be skipped."""
    return not get_metadata(step, table).required
