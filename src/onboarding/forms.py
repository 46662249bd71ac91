"""
Onboarding Forms - options and validation rules.

Option tables drive rendering of the goal and restriction steps. Validation
rules are pure functions keyed by step: they read the draft and return an error
message, or None when the user may move on.
"""

import logging
from typing import Callable

from .state import DietaryGoal, ProfileDraft
from .steps import Step

logger = logging.getLogger(__name__)


# =============================================================================
# Valid Options
# =============================================================================

DIETARY_GOAL_OPTIONS = [
    {
        "id": DietaryGoal.WEIGHT_LOSS.value,
        "label": "Weight Loss",
        "description": "Focus on calorie deficit and lean proteins",
    },
    {
        "id": DietaryGoal.MAINTENANCE.value,
        "label": "Maintenance",
        "description": "Balance your nutrition and maintain weight",
    },
    {
        "id": DietaryGoal.BULKING.value,
        "label": "Muscle Gain",
        "description": "Increase protein and healthy calories",
    },
]

DEFAULT_DIETARY_GOAL = DietaryGoal.MAINTENANCE.value

DIETARY_RESTRICTION_OPTIONS = [
    {"id": "vegetarian", "label": "Vegetarian", "icon": "🥗"},
    {"id": "vegan", "label": "Vegan", "icon": "🌱"},
    {"id": "gluten_free", "label": "Gluten Free", "icon": "🌾"},
    {"id": "dairy_free", "label": "Dairy Free", "icon": "🥛"},
    {"id": "keto", "label": "Keto", "icon": "🥑"},
    {"id": "paleo", "label": "Paleo", "icon": "🍖"},
]

VALID_DIETARY_RESTRICTIONS = {r["id"] for r in DIETARY_RESTRICTION_OPTIONS}

# Sub-options shown once a restriction is selected.
RESTRICTION_SUB_OPTIONS: dict[str, list[dict]] = {
    "vegetarian": [
        {"id": "eggs", "label": "Eats eggs"},
        {"id": "dairy", "label": "Eats dairy"},
        {"id": "fish", "label": "Eats fish"},
    ],
    "vegan": [
        {"id": "honey", "label": "Eats honey"},
    ],
    "gluten_free": [
        {"id": "celiac", "label": "Celiac (strict)"},
        {"id": "oats", "label": "Oats are fine"},
    ],
    "dairy_free": [
        {"id": "lactose_only", "label": "Lactose only"},
        {"id": "butter", "label": "Butter is fine"},
    ],
    "keto": [
        {"id": "strict", "label": "Strict (under 20g carbs)"},
        {"id": "lazy", "label": "Lazy keto"},
    ],
    "paleo": [
        {"id": "legumes", "label": "Allows legumes"},
    ],
}


def is_known_restriction(restriction_id: str) -> bool:
    """Check a restriction id against the option table, logging unknown ones."""
    if restriction_id in VALID_DIETARY_RESTRICTIONS:
        return True
    # Accepted anyway: users may carry ids from other clients
    logger.info(f"Unknown dietary restriction (accepted): {restriction_id}")
    return False


def is_known_restriction_option(restriction_id: str, option: str) -> bool:
    known = {o["id"] for o in RESTRICTION_SUB_OPTIONS.get(restriction_id, [])}
    if option in known:
        return True
    logger.info(f"Unknown option for {restriction_id} (accepted): {option}")
    return False


# =============================================================================
# Validation Rules
# =============================================================================

NAME_REQUIRED_MESSAGE = "Please enter your name"


def validate_name(draft: ProfileDraft) -> str | None:
    if not draft.display_name.strip():
        return NAME_REQUIRED_MESSAGE
    return None


def always_valid(draft: ProfileDraft) -> str | None:
    return None


ValidationRule = Callable[[ProfileDraft], str | None]

VALIDATION_RULES: dict[Step, ValidationRule] = {
    Step.NAME: validate_name,
    # Goal has a pre-selected default, so it is never empty
    Step.GOAL: always_valid,
    Step.RESTRICTIONS: always_valid,
    Step.FAVORITES: always_valid,
    Step.AVOID: always_valid,
}


def validate_step(
    step: Step,
    draft: ProfileDraft,
    rules: dict[Step, ValidationRule] = VALIDATION_RULES,
) -> str | None:
    """
    Run the validation rule for a step.

    Returns:
        The error message to show the user, or None if the step passes.
        Steps without a rule always pass.
    """
    rule = rules.get(step, always_valid)
    return rule(draft)


# =============================================================================
# Rendering Helpers
# =============================================================================

def get_form_options() -> dict:
    """
    Get all option tables for rendering the wizard.

    Returns dict with:
    - dietary_goals: Goal options with descriptions
    - default_dietary_goal: Goal pre-selected for new users
    - dietary_restrictions: Restriction options with icons
    - restriction_options: Sub-options per restriction id
    """
    return {
        "dietary_goals": DIETARY_GOAL_OPTIONS,
        "default_dietary_goal": DEFAULT_DIETARY_GOAL,
        "dietary_restrictions": DIETARY_RESTRICTION_OPTIONS,
        "restriction_options": RESTRICTION_SUB_OPTIONS,
    }
