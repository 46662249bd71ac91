"""
Mindful Meals Onboarding.

Client-side profile setup run right after sign-up. Collects answers into a
ProfileDraft over five steps and submits them to the profile service.

Steps:
1. Name - required
2. Goal - weight loss / maintenance / muscle gain
3. Restrictions - dietary restrictions and their sub-options
4. Favorites - ingredients to include
5. Avoid - ingredients to exclude
"""

from .errors import (
    OnboardingError,
    ValidationFailed,
    StepNotSkippable,
    SubmissionInProgress,
    SubmissionFailed,
    OnboardingComplete,
    NotSignedIn,
    ProfileFetchFailed,
)
from .state import ProfileDraft, IngredientRef, DietaryGoal
from .steps import Step, StepMetadata, STEP_TABLE
from .sequencer import StepSequencer
from .payload import ProfilePayload, build_payload_from_draft
from .ingredients import IngredientCatalog
from .service import ProfileClient, start_onboarding
from .session import Identity, sign_in, sign_out, current_identity

__all__ = [
    "OnboardingError",
    "ValidationFailed",
    "StepNotSkippable",
    "SubmissionInProgress",
    "SubmissionFailed",
    "OnboardingComplete",
    "NotSignedIn",
    "ProfileFetchFailed",
    "ProfileDraft",
    "IngredientRef",
    "DietaryGoal",
    "Step",
    "StepMetadata",
    "STEP_TABLE",
    "StepSequencer",
    "ProfilePayload",
    "build_payload_from_draft",
    "IngredientCatalog",
    "ProfileClient",
    "start_onboarding",
    "Identity",
    "sign_in",
    "sign_out",
    "current_identity",
]
