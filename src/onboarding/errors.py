"""Onboarding errors."""

from .steps import Step


class OnboardingError(Exception):
    """Base class for onboarding failures."""


class ValidationFailed(OnboardingError):
    """The current step's input does not pass its validation rule."""

    def __init__(self, step: Step, message: str):
        super().__init__(message)
        self.step = step
        self.message = message


class StepNotSkippable(OnboardingError):
    """skip() was called on a required step."""

    def __init__(self, step: Step):
        super().__init__(f"Step {step.value} cannot be skipped")
        self.step = step


class SubmissionInProgress(OnboardingError):
    """A transition was requested while the profile is being submitted."""


class OnboardingComplete(OnboardingError):
    """A transition was requested after the profile was submitted."""


class SubmissionFailed(OnboardingError):
    """The profile service rejected the submission or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotSignedIn(OnboardingError):
    """No identity has been initialized for this process."""


class ProfileFetchFailed(OnboardingError):
    """A stored profile could not be read back from the profile service."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
