"""
Signed-in identity for the current process.

Initialized once after sign-in, torn down on sign-out. Onboarding code only
reads it.
"""

import logging
from dataclasses import dataclass

from .errors import NotSignedIn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Authenticated user as seen by the onboarding core."""
    id: str
    email: str


_identity: Identity | None = None


def sign_in(user_id: str, email: str) -> Identity:
    """Initialize the process identity."""
    global _identity

    if not user_id or not email:
        raise ValueError("Both user id and email are required to sign in")

    _identity = Identity(id=user_id, email=email)
    logger.info(f"Signed in as {user_id}")
    return _identity


def sign_out() -> None:
    global _identity
    _identity = None


def current_identity() -> Identity:
    """Get the signed-in identity."""
    if _identity is None:
        raise NotSignedIn("No user is signed in")
    return _identity


def is_signed_in() -> bool:
    return _identity is not None
