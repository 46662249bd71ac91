"""
Profile API endpoints.

Upserts the profile produced by onboarding and reads it back.
"""

import logging

from fastapi import APIRouter, HTTPException

from mindful_meals.db import client as db
from mindful_meals.models import ProfileRequest, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.post("")
async def create_profile(request: ProfileRequest) -> dict:
    """Create or update a profile keyed by userId."""
    if not request.user_id or not request.email:
        raise HTTPException(status_code=400, detail="Missing required fields")

    row = {
        "user_id": request.user_id,
        "email": request.email,
        "display_name": request.display_name,
        "dietary_goals": request.dietary_goals.to_api(),
        "preferences": request.preferences.to_api(),
    }

    try:
        stored = await db.upsert_profile(row)
    except Exception as e:
        logger.error(f"Profile creation error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create profile")

    logger.info(f"Profile saved for user {request.user_id}")
    return UserProfile.model_validate(stored).to_api()


@router.get("/{user_id}")
async def get_profile(user_id: str) -> dict:
    """Get a profile by userId."""
    if not user_id.strip():
        raise HTTPException(status_code=400, detail="User ID is required")

    try:
        stored = await db.get_profile(user_id)
    except Exception as e:
        logger.error(f"Profile fetch error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch profile")

    if stored is None:
        raise HTTPException(status_code=404, detail="Profile not found")

    return UserProfile.model_validate(stored).to_api()
