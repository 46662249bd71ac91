"""
Onboarding Payload Definition.

The ProfilePayload is the contract between onboarding and the profile service:
it maps a finished ProfileDraft onto the body of POST /api/profile.
"""

import json
from dataclasses import dataclass, field

from .session import Identity
from .state import ProfileDraft


@dataclass
class ProfilePayload:
    """Body of a profile upsert."""
    user_id: str
    email: str
    display_name: str
    dietary_goal: str
    dietary_restrictions: list[str] = field(default_factory=list)
    restriction_options: dict[str, list[str]] = field(default_factory=dict)
    favorite_ingredients: list[str] = field(default_factory=list)  # ingredient ids
    disliked_ingredients: list[str] = field(default_factory=list)  # ingredient ids

    def to_dict(self) -> dict:
        """Serialize to the wire shape (camelCase)."""
        return {
            "userId": self.user_id,
            "email": self.email,
            "displayName": self.display_name,
            "dietaryGoals": {
                "type": self.dietary_goal,
            },
            "preferences": {
                "dietaryRestrictions": self.dietary_restrictions,
                "restrictionOptions": self.restriction_options,
                "favoriteIngredients": self.favorite_ingredients,
                "dislikedIngredients": self.disliked_ingredients,
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def build_payload_from_draft(draft: ProfileDraft, identity: Identity) -> ProfilePayload:
    """
    Build the ProfilePayload for a draft.

    Restrictions are a set in the draft, so they are sorted for a stable body.
    Ingredient lists keep selection order and send ids only.
    """
    return ProfilePayload(
        user_id=identity.id,
        email=identity.email,
        display_name=draft.display_name.strip(),
        dietary_goal=draft.dietary_goal.value,
        dietary_restrictions=sorted(draft.dietary_restrictions),
        restriction_options={
            rid: sorted(opts)
            for rid, opts in sorted(draft.restriction_options.items())
            if opts
        },
        favorite_ingredients=draft.ingredient_ids("favorites"),
        disliked_ingredients=draft.ingredient_ids("avoid"),
    )
