"""
Tests for mapping a ProfileDraft onto the profile request body.
"""

import json

from onboarding.payload import build_payload_from_draft
from onboarding.session import Identity
from onboarding.state import IngredientRef, ProfileDraft


IDENTITY = Identity(id="user-1", email="ada@example.com")


def test_empty_draft_payload():
    payload = build_payload_from_draft(ProfileDraft(display_name="Ada"), IDENTITY)
    assert payload.to_dict() == {
        "userId": "user-1",
        "email": "ada@example.com",
        "displayName": "Ada",
        "dietaryGoals": {"type": "maintenance"},
        "preferences": {
            "dietaryRestrictions": [],
            "restrictionOptions": {},
            "favoriteIngredients": [],
            "dislikedIngredients": [],
        },
    }


def test_full_draft_payload():
    draft = ProfileDraft(display_name="  Ada  ")
    draft.set_goal("bulking")
    draft.toggle_restriction("vegan")
    draft.toggle_restriction("gluten_free")
    draft.toggle_restriction_option("vegan", "honey")
    draft.add_ingredient("favorites", IngredientRef(id="b", name="Quinoa"))
    draft.add_ingredient("favorites", IngredientRef(id="a", name="Avocado"))
    draft.add_ingredient("avoid", IngredientRef(id="c", name="Salmon"))

    body = build_payload_from_draft(draft, IDENTITY).to_dict()

    assert body["displayName"] == "Ada"
    assert body["dietaryGoals"] == {"type": "bulking"}
    assert body["preferences"]["dietaryRestrictions"] == ["gluten_free", "vegan"]
    # Restrictions with no chosen options are left out
    assert body["preferences"]["restrictionOptions"] == {"vegan": ["honey"]}
    # Selection order, ids only
    assert body["preferences"]["favoriteIngredients"] == ["b", "a"]
    assert body["preferences"]["dislikedIngredients"] == ["c"]


def test_payload_does_not_touch_draft():
    draft = ProfileDraft(display_name=" Ada ")
    draft.toggle_restriction("keto")
    before = draft.to_dict()
    build_payload_from_draft(draft, IDENTITY)
    assert draft.to_dict() == before


def test_to_json_matches_dict():
    payload = build_payload_from_draft(ProfileDraft(display_name="Ada"), IDENTITY)
    assert json.loads(payload.to_json()) == payload.to_dict()
