"""
Onboarding State Management.

Holds the ProfileDraft: the in-memory answers a user accumulates while walking
through profile setup. The draft lives only in client memory and is discarded
once it has been submitted (or abandoned).
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Literal

logger = logging.getLogger(__name__)


IngredientList = Literal["favorites", "avoid"]


class DietaryGoal(Enum):
    """Dietary goal chosen on the goal step."""
    WEIGHT_LOSS = "weight_loss"
    MAINTENANCE = "maintenance"
    BULKING = "bulking"


@dataclass(frozen=True)
class IngredientRef:
    """
    Copy of a catalog ingredient held by the draft.

    The catalog owns the record; the draft only keeps what the wizard shows
    and what the profile payload needs (the id).
    """
    id: str
    name: str
    categories: frozenset[str] = frozenset()
    dietary_categories: frozenset[str] = frozenset()

    @classmethod
    def from_document(cls, doc: dict) -> "IngredientRef":
        """Build from a catalog document (`id` or `_id`, `category`, `dietaryCategories`)."""
        ingredient_id = doc.get("id") or doc.get("_id")
        if not ingredient_id:
            raise ValueError(f"Ingredient document has no id: {doc!r}")
        return cls(
            id=str(ingredient_id),
            name=doc.get("name", ""),
            categories=frozenset(doc.get("category") or doc.get("categories") or []),
            dietary_categories=frozenset(doc.get("dietaryCategories") or []),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": sorted(self.categories),
            "dietaryCategories": sorted(self.dietary_categories),
        }


@dataclass
class ProfileDraft:
    """
    Accumulated onboarding answers.

    Mutated only through the methods below, one call per user action.
    `restriction_options` is keyed by selected restriction: a restriction that
    is selected always has an entry (possibly empty), one that is not selected
    never does.
    """
    display_name: str = ""
    dietary_goal: DietaryGoal = DietaryGoal.MAINTENANCE
    dietary_restrictions: set[str] = field(default_factory=set)
    restriction_options: dict[str, set[str]] = field(default_factory=dict)
    favorite_ingredients: list[IngredientRef] = field(default_factory=list)
    disliked_ingredients: list[IngredientRef] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Name & goal
    # -------------------------------------------------------------------------

    def set_display_name(self, text: str) -> None:
        self.display_name = text

    def set_goal(self, goal: DietaryGoal | str) -> None:
        """Replace the dietary goal. Unknown goal ids raise ValueError."""
        self.dietary_goal = goal if isinstance(goal, DietaryGoal) else DietaryGoal(goal)

    # -------------------------------------------------------------------------
    # Restrictions
    # -------------------------------------------------------------------------

    def toggle_restriction(self, restriction_id: str) -> None:
        """Select the restriction if absent, deselect it (and drop its options) if present."""
        if restriction_id in self.dietary_restrictions:
            self.dietary_restrictions.discard(restriction_id)
            dropped = self.restriction_options.pop(restriction_id, set())
            if dropped:
                logger.debug(f"Dropped options {sorted(dropped)} with restriction {restriction_id}")
        else:
            self.dietary_restrictions.add(restriction_id)
            self.restriction_options.setdefault(restriction_id, set())

    def toggle_restriction_option(self, restriction_id: str, option: str) -> None:
        """Toggle a sub-option of a selected restriction."""
        if restriction_id not in self.dietary_restrictions:
            raise ValueError(f"Restriction '{restriction_id}' is not selected")
        options = self.restriction_options.setdefault(restriction_id, set())
        if option in options:
            options.discard(option)
        else:
            options.add(option)

    def options_for(self, restriction_id: str) -> frozenset[str] | None:
        """
        Sub-options chosen for a restriction.

        None means the restriction is not selected; an empty set means it is
        selected but no options were chosen yet.
        """
        if restriction_id not in self.dietary_restrictions:
            return None
        return frozenset(self.restriction_options.get(restriction_id, ()))

    # -------------------------------------------------------------------------
    # Ingredients
    # -------------------------------------------------------------------------

    def _ingredient_list(self, which: IngredientList) -> list[IngredientRef]:
        if which == "favorites":
            return self.favorite_ingredients
        if which == "avoid":
            return self.disliked_ingredients
        raise ValueError(f"Unknown ingredient list: {which}")

    def add_ingredient(self, which: IngredientList, ingredient: IngredientRef) -> bool:
        """Append unless an ingredient with the same id is already there. Returns True if added."""
        items = self._ingredient_list(which)
        if any(item.id == ingredient.id for item in items):
            return False
        items.append(ingredient)
        return True

    def remove_ingredient(self, which: IngredientList, ingredient_id: str) -> None:
        items = self._ingredient_list(which)
        items[:] = [item for item in items if item.id != ingredient_id]

    def ingredient_ids(self, which: IngredientList) -> list[str]:
        return [item.id for item in self._ingredient_list(which)]

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the draft to plain JSON-compatible data."""
        return {
            "display_name": self.display_name,
            "dietary_goal": self.dietary_goal.value,
            "dietary_restrictions": sorted(self.dietary_restrictions),
            "restriction_options": {
                rid: sorted(opts) for rid, opts in sorted(self.restriction_options.items())
            },
            "favorite_ingredients": [i.to_dict() for i in self.favorite_ingredients],
            "disliked_ingredients": [i.to_dict() for i in self.disliked_ingredients],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProfileDraft":
        """Deserialize a draft produced by to_dict."""
        restrictions = set(data.get("dietary_restrictions", []))
        options = {
            rid: set(opts)
            for rid, opts in data.get("restriction_options", {}).items()
            if rid in restrictions
        }
        for rid in restrictions:
            options.setdefault(rid, set())

        return cls(
            display_name=data.get("display_name", ""),
            dietary_goal=DietaryGoal(data.get("dietary_goal", DietaryGoal.MAINTENANCE.value)),
            dietary_restrictions=restrictions,
            restriction_options=options,
            favorite_ingredients=_refs(data.get("favorite_ingredients", [])),
            disliked_ingredients=_refs(data.get("disliked_ingredients", [])),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> "ProfileDraft":
        return cls.from_dict(json.loads(json_str))


def _refs(docs: Iterable[dict]) -> list[IngredientRef]:
    refs: list[IngredientRef] = []
    for doc in docs:
        ref = IngredientRef.from_document(doc)
        if all(r.id != ref.id for r in refs):
            refs.append(ref)
    return refs
