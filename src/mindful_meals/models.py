"""
Mindful Meals - API and storage models.

Rows are stored with snake_case columns; the HTTP API speaks camelCase. Every
model accepts both (populate_by_name) and dumps camelCase with by_alias=True.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


# =============================================================================
# Profiles
# =============================================================================

DietaryGoalType = Literal["weight_loss", "bulking", "maintenance"]


class DietaryGoals(CamelModel):
    type: DietaryGoalType = "maintenance"
    target_calories: float | None = None
    target_protein: float | None = None
    target_carbs: float | None = None
    target_fat: float | None = None


class Preferences(CamelModel):
    dietary_restrictions: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    favorite_ingredients: list[str] = Field(default_factory=list)  # ingredient ids
    disliked_ingredients: list[str] = Field(default_factory=list)  # ingredient ids
    restriction_options: dict[str, list[str]] = Field(default_factory=dict)


class ProfileRequest(CamelModel):
    """
    Body of POST /api/profile.

    userId and email are optional here so the route can answer a missing one
    with "Missing required fields" instead of a schema error.
    """
    user_id: str | None = None
    email: str | None = None
    display_name: str | None = None
    dietary_goals: DietaryGoals = Field(default_factory=DietaryGoals)
    preferences: Preferences = Field(default_factory=Preferences)


class UserProfile(CamelModel):
    """Stored profile document."""
    user_id: str
    email: str
    display_name: str | None = None
    dietary_goals: DietaryGoals = Field(default_factory=DietaryGoals)
    preferences: Preferences = Field(default_factory=Preferences)
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Ingredients
# =============================================================================

class NutritionalInfo(CamelModel):
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    vitamins: dict[str, float] | None = None
    minerals: dict[str, float] | None = None


class IngredientCreate(CamelModel):
    """Body of POST /api/ingredients."""
    name: str = Field(min_length=1)
    category: list[str] = Field(min_length=1)
    nutritional_info: NutritionalInfo
    dietary_categories: list[str] = Field(default_factory=list)
    seasonality: list[str] = Field(default_factory=list)
    common_allergies: list[str] = Field(default_factory=list)
    substitutes: list[str] = Field(default_factory=list)  # ingredient ids

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Ingredient name cannot be blank")
        return v


class IngredientUpdate(CamelModel):
    """Body of PUT /api/ingredients/{id}. Only provided fields change."""
    name: str | None = None
    category: list[str] | None = None
    nutritional_info: NutritionalInfo | None = None
    dietary_categories: list[str] | None = None
    seasonality: list[str] | None = None
    common_allergies: list[str] | None = None
    substitutes: list[str] | None = None


class Ingredient(CamelModel):
    """Stored ingredient document."""
    id: str
    name: str
    category: list[str] = Field(default_factory=list)
    nutritional_info: NutritionalInfo | None = None
    dietary_categories: list[str] = Field(default_factory=list)
    seasonality: list[str] = Field(default_factory=list)
    common_allergies: list[str] = Field(default_factory=list)
    substitutes: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        return str(v)
