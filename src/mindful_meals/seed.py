"""
Seed data for the ingredient catalog.

Usage:
    mindful-meals seed            Replace the catalog with SEED_INGREDIENTS
    mindful-meals seed --merge    Upsert by name, keeping other ingredients
"""

import logging

from mindful_meals.db import client as db
from mindful_meals.models import IngredientCreate

logger = logging.getLogger(__name__)


SEED_INGREDIENTS: list[dict] = [
    {
        "name": "Chicken Breast",
        "category": ["Protein", "Meat"],
        "nutritionalInfo": {"calories": 165, "protein": 31, "carbs": 0, "fat": 3.6},
        "dietaryCategories": ["high-protein", "low-carb"],
    },
    {
        "name": "Quinoa",
        "category": ["Grains", "Plant-Based"],
        "nutritionalInfo": {"calories": 120, "protein": 4.4, "carbs": 21.3, "fat": 1.9, "fiber": 2.8},
        "dietaryCategories": ["vegetarian", "vegan", "gluten-free"],
    },
    {
        "name": "Sweet Potato",
        "category": ["Vegetables", "Starchy Vegetables"],
        "nutritionalInfo": {"calories": 103, "protein": 2, "carbs": 23.6, "fat": 0.2, "fiber": 3.8},
        "dietaryCategories": ["vegetarian", "vegan", "paleo"],
    },
    {
        "name": "Salmon",
        "category": ["Protein", "Fish"],
        "nutritionalInfo": {"calories": 208, "protein": 22, "carbs": 0, "fat": 13},
        "dietaryCategories": ["pescatarian", "keto", "high-protein"],
    },
    {
        "name": "Avocado",
        "category": ["Fruits", "Healthy Fats"],
        "nutritionalInfo": {"calories": 160, "protein": 2, "carbs": 8.5, "fat": 14.7, "fiber": 6.7},
        "dietaryCategories": ["vegetarian", "vegan", "keto"],
    },
    {
        "name": "Spinach",
        "category": ["Vegetables", "Leafy Greens"],
        "nutritionalInfo": {"calories": 23, "protein": 2.9, "carbs": 3.6, "fat": 0.4, "fiber": 2.2},
        "dietaryCategories": ["vegetarian", "vegan", "low-calorie"],
    },
    {
        "name": "Greek Yogurt",
        "category": ["Dairy", "Protein"],
        "nutritionalInfo": {"calories": 59, "protein": 10, "carbs": 3.6, "fat": 0.4},
        "dietaryCategories": ["vegetarian", "high-protein", "probiotic"],
        "commonAllergies": ["milk"],
    },
    {
        "name": "Almonds",
        "category": ["Nuts", "Healthy Fats"],
        "nutritionalInfo": {"calories": 579, "protein": 21, "carbs": 22, "fat": 50, "fiber": 12.5},
        "dietaryCategories": ["vegetarian", "vegan", "healthy-fats"],
        "commonAllergies": ["tree nuts"],
    },
]


def seed_rows(ingredients: list[dict] = SEED_INGREDIENTS) -> list[dict]:
    """Validate seed documents and convert them to table rows."""
    return [
        IngredientCreate.model_validate(doc).model_dump(mode="json", exclude_none=True)
        for doc in ingredients
    ]


async def seed_ingredients(replace: bool = True, ingredients: list[dict] = SEED_INGREDIENTS) -> int:
    """
    Load seed ingredients into the catalog.

    With replace=True the existing catalog is cleared first.

    Returns:
        Number of ingredients written.
    """
    rows = seed_rows(ingredients)

    if replace:
        written = await db.replace_ingredients(rows)
        logger.info(f"Replaced catalog with {len(written)} ingredients")
    else:
        written = await db.upsert_ingredients(rows)
        logger.info(f"Upserted {len(written)} ingredients")

    return len(written)
