"""
Ingredient catalog API endpoints.

Read endpoints feed the onboarding ingredient picker; the write endpoints are
for catalog maintenance.
"""

import logging

from fastapi import APIRouter, HTTPException

from mindful_meals.db import client as db
from mindful_meals.models import Ingredient, IngredientCreate, IngredientUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ingredients", tags=["ingredients"])

NOT_FOUND = "Ingredient not found"


def _documents(rows: list[dict]) -> list[dict]:
    return [Ingredient.model_validate(row).to_api() for row in rows]


@router.get("")
async def list_ingredients() -> list[dict]:
    """Get the whole catalog."""
    try:
        rows = await db.list_ingredients()
    except Exception as e:
        logger.error(f"Error fetching ingredients: {e}")
        raise HTTPException(status_code=500, detail="Error fetching ingredients")
    return _documents(rows)


# Declared before /{ingredient_id} so "search" is not taken for an id
@router.get("/search")
async def search_ingredients(query: str | None = None) -> list[dict]:
    """Text search over name and category, best match first."""
    if not query or not query.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    try:
        rows = await db.search_ingredients(query.strip())
    except Exception as e:
        logger.error(f"Error searching ingredients: {e}")
        raise HTTPException(status_code=500, detail="Error searching ingredients")
    return _documents(rows)


@router.get("/{ingredient_id}")
async def get_ingredient(ingredient_id: str) -> dict:
    try:
        row = await db.get_ingredient(ingredient_id)
    except Exception as e:
        logger.error(f"Error fetching ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=500, detail="Error fetching ingredient")

    if row is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Ingredient.model_validate(row).to_api()


@router.post("", status_code=201)
async def create_ingredient(request: IngredientCreate) -> dict:
    try:
        row = await db.create_ingredient(request.model_dump(mode="json", exclude_none=True))
    except Exception as e:
        logger.error(f"Error creating ingredient: {e}")
        raise HTTPException(status_code=400, detail="Error creating ingredient")

    logger.info(f"Created ingredient {request.name}")
    return Ingredient.model_validate(row).to_api()


@router.put("/{ingredient_id}")
async def update_ingredient(ingredient_id: str, request: IngredientUpdate) -> dict:
    updates = request.model_dump(mode="json", exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    try:
        row = await db.update_ingredient(ingredient_id, updates)
    except Exception as e:
        logger.error(f"Error updating ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=400, detail="Error updating ingredient")

    if row is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Ingredient.model_validate(row).to_api()


@router.delete("/{ingredient_id}")
async def delete_ingredient(ingredient_id: str) -> dict:
    try:
        row = await db.delete_ingredient(ingredient_id)
    except Exception as e:
        logger.error(f"Error deleting ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=500, detail="Error deleting ingredient")

    if row is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    logger.info(f"Deleted ingredient {ingredient_id}")
    return {"message": "Ingredient deleted successfully"}
