"""
Mindful Meals - Supabase Client.

Low-level database access. All queries go through here.
"""

import logging
from datetime import datetime, timezone

from supabase import Client, create_client

from mindful_meals.config import settings

logger = logging.getLogger(__name__)

PROFILES_TABLE = "user_profiles"
INGREDIENTS_TABLE = "ingredients"

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection. Raises MissingConfiguration on
    first use if the Supabase settings are absent.
    """
    global _client

    if _client is None:
        _client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )
        logger.info("Connected to Supabase")

    return _client


def reset_client() -> None:
    """Drop the cached client (tests, settings reload)."""
    global _client
    _client = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Profile Operations
# =============================================================================


async def upsert_profile(profile: dict) -> dict:
    """
    Create or update a profile keyed by user_id.

    Returns the stored row.
    """
    client = get_client()
    data = {**profile, "updated_at": _now()}
    response = (
        client.table(PROFILES_TABLE)
        .upsert(data, on_conflict="user_id")
        .execute()
    )
    return response.data[0]


async def get_profile(user_id: str) -> dict | None:
    """Get a profile by user_id."""
    client = get_client()
    response = client.table(PROFILES_TABLE).select("*").eq("user_id", user_id).limit(1).execute()
    return response.data[0] if response.data else None


# =============================================================================
# Ingredient Operations
# =============================================================================


async def list_ingredients() -> list[dict]:
    """Get the full ingredient catalog, ordered by name."""
    client = get_client()
    response = client.table(INGREDIENTS_TABLE).select("*").order("name").execute()
    return response.data


async def search_ingredients(query: str) -> list[dict]:
    """
    Full-text search over name and category, best match first.

    Uses the search_ingredients() Postgres function (see migrations/).
    Falls back to substring matching ranked in Python if the function is not
    available.
    """
    client = get_client()

    try:
        response = client.rpc("search_ingredients", {"query": query}).execute()
        return response.data
    except Exception as e:
        # Function may not exist yet - fall back to direct query
        logger.debug(f"search_ingredients RPC failed, using fallback: {e}")

    response = client.table(INGREDIENTS_TABLE).select("*").execute()
    return rank_ingredients(response.data, query)


def rank_ingredients(rows: list[dict], query: str) -> list[dict]:
    """
    Rank rows by how many query terms they contain.

    A term found in the name counts double a term found in a category. Rows
    matching no term are dropped; ties keep name order.
    """
    terms = [t for t in query.lower().split() if t]
    scored = []
    for row in rows:
        name = (row.get("name") or "").lower()
        categories = " ".join(row.get("category") or []).lower()
        score = 0
        for term in terms:
            if term in name:
                score += 2
            elif term in categories:
                score += 1
        if score:
            scored.append((score, name, row))

    scored.sort(key=lambda item: (-item[0], item[1]))
    return [row for _, _, row in scored]


async def get_ingredient(ingredient_id: str) -> dict | None:
    """Get an ingredient by ID."""
    client = get_client()
    response = client.table(INGREDIENTS_TABLE).select("*").eq("id", ingredient_id).limit(1).execute()
    return response.data[0] if response.data else None


async def create_ingredient(ingredient: dict) -> dict:
    """Insert an ingredient."""
    client = get_client()
    response = client.table(INGREDIENTS_TABLE).insert(ingredient).execute()
    return response.data[0]


async def update_ingredient(ingredient_id: str, updates: dict) -> dict | None:
    """Update an ingredient. Returns None if it does not exist."""
    client = get_client()
    data = {**updates, "updated_at": _now()}
    response = client.table(INGREDIENTS_TABLE).update(data).eq("id", ingredient_id).execute()
    return response.data[0] if response.data else None


async def delete_ingredient(ingredient_id: str) -> dict | None:
    """Delete an ingredient. Returns the deleted row, or None if it did not exist."""
    client = get_client()
    response = client.table(INGREDIENTS_TABLE).delete().eq("id", ingredient_id).execute()
    return response.data[0] if response.data else None


async def replace_ingredients(ingredients: list[dict]) -> list[dict]:
    """Clear the catalog and insert the given ingredients."""
    client = get_client()
    client.table(INGREDIENTS_TABLE).delete().neq("name", "").execute()
    if not ingredients:
        return []
    response = client.table(INGREDIENTS_TABLE).insert(ingredients).execute()
    return response.data


async def upsert_ingredients(ingredients: list[dict]) -> list[dict]:
    """Insert or update ingredients by name."""
    client = get_client()
    if not ingredients:
        return []
    response = client.table(INGREDIENTS_TABLE).upsert(ingredients, on_conflict="name").execute()
    return response.data
