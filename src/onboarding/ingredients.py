"""
Ingredient Lookup for favorites / avoid selection.

The catalog is fetched once from the profile service. When the service cannot
be reached, answers with an error, or has no ingredients yet, the built-in
DEFAULT_INGREDIENTS are used instead so the wizard is never blocked.
"""

import logging

import httpx

from .state import IngredientRef

logger = logging.getLogger(__name__)


# =============================================================================
# Built-in Catalog
# =============================================================================

DEFAULT_INGREDIENTS: tuple[IngredientRef, ...] = (
    IngredientRef(
        id="1",
        name="Chicken Breast",
        categories=frozenset({"Protein", "Meat"}),
        dietary_categories=frozenset({"high-protein", "low-carb"}),
    ),
    IngredientRef(
        id="2",
        name="Salmon",
        categories=frozenset({"Protein", "Fish"}),
        dietary_categories=frozenset({"high-protein", "omega-3"}),
    ),
    IngredientRef(
        id="3",
        name="Quinoa",
        categories=frozenset({"Grains"}),
        dietary_categories=frozenset({"vegetarian", "gluten-free"}),
    ),
    IngredientRef(
        id="4",
        name="Sweet Potato",
        categories=frozenset({"Vegetables"}),
        dietary_categories=frozenset({"vegetarian", "complex-carbs"}),
    ),
    IngredientRef(
        id="5",
        name="Avocado",
        categories=frozenset({"Fruits", "Healthy Fats"}),
        dietary_categories=frozenset({"vegetarian", "healthy-fats"}),
    ),
    IngredientRef(
        id="6",
        name="Spinach",
        categories=frozenset({"Vegetables", "Leafy Greens"}),
        dietary_categories=frozenset({"vegetarian", "low-calorie"}),
    ),
    IngredientRef(
        id="7",
        name="Greek Yogurt",
        categories=frozenset({"Dairy", "Protein"}),
        dietary_categories=frozenset({"high-protein", "probiotic"}),
    ),
    IngredientRef(
        id="8",
        name="Almonds",
        categories=frozenset({"Nuts", "Healthy Fats"}),
        dietary_categories=frozenset({"vegetarian", "healthy-fats"}),
    ),
)


# =============================================================================
# Search
# =============================================================================

def filter_ingredients(ingredients: list[IngredientRef], query: str) -> list[IngredientRef]:
    """
    Case-insensitive multi-term AND match on name and categories.

    Every whitespace-separated term must appear in the name or in one of the
    categories. A blank query returns everything, in catalog order.
    """
    terms = [t for t in query.lower().split() if t]
    if not terms:
        return list(ingredients)

    matches = []
    for ingredient in ingredients:
        name = ingredient.name.lower()
        categories = " ".join(sorted(ingredient.categories)).lower()
        if all(term in name or term in categories for term in terms):
            matches.append(ingredient)
    return matches


# =============================================================================
# Catalog
# =============================================================================

class IngredientCatalog:
    """
    Client-side view of the ingredient catalog.

    Usage:
        catalog = IngredientCatalog("http://localhost:6000")
        await catalog.load()
        catalog.search("leafy greens")
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._timeout = timeout
        self._ingredients: list[IngredientRef] = list(DEFAULT_INGREDIENTS)
        self.fallback_active = True

    @property
    def ingredients(self) -> list[IngredientRef]:
        return list(self._ingredients)

    async def load(self) -> list[IngredientRef]:
        """Fetch the catalog, keeping the built-in one on any failure."""
        try:
            documents = await self._fetch_all()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Using default ingredients: {e}")
            self._use_fallback()
            return self.ingredients

        refs = []
        for doc in documents:
            try:
                refs.append(IngredientRef.from_document(doc))
            except ValueError as e:
                logger.warning(f"Skipping catalog entry: {e}")

        if not refs:
            logger.warning("Using default ingredients: catalog is empty")
            self._use_fallback()
            return self.ingredients

        self._ingredients = refs
        self.fallback_active = False
        logger.info(f"Loaded {len(refs)} ingredients from catalog")
        return self.ingredients

    async def _fetch_all(self) -> list[dict]:
        url = f"{self.base_url}/api/ingredients"
        if self._http_client is not None:
            response = await self._http_client.get(url)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, list):
            raise ValueError("Catalog response is not a list")
        return data

    def _use_fallback(self) -> None:
        self._ingredients = list(DEFAULT_INGREDIENTS)
        self.fallback_active = True

    def search(self, query: str) -> list[IngredientRef]:
        return filter_ingredients(self._ingredients, query)

    def get(self, ingredient_id: str) -> IngredientRef | None:
        for ingredient in self._ingredients:
            if ingredient.id == ingredient_id:
                return ingredient
        return None
