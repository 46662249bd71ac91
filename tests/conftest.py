"""
Pytest configuration and fixtures for Mindful Meals tests.
"""

import os
from unittest.mock import MagicMock, patch

import pytest

# Set test environment before importing mindful_meals modules
os.environ["APP_ENV"] = "development"
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key-not-real")


@pytest.fixture
def mock_supabase():
    """Mock Supabase client, patched in as the db client singleton."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    for method in ("select", "insert", "update", "upsert", "delete", "eq", "neq", "order", "limit"):
        getattr(mock_table, method).return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    with patch("mindful_meals.db.client.get_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def sample_ingredient_rows():
    """Ingredient rows as stored in Supabase."""
    return [
        {
            "id": "ing-1",
            "name": "Spinach",
            "category": ["Vegetables", "Leafy Greens"],
            "nutritional_info": {"calories": 23, "protein": 2.9, "carbs": 3.6, "fat": 0.4},
            "dietary_categories": ["vegan"],
            "seasonality": [],
            "common_allergies": [],
            "substitutes": [],
        },
        {
            "id": "ing-2",
            "name": "Salmon",
            "category": ["Protein", "Fish"],
            "nutritional_info": {"calories": 208, "protein": 22, "carbs": 0, "fat": 13},
            "dietary_categories": ["pescatarian"],
            "seasonality": [],
            "common_allergies": ["fish"],
            "substitutes": [],
        },
        {
            "id": "ing-3",
            "name": "Green Beans",
            "category": ["Vegetables"],
            "nutritional_info": {"calories": 31, "protein": 1.8, "carbs": 7, "fat": 0.2},
            "dietary_categories": ["vegan"],
            "seasonality": ["summer"],
            "common_allergies": [],
            "substitutes": [],
        },
    ]


@pytest.fixture
def sample_profile_body():
    """POST /api/profile body as sent by the onboarding wizard."""
    return {
        "userId": "user-1",
        "email": "ada@example.com",
        "displayName": "Ada",
        "dietaryGoals": {"type": "maintenance"},
        "preferences": {
            "dietaryRestrictions": ["vegan"],
            "restrictionOptions": {"vegan": ["honey"]},
            "favoriteIngredients": ["ing-1"],
            "dislikedIngredients": ["ing-2"],
        },
    }
