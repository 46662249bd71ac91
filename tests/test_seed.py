"""
Tests for seeding the ingredient catalog.
"""

import asyncio
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from mindful_meals.seed import SEED_INGREDIENTS, seed_ingredients, seed_rows


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


def test_seed_rows_use_column_names():
    rows = seed_rows()
    assert len(rows) == len(SEED_INGREDIENTS) == 8
    almonds = next(r for r in rows if r["name"] == "Almonds")
    assert almonds["nutritional_info"]["fiber"] == 12.5
    assert almonds["common_allergies"] == ["tree nuts"]
    assert "nutritionalInfo" not in almonds


def test_seed_rows_validate_documents():
    with pytest.raises(ValidationError):
        seed_rows([{"name": "Mystery", "category": []}])


def test_replace_clears_then_inserts(mock_supabase):
    table = mock_supabase.table.return_value
    table.execute.return_value = MagicMock(data=[{"id": str(i)} for i in range(8)])

    count = _run(seed_ingredients())

    assert count == 8
    mock_supabase.table.assert_called_with("ingredients")
    table.delete.assert_called_once()
    table.neq.assert_called_once_with("name", "")
    inserted = table.insert.call_args[0][0]
    assert [r["name"] for r in inserted] == [doc["name"] for doc in SEED_INGREDIENTS]
    table.upsert.assert_not_called()


def test_merge_upserts_by_name(mock_supabase):
    table = mock_supabase.table.return_value
    table.execute.return_value = MagicMock(data=[{"id": "1"}, {"id": "2"}])

    count = _run(seed_ingredients(replace=False, ingredients=SEED_INGREDIENTS[:2]))

    assert count == 2
    table.delete.assert_not_called()
    assert table.upsert.call_args[1] == {"on_conflict": "name"}
