"""Mindful Meals database access (Supabase)."""

from .client import get_client

__all__ = ["get_client"]
