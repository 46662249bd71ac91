"""Mindful Meals HTTP API."""
