"""
Mindful Meals - meal planning backend.

Stores user profiles and the ingredient catalog, and serves them over HTTP to
the onboarding wizard and the app.
"""

__version__ = "1.0.0"
