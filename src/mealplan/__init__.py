"""
Household meal-planning service.

The package bundles the HTTP API (recipes, meals, plans, pantry, shopping list and
household sharing) together with the client-side editing models used by front ends.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
