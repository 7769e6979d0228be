"""ASGI application factory and dependencies for the meal-planning server."""

from mealplan.server.app import app, create_app

__all__ = ["app", "create_app"]
