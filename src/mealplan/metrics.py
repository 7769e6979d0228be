"""Prometheus metrics definitions for the meal-planning API."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "mealplan_http_requests_total",
    "Total number of HTTP requests processed by the meal-planning API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "mealplan_http_request_duration_seconds",
    "Latency of HTTP requests processed by the meal-planning API",
    ["method", "path"],
)

SHOPPING_LIST_UPDATES = Counter(
    "mealplan_shopping_list_updates_total",
    "Shopping list checklist writes by result",
    ["result"],
)

JOIN_CODES_PURGED = Counter(
    "mealplan_join_codes_purged_total",
    "Number of expired household join codes removed",
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "SHOPPING_LIST_UPDATES",
    "JOIN_CODES_PURGED",
]
