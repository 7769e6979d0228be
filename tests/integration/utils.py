"""Shared helpers for integration tests."""

from __future__ import annotations

from typing import Optional

from mealplan.config import get_settings


def auth_headers(
    user_id: Optional[str] = "user-1",
    *,
    email: Optional[str] = None,
    name: Optional[str] = None,
) -> dict[str, str]:
    headers: dict[str, str] = {}
    token = get_settings().api_token
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if user_id:
        headers["X-User-ID"] = user_id
    if email:
        headers["X-User-Email"] = email
    if name:
        headers["X-User-Name"] = name
    return headers
