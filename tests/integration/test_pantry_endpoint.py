"""Integration tests for the household pantry endpoints."""

from __future__ import annotations

from fastapi import status

from mealplan.db.pantry import DEFAULT_PANTRY_ITEMS
from tests.integration.utils import auth_headers


def test_pantry_lifecycle(client):
    response = client.get("/api/pantry", headers=auth_headers())
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["items"] == list(DEFAULT_PANTRY_ITEMS)

    replaced = client.put("/api/pantry", json={"items": ["Rice", "rice", "Miso"]}, headers=auth_headers())
    assert replaced.status_code == status.HTTP_200_OK
    assert replaced.json()["items"] == ["rice", "miso"]

    created = client.post("/api/pantry", json={"items": ["soy sauce"]}, headers=auth_headers())
    assert created.status_code == status.HTTP_200_OK
    assert created.json()["items"] == ["soy sauce"]

    cleared = client.delete("/api/pantry", headers=auth_headers())
    assert cleared.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/pantry", headers=auth_headers()).json()["items"] == []


def test_pantry_is_shared_within_household_only(client):
    client.put("/api/pantry", json={"items": ["rice"]}, headers=auth_headers("user-1"))

    other = client.get("/api/pantry", headers=auth_headers("user-2"))

    assert other.json()["items"] == list(DEFAULT_PANTRY_ITEMS)


def test_pantry_requires_user(client):
    response = client.get("/api/pantry", headers=auth_headers(None))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
