"""Integration tests for household meal plan endpoints."""

from __future__ import annotations

from datetime import date, timedelta

from fastapi import status

from tests.integration.utils import auth_headers


def _day(offset: int) -> str:
    return (date.today() + timedelta(days=offset)).isoformat()


def _create_meal(client, name, ingredients):
    response = client.post(
        "/api/meals",
        json={"name": name, "description": f"{name} dinner", "ingredients": ingredients},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def _create_plan(client, start, end, meals=(), user_id="user-1"):
    return client.post(
        "/api/plans",
        json={"start_date": start, "end_date": end, "meals": list(meals)},
        headers=auth_headers(user_id),
    )


def test_plan_crud_flow(client):
    curry = _create_meal(client, "Curry", [{"name": "Rice", "amount": "1 cup"}])

    create_response = _create_plan(client, _day(1), _day(7), [curry["id"]])
    assert create_response.status_code == status.HTTP_201_CREATED
    plan = create_response.json()
    assert plan["meals"] == [curry["id"]]

    get_response = client.get(f"/api/plans/{plan['id']}", headers=auth_headers())
    assert get_response.status_code == status.HTTP_200_OK
    assert get_response.json() == plan

    update_response = client.put(
        f"/api/plans/{plan['id']}",
        json={"meals": [], "end_date": _day(8)},
        headers=auth_headers(),
    )
    assert update_response.status_code == status.HTTP_200_OK
    assert update_response.json()["meals"] == []
    assert update_response.json()["end_date"] == _day(8)

    delete_response = client.delete(f"/api/plans/{plan['id']}", headers=auth_headers())
    assert delete_response.status_code == status.HTTP_204_NO_CONTENT

    missing = client.get(f"/api/plans/{plan['id']}", headers=auth_headers())
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_plan_dates_are_validated(client):
    response = _create_plan(client, _day(-2), _day(3))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "start date and end date must be in the future"

    response = _create_plan(client, _day(5), _day(3))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "start date must be before end date"


def test_plan_queries(client):
    assert client.get("/api/plans", params={"next": "true"}, headers=auth_headers()).status_code == (
        status.HTTP_404_NOT_FOUND
    )

    soon = _create_plan(client, _day(1), _day(2)).json()
    later = _create_plan(client, _day(10), _day(12)).json()

    listed = client.get("/api/plans", headers=auth_headers()).json()
    assert [plan["id"] for plan in listed] == [soon["id"], later["id"]]

    assert client.get("/api/plans", params={"last": "true"}, headers=auth_headers()).json()["id"] == later["id"]
    assert client.get("/api/plans", params={"next": "true"}, headers=auth_headers()).json()["id"] == soon["id"]

    future = client.get("/api/plans", params={"future": "true"}, headers=auth_headers()).json()
    assert [plan["id"] for plan in future] == [soon["id"], later["id"]]


def test_plans_are_private_to_household(client):
    plan = _create_plan(client, _day(1), _day(2)).json()

    assert client.get("/api/plans", headers=auth_headers("intruder")).json() == []
    response = client.get(f"/api/plans/{plan['id']}", headers=auth_headers("intruder"))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    response = client.delete(f"/api/plans/{plan['id']}", headers=auth_headers("intruder"))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_plan_ingredients_endpoint_aggregates(client):
    curry = _create_meal(
        client,
        "Curry",
        [{"name": "Rice", "amount": "1 cup"}, {"name": "Onion", "amount": "1"}],
    )
    pilaf = _create_meal(client, "Pilaf", [{"name": "rice", "amount": "1/2 cup"}])
    plan = _create_plan(client, _day(1), _day(3), [curry["id"], pilaf["id"]]).json()

    response = client.get(f"/api/plans/{plan['id']}/ingredients", headers=auth_headers())

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [
        {"name": "Rice", "amount": "1 1/2 cup"},
        {"name": "Onion", "amount": "1"},
    ]
