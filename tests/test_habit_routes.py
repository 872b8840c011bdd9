"""HTTP tests for the habits blueprint."""

from __future__ import annotations

from datetime import date, timedelta

from .conftest import OTHER_USER_ID


def _create(client, headers, **payload):
    body = {"title": "Read", **payload}
    response = client.post("/habits/", json=body, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_requires_user_header(client):
    response = client.get("/habits/")

    assert response.status_code == 401
    assert "X-User-Id" in response.get_json()["error"]


def test_create_and_list(client, auth_headers):
    created = _create(
        client,
        auth_headers,
        recurrence="weekly",
        weekdays="Monday, friday",
        timeOfDay="Morning",
    )

    assert created["status"] == "Todo"
    assert created["streak"] == 0
    assert created["weekdays"] == ["monday", "friday"]
    assert created["time_of_day"] == "Morning"

    listing = client.get("/habits/all", headers=auth_headers).get_json()
    assert [habit["id"] for habit in listing["habits"]] == [created["id"]]


def test_create_validation_errors(client, auth_headers):
    response = client.post(
        "/habits/",
        json={"title": "  ", "recurrence": "hourly", "weekdays": ["someday"], "time_of_day": "Brunch"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    errors = response.get_json()["errors"]
    assert {"title", "recurrence", "weekdays"} <= set(errors)
    assert len(errors) == 4


def test_non_object_body_is_rejected(client, auth_headers):
    response = client.post("/habits/", json=["nope"], headers=auth_headers)

    assert response.status_code == 400


def test_today_board_filters_by_weekday(client, auth_headers):
    _create(client, auth_headers, title="Gym", recurrence="weekly", weekdays=["monday", "wednesday", "friday"])
    _create(client, auth_headers, title="Journal", time_of_day="Evening")

    tuesday = client.get("/habits/?date=2024-06-04", headers=auth_headers).get_json()
    wednesday = client.get("/habits/?date=2024-06-05", headers=auth_headers).get_json()

    assert tuesday["hidden_weekly"] == 1
    assert [h["title"] for g in tuesday["groups"] for h in g["habits"]] == ["Journal"]
    assert wednesday["hidden_weekly"] == 0
    assert sorted(h["title"] for g in wednesday["groups"] for h in g["habits"]) == ["Gym", "Journal"]


def test_bad_date_parameter(client, auth_headers):
    response = client.get("/habits/?date=June", headers=auth_headers)

    assert response.status_code == 400


def test_toggle_completes_then_reopens(client, auth_headers):
    habit = _create(client, auth_headers)

    done = client.post(f"/habits/{habit['id']}/toggle", headers=auth_headers).get_json()
    reopened = client.post(f"/habits/{habit['id']}/toggle", headers=auth_headers).get_json()
    done_again = client.post(f"/habits/{habit['id']}/toggle", headers=auth_headers).get_json()

    assert done["status"] == "Done"
    assert done["streak"] == 1
    assert done["last_completed_date"] is not None
    assert reopened["status"] == "Todo"
    assert reopened["streak"] == 1
    assert done_again["streak"] == 1


def test_update_habit(client, auth_headers):
    habit = _create(client, auth_headers)

    response = client.patch(
        f"/habits/{habit['id']}",
        json={"title": "Read 20 pages", "recurrence": "weekly", "weekdays": ["sunday"]},
        headers=auth_headers,
    )

    body = response.get_json()
    assert response.status_code == 200
    assert body["title"] == "Read 20 pages"
    assert body["recurrence"] == "weekly"
    assert body["weekdays"] == ["sunday"]
    assert body["time_of_day"] == "Daily"


def test_update_unknown_habit_is_404(client, auth_headers):
    response = client.patch("/habits/999", json={"title": "x"}, headers=auth_headers)

    assert response.status_code == 404


def test_delete_is_soft_and_scoped(client, auth_headers):
    habit = _create(client, auth_headers)

    other = client.delete(f"/habits/{habit['id']}", headers={"X-User-Id": OTHER_USER_ID})
    assert other.status_code == 404

    response = client.delete(f"/habits/{habit['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/habits/all", headers=auth_headers).get_json()["habits"] == []
    assert client.post(f"/habits/{habit['id']}/toggle", headers=auth_headers).status_code == 404


def test_today_defaults_to_current_day(client, auth_headers):
    _create(client, auth_headers)

    payload = client.get("/habits/", headers=auth_headers).get_json()

    assert payload["date"] in {date.today().isoformat(), (date.today() + timedelta(days=1)).isoformat()}
    assert payload["total"] == 1
