"""HTTP-level tests: routing, status codes and error mapping."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

API = "/api/v1"


def _create_category(client, name="Work", color="#ff0000"):
    response = client.post(f"{API}/categories", json={"name": name, "color": color})
    assert response.status_code == 201
    return response.json()


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "timestamp" in response.json()


def test_ship_report_over_http(client):
    work = _create_category(client)

    response = client.post(f"{API}/tasks", json={"title": "Ship report", "category_ids": [work["id"]]})
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "pending"
    assert created["priority"] == "medium"

    response = client.get(f"{API}/tasks", params={"category_id": work["id"]})
    assert response.status_code == 200
    tasks = response.json()
    assert [t["title"] for t in tasks] == ["Ship report"]
    assert [(c["id"], c["name"], c["color"]) for c in tasks[0]["categories"]] == [
        (work["id"], "Work", "#ff0000")
    ]


def test_create_task_with_unknown_category_is_rejected(client):
    work = _create_category(client)

    response = client.post(f"{API}/tasks", json={"title": "Bad", "category_ids": [work["id"], 999]})

    assert response.status_code == 400
    assert response.json()["missing_ids"] == [999]
    assert client.get(f"{API}/tasks").json() == []


def test_create_task_validation_error(client):
    assert client.post(f"{API}/tasks", json={"title": ""}).status_code == 422
    assert client.post(f"{API}/tasks", json={"title": "x", "status": "done"}).status_code == 422


def test_list_tasks_rejects_bad_query(client):
    assert client.get(f"{API}/tasks", params={"sort": "title_asc"}).status_code == 422
    assert client.get(f"{API}/tasks", params={"limit": 0}).status_code == 422
    assert client.get(f"{API}/tasks", params={"offset": -1}).status_code == 422


def test_list_tasks_sort_and_paginate(client):
    for priority in ("low", "high", "medium"):
        client.post(f"{API}/tasks", json={"title": priority, "priority": priority})

    response = client.get(f"{API}/tasks", params={"sort": "priority_desc", "limit": 2})

    assert [t["title"] for t in response.json()] == ["high", "medium"]


def test_list_tasks_due_date_filter(client):
    client.post(f"{API}/tasks", json={"title": "soon", "due_date": "2024-03-01T00:00:00Z"})
    client.post(f"{API}/tasks", json={"title": "later", "due_date": "2024-09-01T00:00:00Z"})

    response = client.get(f"{API}/tasks", params={"due_before": "2024-06-01T00:00:00Z"})

    assert [t["title"] for t in response.json()] == ["soon"]


def test_get_task_not_found(client):
    assert client.get(f"{API}/tasks/999").status_code == 404


def test_patch_task(client):
    work = _create_category(client)
    task = client.post(
        f"{API}/tasks",
        json={"title": "Draft", "description": "notes", "category_ids": [work["id"]]},
    ).json()

    response = client.patch(f"{API}/tasks/{task['id']}", json={"description": None, "status": "completed"})
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Draft"
    assert body["description"] is None
    assert body["status"] == "completed"
    assert [c["id"] for c in body["categories"]] == [work["id"]]

    response = client.patch(f"{API}/tasks/{task['id']}", json={"category_ids": []})
    assert response.json()["categories"] == []


def test_patch_task_errors(client):
    assert client.patch(f"{API}/tasks/999", json={"title": "Ghost"}).status_code == 404

    task = client.post(f"{API}/tasks", json={"title": "Real"}).json()
    assert client.patch(f"{API}/tasks/{task['id']}", json={"title": None}).status_code == 422
    assert client.patch(f"{API}/tasks/{task['id']}", json={"category_ids": [999]}).status_code == 400


def test_delete_task(client):
    task = client.post(f"{API}/tasks", json={"title": "Temp"}).json()

    assert client.delete(f"{API}/tasks/{task['id']}").json() == {"success": True}
    assert client.delete(f"{API}/tasks/{task['id']}").json() == {"success": False}
    assert client.get(f"{API}/tasks/{task['id']}").status_code == 404


def test_category_crud(client):
    home = _create_category(client, "Home", None)
    work = _create_category(client, "Work", "#ff0000")

    assert [c["name"] for c in client.get(f"{API}/categories").json()] == ["Home", "Work"]
    assert client.get(f"{API}/categories/{home['id']}").json()["name"] == "Home"
    assert client.get(f"{API}/categories/999").status_code == 404

    response = client.patch(f"{API}/categories/{work['id']}", json={"color": None})
    assert response.status_code == 200
    assert response.json() == {**work, "color": None}

    assert client.patch(f"{API}/categories/999", json={"name": "x"}).status_code == 404
    assert client.post(f"{API}/categories", json={"name": ""}).status_code == 422

    assert client.delete(f"{API}/categories/{home['id']}").json() == {"success": True}
    assert client.delete(f"{API}/categories/{home['id']}").json() == {"success": False}


def test_deleting_category_detaches_it_from_tasks(client):
    work = _create_category(client, "Work")
    home = _create_category(client, "Home")
    task = client.post(f"{API}/tasks", json={"title": "Tagged", "category_ids": [work["id"], home["id"]]}).json()

    client.delete(f"{API}/categories/{work['id']}")

    body = client.get(f"{API}/tasks/{task['id']}").json()
    assert [c["id"] for c in body["categories"]] == [home["id"]]


def test_due_date_round_trips_as_utc_over_http(client):
    response = client.post(
        f"{API}/tasks", json={"title": "Dated", "due_date": "2024-03-01T12:00:00+02:00"}
    )
    assert response.status_code == 201
    task_id = response.json()["id"]

    fetched = client.get(f"{API}/tasks/{task_id}").json()
    assert fetched["due_date"].startswith("2024-03-01T10:00:00")


@pytest.mark.parametrize("path", ["/tasks", "/tasks/1", "/categories"])
def test_storage_failure_maps_to_503(client, monkeypatch, path):
    def broken_exec(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("could not connect to server"))

    monkeypatch.setattr(Session, "exec", broken_exec)

    response = client.get(f"{API}{path}")
    assert response.status_code == 503
    assert "detail" in response.json()
