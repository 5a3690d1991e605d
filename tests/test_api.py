import logging

import pytest
from fastapi.testclient import TestClient

from timeledger.api import main
from timeledger.api.main import create_app
from timeledger.core.config import Settings
from timeledger.storage import DataStore


@pytest.fixture
def client(tmp_path):
    settings = Settings(data_path=tmp_path / "ledger.json", _env_file=None)
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def create_task(client, task_id, estimate, status="pending"):
    response = client.post("/tasks", json={"id": task_id, "title": f"Task {task_id}", "estimated_hours": estimate, "status": status})
    assert response.status_code == 201
    return response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "tasks": 0, "time_entries": 0}


def test_log_time_and_totals(client):
    create_task(client, "T1", 20)
    entries = [
        {"worker_id": "U1", "worker_name": "Ulla", "start": "08:00", "end": "16:00"},
        {"worker_id": "U2", "worker_name": "Ukko", "start": "09:00", "end": "12:00"},
        {"worker_name": "John Doe", "start": "13:00", "end": "15:00"},
    ]
    for payload in entries:
        response = client.post("/tasks/T1/time-entries", json={**payload, "date": "2025-10-23", "recorded_by": "admin"})
        assert response.status_code == 201

    listed = client.get("/tasks/T1/time-entries").json()
    totals = client.get("/tasks/T1/totals").json()

    assert [e["worker_name"] for e in listed] == ["Ulla", "Ukko", "John Doe"]
    assert [e["worker_id"] for e in listed] == ["U1", "U2", None]
    assert [e["guest"] for e in listed] == [False, False, True]
    assert listed[2]["guest"] is True
    assert listed[2]["worker_id"] is None
    assert totals["actual_hours"] == 13.0
    assert totals["remaining_hours"] == 7.0
    assert totals["hours_by_worker"] == {"U1": 8.0, "U2": 3.0}


def test_break_deduction_uses_configured_break(tmp_path):
    settings = Settings(data_path=tmp_path / "ledger.json", break_hours=1.0, _env_file=None)
    with TestClient(create_app(settings)) as client:
        create_task(client, "T1", 8)
        response = client.post(
            "/tasks/T1/time-entries",
            json={"worker_id": "U1", "date": "2025-10-23", "start": "08:00", "end": "16:00", "deduct_break": True, "recorded_by": "admin"},
        )

    assert response.json()["hours_spent"] == 7.0


def test_invalid_time_rejected(client):
    create_task(client, "T1", 1)

    response = client.post(
        "/tasks/T1/time-entries",
        json={"worker_id": "U1", "date": "2025-10-23", "start": "08:60", "end": "16:00", "recorded_by": "admin"},
    )

    assert response.status_code == 422
    assert response.json()["error"] == "InvalidFormat"
    assert client.get("/tasks/T1/time-entries").json() == []


def test_guest_without_name_rejected(client):
    create_task(client, "T1", 1)

    response = client.post(
        "/tasks/T1/time-entries",
        json={"worker_name": "", "date": "2025-10-23", "start": "08:00", "end": "16:00", "recorded_by": "admin"},
    )

    assert response.status_code == 422
    assert response.json()["error"] == "MissingWorkerIdentity"


def test_unknown_task_is_404(client):
    response = client.post(
        "/tasks/nope/time-entries",
        json={"worker_id": "U1", "date": "2025-10-23", "start": "08:00", "end": "16:00", "recorded_by": "admin"},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Task nope not found"
    assert client.get("/tasks/nope/totals").status_code == 404


def test_overview_and_status_update(client):
    create_task(client, "A", 5)
    create_task(client, "B", 3)
    for task_id, end in (("A", "15:00"), ("B", "10:00")):
        client.post(
            f"/tasks/{task_id}/time-entries",
            json={"worker_id": "U1", "date": "2025-10-23", "start": "08:00", "end": end, "recorded_by": "admin"},
        )

    updated = client.patch("/tasks/B/status", json={"status": "completed"})
    overview = client.get("/overview").json()

    assert updated.json()["status"] == "completed"
    assert updated.json()["actual_hours"] == 2.0
    assert overview == {"pending_count": 1, "total_estimated_hours": 5.0, "total_actual_hours": 9.0}
    assert [t["id"] for t in client.get("/tasks", params={"task_status": "pending"}).json()] == ["A"]


def test_duplicate_task_rejected(client):
    create_task(client, "A", 1)

    response = client.post("/tasks", json={"id": "A", "title": "Again"})

    assert response.status_code == 409
    assert response.json()["detail"] == "Task A already exists"
    assert client.get("/tasks").json()[0]["title"] == "Task A"


def test_injected_store_is_used_and_logged(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    store = DataStore(tmp_path / "injected.json")
    settings = Settings(data_path=tmp_path / "configured.json", _env_file=None)

    with TestClient(create_app(settings, store=store)) as client:
        create_task(client, "T1", 2)

    assert (tmp_path / "injected.json").exists()
    assert not (tmp_path / "configured.json").exists()
    startup = [r.getMessage() for r in caplog.records if "startup_complete" in r.getMessage()]
    assert startup and str(tmp_path / "injected.json") in startup[0]


def test_module_builds_no_app_at_import():
    assert not hasattr(main, "app")
