from __future__ import annotations

import pytest

from src.timeclock.timeclock.container import assemble_container
from src.timeclock.timeclock.main import create_app
from src.timeclock.timeclock.shifts.model import Shift

from tests.fakes import utc


@pytest.fixture
def app(monkeypatch, shifts, punches, profiles, company_settings):
    monkeypatch.setenv("APP_ENV", "testing")
    shifts.add(
        Shift(
            shift_id=7,
            employee_id="e1",
            company_id="c1",
            start_time=utc(2024, 5, 6, 9, 0),
            end_time=utc(2024, 5, 6, 17, 0),
        )
    )
    container = assemble_container(
        shifts_repo=shifts,
        punches_repo=punches,
        profiles_repo=profiles,
        company_settings_repo=company_settings,
        timezone_name="UTC",
        clock=lambda: utc(2024, 5, 8, 12, 0),
    )
    app = create_app(container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_employee_days(client):
    res = client.get("/api/employees/e1/days?start=2024-05-06&end=2024-05-07")

    assert res.status_code == 200
    body = res.get_json()
    assert [d["date"] for d in body["days"]] == ["2024-05-06", "2024-05-07"]
    assert body["days"][0]["source"] == "schedule"
    assert body["days"][0]["shift_id"] == 7
    assert body["days"][1]["has_data"] is False


def test_employee_days_defaults_to_last_week(client):
    body = client.get("/api/employees/e1/days").get_json()

    assert body["start"] == "2024-05-02"
    assert body["end"] == "2024-05-08"
    assert len(body["days"]) == 7


@pytest.mark.parametrize("query", ["start=06-05-2024", "start=2024-05-08&end=2024-05-06"])
def test_employee_days_rejects_bad_range(client, query):
    assert client.get(f"/api/employees/e1/days?{query}").status_code == 400


def test_auto_punch_in_endpoint(client):
    res = client.post("/api/jobs/auto-punch-in")

    assert res.status_code == 200
    assert res.get_json()["processed_count"] == 0


def test_auto_punch_out_with_forced_date(client):
    res = client.post("/api/jobs/auto-punch-out", json={"date": "2024-05-06", "force": True})

    assert res.status_code == 200
    body = res.get_json()
    assert [n["date"] for n in body["normalized"]] == ["2024-05-06"]
    assert body["normalized"][0]["normalized"] == 1


def test_auto_punch_out_rejects_bad_date(client):
    assert client.post("/api/jobs/auto-punch-out", json={"date": "yesterday"}).status_code == 400


def test_normalize_defaults_to_today(client):
    res = client.post("/api/jobs/normalize")

    assert res.status_code == 200
    assert res.get_json()["date"] == "2024-05-08"


def test_job_token_is_enforced(app, client):
    app.config["JOB_TOKEN"] = "t0ken"

    assert client.post("/api/jobs/normalize").status_code == 401
    assert client.post("/api/jobs/normalize", headers={"X-Job-Token": "wrong"}).status_code == 401
    assert client.post("/api/jobs/normalize", headers={"X-Job-Token": "t0ken"}).status_code == 200
