"""End-to-end: student request → HOD approval → security entry and exit."""

import re
from datetime import datetime

API = "/api"


def test_full_gate_pass_workflow(client, register):
    # Student signs up and logs in by roll number
    register(name="Alice", email="alice@x.edu", rollNumber="R100", department="CSE")
    student = client.post(f"{API}/auth/login",
                          json={"email": "R100", "password": "secret123", "role": "student"}).json()["user"]

    resp = client.post(f"{API}/gatepasses", json={
        "studentId": student["id"],
        "reason": "medical",
        "destination": "city hospital",
        "dateOfExit": "2030-06-01",
        "returnTime": "17:30",
    })
    assert resp.status_code == 201
    gate_pass = resp.json()["gatePass"]
    pass_id = gate_pass["passId"]
    assert pass_id == f"GP-{datetime.utcnow().strftime('%Y%m%d')}-0001"
    assert re.match(r"^GP-\d{8}-\d{4}$", pass_id)
    assert gate_pass["status"] == "pending"

    # HOD of the same department approves
    register(role="hod", name="Dr. Rao", email="rao@x.edu", employeeId="H1", department="CSE")
    hod = client.post(f"{API}/auth/login",
                      json={"email": "H1", "password": "secret123", "role": "hod"}).json()["user"]
    department_passes = client.get(f"{API}/gatepasses/department/{hod['department']}").json()
    assert pass_id in [p["passId"] for p in department_passes]

    resp = client.patch(f"{API}/gatepasses/{pass_id}/approve",
                        json={"approvedBy": hod["name"], "hodRemarks": "ok"})
    assert resp.status_code == 200

    refetched = client.get(f"{API}/gatepasses/{pass_id}").json()
    assert refetched["status"] == "approved"
    assert refetched["hodRemarks"] == "ok"
    assert refetched["approvedBy"] == "Dr. Rao"

    # Security validates and logs the movement
    register(role="security", name="Guard Singh", employeeId="SEC1")
    guard = client.post(f"{API}/auth/login",
                        json={"email": "SEC1", "password": "secret123", "role": "security"}).json()["user"]

    found = client.get(f"{API}/search/R100").json()
    assert found["passId"] == pass_id

    log = client.post(f"{API}/logs", json={"passId": found["passId"]}).json()
    assert log["entryTime"] is None and log["exitTime"] is None

    log = client.patch(f"{API}/logs/{pass_id}/entry", json={"markedBy": guard["name"]}).json()["log"]
    assert log["entryTime"] is not None
    assert log["exitTime"] is None

    log = client.patch(f"{API}/logs/{pass_id}/exit").json()["log"]
    assert log["entryTime"] is not None
    assert log["exitTime"] is not None
    assert log["status"] == "completed"

    logs = client.get(f"{API}/logs").json()
    assert [entry["logId"] for entry in logs] == [log["logId"]]


def test_health(client):
    resp = client.get(f"{API}/health")
    assert resp.status_code == 200
    assert resp.json()["database"] == "ok"
