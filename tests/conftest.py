"""Shared fixtures: in-memory SQLite database, API client, account/pass factories."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STRICT_TRANSITIONS"] = "false"

import pytest
from fastapi.testclient import TestClient
from app.database import Base, SessionLocal, engine, create_tables
from app.main import app

API = "/api"


@pytest.fixture
def db():
    create_tables()
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def register(client):
    def _register(role="student", password="secret123", **fields):
        resp = client.post(f"{API}/auth/register", json={"role": role, "password": password, **fields})
        assert resp.status_code == 201, resp.text
        return resp.json()["user"]
    return _register


@pytest.fixture
def student(register):
    return register(name="Alice", email="alice@x.edu", rollNumber="R100", department="CSE")


@pytest.fixture
def submit_pass(client):
    def _submit(student_id, reason="medical", destination="city hospital"):
        resp = client.post(f"{API}/gatepasses", json={
            "studentId": student_id,
            "reason": reason,
            "destination": destination,
            "dateOfExit": "2030-06-02",
            "returnTime": "18:00",
        })
        assert resp.status_code == 201, resp.text
        return resp.json()["gatePass"]
    return _submit


@pytest.fixture
def approved_pass(client, student, submit_pass):
    gate_pass = submit_pass(student["id"])
    resp = client.patch(f"{API}/gatepasses/{gate_pass['passId']}/approve", json={"approvedBy": "Dr. Rao"})
    assert resp.status_code == 200, resp.text
    return resp.json()["gatePass"]
