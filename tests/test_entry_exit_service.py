"""Entry/exit log lifecycle at the security desk."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from app.config import settings
from app.models.entry_exit_log import EntryExitLog
from app.services.entry_exit_service import mark_exit
from app.services.gatepass_service import TransitionError

API = "/api"


def open_log(client, pass_id):
    return client.post(f"{API}/logs", json={"passId": pass_id})


class TestOpenLog:
    def test_first_lookup_creates_log(self, client, approved_pass):
        resp = open_log(client, approved_pass["passId"])
        assert resp.status_code == 200
        log = resp.json()
        assert log["logId"] == "LOG0001"
        assert log["passId"] == approved_pass["passId"]
        assert log["gatePassId"] == approved_pass["id"]
        assert log["studentName"] == "Alice"
        assert log["rollNumber"] == "R100"
        assert log["entryTime"] is None
        assert log["exitTime"] is None
        assert log["status"] == "awaiting-entry"

    def test_second_lookup_reuses_log(self, client, db, approved_pass):
        first = open_log(client, approved_pass["passId"]).json()
        second = open_log(client, approved_pass["passId"]).json()
        assert first["id"] == second["id"]
        assert db.query(EntryExitLog).filter(EntryExitLog.gate_pass_id == approved_pass["id"]).count() == 1

    def test_log_ids_are_sequential(self, client, student, submit_pass, approved_pass):
        other = submit_pass(student["id"])
        client.patch(f"{API}/gatepasses/{other['passId']}/approve", json={"approvedBy": "Dr. Rao"})
        assert open_log(client, approved_pass["passId"]).json()["logId"] == "LOG0001"
        assert open_log(client, other["passId"]).json()["logId"] == "LOG0002"

    def test_unknown_pass(self, client, db):
        resp = open_log(client, "GP-20000101-0001")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Gate pass not found"}

    def test_pending_pass_allowed_by_default(self, client, student, submit_pass):
        gate_pass = submit_pass(student["id"])
        assert open_log(client, gate_pass["passId"]).status_code == 200

    def test_pending_pass_conflict_in_strict_mode(self, client, student, submit_pass, monkeypatch):
        monkeypatch.setattr(settings, "STRICT_TRANSITIONS", True)
        gate_pass = submit_pass(student["id"])
        resp = open_log(client, gate_pass["passId"])
        assert resp.status_code == 409
        assert "not approved" in resp.json()["error"]


class TestMarking:
    def test_entry_then_exit(self, client, approved_pass):
        pass_id = approved_pass["passId"]
        open_log(client, pass_id)

        resp = client.patch(f"{API}/logs/{pass_id}/entry", json={"markedBy": "Guard Singh"})
        assert resp.status_code == 200
        entered = resp.json()
        assert entered["message"] == "Entry marked successfully"
        assert entered["log"]["entryTime"] is not None
        assert entered["log"]["exitTime"] is None
        assert entered["log"]["markedBy"] == "Guard Singh"
        assert entered["log"]["status"] == "in-transit"

        resp = client.patch(f"{API}/logs/{pass_id}/exit")
        assert resp.status_code == 200
        exited = resp.json()["log"]
        assert exited["exitTime"] is not None
        assert exited["entryTime"] == entered["log"]["entryTime"]
        assert exited["markedBy"] == "Guard Singh"
        assert exited["status"] == "completed"

    def test_entry_without_log(self, client, approved_pass):
        resp = client.patch(f"{API}/logs/{approved_pass['passId']}/entry", json={"markedBy": "Guard"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Entry/exit log not found"}

    @pytest.mark.parametrize("action", ["entry", "exit"])
    def test_unknown_pass(self, client, db, action):
        resp = client.patch(f"{API}/logs/GP-20000101-0001/{action}", json={})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Gate pass not found"}

    def test_exit_before_entry_accepted_by_default(self, client, approved_pass):
        open_log(client, approved_pass["passId"])
        log = client.patch(f"{API}/logs/{approved_pass['passId']}/exit").json()["log"]
        assert log["entryTime"] is None
        assert log["exitTime"] is not None

    def test_exit_before_entry_conflict_in_strict_mode(self, client, approved_pass, monkeypatch):
        monkeypatch.setattr(settings, "STRICT_TRANSITIONS", True)
        open_log(client, approved_pass["passId"])
        resp = client.patch(f"{API}/logs/{approved_pass['passId']}/exit")
        assert resp.status_code == 409

    def test_double_entry_conflict_in_strict_mode(self, client, approved_pass, monkeypatch):
        monkeypatch.setattr(settings, "STRICT_TRANSITIONS", True)
        pass_id = approved_pass["passId"]
        open_log(client, pass_id)
        assert client.patch(f"{API}/logs/{pass_id}/entry", json={"markedBy": "G"}).status_code == 200
        assert client.patch(f"{API}/logs/{pass_id}/entry", json={"markedBy": "G"}).status_code == 409

    def test_strict_exit_leaves_session_untouched(self, monkeypatch):
        monkeypatch.setattr(settings, "STRICT_TRANSITIONS", True)
        log = MagicMock(entry_time=None, exit_time=None, pass_id="GP-20250601-0001")
        db = MagicMock()

        with pytest.raises(TransitionError):
            mark_exit(db, log)

        db.commit.assert_not_called()
        assert log.exit_time is None


class TestListingAndStats:
    def _approve_new(self, client, student_id, submit_pass):
        gate_pass = submit_pass(student_id)
        client.patch(f"{API}/gatepasses/{gate_pass['passId']}/approve", json={"approvedBy": "Dr. Rao"})
        return gate_pass["passId"]

    def test_logs_newest_first(self, client, student, submit_pass):
        ids = [self._approve_new(client, student["id"], submit_pass) for _ in range(3)]
        for pass_id in ids:
            open_log(client, pass_id)
        logs = client.get(f"{API}/logs").json()
        assert [log["logId"] for log in logs] == ["LOG0003", "LOG0002", "LOG0001"]

    def test_logs_capped(self, client, student, submit_pass, monkeypatch):
        monkeypatch.setattr(settings, "RECENT_LOGS_LIMIT", 2)
        for _ in range(3):
            open_log(client, self._approve_new(client, student["id"], submit_pass))
        assert len(client.get(f"{API}/logs").json()) == 2

    def test_daily_counts(self, client, student, submit_pass):
        out_now = self._approve_new(client, student["id"], submit_pass)
        back = self._approve_new(client, student["id"], submit_pass)
        untouched = self._approve_new(client, student["id"], submit_pass)
        for pass_id in (out_now, back, untouched):
            open_log(client, pass_id)
        client.patch(f"{API}/logs/{out_now}/entry", json={"markedBy": "G"})
        client.patch(f"{API}/logs/{back}/entry", json={"markedBy": "G"})
        client.patch(f"{API}/logs/{back}/exit")

        stats = client.get(f"{API}/logs/stats/today").json()
        assert stats == {"date": str(datetime.utcnow().date()), "entries": 2, "exits": 1, "currentlyOut": 1}

    def test_daily_counts_for_other_date(self, client, approved_pass):
        open_log(client, approved_pass["passId"])
        client.patch(f"{API}/logs/{approved_pass['passId']}/entry", json={"markedBy": "G"})
        stats = client.get(f"{API}/logs/stats/today", params={"target_date": "2000-01-01"}).json()
        assert stats["entries"] == 0
        assert stats["currentlyOut"] == 1
