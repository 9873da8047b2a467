# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Ticket Desk: HTTP tests
========================
Run:  pytest -v
Each test gets a fresh data file through the DocumentStore dependency.
"""
import json
import pathlib

import pytest
from fastapi.testclient import TestClient

from main import app
from ticketdesk.core.dependencies import get_document_store
from ticketdesk.repositories import DocumentStore

client = TestClient(app)

EMPTY_DOCUMENT = {"teams": [], "users": [], "tickets": []}


@pytest.fixture(autouse=True)
def data_file(tmp_path):
    """Point the app at an empty data file for the duration of one test."""
    path = tmp_path / "data.json"
    path.write_text(json.dumps(EMPTY_DOCUMENT), encoding="utf-8")
    store = DocumentStore(path)
    app.dependency_overrides[get_document_store] = lambda: store
    yield path
    app.dependency_overrides.clear()


def read_file(path):
    return json.loads(path.read_text(encoding="utf-8"))


VALID_USER = {
    "firstName": "Asha",
    "lastName": "Rao",
    "emailId": "asha.rao@gmail.com",
    "phno": "9876543210",
    "employeeId": 1001,
    "designation": "Engineer",
    "teamId": 1,
}

VALID_TICKET = {
    "title": "Login page broken",
    "description": "500 on submit",
    "team": "Platform",
    "status": "open",
    "assignee": "asha",
    "reporter": "ravi",
}


def violations(response):
    return [(e["field"], e["message"]) for e in response.json()["errors"]]


# ═══════════════════════════════════════════════════════════════════════════
# HEALTH & METRICS
# ═══════════════════════════════════════════════════════════════════════════
class TestHealth:
    def test_health_returns_ok(self):
        r = client.get("/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "ok"
        assert data["service"] == "ticketdesk"
        assert "timestamp" in data

    def test_readiness_reports_collection_sizes(self):
        client.post("/teams", json={"name": "Core", "members": ["a"]})
        r = client.get("/health/ready")
        assert r.status_code == 200
        assert r.json()["collections"] == {"teams": 1, "users": 0, "tickets": 0}

    def test_readiness_fails_when_file_is_corrupt(self, data_file):
        data_file.write_text("{not json", encoding="utf-8")
        r = client.get("/health/ready")
        assert r.status_code == 503
        assert r.json()["status"] == "not_ready"

    def test_request_id_propagated(self):
        r = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert r.headers["X-Request-ID"] == "req-42"

    def test_request_id_generated(self):
        r = client.get("/health")
        assert len(r.headers.get("X-Request-ID", "")) > 0

    def test_metrics_exposed(self):
        client.post("/teams", json={"name": "Core", "members": []})
        r = client.get("/metrics")
        assert r.status_code == 200
        assert "ticketdesk_entity_operations_total" in r.text
        assert "ticketdesk_requests_total" in r.text


# ═══════════════════════════════════════════════════════════════════════════
# TEAMS
# ═══════════════════════════════════════════════════════════════════════════
class TestTeams:
    def test_list_empty(self):
        r = client.get("/teams")
        assert r.status_code == 200
        assert r.json() == []

    def test_create_assigns_first_id(self, data_file):
        r = client.post("/teams", json={"name": "Core", "members": ["alice", "bob"]})
        assert r.status_code == 201
        assert r.json() == {"name": "Core", "members": ["alice", "bob"], "id": 1}
        assert read_file(data_file)["teams"] == [r.json()]

    def test_create_uses_max_id_plus_one(self, data_file):
        data_file.write_text(json.dumps({
            "teams": [{"id": 7, "name": "A", "members": []}, {"id": 3, "name": "B", "members": []}],
            "users": [], "tickets": [],
        }), encoding="utf-8")
        r = client.post("/teams", json={"name": "C", "members": []})
        assert r.status_code == 201
        assert r.json()["id"] == 8
        assert len(client.get("/teams").json()) == 3

    def test_duplicate_name_rejected(self):
        client.post("/teams", json={"name": "Core", "members": []})
        r = client.post("/teams", json={"name": "Core", "members": []})
        assert r.status_code == 400
        assert ("name", "Team name already exists") in violations(r)
        assert {"field": "name", "message": "Team name already exists", "value": "Core"} in r.json()["errors"]

    def test_name_case_not_normalized(self):
        client.post("/teams", json={"name": "Core", "members": []})
        r = client.post("/teams", json={"name": "core", "members": []})
        assert r.status_code == 201

    def test_members_already_in_other_team_listed(self):
        client.post("/teams", json={"name": "Core", "members": ["alice", "bob", "carol"]})
        r = client.post("/teams", json={"name": "Edge", "members": ["alice", "dave", "carol"]})
        assert r.status_code == 400
        assert ("members", "Members alice, carol are already in other teams") in violations(r)
        assert len(client.get("/teams").json()) == 1

    def test_missing_fields_all_reported(self):
        r = client.post("/teams", json={})
        assert r.status_code == 400
        assert violations(r) == [
            ("name", "Team name is required"),
            ("members", "Members should be an array"),
        ]

    def test_client_supplied_id_rejected(self):
        r = client.post("/teams", json={"id": 99, "name": "Core", "members": []})
        assert r.status_code == 400
        assert violations(r) == [("id", "Invalid field")]

    def test_update_merges(self):
        client.post("/teams", json={"name": "Core", "members": ["alice"]})
        r = client.put("/teams/1", json={"name": "Platform"})
        assert r.status_code == 200
        assert r.json() == {"name": "Platform", "members": ["alice"], "id": 1}

    def test_update_keeps_own_members(self):
        client.post("/teams", json={"name": "Core", "members": ["alice"]})
        r = client.put("/teams/1", json={"members": ["alice", "bob"]})
        assert r.status_code == 200
        assert r.json()["members"] == ["alice", "bob"]

    def test_update_unknown_field_leaves_entity_unchanged(self):
        created = client.post("/teams", json={"name": "Core", "members": ["alice"]}).json()
        r = client.put("/teams/1", json={"foo": 1})
        assert r.status_code == 400
        assert ("foo", "Invalid field") in violations(r)
        assert client.get("/teams").json() == [created]

    def test_update_missing_team_404(self):
        r = client.put("/teams/5", json={"name": "X"})
        assert r.status_code == 404
        assert r.json() == {"message": "Team not found"}

    def test_update_non_integer_id_400(self):
        r = client.put("/teams/abc", json={"name": "X"})
        assert r.status_code == 400
        assert violations(r) == [("teamId", "Team ID must be an integer")]

    def test_delete_returns_snapshot(self):
        created = client.post("/teams", json={"name": "Core", "members": ["alice"]}).json()
        r = client.delete("/teams/1")
        assert r.status_code == 200
        assert r.json() == created
        assert client.get("/teams").json() == []

    def test_delete_missing_404_leaves_collection(self):
        client.post("/teams", json={"name": "Core", "members": []})
        before = client.get("/teams").json()
        r = client.delete("/teams/9999")
        assert r.status_code == 404
        assert client.get("/teams").json() == before

    def test_delete_non_integer_id_400(self):
        r = client.delete("/teams/1.5")
        assert r.status_code == 400


# ═══════════════════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════════════════
class TestUsers:
    def test_round_trip(self):
        r = client.post("/users", json=VALID_USER)
        assert r.status_code == 201
        created = r.json()
        assert created["id"] == 1
        assert created in client.get("/users").json()

        again = dict(VALID_USER, phno="1234567890", employeeId=2002)
        r = client.post("/users", json=again)
        assert r.status_code == 400
        assert ("emailId", "Email ID already exists") in violations(r)

    def test_non_gmail_rejected(self):
        r = client.post("/users", json=dict(VALID_USER, emailId="asha@yahoo.com"))
        assert r.status_code == 400
        assert violations(r) == [("emailId", "Email must be a Gmail address")]

    def test_bad_email_format(self):
        r = client.post("/users", json=dict(VALID_USER, emailId="not-an-email"))
        assert ("emailId", "Invalid email format") in violations(r)

    def test_phone_rules(self):
        r = client.post("/users", json=dict(VALID_USER, phno="12345abcde"))
        assert violations(r) == [("phno", "Phone number must contain only digits")]
        r = client.post("/users", json=dict(VALID_USER, phno="12345"))
        assert violations(r) == [("phno", "Phone number must be 10 digits")]

    def test_duplicate_phone_and_employee_id(self):
        client.post("/users", json=VALID_USER)
        r = client.post("/users", json=dict(VALID_USER, emailId="other@gmail.com"))
        assert r.status_code == 400
        assert violations(r) == [
            ("phno", "Phone number already exists"),
            ("employeeId", "Employee ID already exists"),
        ]

    def test_unknown_field_rejected_before_other_rules(self):
        r = client.post("/users", json={"nickname": "ash"})
        assert r.status_code == 400
        assert violations(r) == [("nickname", "Invalid field")]

    def test_team_id_not_checked_against_teams(self):
        r = client.post("/users", json=dict(VALID_USER, teamId=404))
        assert r.status_code == 201

    def test_update_own_email_allowed(self):
        client.post("/users", json=VALID_USER)
        r = client.put("/users/1", json={"emailId": VALID_USER["emailId"], "designation": "Lead"})
        assert r.status_code == 200
        assert r.json()["designation"] == "Lead"

    def test_update_empty_first_name(self):
        client.post("/users", json=VALID_USER)
        r = client.put("/users/1", json={"firstName": "   "})
        assert violations(r) == [("firstName", "First name is required if provided")]

    def test_delete_user(self):
        client.post("/users", json=VALID_USER)
        r = client.delete("/users/1")
        assert r.status_code == 200
        assert r.json()["emailId"] == VALID_USER["emailId"]
        assert client.delete("/users/1").status_code == 404

    def test_storage_failure_500(self, data_file):
        data_file.unlink()
        r = client.get("/users")
        assert r.status_code == 500
        assert r.json() == {"message": "Error reading data from file"}

    def test_padded_values_stored_trimmed(self, data_file):
        padded = dict(VALID_USER, firstName="  Asha ", emailId=" asha.rao@gmail.com ", phno=" 9876543210 ")
        r = client.post("/users", json=padded)
        assert r.status_code == 201
        stored = read_file(data_file)["users"][0]
        assert (stored["firstName"], stored["emailId"], stored["phno"]) == (
            "Asha", "asha.rao@gmail.com", "9876543210",
        )

        r = client.post("/users", json=dict(VALID_USER, emailId="other@gmail.com", employeeId=2002))
        assert r.status_code == 400
        assert violations(r) == [("phno", "Phone number already exists")]

        r = client.post("/users", json=dict(VALID_USER, phno="1234567890", employeeId=2002))
        assert r.status_code == 400
        assert violations(r) == [("emailId", "Email ID already exists")]

    def test_padded_update_stored_trimmed(self, data_file):
        client.post("/users", json=VALID_USER)
        r = client.put("/users/1", json={"designation": " Lead  "})
        assert r.status_code == 200
        assert read_file(data_file)["users"][0]["designation"] == "Lead"


# ═══════════════════════════════════════════════════════════════════════════
# TICKETS
# ═══════════════════════════════════════════════════════════════════════════
class TestTickets:
    def test_create_and_list(self):
        r = client.post("/tickets", json=VALID_TICKET)
        assert r.status_code == 201
        assert r.json() == dict(VALID_TICKET, id=1)
        assert client.get("/tickets").json() == [dict(VALID_TICKET, id=1)]

    def test_partial_update_changes_only_status(self):
        client.post("/tickets", json=VALID_TICKET)
        r = client.put("/tickets/1", json={"status": "closed"})
        assert r.status_code == 200
        assert r.json() == dict(VALID_TICKET, status="closed", id=1)

    def test_update_with_empty_value(self):
        client.post("/tickets", json=VALID_TICKET)
        r = client.put("/tickets/1", json={"title": ""})
        assert r.status_code == 400
        assert violations(r) == [("title", "Title cannot be empty")]

    def test_create_missing_fields(self):
        r = client.post("/tickets", json={"title": "Only a title"})
        assert r.status_code == 400
        fields = [f for f, _ in violations(r)]
        assert fields == ["description", "team", "status", "assignee", "reporter"]

    def test_team_is_free_text(self):
        r = client.post("/tickets", json=dict(VALID_TICKET, team="No Such Team"))
        assert r.status_code == 201

    def test_non_object_body_400(self):
        r = client.post("/tickets", json=["not", "an", "object"])
        assert r.status_code == 400
        assert "errors" in r.json()

    def test_invalid_json_400(self):
        r = client.post("/tickets", content=b"{oops", headers={"Content-Type": "application/json"})
        assert r.status_code == 400
        assert [f for f, _ in violations(r)] == ["body"]

    def test_delete_missing_404(self):
        r = client.delete("/tickets/3")
        assert r.status_code == 404
        assert r.json() == {"message": "Ticket not found"}


# ═══════════════════════════════════════════════════════════════════════════
# WRITE FAILURES
# ═══════════════════════════════════════════════════════════════════════════
def _unwritable(monkeypatch):
    def refuse(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))
    monkeypatch.setattr(pathlib.Path, "write_text", refuse)


class TestWriteFailures:
    def test_create_500_leaves_file(self, data_file, monkeypatch):
        before = data_file.read_text(encoding="utf-8")
        _unwritable(monkeypatch)
        r = client.post("/tickets", json=VALID_TICKET)
        assert r.status_code == 500
        assert r.json() == {"message": "Error writing data to file"}
        assert data_file.read_text(encoding="utf-8") == before

    def test_update_500_leaves_file(self, data_file, monkeypatch):
        client.post("/teams", json={"name": "Core", "members": []})
        before = data_file.read_text(encoding="utf-8")
        _unwritable(monkeypatch)
        r = client.put("/teams/1", json={"name": "Platform"})
        assert r.status_code == 500
        assert r.json() == {"message": "Error writing data to file"}
        assert data_file.read_text(encoding="utf-8") == before

    def test_delete_500_leaves_file(self, data_file, monkeypatch):
        client.post("/users", json=VALID_USER)
        before = data_file.read_text(encoding="utf-8")
        _unwritable(monkeypatch)
        r = client.delete("/users/1")
        assert r.status_code == 500
        assert r.json() == {"message": "Error writing data to file"}
        assert data_file.read_text(encoding="utf-8") == before
        assert len(read_file(data_file)["users"]) == 1
