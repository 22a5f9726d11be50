"""Integration tests for API endpoints."""

from collections.abc import Generator
import json
from unittest.mock import patch

from fastapi.testclient import TestClient
import pytest
from sqlmodel import Session

from pokerpal.api.deps import get_session
from pokerpal.core.exceptions import SettlementError
from pokerpal.main import app

SESSION_BODY = {
    "date": "2024-05-01",
    "location": "Bob's place",
    "added_by": "Alice",
    "buy_in_amount": 10,
    "players": [
        {"name": "Alice", "result": 20, "buy_ins": 2},
        {"name": "Bob", "result": -10, "buy_ins": 1},
        {"name": "Carol", "result": -10, "buy_ins": 1},
    ],
}


@pytest.fixture
def client(test_engine) -> Generator[TestClient, None, None]:
    """Create a test client with overridden dependencies."""

    def get_test_session() -> Generator[Session, None, None]:
        with Session(test_engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_test_session

    with (
        patch("pokerpal.main.create_db_and_tables"),
        TestClient(app, raise_server_exceptions=False) as test_client,
    ):
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def api_roster(client) -> list[str]:
    for name in ["Alice", "Bob", "Carol"]:
        client.post("/api/v1/roster/", json={"name": name})
    return ["Alice", "Bob", "Carol"]


@pytest.fixture
def created_session(client, api_roster) -> dict:
    response = client.post("/api/v1/sessions/", json=SESSION_BODY)
    assert response.status_code == 201
    return response.json()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to PokerPal API"}


class TestRosterEndpoints:
    def test_add_and_list(self, client, api_roster):
        response = client.get("/api/v1/roster/")

        assert response.status_code == 200
        assert response.json() == {"players": api_roster, "max_players": 10}

    def test_duplicate_player_conflict(self, client, api_roster):
        response = client.post("/api/v1/roster/", json={"name": "Bob"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "player_exists"

    def test_blank_name(self, client):
        response = client.post("/api/v1/roster/", json={"name": "  "})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "missing_required_field"

    def test_remove_player(self, client, api_roster):
        response = client.delete("/api/v1/roster/Bob")

        assert response.status_code == 200
        assert response.json()["players"] == ["Alice", "Carol"]

    def test_remove_unknown_player(self, client, api_roster):
        response = client.delete("/api/v1/roster/Mallory")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not_found"


class TestSessionEndpoints:
    def test_check_reports_running_balance(self, client, api_roster):
        body = {
            **SESSION_BODY,
            "players": [{"name": "Alice", "result": 25, "buy_ins": 1}],
        }

        response = client.post("/api/v1/sessions/check", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["balance"]["balance"] == pytest.approx(25.0)
        assert data["balance"]["is_balanced"] is False
        assert [e["code"] for e in data["errors"]] == ["unbalanced_session"]

    def test_create_session(self, created_session):
        assert created_session["total_pot"] == pytest.approx(40.0)
        assert created_session["settled"] is False
        assert [p["name"] for p in created_session["players"]] == [
            "Alice",
            "Bob",
            "Carol",
        ]

    def test_unbalanced_session_rejected(self, client, api_roster):
        body = {
            **SESSION_BODY,
            "players": [
                {"name": "Alice", "result": 15, "buy_ins": 1},
                {"name": "Bob", "result": -10, "buy_ins": 1},
            ],
        }

        response = client.post("/api/v1/sessions/", json=body)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "unbalanced_session"
        assert error["details"]["balance"] == pytest.approx(5.0)
        assert client.get("/api/v1/sessions/").json() == []

    def test_malformed_body(self, client):
        response = client.post(
            "/api/v1/sessions/",
            json={**SESSION_BODY, "players": [{"name": "A", "buy_ins": -1}]},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "request_validation_error"

    def test_get_and_list(self, client, created_session):
        session_id = created_session["id"]

        assert client.get(f"/api/v1/sessions/{session_id}").json() == created_session
        assert [s["id"] for s in client.get("/api/v1/sessions/").json()] == [
            session_id
        ]

    def test_get_missing(self, client):
        response = client.get("/api/v1/sessions/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not_found"

    def test_update(self, client, created_session):
        body = {**SESSION_BODY, "location": "Carol's"}

        response = client.put(f"/api/v1/sessions/{created_session['id']}", json=body)

        assert response.status_code == 200
        assert response.json()["location"] == "Carol's"

    def test_delete(self, client, created_session):
        session_id = created_session["id"]

        response = client.delete(f"/api/v1/sessions/{session_id}")

        assert response.status_code == 204
        assert client.get(f"/api/v1/sessions/{session_id}").status_code == 404


class TestSettlementEndpoints:
    def test_preview(self, client, created_session):
        response = client.get(f"/api/v1/sessions/{created_session['id']}/settlement")

        assert response.status_code == 200
        assert sorted(t["from_player"] for t in response.json()) == ["Bob", "Carol"]
        assert client.get("/api/v1/debts/").json() == []

    def test_settle_then_edit_rejected(self, client, created_session):
        session_id = created_session["id"]

        response = client.post(f"/api/v1/sessions/{session_id}/settle")

        assert response.status_code == 200
        debts = response.json()
        assert len(debts) == 2
        assert {d["to_player"] for d in debts} == {"Alice"}
        assert client.get(f"/api/v1/sessions/{session_id}").json()["settled"] is True

        again = client.post(f"/api/v1/sessions/{session_id}/settle")
        assert again.status_code == 409
        edit = client.put(f"/api/v1/sessions/{session_id}", json=SESSION_BODY)
        assert edit.status_code == 409

    def test_settle_missing(self, client):
        assert client.post("/api/v1/sessions/5/settle").status_code == 404


class TestDebtEndpoints:
    def test_manual_debt_lifecycle(self, client, api_roster):
        response = client.post(
            "/api/v1/debts/",
            json={"from_player": "Bob", "to_player": "Alice", "amount": 7.5},
        )
        assert response.status_code == 201
        debt_id = response.json()["id"]

        settled = client.post(f"/api/v1/debts/{debt_id}/settle")

        assert settled.status_code == 200
        assert settled.json()["settled"] is True
        assert client.get("/api/v1/debts/", params={"settled": False}).json() == []
        assert len(client.get("/api/v1/debts/", params={"settled": True}).json()) == 1

    def test_self_debt(self, client, api_roster):
        response = client.post(
            "/api/v1/debts/",
            json={"from_player": "Bob", "to_player": "Bob", "amount": 7.5},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "self_debt"

    def test_settle_missing_debt(self, client):
        assert client.post("/api/v1/debts/42/settle").status_code == 404


class TestLeaderboardEndpoints:
    def test_leaderboard(self, client, created_session):
        response = client.get("/api/v1/leaderboard/")

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data["players"]] == ["Alice", "Bob", "Carol"]
        assert data["players"][0]["total_winnings"] == pytest.approx(20.0)
        assert data["players"][0]["win_rate"] == 100
        assert [s["total_pot"] for s in data["biggest_sessions"]] == [40.0]

    def test_widget(self, client, created_session):
        response = client.get("/api/v1/leaderboard/widget")

        assert response.status_code == 200
        assert len(response.json()["players"]) == 3

    def test_limit_out_of_range(self, client):
        response = client.get("/api/v1/leaderboard/", params={"limit": 500})
        assert response.status_code == 422


def test_settlement_failure_is_retryable(client, created_session):
    with patch(
        "pokerpal.services.session_service.settle_session",
        side_effect=SettlementError(details={"session_id": created_session["id"]}),
    ):
        response = client.post(f"/api/v1/sessions/{created_session['id']}/settle")

    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "settlement_failed"
    assert error["details"]["retryable"] is True


class TestRejectedNumbers:
    """Bodies the JSON parser accepts but the ledger must not."""

    def test_nan_result_rejected(self, client, api_roster):
        body = json.dumps(SESSION_BODY).replace('"result": 20', '"result": NaN')

        response = client.post(
            "/api/v1/sessions/",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "request_validation_error"
        assert client.get("/api/v1/sessions/").json() == []

    def test_infinite_debt_rejected(self, client, api_roster):
        response = client.post(
            "/api/v1/debts/",
            content='{"from_player": "Bob", "to_player": "Alice", "amount": Infinity}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert client.get("/api/v1/debts/").json() == []

    def test_null_buy_ins_on_new_session_rejected(self, client, api_roster):
        players = [{**p, "buy_ins": None} for p in SESSION_BODY["players"]]

        response = client.post(
            "/api/v1/sessions/", json={**SESSION_BODY, "players": players}
        )

        assert response.status_code == 422
        assert client.get("/api/v1/sessions/").json() == []

    def test_null_buy_ins_on_edit_rejected(self, client, created_session):
        players = [{**p, "buy_ins": None} for p in SESSION_BODY["players"]]

        response = client.put(
            f"/api/v1/sessions/{created_session['id']}",
            json={**SESSION_BODY, "players": players},
        )

        assert response.status_code == 422


def test_debt_with_unknown_player(client, api_roster):
    response = client.post(
        "/api/v1/debts/",
        json={"from_player": "Mallory", "to_player": "Alice", "amount": 5},
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "unknown_player"
