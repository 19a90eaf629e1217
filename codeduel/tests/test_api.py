"""
Tests for the HTTP API.

Tests:
- Game lifecycle over HTTP
- camelCase wire format
- Error responses and status codes
"""

import pytest
from fastapi.testclient import TestClient

from codeduel.api.app import create_app
from codeduel.api.service import DuelService


@pytest.fixture
def client(service, settings):
    """Test client over a fresh service."""
    with TestClient(create_app(service=service, settings=settings)) as client:
        yield client


def _create(client, **body):
    response = client.post("/api/game/create", json=body or None)
    assert response.status_code == 200
    return response.json()["game"]


class TestGameEndpoints:
    """Tests for create/get/list."""

    def test_create_game(self, client):
        response = client.post("/api/game/create")

        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True
        game = payload["game"]
        assert game["id"].startswith("game_")
        assert game["round"] == 1
        assert game["gameStatus"] == "active"
        assert game["winner"] is None
        assert game["currentTurn"] == "player1"
        assert game["lastActions"] == {"player1": None, "player2": None}
        assert game["recentBattleLog"] == []
        assert game["players"]["player1"] == {
            "id": "player1",
            "name": "Player 1",
            "hp": 100,
            "maxHp": 100,
            "energy": 3,
            "maxEnergy": 5,
            "charged": False,
            "status": "active",
        }

    def test_create_game_with_names(self, client):
        game = _create(client, player1Name="Ada", player2Name="Linus")

        assert game["players"]["player1"]["name"] == "Ada"
        assert game["players"]["player2"]["name"] == "Linus"

    def test_get_game(self, client):
        created = _create(client)

        response = client.get(f"/api/game/{created['id']}")

        assert response.status_code == 200
        assert response.json()["game"]["id"] == created["id"]

    def test_get_unknown_game(self, client):
        response = client.get("/api/game/game_missing")

        assert response.status_code == 404
        payload = response.json()
        assert payload["success"] is False
        assert payload["error"] == "Game not found"
        assert payload["errorCode"] == "GAME_NOT_FOUND"

    def test_list_games(self, client):
        first = _create(client)
        _create(client)

        response = client.get("/api/games")

        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True
        assert payload["count"] == 2
        summary = next(g for g in payload["games"] if g["id"] == first["id"])
        assert summary == {
            "id": first["id"],
            "round": 1,
            "gameStatus": "active",
            "winner": None,
        }


class TestActionsEndpoint:
    """Tests for round submission over HTTP."""

    def test_submit_actions(self, client):
        game_id = _create(client)["id"]

        response = client.post(
            f"/api/game/{game_id}/actions",
            json={"player1Action": "attack", "player2Action": "defend"},
        )

        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True
        game = payload["game"]
        assert game["round"] == 2
        assert game["players"]["player2"]["hp"] == 93
        assert game["lastActions"] == {"player1": "attack", "player2": "defend"}

        result = payload["battleResult"]
        assert result["player2"]["damage"] == 7
        assert result["player1"]["energyChange"] == -1
        assert result["player1"]["statusChange"] == "Normal attack!"
        assert "defending" not in result["player2"]

        entry = game["recentBattleLog"][0]
        assert entry["round"] == 1
        assert entry["actions"] == {"player1": "attack", "player2": "defend"}
        assert entry["finalHp"] == {"player1": 100, "player2": 93}

    def test_recent_log_has_three_entries(self, client):
        game_id = _create(client)["id"]

        for _ in range(4):
            response = client.post(
                f"/api/game/{game_id}/actions",
                json={"player1Action": "defend", "player2Action": "defend"},
            )

        log = response.json()["game"]["recentBattleLog"]
        assert [entry["round"] for entry in log] == [2, 3, 4]

    def test_unknown_game(self, client):
        response = client.post(
            "/api/game/game_missing/actions",
            json={"player1Action": "attack", "player2Action": "attack"},
        )

        assert response.status_code == 404
        assert response.json()["errorCode"] == "GAME_NOT_FOUND"

    def test_missing_action(self, client):
        game_id = _create(client)["id"]

        response = client.post(
            f"/api/game/{game_id}/actions",
            json={"player1Action": "attack"},
        )

        assert response.status_code == 400
        payload = response.json()
        assert payload["errorCode"] == "INVALID_INPUT"
        assert payload["error"] == "Both player actions are required"
        assert payload["details"]["received"] == {
            "player1Action": "attack",
            "player2Action": None,
        }

    def test_missing_body(self, client):
        game_id = _create(client)["id"]

        response = client.post(f"/api/game/{game_id}/actions")

        assert response.status_code == 400
        assert response.json()["errorCode"] == "INVALID_INPUT"

    def test_invalid_action(self, client, service):
        game_id = _create(client)["id"]

        response = client.post(
            f"/api/game/{game_id}/actions",
            json={"player1Action": "attack", "player2Action": "fireball"},
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "INVALID_INPUT"
        assert service.store.get(game_id).round == 1

    def test_finished_game(self, client, service):
        game_id = _create(client)["id"]
        service.store.get(game_id).player2.hp = 10

        finishing = client.post(
            f"/api/game/{game_id}/actions",
            json={"player1Action": "attack", "player2Action": "charge"},
        )
        assert finishing.status_code == 200
        game = finishing.json()["game"]
        assert game["gameStatus"] == "finished"
        assert game["winner"] == "player1"
        assert game["round"] == 1

        response = client.post(
            f"/api/game/{game_id}/actions",
            json={"player1Action": "attack", "player2Action": "attack"},
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "GAME_NOT_ACTIVE"

    def test_malformed_json(self, client):
        game_id = _create(client)["id"]

        response = client.post(
            f"/api/game/{game_id}/actions",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "VALIDATION_ERROR"

    def test_non_string_action_unknown_game(self, client):
        response = client.post(
            "/api/game/game_missing/actions",
            json={"player1Action": 5, "player2Action": "attack"},
        )

        assert response.status_code == 404
        assert response.json()["errorCode"] == "GAME_NOT_FOUND"

    def test_non_string_action_finished_game(self, client, service):
        game_id = _create(client)["id"]
        service.store.get(game_id).player2.hp = 10
        client.post(
            f"/api/game/{game_id}/actions",
            json={"player1Action": "attack", "player2Action": "charge"},
        )

        response = client.post(
            f"/api/game/{game_id}/actions",
            json={"player1Action": 5, "player2Action": "attack"},
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "GAME_NOT_ACTIVE"

    def test_non_string_action_active_game(self, client, service):
        game_id = _create(client)["id"]

        response = client.post(
            f"/api/game/{game_id}/actions",
            json={"player1Action": 5, "player2Action": ["attack"]},
        )

        assert response.status_code == 400
        payload = response.json()
        assert payload["errorCode"] == "INVALID_INPUT"
        assert payload["error"] == "Invalid action. Must be: attack, defend, charge"
        assert payload["details"]["received"] == {
            "player1Action": 5,
            "player2Action": ["attack"],
        }
        assert service.store.get(game_id).round == 1


class TestSystemEndpoints:
    """Tests for health and root."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True
        assert payload["message"] == "Code Duel Backend is running!"
        assert payload["timestamp"]

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/api/docs"


class TestIsolation:
    """Each app sees only its own service's games."""

    def test_separate_apps(self, settings):
        with TestClient(create_app(service=DuelService(), settings=settings)) as first:
            game_id = _create(first)["id"]
        with TestClient(create_app(service=DuelService(), settings=settings)) as second:
            assert second.get(f"/api/game/{game_id}").status_code == 404
