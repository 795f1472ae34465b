"""Tests for the HTTP API: catalog, leaderboard, guests, variations and play sessions."""

import sys
import os
import datetime as dt
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fastapi.testclient import TestClient

from daily_arcade.api.app import create_app
from daily_arcade.api.dependencies import get_session_manager, get_storage
from daily_arcade.api.session_manager import SessionManager
from daily_arcade.config import ArcadeConfig
from daily_arcade.core.enums import GameOutcome, GameType
from daily_arcade.core.parameters import GameParameters
from daily_arcade.engine.scheduler import ManualScheduler
from daily_arcade.storage.models import NewGame

TODAY = dt.date(2024, 3, 10)


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def client(scheduler):
    app = create_app(ArcadeConfig(max_samples=5), scheduler=scheduler, today=TODAY)
    with TestClient(app) as c:
        yield c


class TestGames:
    def test_list_games(self, client):
        games = client.get("/api/games").json()
        assert len(games) == 7
        assert {"id", "name", "type", "description", "instructions", "date", "icon",
                "parameters", "variationId"} <= set(games[0])

    def test_today_generates_on_demand(self, client):
        today = dt.date.today().isoformat()
        first = client.get("/api/games/today").json()
        assert first["date"] == today
        assert client.get("/api/games/today").json()["id"] == first["id"]

    def test_by_date(self, client):
        assert client.get("/api/games/date/2024-03-10").json()["date"] == "2024-03-10"
        resp = client.get("/api/games/date/1990-01-01")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "No game found for this date"

    def test_by_id(self, client):
        assert client.get("/api/games/1").json()["id"] == 1
        assert client.get("/api/games/999").status_code == 404
        assert client.get("/api/games/abc").status_code == 400

    def test_parameters(self, client):
        params = client.get("/api/games/1/parameters").json()
        assert params["difficulty"] in {"easy", "medium", "hard", "expert"}
        assert "layoutSeed" in params
        if params["difficulty"] in {"easy", "medium"}:
            assert "timeLimit" not in params

    def test_corrupt_parameters_500(self, client):
        game = get_storage().create_game(NewGame(
            name="Broken", type=GameType.PACMAN, description="", instructions="",
            date="2031-01-01", icon="ghost", parameters="not-json",
        ))
        resp = client.get(f"/api/games/{game.id}/parameters")
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Invalid game parameters format"


class TestScoresAndUsers:
    def test_guest_and_submit(self, client):
        guest = client.post("/api/users/guest")
        assert guest.status_code == 201
        user = guest.json()
        assert user["username"].startswith("Guest_")

        for value in (120, 450, 300):
            resp = client.post("/api/scores", json={
                "gameId": 1, "userId": user["id"], "score": value, "date": "2024-03-10",
            })
            assert resp.status_code == 201

        top = client.get("/api/scores/1", params={"limit": 2}).json()
        assert [s["score"] for s in top] == [450, 300]
        assert top[0]["userId"] == user["id"]

    def test_default_limit(self, client):
        user = client.post("/api/users/guest").json()
        for value in range(8):
            client.post("/api/scores", json={"gameId": 1, "userId": user["id"], "score": value, "date": "2024-03-10"})
        assert len(client.get("/api/scores/1").json()) == 5

    def test_guest_names_unique(self, client):
        names = {client.post("/api/users/guest").json()["username"] for _ in range(20)}
        assert len(names) == 20

    def test_submit_validation(self, client):
        user = client.post("/api/users/guest").json()
        base = {"gameId": 1, "userId": user["id"], "score": 10, "date": "2024-03-10"}
        assert client.post("/api/scores", json={**base, "score": -1}).status_code == 422
        assert client.post("/api/scores", json={**base, "date": "yesterday"}).status_code == 422
        assert client.post("/api/scores", json={**base, "gameId": 999}).status_code == 404
        assert client.post("/api/scores", json={**base, "userId": 999}).status_code == 404

    def test_scores_bad_id(self, client):
        assert client.get("/api/scores/xyz").status_code == 400


class TestVariations:
    def test_generate_with_seed_is_stable(self, client):
        a = client.get("/api/variations/generate", params={"type": "frogger", "seed": 42}).json()
        b = client.get("/api/variations/generate", params={"type": "frogger", "seed": 42}).json()
        assert a["gameType"] == "frogger"
        assert a["parameters"] == b["parameters"]
        assert a["name"] == b["name"]
        assert 0 <= a["id"] < 1000

    def test_samples_clamped(self, client):
        assert len(client.get("/api/variations/samples", params={"count": 50}).json()) == 5
        assert len(client.get("/api/variations/samples", params={"count": 0}).json()) == 1
        types = [v["gameType"] for v in client.get("/api/variations/samples", params={"count": 3}).json()]
        assert types == ["pacman", "space-invaders", "frogger"]

    def test_config(self, client):
        cfg = client.get("/api/config").json()
        assert cfg["canvasWidth"] == 640
        assert cfg["maxSamples"] == 5


class TestPlaySession:
    def test_no_session_503(self, client):
        assert client.get("/api/play/state").status_code == 503
        assert client.post("/api/play/control/pause").status_code == 503

    def test_load_requires_one_source(self, client):
        assert client.post("/api/play/load", json={}).status_code == 422
        assert client.post("/api/play/load", json={"gameId": 1, "gameType": "pacman"}).status_code == 422

    def test_load_unknown_game_404(self, client):
        assert client.post("/api/play/load", json={"gameId": 999}).status_code == 404

    def test_load_stored_game_and_run(self, client, scheduler):
        state = client.post("/api/play/load", json={"gameId": 1}).json()
        assert state["gameId"] == 1
        assert state["status"] == "running"
        assert state["frame"] == 0

        scheduler.run(10)
        state = client.get("/api/play/state").json()
        assert state["frame"] == 10 or state["status"] == "game_over"

    def test_ad_hoc_load_and_controls(self, client, scheduler):
        state = client.post("/api/play/load", json={"gameType": "space-invaders", "seed": 3}).json()
        assert state["gameType"] == "space-invaders"
        assert state["parameters"]["livesCount"] >= 2

        scheduler.run(5)
        resp = client.post("/api/play/control/pause").json()
        assert resp["frame"] == 5
        assert scheduler.pending == 0

        assert client.post("/api/play/control/step").json()["frame"] == 6
        assert client.post("/api/play/control/resume").status_code == 200
        reset = client.post("/api/play/control/reset").json()
        assert reset["frame"] == 0
        assert client.get("/api/play/state").json()["episode"] == 2
        assert client.post("/api/play/control/bogus").status_code == 422

    def test_illegal_transition_409(self, client):
        client.post("/api/play/load", json={"gameType": "pacman", "seed": 1})
        client.post("/api/play/control/pause")
        client.get("/api/play/state")
        get_session_manager().get_loop().cleanup()
        assert client.post("/api/play/control/start").status_code == 409

    def test_input_and_gesture(self, client):
        client.post("/api/play/load", json={"gameType": "frogger", "seed": 8})
        assert client.post("/api/play/input", json={"code": "ArrowUp"}).json()["accepted"]
        assert not client.post("/api/play/input", json={"code": "KeyQ"}).json()["accepted"]
        assert client.post("/api/play/gesture", json={"kind": "swipe", "dy": -60}).json()["accepted"]
        assert client.post("/api/play/gesture", json={"kind": "pinch"}).status_code == 422

    def test_frame_commands(self, client, scheduler):
        client.post("/api/play/load", json={"gameType": "pacman", "seed": 12})
        scheduler.run(1)
        frame = client.get("/api/play/frame").json()
        assert (frame["width"], frame["height"]) == (640, 480)
        assert frame["commands"][0]["op"] == "clear"
        assert any(c["op"] == "wedge" for c in frame["commands"])

    def test_events_feed(self, client, scheduler):
        client.post("/api/play/load", json={"gameType": "pacman", "seed": 4})
        manager_loop = get_session_manager().get_loop()
        manager_loop.emit("test", "hello")
        events = client.get("/api/play/events", params={"since": 0}).json()
        assert events["events"][-1] == {"frame": 0, "category": "test", "message": "hello"}

    def test_reload_replaces_session(self, client, scheduler):
        client.post("/api/play/load", json={"gameType": "pacman", "seed": 1})
        scheduler.run(3)
        state = client.post("/api/play/load", json={"gameType": "frogger", "seed": 1}).json()
        assert state["gameType"] == "frogger"
        assert state["frame"] == 0
        assert scheduler.pending == 1


class TestSessionManager:
    def test_completed_history_is_bounded(self):
        manager = SessionManager(ArcadeConfig(completed_history=3), ManualScheduler())
        loop = manager.load(GameType.FROGGER, GameParameters())
        outcomes = [GameOutcome.LOSS, GameOutcome.WIN, GameOutcome.TIMEOUT, GameOutcome.LOSS, GameOutcome.WIN]
        for outcome in outcomes:
            loop.game_over(outcome)
            loop.reset()

        assert manager.completed == [(0, o) for o in outcomes[-3:]]
        manager.stop()
