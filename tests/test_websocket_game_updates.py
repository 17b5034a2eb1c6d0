from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from stackcut.config import EngineConfig
from stackcut.engine import StackEngine
from stackcut.game_store import GameStore
from stackcut.websocket_hub import GameWebSocketHub, snapshot_message


def test_ws_sends_current_frame_then_updates(client: TestClient) -> None:
    state = client.post("/game", json={}).json()
    game_id = state["game_id"]

    with client.websocket_connect(f"/ws/game/{game_id}") as ws:
        first = ws.receive_json()
        assert first["type"] == "game_updated"
        assert first["game_id"] == game_id
        assert first["phase"] == "spawning"
        assert first["score"] == 1

        res = client.post(f"/game/{game_id}/tick", json={"elapsed": 0})
        assert res.status_code == 200

        msg = ws.receive_json()
        assert msg["phase"] == "moving"
        assert msg["state"]["game_id"] == game_id
        assert msg["state"]["active_block"]["position"]["z"] == -60.0


def test_ws_cut_message_requests_a_cut(client: TestClient) -> None:
    game_id = client.post("/game", json={}).json()["game_id"]
    client.post(f"/game/{game_id}/tick", json={"elapsed": 0})

    with client.websocket_connect(f"/ws/game/{game_id}") as ws:
        assert ws.receive_json()["state"]["cut_pending"] is False

        ws.send_text("cut")
        msg = ws.receive_json()
        assert msg["state"]["cut_pending"] is True

    res = client.post(f"/game/{game_id}/tick", json={"elapsed": 1.2})
    assert res.json()["height"] == 2


def test_ws_unknown_game_is_refused(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"/ws/game/{uuid4()}") as ws:
            ws.receive_json()


class _FakeSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.broken = broken
        self.sent: list[dict[str, object]] = []
        self.accepted = False
        self.closed = False

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, payload: dict[str, object]) -> None:
        if self.broken and self.sent:
            raise RuntimeError("socket closed")
        self.sent.append(payload)

    async def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_hub_drops_dead_sockets() -> None:
    game = GameStore().create_game()
    hub = GameWebSocketHub()
    good, bad = _FakeSocket(), _FakeSocket(broken=True)
    await hub.subscribe(good, game.snapshot())  # type: ignore[arg-type]
    await hub.subscribe(bad, game.snapshot())  # type: ignore[arg-type]
    assert good.accepted and bad.accepted
    assert hub.watchers(game.game_id) == 2

    game.engine.tick(0)
    assert await hub.publish(game.snapshot()) == 1
    assert [m["phase"] for m in good.sent] == ["spawning", "moving"]
    assert hub.watchers(game.game_id) == 1

    hub.unsubscribe(game.game_id, good)  # type: ignore[arg-type]
    assert hub.watchers(game.game_id) == 0
    # Nobody is watching, so nothing is sent.
    assert await hub.publish(game.snapshot()) == 0


@pytest.mark.asyncio
async def test_hub_keeps_games_apart_and_closes_deleted_ones() -> None:
    store = GameStore()
    a, b = store.create_game(), store.create_game()
    hub = GameWebSocketHub()
    ws_a, ws_b = _FakeSocket(), _FakeSocket()
    await hub.subscribe(ws_a, a.snapshot())  # type: ignore[arg-type]
    await hub.subscribe(ws_b, b.snapshot())  # type: ignore[arg-type]

    await hub.publish(a.snapshot())
    assert len(ws_a.sent) == 2
    assert len(ws_b.sent) == 1

    await hub.close_game(a.game_id)
    assert ws_a.closed
    assert not ws_b.closed
    assert hub.watchers(a.game_id) == 0
    assert hub.watchers(b.game_id) == 1


@pytest.mark.asyncio
async def test_subscribe_requires_a_game_id() -> None:
    with pytest.raises(ValueError):
        await GameWebSocketHub().subscribe(_FakeSocket(), StackEngine().snapshot())  # type: ignore[arg-type]


def test_message_marks_finished_games() -> None:
    game = GameStore(defaults=EngineConfig(block_speed=1.0)).create_game()
    game.engine.tick(0)
    game.engine.tick(500)

    msg = snapshot_message(game.snapshot())
    assert msg["type"] == "game_over"
    assert msg["game_id"] == str(game.game_id)
    assert msg["phase"] == "game_over"
    assert msg["score"] == 0
    state = msg["state"]
    assert isinstance(state, dict)
    assert state["end_reason"] == "overshoot"
