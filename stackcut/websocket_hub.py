from __future__ import annotations

import logging
from collections import defaultdict
from uuid import UUID

from fastapi import WebSocket

from stackcut.api.models import GameSnapshot, GameStatus

logger = logging.getLogger(__name__)


def snapshot_message(snapshot: GameSnapshot) -> dict[str, object]:
    """Envelope sent to renderers: the full frame plus the fields a score display needs."""

    return {
        "type": "game_over" if snapshot.status == GameStatus.stopped else "game_updated",
        "game_id": str(snapshot.game_id),
        "phase": snapshot.phase.value,
        "score": snapshot.score,
        "state": snapshot.model_dump(mode="json"),
    }


class GameWebSocketHub:
    """Pushes game snapshots to every socket watching that game.

    All calls happen on the server's event loop, so subscriber sets are
    only touched between awaits.
    """

    def __init__(self) -> None:
        self._watchers: dict[UUID, set[WebSocket]] = defaultdict(set)

    def watchers(self, game_id: UUID) -> int:
        return len(self._watchers.get(game_id, ()))

    async def subscribe(self, websocket: WebSocket, snapshot: GameSnapshot) -> None:
        """Accept the socket and send it the current frame straight away."""

        if snapshot.game_id is None:
            raise ValueError("snapshot has no game_id")
        await websocket.accept()
        self._watchers[snapshot.game_id].add(websocket)
        await websocket.send_json(snapshot_message(snapshot))

    def unsubscribe(self, game_id: UUID, websocket: WebSocket) -> None:
        sockets = self._watchers.get(game_id)
        if sockets is None:
            return
        sockets.discard(websocket)
        if not sockets:
            del self._watchers[game_id]

    async def publish(self, snapshot: GameSnapshot) -> int:
        """Send `snapshot` to the game's watchers; returns how many received it."""

        if snapshot.game_id is None:
            return 0
        sockets = list(self._watchers.get(snapshot.game_id, ()))
        if not sockets:
            return 0

        message = snapshot_message(snapshot)
        delivered = 0
        for ws in sockets:
            try:
                await ws.send_json(message)
            except Exception:
                logger.debug("dropping closed websocket for game %s", snapshot.game_id)
                self.unsubscribe(snapshot.game_id, ws)
            else:
                delivered += 1
        return delivered

    async def close_game(self, game_id: UUID) -> None:
        """Disconnect everyone watching a game that no longer exists."""

        for ws in list(self._watchers.pop(game_id, ())):
            try:
                await ws.close()
            except Exception:
                logger.debug("websocket for game %s already closed", game_id)


hub = GameWebSocketHub()
