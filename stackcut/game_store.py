from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from stackcut.api.models import GameSnapshot
from stackcut.config import EngineConfig
from stackcut.engine import StackEngine


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class StoredGame:
    game_id: UUID
    engine: StackEngine
    created_at: datetime

    def snapshot(self) -> GameSnapshot:
        snap = self.engine.snapshot()
        snap.game_id = self.game_id
        return snap


@dataclass(slots=True)
class GameStore:
    """In-memory registry of running games, one engine per game.

    Games live only as long as the process; nothing is persisted.
    """

    defaults: EngineConfig = field(default_factory=EngineConfig)
    # Oldest games are dropped once this many exist.
    max_games: int = 1000
    _games: dict[UUID, StoredGame] = field(default_factory=dict)

    def create_game(self, *, config: EngineConfig | None = None) -> StoredGame:
        game = StoredGame(game_id=uuid4(), engine=StackEngine(config or self.defaults), created_at=_now())
        self._games[game.game_id] = game
        while len(self._games) > self.max_games:
            # dicts keep insertion order, so the first key is the oldest game
            del self._games[next(iter(self._games))]
        return game

    def get_game(self, game_id: UUID) -> StoredGame | None:
        return self._games.get(game_id)

    def delete_game(self, game_id: UUID) -> StoredGame | None:
        return self._games.pop(game_id, None)

    def list_games(self) -> list[StoredGame]:
        return sorted(self._games.values(), key=lambda g: g.created_at, reverse=True)
