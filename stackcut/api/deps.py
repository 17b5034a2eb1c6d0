from __future__ import annotations

from stackcut.config import config_from_env
from stackcut.game_store import GameStore

_STORE: GameStore | None = None


def get_store() -> GameStore:
    """Process-wide game store, created lazily with engine defaults from env."""

    global _STORE
    if _STORE is None:
        _STORE = GameStore(defaults=config_from_env())
    return _STORE
