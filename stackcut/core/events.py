from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

EventType = Literal[
    "BLOCK_SPAWNED",
    "BLOCK_CUT",
    "PIECE_FALLING",
    "PIECE_REMOVED",
    "GAME_OVER",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    type: EventType
    round_number: int
    payload: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, round_number: int, payload: dict[str, Any]) -> "GameEvent":
        return GameEvent(type=type, round_number=round_number, payload=payload, ts=datetime.now(timezone.utc))
