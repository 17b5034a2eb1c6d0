from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from stackcut.api.models import GameSnapshot
from stackcut.config import EngineConfig
from stackcut.core.events import GameEvent
from stackcut.engine import StackEngine
from stackcut.policies.base import CutPolicy, PolicyView

CommandKind = Literal["advance", "cut"]


@dataclass(frozen=True, slots=True)
class Command:
    kind: CommandKind
    elapsed: float = 0.0

    @staticmethod
    def advance(elapsed: float) -> "Command":
        return Command(kind="advance", elapsed=elapsed)

    @staticmethod
    def cut() -> "Command":
        return Command(kind="cut")


@dataclass(frozen=True, slots=True)
class Frame:
    index: int
    elapsed: float
    snapshot: GameSnapshot


def replay(commands: Iterable[Command], *, config: EngineConfig | None = None, engine: StackEngine | None = None) -> list[Frame]:
    """Run a command script against a fresh engine, one frame per `advance`.

    `cut` commands only buffer the request; it lands on the following
    `advance`, exactly as live input does.
    """

    engine = engine or StackEngine(config)
    frames: list[Frame] = []
    for cmd in commands:
        if cmd.kind == "cut":
            engine.request_cut()
            continue
        if cmd.kind != "advance":
            raise ValueError(f"Unknown command: {cmd.kind}")
        engine.tick(cmd.elapsed)
        frames.append(Frame(index=len(frames), elapsed=cmd.elapsed, snapshot=engine.snapshot()))
    return frames


def run_with_policy(engine: StackEngine, policy: CutPolicy, *, dt: float = 1 / 60, max_ticks: int = 100_000) -> list[GameEvent]:
    """Drive the engine at a fixed frame rate, letting `policy` decide when to cut.

    Stops when the game is over or after `max_ticks` frames.
    """

    events: list[GameEvent] = []
    for _ in range(max_ticks):
        if engine.is_over:
            break
        view = PolicyView.of(engine, lookahead=dt)
        if view is not None and policy.should_cut(view):
            engine.request_cut()
        events.extend(engine.tick(dt))
    return events
