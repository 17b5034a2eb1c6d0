from __future__ import annotations

from enum import StrEnum
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class GamePhase(StrEnum):
    spawning = "spawning"
    moving = "moving"
    game_over = "game_over"


class GameStatus(StrEnum):
    running = "running"
    stopped = "stopped"


class EndReason(StrEnum):
    overshoot = "overshoot"
    no_overlap = "no_overlap"


class FootprintModel(BaseModel):
    x: float
    z: float


class PositionModel(BaseModel):
    x: float
    y: float
    z: float


class BlockModel(BaseModel):
    footprint: FootprintModel
    position: PositionModel


class FallingPieceModel(BlockModel):
    # 0.0 at the start of the drop, 1.0 when it is about to be removed.
    progress: float = 0.0


class GameSnapshot(BaseModel):
    """Everything a renderer or score display needs for one frame."""

    game_id: UUID | None = None

    phase: GamePhase
    status: GameStatus
    height: int
    score: int

    # Set once the game is over.
    final_score: int | None = None
    end_reason: EndReason | None = None

    speed: float
    axis: Literal["x", "z"] | None = None
    cut_pending: bool = False

    center: FootprintModel
    footprint: FootprintModel

    top: BlockModel
    active_block: BlockModel | None = None
    falling_pieces: list[FallingPieceModel] = Field(default_factory=list)


class GameCreateRequest(BaseModel):
    """Optional per-game overrides of the server's engine defaults."""

    layer_thickness: float | None = Field(default=None, gt=0)
    base_width: float | None = Field(default=None, gt=0)
    base_depth: float | None = Field(default=None, gt=0)
    play_boundary: float | None = Field(default=None, gt=0)
    spawn_distance: float | None = Field(default=None, gt=0)
    block_speed: float | None = Field(default=None, gt=0)
    fall_duration: float | None = Field(default=None, ge=0)
    floor_offset: bool | None = None


class TickRequest(BaseModel):
    elapsed: float = Field(..., ge=0)


class SpeedRequest(BaseModel):
    speed: float = Field(..., gt=0)


class CommandModel(BaseModel):
    kind: Literal["advance", "cut"]
    elapsed: float = Field(default=0.0, ge=0)


class ReplayRequest(BaseModel):
    commands: list[CommandModel] = Field(..., min_length=1, max_length=100_000)


class FrameModel(BaseModel):
    index: int
    elapsed: float
    snapshot: GameSnapshot


class ReplayResponse(BaseModel):
    frames: list[FrameModel]
    final: GameSnapshot


class CutResponse(BaseModel):
    accepted: bool
    state: GameSnapshot


class GameListResponse(BaseModel):
    games: list[GameSnapshot]

