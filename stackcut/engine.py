from __future__ import annotations

import logging

from stackcut.api.models import (
    BlockModel,
    EndReason,
    FallingPieceModel,
    FootprintModel,
    GamePhase,
    GameSnapshot,
    GameStatus,
    PositionModel,
)
from stackcut.config import EngineConfig
from stackcut.core.events import EventType, GameEvent
from stackcut.core.falling import FallingPiece, FallingPieces
from stackcut.core.geometry import Axis, Block, Center, Footprint, Position, axis_for
from stackcut.core.moving_block import MovingBlock
from stackcut.core.slicing import NoOverlap, slice_block
from stackcut.fsm import StackFSM

logger = logging.getLogger(__name__)


class StackEngine:
    """One game of the stacking engine, driven by `tick(elapsed)`.

    Contract:
      - call `tick` once per frame with the elapsed seconds.
      - `request_cut` may be called any time; it is applied on the next tick.
      - losing (overshoot / no overlap) is a state, never an exception:
        check `is_over`, `end_reason`, and `final_score`.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = (config or EngineConfig()).validate()
        self.reset()

    def reset(self) -> None:
        cfg = self.config
        self._fsm = StackFSM()
        self._cut_pending = False

        self.speed = cfg.block_speed
        self.height = 1
        self.footprint = Footprint(x=cfg.base_width, z=cfg.base_depth)
        self.center = Center()
        self.top = Block(footprint=self.footprint, position=Position(x=0.0, y=0.0, z=0.0))
        self.active_block: MovingBlock | None = None
        self.falling = FallingPieces()

        self.final_score: int | None = None
        self.end_reason: EndReason | None = None
        self.history: list[GameEvent] = []

    # -- read-only views ---------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self._fsm.phase

    @property
    def is_over(self) -> bool:
        return self._fsm.is_over

    @property
    def status(self) -> GameStatus:
        return GameStatus.stopped if self.is_over else GameStatus.running

    @property
    def score(self) -> int:
        if self.final_score is not None:
            return self.final_score
        return self.height

    @property
    def cut_pending(self) -> bool:
        return self._cut_pending

    @property
    def round_axis(self) -> Axis:
        if self.active_block is not None:
            return self.active_block.axis
        return axis_for(self.height)

    @property
    def falling_pieces(self) -> list[FallingPiece]:
        return list(self.falling)

    # -- commands ----------------------------------------------------------

    def set_speed(self, speed: float) -> None:
        if speed <= 0:
            raise ValueError("speed must be positive")
        self.speed = speed

    def request_cut(self) -> bool:
        """Buffer a cut for the next tick.

        Returns False when there is nothing to cut (game over, or no block on
        the move yet). Extra requests before the next tick are coalesced.
        """

        if self.is_over or self.active_block is None:
            logger.debug("cut ignored: phase=%s", self.phase.value)
            return False
        self._cut_pending = True
        return True

    def tick(self, elapsed: float) -> list[GameEvent]:
        if elapsed < 0:
            raise ValueError("elapsed must not be negative")

        events: list[GameEvent] = []

        # Drops run on their own clock, even after the game is over.
        for piece in self.falling.advance(elapsed):
            self._emit(events, "PIECE_REMOVED", {"x": piece.block.position.x, "z": piece.block.position.z})

        if self.is_over:
            self._cut_pending = False
            return self._record(events)

        if self.active_block is None:
            self._spawn(events)
        else:
            block = self.active_block
            block.advance(elapsed, self.speed)
            if block.has_overshot(self.config.play_boundary, self.center):
                self._finish(events, reason=EndReason.overshoot, final_score=self.height - 1)
            elif self._cut_pending:
                self._cut(events, block)

        self._cut_pending = False
        return self._record(events)

    # -- internals ---------------------------------------------------------

    def _spawn(self, events: list[GameEvent]) -> None:
        cfg = self.config
        block = MovingBlock.spawn(
            self.height,
            self.footprint,
            self.center,
            layer_thickness=cfg.layer_thickness,
            spawn_distance=cfg.spawn_distance,
        )
        self.active_block = block
        self._fsm.spawn()
        logger.debug("round %d: block spawned on %s at %.2f", self.height, block.axis.value, block.coord)
        self._emit(events, "BLOCK_SPAWNED", {"axis": block.axis.value, "coord": block.coord})

    def _cut(self, events: list[GameEvent], block: MovingBlock) -> None:
        result = slice_block(
            block,
            self.center,
            self.footprint,
            layer_y=self.height * self.config.layer_thickness,
            floor_offset=self.config.floor_offset,
        )

        if isinstance(result, NoOverlap):
            logger.info("round %d: cut missed the stack (offset=%.2f)", self.height, result.offset)
            self._finish(events, reason=EndReason.no_overlap, final_score=self.height)
            return

        if result.has_falling_piece:
            self.falling.spawn(result.falling, drop=self.config.layer_thickness, duration=self.config.fall_duration)
            self._emit(
                events,
                "PIECE_FALLING",
                {
                    "axis": result.axis.value,
                    "extent": result.falling.footprint.along(result.axis),
                    "coord": result.falling.position.along(result.axis),
                },
            )

        self._emit(
            events,
            "BLOCK_CUT",
            {
                "axis": result.axis.value,
                "offset": result.offset,
                "width": result.footprint.x,
                "depth": result.footprint.z,
            },
        )

        self.center = result.center
        self.footprint = result.footprint
        self.top = result.staying
        self.active_block = None
        self.height += 1
        self._fsm.land()
        logger.debug(
            "cut offset=%.2f -> footprint=(%.2f, %.2f) height=%d",
            result.offset,
            self.footprint.x,
            self.footprint.z,
            self.height,
        )

    def _finish(self, events: list[GameEvent], *, reason: EndReason, final_score: int) -> None:
        if reason is EndReason.overshoot:
            self._fsm.overshoot()
        else:
            self._fsm.miss()
        self.active_block = None
        self.end_reason = reason
        self.final_score = final_score
        logger.info("game over: %s, final score %d", reason.value, final_score)
        self._emit(events, "GAME_OVER", {"reason": reason.value, "final_score": final_score})

    def _emit(self, events: list[GameEvent], type: EventType, payload: dict[str, object]) -> None:
        events.append(GameEvent.now(type=type, round_number=self.height, payload=payload))

    def _record(self, events: list[GameEvent]) -> list[GameEvent]:
        self.history.extend(events)
        return events

    def snapshot(self) -> GameSnapshot:
        active = self.active_block
        return GameSnapshot(
            phase=self.phase,
            status=self.status,
            height=self.height,
            score=self.score,
            final_score=self.final_score,
            end_reason=self.end_reason,
            speed=self.speed,
            axis=None if self.is_over else self.round_axis.value,
            cut_pending=self._cut_pending,
            center=FootprintModel(x=self.center.x, z=self.center.z),
            footprint=FootprintModel(x=self.footprint.x, z=self.footprint.z),
            top=block_model(self.top),
            active_block=block_model(active.as_block()) if active is not None else None,
            falling_pieces=[
                FallingPieceModel(
                    footprint=FootprintModel(x=p.block.footprint.x, z=p.block.footprint.z),
                    position=PositionModel(x=p.position.x, y=p.position.y, z=p.position.z),
                    progress=p.progress,
                )
                for p in self.falling
            ],
        )


def block_model(block: Block) -> BlockModel:
    return BlockModel(
        footprint=FootprintModel(x=block.footprint.x, z=block.footprint.z),
        position=PositionModel(x=block.position.x, y=block.position.y, z=block.position.z),
    )
