from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from stackcut.core.geometry import Axis, Center, Position

if TYPE_CHECKING:
    from stackcut.engine import StackEngine


@dataclass(frozen=True, slots=True)
class PolicyView:
    """What a cut policy may look at: the moving block relative to the stack."""

    axis: Axis
    position: Position
    center: Center
    speed: float
    # Seconds until the next tick, when a requested cut is applied.
    lookahead: float = 0.0

    def projected_offset(self, axis: Axis) -> float:
        coord = self.position.along(axis)
        if axis is self.axis:
            coord += self.speed * self.lookahead
        return coord - self.center.along(axis)

    @staticmethod
    def of(engine: "StackEngine", *, lookahead: float = 0.0) -> "PolicyView | None":
        block = engine.active_block
        if engine.is_over or block is None:
            return None
        return PolicyView(
            axis=block.axis,
            position=block.position,
            center=engine.center,
            speed=engine.speed,
            lookahead=lookahead,
        )


class CutPolicy(Protocol):
    name: str

    def should_cut(self, view: PolicyView) -> bool:  # pragma: no cover
        ...
