from __future__ import annotations

from dataclasses import dataclass

from stackcut.core.geometry import Axis, Block, Center, Footprint, Position, axis_for


@dataclass(slots=True)
class MovingBlock:
    """The block currently sliding across the stack.

    Only the coordinate on `axis` ever changes after spawn.
    """

    round_number: int
    axis: Axis
    footprint: Footprint
    position: Position

    @classmethod
    def spawn(
        cls,
        round_number: int,
        stack_footprint: Footprint,
        stack_center: Center,
        *,
        layer_thickness: float,
        spawn_distance: float,
    ) -> "MovingBlock":
        axis = axis_for(round_number)
        start = Position.at(stack_center, y=round_number * layer_thickness)
        start = start.with_coord(axis, stack_center.along(axis) - spawn_distance)
        return cls(round_number=round_number, axis=axis, footprint=stack_footprint, position=start)

    @property
    def coord(self) -> float:
        return self.position.along(self.axis)

    def advance(self, elapsed: float, speed: float) -> None:
        self.position = self.position.with_coord(self.axis, self.coord + elapsed * speed)

    def has_overshot(self, boundary: float, stack_center: Center) -> bool:
        return any(self.position.along(a) > boundary - stack_center.along(a) for a in Axis)

    def offset_from(self, stack_center: Center) -> float:
        """Raw signed offset from the stack center on the moving axis."""

        return self.coord - stack_center.along(self.axis)

    def as_block(self) -> Block:
        return Block(footprint=self.footprint, position=self.position)
