from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum


class Axis(StrEnum):
    x = "x"
    z = "z"

    @property
    def other(self) -> "Axis":
        return Axis.z if self is Axis.x else Axis.x


def axis_for(round_number: int) -> Axis:
    """Horizontal axis the block of `round_number` slides along.

    Even rounds move along X, odd rounds along Z, so round 1 (the first
    block above the base) moves along Z.
    """

    return Axis.x if round_number % 2 == 0 else Axis.z


@dataclass(frozen=True, slots=True)
class Footprint:
    """Horizontal extent of a block: width along X, depth along Z."""

    x: float
    z: float

    def along(self, axis: Axis) -> float:
        return self.x if axis is Axis.x else self.z

    def with_extent(self, axis: Axis, value: float) -> "Footprint":
        return replace(self, **{axis.value: value})

    @property
    def is_positive(self) -> bool:
        return self.x > 0 and self.z > 0


@dataclass(frozen=True, slots=True)
class Center:
    """Horizontal reference point (x, z) of the current stack top."""

    x: float = 0.0
    z: float = 0.0

    def along(self, axis: Axis) -> float:
        return self.x if axis is Axis.x else self.z


@dataclass(frozen=True, slots=True)
class Position:
    # y is display-only: round number * layer thickness.
    x: float
    y: float
    z: float

    def along(self, axis: Axis) -> float:
        return self.x if axis is Axis.x else self.z

    def with_coord(self, axis: Axis, value: float) -> "Position":
        return replace(self, **{axis.value: value})

    @staticmethod
    def at(center: Center, *, y: float) -> "Position":
        return Position(x=center.x, y=y, z=center.z)


@dataclass(frozen=True, slots=True)
class Block:
    """A placed box: the stack top, a staying piece, or a falling piece."""

    footprint: Footprint
    position: Position
