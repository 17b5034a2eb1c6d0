from __future__ import annotations

import math
from dataclasses import dataclass

from stackcut.core.geometry import Axis, Block, Center, Footprint, Position
from stackcut.core.moving_block import MovingBlock


@dataclass(frozen=True, slots=True)
class SliceResult:
    """Outcome of a cut that left some overlap.

    - `staying`: the new stack top.
    - `falling`: the discarded remainder; zero extent on `axis` for a perfect cut.
    - `center` / `footprint`: the stack reference for the next round.
    """

    axis: Axis
    offset: float
    staying: Block
    falling: Block

    @property
    def center(self) -> Center:
        return Center(x=self.staying.position.x, z=self.staying.position.z)

    @property
    def footprint(self) -> Footprint:
        return self.staying.footprint

    @property
    def has_falling_piece(self) -> bool:
        return self.falling.footprint.along(self.axis) > 0


@dataclass(frozen=True, slots=True)
class NoOverlap:
    """A cut that missed the stack: nothing stays, the game is lost."""

    axis: Axis
    offset: float
    staying_extent: float


def cut_offset(block: MovingBlock, center: Center, *, floor_offset: bool = True) -> float:
    raw = block.offset_from(center)
    return float(math.floor(raw)) if floor_offset else raw


def slice_block(
    block: MovingBlock,
    center: Center,
    footprint: Footprint,
    *,
    layer_y: float,
    floor_offset: bool = True,
) -> SliceResult | NoOverlap:
    """Split the moving block against the stack top.

    The offset is floored toward negative infinity unless `floor_offset` is
    False, in which case the raw fractional offset is used.
    """

    axis = block.axis
    offset = cut_offset(block, center, floor_offset=floor_offset)

    staying_extent = footprint.along(axis) - abs(offset)
    staying_footprint = footprint.with_extent(axis, staying_extent)
    if not staying_footprint.is_positive:
        return NoOverlap(axis=axis, offset=offset, staying_extent=staying_extent)

    base = Position.at(center, y=layer_y)
    staying = Block(
        footprint=staying_footprint,
        position=base.with_coord(axis, center.along(axis) + offset / 2),
    )

    # Only the active axis is clipped; the discard spans the whole other dimension.
    falling_footprint = footprint.with_extent(axis, footprint.along(axis) - staying_extent)
    falling = Block(
        footprint=falling_footprint,
        position=base.with_coord(axis, block.coord + offset / 2),
    )

    return SliceResult(axis=axis, offset=offset, staying=staying, falling=falling)
