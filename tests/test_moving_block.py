from __future__ import annotations

from stackcut.core.geometry import Axis, Center, Footprint
from stackcut.core.moving_block import MovingBlock


def _spawn(round_number: int, center: Center = Center()) -> MovingBlock:
    return MovingBlock.spawn(
        round_number,
        Footprint(x=30, z=20),
        center,
        layer_thickness=4,
        spawn_distance=60,
    )


def test_spawn_odd_round_starts_far_negative_on_z() -> None:
    block = _spawn(1, Center(x=3, z=-2))

    assert block.axis == Axis.z
    assert block.footprint == Footprint(x=30, z=20)
    assert block.position.y == 4
    assert block.position.x == 3
    assert block.position.z == -62


def test_spawn_even_round_starts_far_negative_on_x() -> None:
    block = _spawn(2, Center(x=3, z=-2))

    assert block.axis == Axis.x
    assert block.position.y == 8
    assert block.position.x == -57
    assert block.position.z == -2


def test_advance_moves_only_the_active_axis() -> None:
    block = _spawn(1)
    block.advance(0.5, 50)
    assert block.position.z == -35
    assert block.position.x == 0
    assert block.offset_from(Center()) == -35


def test_overshoot_against_boundary_minus_center() -> None:
    block = _spawn(1, Center(x=0, z=5))
    block.advance(1.0, 115)
    assert block.position.z == 60
    # boundary - center.z == 55
    assert block.has_overshot(60, Center(x=0, z=5))
    assert not block.has_overshot(60, Center(x=0, z=0))
