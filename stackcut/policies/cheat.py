from __future__ import annotations

from dataclasses import dataclass

from stackcut.core.geometry import Axis
from stackcut.policies.base import PolicyView


@dataclass(frozen=True, slots=True)
class CheatPolicy:
    """Auto-cut as soon as the block lines up with the stack.

    Cuts when the projected offset is non-negative on both axes and below
    `tolerance` on the moving axis. With the offset floored, any tolerance
    up to 1.0 only ever produces perfect cuts.
    """

    tolerance: float = 1.0
    name: str = "cheat"

    def should_cut(self, view: PolicyView) -> bool:
        offsets = {a: view.projected_offset(a) for a in Axis}
        if any(o < 0 for o in offsets.values()):
            return False
        return offsets[view.axis] < self.tolerance


@dataclass(frozen=True, slots=True)
class NeverCutPolicy:
    """Never cuts; every block eventually overshoots."""

    name: str = "never"

    def should_cut(self, view: PolicyView) -> bool:
        return False
