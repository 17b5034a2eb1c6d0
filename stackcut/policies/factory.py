from __future__ import annotations

from typing import cast

from stackcut.policies.base import CutPolicy
from stackcut.policies.cheat import CheatPolicy, NeverCutPolicy


def create_policy(name: str, *, tolerance: float = 1.0) -> CutPolicy:
    """Create a cut policy by name ("cheat" or "never")."""

    if name == "cheat":
        return cast(CutPolicy, CheatPolicy(tolerance=tolerance))
    if name == "never":
        return cast(CutPolicy, NeverCutPolicy())
    raise ValueError(f"Unknown policy: {name}")
