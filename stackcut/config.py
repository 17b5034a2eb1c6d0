from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class EngineConfig:
    # Vertical size of one layer; also how far a discarded piece drops.
    layer_thickness: float = 4.0
    # Footprint of the base block.
    base_width: float = 30.0
    base_depth: float = 30.0
    # A block whose coordinate passes `play_boundary - center` is lost.
    play_boundary: float = 60.0
    # New blocks start this far on the negative side of the stack center.
    spawn_distance: float = 60.0
    # Units per second along the moving axis.
    block_speed: float = 50.0
    # Seconds a discarded piece takes to drop one layer.
    fall_duration: float = 1.0
    # Floor the cut offset toward negative infinity before slicing.
    floor_offset: bool = True

    def validate(self) -> "EngineConfig":
        if self.layer_thickness <= 0:
            raise ValueError("layer_thickness must be positive")
        if self.base_width <= 0 or self.base_depth <= 0:
            raise ValueError("base footprint must be positive")
        if self.play_boundary <= 0:
            raise ValueError("play_boundary must be positive")
        if self.spawn_distance <= 0:
            raise ValueError("spawn_distance must be positive")
        if self.block_speed <= 0:
            raise ValueError("block_speed must be positive")
        if self.fall_duration < 0:
            raise ValueError("fall_duration must not be negative")
        return self

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        known = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **known).validate()


_FLOAT_FIELDS = (
    "layer_thickness",
    "base_width",
    "base_depth",
    "play_boundary",
    "spawn_distance",
    "block_speed",
    "fall_duration",
)


def _env_bool(raw: str) -> bool:
    return raw.strip().casefold() in {"1", "true", "yes", "on"}


def config_from_env(*, prefix: str = "STACKCUT_") -> EngineConfig:
    """Build an EngineConfig from environment variables.

    Each field maps to `<prefix><FIELD>` (e.g. STACKCUT_BLOCK_SPEED=65).
    Unset variables keep the defaults.
    """

    overrides: dict[str, Any] = {}
    for name in _FLOAT_FIELDS:
        raw = os.environ.get(f"{prefix}{name.upper()}")
        if raw:
            try:
                overrides[name] = float(raw)
            except ValueError as e:
                raise ValueError(f"{prefix}{name.upper()} must be a number, got {raw!r}") from e

    raw_floor = os.environ.get(f"{prefix}FLOOR_OFFSET")
    if raw_floor:
        overrides["floor_offset"] = _env_bool(raw_floor)

    return EngineConfig().with_overrides(**overrides)


def log_level_from_env() -> str:
    return os.environ.get("STACKCUT_LOG_LEVEL", "DEBUG").upper()
