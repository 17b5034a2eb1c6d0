from __future__ import annotations

import pytest

from stackcut.config import EngineConfig, config_from_env
from stackcut.engine import StackEngine


def test_defaults_match_classic_game() -> None:
    cfg = config_from_env()
    assert cfg == EngineConfig()
    assert cfg.layer_thickness == 4
    assert (cfg.base_width, cfg.base_depth) == (30, 30)
    assert cfg.play_boundary == 60
    assert cfg.block_speed == 50
    assert cfg.floor_offset is True


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STACKCUT_BLOCK_SPEED", "65")
    monkeypatch.setenv("STACKCUT_FALL_DURATION", "0.25")
    monkeypatch.setenv("STACKCUT_FLOOR_OFFSET", "false")

    cfg = config_from_env()
    assert cfg.block_speed == 65
    assert cfg.fall_duration == 0.25
    assert cfg.floor_offset is False


def test_env_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STACKCUT_BLOCK_SPEED", "fast")
    with pytest.raises(ValueError) as e:
        config_from_env()
    assert "STACKCUT_BLOCK_SPEED" in str(e.value)


@pytest.mark.parametrize(
    "overrides",
    [
        {"block_speed": 0},
        {"block_speed": -1},
        {"base_width": 0},
        {"layer_thickness": -4},
        {"fall_duration": -1},
    ],
)
def test_invalid_config_rejected_up_front(overrides: dict[str, float]) -> None:
    with pytest.raises(ValueError):
        EngineConfig().with_overrides(**overrides)


def test_engine_validates_config_on_construction() -> None:
    with pytest.raises(ValueError):
        StackEngine(EngineConfig(play_boundary=0))


def test_with_overrides_ignores_none() -> None:
    cfg = EngineConfig().with_overrides(block_speed=None, base_depth=20)
    assert cfg.block_speed == 50
    assert cfg.base_depth == 20
