"""Replay a command script and dump one CSV row per frame.

Contract
- Input: a JSON list of commands, e.g.
  `[{"kind": "advance", "elapsed": 0.016}, {"kind": "cut"}, ...]`.
- Output: CSV with the active block, stack top, score and phase per frame.
- Engine settings come from STACKCUT_* environment variables.

Usage:
    uv run python scripts/replay_commands.py commands.json frames.csv

The output is deterministic for a given input and configuration.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import pandas as pd

from stackcut.config import config_from_env
from stackcut.game_loop import Command, Frame, replay


def load_commands(path: Path) -> list[Command]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError("command file must contain a JSON list")
    return [Command(kind=item["kind"], elapsed=float(item.get("elapsed", 0.0))) for item in raw]


def _frame_row(frame: Frame) -> dict[str, Any]:
    snap = frame.snapshot
    active = snap.active_block
    return {
        "frame": frame.index,
        "elapsed": frame.elapsed,
        "phase": snap.phase.value,
        "height": snap.height,
        "score": snap.score,
        "axis": snap.axis or "",
        "active_x": active.position.x if active else None,
        "active_z": active.position.z if active else None,
        "top_x": snap.top.position.x,
        "top_z": snap.top.position.z,
        "width": snap.footprint.x,
        "depth": snap.footprint.z,
        "falling": len(snap.falling_pieces),
    }


def frames_to_dataframe(frames: list[Frame]) -> pd.DataFrame:
    return pd.DataFrame([_frame_row(f) for f in frames])


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("commands", type=Path)
    parser.add_argument("output", type=Path)
    args = parser.parse_args(argv)

    frames = replay(load_commands(args.commands), config=config_from_env())
    df = frames_to_dataframe(frames)
    df.to_csv(args.output, index=False)

    last = frames[-1].snapshot if frames else None
    if last is not None:
        print(f"{len(frames)} frames, phase={last.phase.value}, score={last.score}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
