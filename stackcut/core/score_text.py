from __future__ import annotations

from stackcut.api.models import GameSnapshot, GameStatus


def score_text(state: GameSnapshot) -> str:
    """Text for the score display: the height while playing, a summary once lost."""

    if state.status == GameStatus.stopped:
        return f"You lost at {state.final_score} blocks"
    return str(state.height)
