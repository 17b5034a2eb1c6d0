from __future__ import annotations

from statemachine import State, StateMachine

from stackcut.api.models import GamePhase


class StackFSM(StateMachine):
    """Round lifecycle of a single game.

    - spawning -> moving once a block is placed on the start line.
    - moving -> spawning after a cut that leaves some overlap.
    - moving -> game_over on overshoot or on a cut with no overlap.

    The engine owns all geometry; the FSM only guards transitions.
    """

    spawning = State(GamePhase.spawning.value, value=GamePhase.spawning.value, initial=True)
    moving = State(GamePhase.moving.value, value=GamePhase.moving.value)
    game_over = State(GamePhase.game_over.value, value=GamePhase.game_over.value, final=True)

    spawn = spawning.to(moving)
    land = moving.to(spawning)
    overshoot = moving.to(game_over)
    miss = moving.to(game_over)

    def __init__(self, start: GamePhase = GamePhase.spawning):
        super().__init__(start_value=start.value)

    @property
    def phase(self) -> GamePhase:
        return GamePhase(str(self.current_state_value))

    @property
    def is_over(self) -> bool:
        return self.current_state_value == GamePhase.game_over.value
