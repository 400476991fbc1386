"""Game management layer: controller, players, state machine.

Quick start::

    from crownchess.core.types import E2, E4
    from crownchess.game import AIDifficulty, GameController

    ctrl = GameController()
    ctrl.start_ai_game(AIDifficulty.EASY)
    ctrl.move_piece(E2, E4)  # the AI answers inline

``crownchess.game.ai_session`` moves the AI search onto a Qt worker
thread and must be imported explicitly.
"""

from crownchess.engine.search import AIDifficulty
from crownchess.game.controller import EffectCue, GameController, GameEvents
from crownchess.game.interfaces import (
    GameMode,
    GamePhase,
    IGameController,
    IPlayer,
    can_transition,
)
from crownchess.game.player import AIController, HumanPlayer
from crownchess.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameMode",
    "GamePhase",
    "IGameController",
    "IPlayer",
    "can_transition",
    # Concrete
    "AIController",
    "AIDifficulty",
    "EffectCue",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
]
