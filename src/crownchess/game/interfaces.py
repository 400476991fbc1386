"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, StrEnum, auto
from typing import TYPE_CHECKING

from crownchess.core.enums import Team

if TYPE_CHECKING:
    from crownchess.core.board import Board
    from crownchess.core.combat import AbilityResult
    from crownchess.core.types import Position


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game session."""

    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    ABILITY_TARGETING = auto()
    GAME_OVER = auto()


# Phases reachable through an explicit ``set_phase`` call. GAME_OVER is
# entered only by the rules, and MENU is reachable from anywhere.
_PHASE_TRANSITIONS: dict[GamePhase, frozenset[GamePhase]] = {
    GamePhase.MENU: frozenset({GamePhase.PLAYING}),
    GamePhase.PLAYING: frozenset({GamePhase.PAUSED, GamePhase.ABILITY_TARGETING}),
    GamePhase.PAUSED: frozenset({GamePhase.PLAYING}),
    GamePhase.ABILITY_TARGETING: frozenset({GamePhase.PLAYING}),
    GamePhase.GAME_OVER: frozenset(),
}


def can_transition(current: GamePhase, target: GamePhase) -> bool:
    if target == GamePhase.MENU or target == current:
        return True
    return target in _PHASE_TRANSITIONS[current]


class GameMode(StrEnum):
    CLASSIC = "classic"
    BLITZ = "blitz"
    CAMPAIGN = "campaign"
    PRACTICE = "practice"


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def team(self) -> Team: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, mode: GameMode = GameMode.CLASSIC) -> None:
        """Set up a new human-vs-human game."""

    @abstractmethod
    def reset_game(self, board: Board | None = None) -> None:
        """Start over with the current players and mode."""

    @abstractmethod
    def select_piece(self, pos: Position) -> bool:
        """Select an own piece and highlight its legal moves."""

    @abstractmethod
    def move_piece(self, from_pos: Position, to_pos: Position) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def use_ability(
        self, piece_id: str, ability_id: str, target: Position | None = None
    ) -> AbilityResult | None:
        """Cast an ability, or enter targeting when a target is still needed."""

    @abstractmethod
    def end_turn(self) -> None:
        """Hand the turn to the other team."""

    @abstractmethod
    def set_phase(self, phase: GamePhase) -> bool:
        """Request a phase change. Returns True if it was allowed."""
