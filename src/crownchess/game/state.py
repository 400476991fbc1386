"""Per-session game state and the move log."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from crownchess.core.board import Board
from crownchess.core.enums import GameResult, Team
from crownchess.game.interfaces import GameMode, GamePhase

if TYPE_CHECKING:
    from crownchess.core.piece import Piece
    from crownchess.core.types import Position
    from crownchess.game.player import AIController


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One entry of the append-only history.

    ``piece`` and ``captured`` are snapshots taken before the action.
    Ability casts carry ``ability_id`` and use the target as ``to_pos``.
    """

    from_pos: Position
    to_pos: Position
    piece: Piece
    captured: Piece | None = None
    damage: int | None = None
    ability_id: str | None = None
    timestamp: float = field(default_factory=time.time)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


@dataclass(slots=True)
class GameState:
    """Everything a front end needs to draw one game session."""

    board: Board = field(default_factory=Board.initial)
    current_turn: Team = Team.WHITE
    selected: Position | None = None
    highlighted: frozenset[Position] = frozenset()
    phase: GamePhase = GamePhase.MENU
    mode: GameMode = GameMode.CLASSIC
    winner: Team | None = None
    is_draw: bool = False
    move_history: list[MoveRecord] = field(default_factory=list)
    turn_count: int = 1
    ai: AIController | None = None
    is_ai_thinking: bool = False
    # Caster id and ability id while waiting for a target.
    pending_ability: tuple[str, str] | None = None

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def result(self) -> GameResult:
        if self.winner is not None:
            return GameResult.win_for(self.winner)
        if self.is_draw:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    @property
    def last_move(self) -> MoveRecord | None:
        return self.move_history[-1] if self.move_history else None

    def clear_selection(self) -> None:
        self.selected = None
        self.highlighted = frozenset()
        self.pending_ability = None

    def reset(self, board: Board | None = None) -> None:
        """Fresh board, White to move, empty history.

        The phase, mode and AI opponent are left to the caller.
        """
        self.board = board if board is not None else Board.initial()
        self.current_turn = Team.WHITE
        self.clear_selection()
        self.winner = None
        self.is_draw = False
        self.move_history = []
        self.turn_count = 1
        self.is_ai_thinking = False
