"""Tests for GameState, MoveRecord and the phase table."""

from crownchess.core.board import Board
from crownchess.core.enums import GameResult, PieceType, Team
from crownchess.core.piece import make_piece
from crownchess.core.types import E2, E4
from crownchess.game.interfaces import GameMode, GamePhase, can_transition
from crownchess.game.state import GameState, MoveRecord


class TestGameState:
    def test_defaults(self) -> None:
        state = GameState()
        assert state.board == Board.initial()
        assert state.current_turn == Team.WHITE
        assert state.phase == GamePhase.MENU
        assert state.mode == GameMode.CLASSIC
        assert state.turn_count == 1
        assert state.move_history == []
        assert state.result == GameResult.IN_PROGRESS
        assert not state.is_game_over

    def test_reset(self) -> None:
        state = GameState()
        pawn = make_piece(PieceType.PAWN, Team.WHITE, E2)
        state.board = Board()
        state.current_turn = Team.BLACK
        state.turn_count = 9
        state.winner = Team.BLACK
        state.selected = E2
        state.highlighted = frozenset({E4})
        state.move_history.append(MoveRecord(E2, E4, pawn))

        state.reset()

        assert state.board == Board.initial()
        assert state.current_turn == Team.WHITE
        assert state.turn_count == 1
        assert state.winner is None
        assert state.selected is None
        assert state.highlighted == frozenset()
        assert state.move_history == []

    def test_result(self) -> None:
        state = GameState()
        state.winner = Team.WHITE
        assert state.result == GameResult.WHITE_WINS
        state.winner = None
        state.is_draw = True
        assert state.result == GameResult.DRAW


class TestMoveRecord:
    def test_capture_flag(self) -> None:
        pawn = make_piece(PieceType.PAWN, Team.WHITE, E2)
        enemy = make_piece(PieceType.PAWN, Team.BLACK, E4)
        assert not MoveRecord(E2, E4, pawn).is_capture
        assert MoveRecord(E2, E4, pawn, captured=enemy, damage=15).is_capture

    def test_timestamp_is_set(self) -> None:
        pawn = make_piece(PieceType.PAWN, Team.WHITE, E2)
        assert MoveRecord(E2, E4, pawn).timestamp > 0


class TestPhaseTable:
    def test_menu_to_playing(self) -> None:
        assert can_transition(GamePhase.MENU, GamePhase.PLAYING)
        assert not can_transition(GamePhase.MENU, GamePhase.PAUSED)

    def test_playing_branches(self) -> None:
        assert can_transition(GamePhase.PLAYING, GamePhase.PAUSED)
        assert can_transition(GamePhase.PLAYING, GamePhase.ABILITY_TARGETING)
        assert can_transition(GamePhase.PAUSED, GamePhase.PLAYING)
        assert can_transition(GamePhase.ABILITY_TARGETING, GamePhase.PLAYING)
        assert not can_transition(GamePhase.PAUSED, GamePhase.ABILITY_TARGETING)

    def test_menu_always_reachable(self) -> None:
        for phase in GamePhase:
            assert can_transition(phase, GamePhase.MENU)

    def test_game_over_is_terminal(self) -> None:
        assert not can_transition(GamePhase.GAME_OVER, GamePhase.PLAYING)
