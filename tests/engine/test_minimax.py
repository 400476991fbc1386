"""Tests for the minimax search engine."""

import pytest

from crownchess.core.board import Board
from crownchess.core.enums import Team
from crownchess.core.move import Move
from crownchess.core.move_generator import MoveGenerator
from crownchess.core.notation import board_from_fen
from crownchess.core.types import A1, A8
from crownchess.engine import DefaultEngine
from crownchess.engine.evaluation import MATE_SCORE
from crownchess.engine.minimax import MinimaxEngine
from crownchess.engine.search import AIDifficulty, SearchLimits

WHITE_MATE_IN_ONE = "6k1/5ppp/8/8/8/8/8/R5K1"
BLACK_MATE_IN_ONE = "r5k1/8/8/8/8/8/5PPP/6K1"


class TestMinimaxSearch:
    def test_finds_mate_in_one(self) -> None:
        board = board_from_fen(WHITE_MATE_IN_ONE)
        result = MinimaxEngine().search(board, Team.WHITE, SearchLimits(max_depth=2))
        assert result.best_move == Move(A1, A8)
        assert result.score >= MATE_SCORE
        assert result.depth == 2

    def test_finds_mate_in_one_for_black(self) -> None:
        board = board_from_fen(BLACK_MATE_IN_ONE)
        result = MinimaxEngine().search(board, Team.BLACK, SearchLimits(max_depth=1))
        assert result.best_move == Move(A8, A1)

    def test_returns_legal_move_from_start(self) -> None:
        board = Board.initial()
        result = MinimaxEngine().search(
            board, Team.WHITE, SearchLimits(max_depth=2, time_limit_ms=500)
        )
        assert result.best_move in MoveGenerator(board).all_legal_moves(Team.WHITE)
        assert result.depth >= 1
        assert result.nodes > 0

    def test_search_leaves_board_untouched(self) -> None:
        board = Board.initial()
        before = board.copy()
        MinimaxEngine().search(board, Team.BLACK, SearchLimits(max_depth=1))
        assert board == before

    def test_no_legal_moves_when_mated(self) -> None:
        board = board_from_fen("k7/8/8/8/8/8/5PPP/r5K1")
        result = MinimaxEngine().search(board, Team.WHITE, SearchLimits(max_depth=3))
        assert result.best_move is None
        assert result.score == -MATE_SCORE

    def test_no_legal_moves_when_stalemated(self) -> None:
        board = board_from_fen("k7/8/1Q6/8/8/8/8/7K")
        result = MinimaxEngine().search(board, Team.BLACK, SearchLimits(max_depth=3))
        assert result.best_move is None
        assert result.score == 0

    def test_depth_one_completes_despite_tiny_budget(self) -> None:
        board = Board.initial()
        result = MinimaxEngine().search(
            board, Team.WHITE, SearchLimits(max_depth=7, time_limit_ms=1)
        )
        assert result.best_move is not None
        assert result.depth >= 1

    def test_cancelled_search_still_returns_a_move(self) -> None:
        board = Board.initial()
        result = MinimaxEngine().search(
            board, Team.WHITE, SearchLimits(max_depth=3), is_cancelled=lambda: True
        )
        assert result.best_move is not None
        assert result.depth == 0

    def test_rejects_zero_depth(self) -> None:
        with pytest.raises(ValueError):
            MinimaxEngine().search(Board.initial(), Team.WHITE, SearchLimits(max_depth=0))


class TestDifficulty:
    def test_values_are_depths(self) -> None:
        assert [int(d) for d in AIDifficulty] == [1, 3, 5, 7]

    def test_display_name(self) -> None:
        assert AIDifficulty.EXPERT.display_name == "Expert"

    def test_random_moves_only_on_easier_levels(self) -> None:
        assert AIDifficulty.EASY.plays_random_moves
        assert AIDifficulty.MEDIUM.plays_random_moves
        assert not AIDifficulty.HARD.plays_random_moves
        assert not AIDifficulty.EXPERT.plays_random_moves

    def test_default_engine(self) -> None:
        assert DefaultEngine is MinimaxEngine
