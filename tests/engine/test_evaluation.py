"""Tests for the static evaluation."""

from crownchess.core.board import Board
from crownchess.core.enums import PieceType, Team
from crownchess.core.notation import board_from_fen
from crownchess.core.piece import make_piece
from crownchess.core.types import D8, E2, E7, E4
from crownchess.engine.evaluation import (
    MATE_SCORE,
    PIECE_VALUES,
    evaluate,
    piece_square_bonus,
    rpg_bonus,
)


class TestEvaluate:
    def test_initial_position_is_balanced(self) -> None:
        board = Board.initial()
        assert evaluate(board, Team.WHITE) == 0
        assert evaluate(board, Team.BLACK) == 0

    def test_perspective_flips(self) -> None:
        board = Board.initial()
        board.remove(D8)
        white = evaluate(board, Team.WHITE)
        assert white > PIECE_VALUES[PieceType.QUEEN] / 2
        assert evaluate(board, Team.BLACK) == -white

    def test_checkmate_scores_mate(self) -> None:
        board = board_from_fen("k7/8/8/8/8/8/5PPP/r5K1")
        assert evaluate(board, Team.BLACK, to_move=Team.WHITE) > MATE_SCORE / 2
        assert evaluate(board, Team.WHITE, to_move=Team.WHITE) < -MATE_SCORE / 2

    def test_stalemate_is_zero(self) -> None:
        board = board_from_fen("k7/8/1Q6/8/8/8/8/7K")
        assert evaluate(board, Team.WHITE, to_move=Team.BLACK) == 0

    def test_missing_king(self) -> None:
        board = board_from_fen("8/8/8/8/8/8/8/K7")
        assert evaluate(board, Team.WHITE) == MATE_SCORE
        assert evaluate(board, Team.BLACK) == -MATE_SCORE

    def test_wounded_pieces_are_worth_less(self) -> None:
        board = Board.initial()
        pawn = board[E2]
        assert pawn is not None
        board.replace(pawn.with_stats(pawn.stats.with_hp(10)))
        assert evaluate(board, Team.WHITE) < 0


class TestTerms:
    def test_piece_square_tables_are_mirrored(self) -> None:
        white = make_piece(PieceType.PAWN, Team.WHITE, E2)
        black = make_piece(PieceType.PAWN, Team.BLACK, E7)
        assert piece_square_bonus(white) == piece_square_bonus(black) == -20

    def test_advanced_pawn_is_better(self) -> None:
        home = make_piece(PieceType.PAWN, Team.WHITE, E2)
        advanced = make_piece(PieceType.PAWN, Team.WHITE, E4)
        assert piece_square_bonus(advanced) > piece_square_bonus(home)

    def test_rpg_bonus_scales_with_health(self) -> None:
        pawn = make_piece(PieceType.PAWN, Team.WHITE, E2)
        assert rpg_bonus(pawn) == 25
        half = pawn.with_stats(pawn.stats.with_hp(25))
        assert rpg_bonus(half) == 12.5
