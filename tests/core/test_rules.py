"""Tests for check, checkmate and stalemate rules."""

from crownchess.core.board import Board
from crownchess.core.enums import GameResult, MoveFlag, Team
from crownchess.core.notation import board_from_fen
from crownchess.core.rules import Rules
from crownchess.core.types import E1, E2, E4, E5, G1, H2, parse_square

# Back-rank check where Kh2 is the only way out.
ONE_ESCAPE = "k7/8/8/8/8/8/5PP1/r5K1"
# Same with h2 blocked by a pawn: back-rank mate.
BACK_RANK_MATE = "k7/8/8/8/8/8/5PPP/r5K1"
STALEMATE = "k7/8/1Q6/8/8/8/8/7K"


class TestCheckmate:
    def test_single_escape_is_not_mate(self) -> None:
        board = board_from_fen(ONE_ESCAPE)
        assert Rules.is_in_check(board, Team.WHITE)
        moves = Rules.all_legal_moves(board, Team.WHITE)
        assert [(m.from_pos, m.to_pos) for m in moves] == [(G1, H2)]
        assert not Rules.is_checkmate(board, Team.WHITE)

    def test_blocking_the_escape_is_mate(self) -> None:
        board = board_from_fen(BACK_RANK_MATE)
        assert Rules.is_checkmate(board, Team.WHITE)
        assert not Rules.has_legal_move(board, Team.WHITE)
        assert not Rules.is_stalemate(board, Team.WHITE)

    def test_checkmate_result(self) -> None:
        board = board_from_fen(BACK_RANK_MATE)
        assert Rules.game_result(board, Team.WHITE) == GameResult.BLACK_WINS

    def test_initial_position_in_progress(self) -> None:
        board = Board.initial()
        assert Rules.game_result(board, Team.WHITE) == GameResult.IN_PROGRESS
        assert not Rules.is_checkmate(board, Team.WHITE)
        assert not Rules.is_stalemate(board, Team.WHITE)


class TestStalemate:
    def test_stalemate_detected(self) -> None:
        board = board_from_fen(STALEMATE)
        assert Rules.is_stalemate(board, Team.BLACK)
        assert not Rules.is_checkmate(board, Team.BLACK)
        assert not Rules.is_in_check(board, Team.BLACK)

    def test_stalemate_is_draw_by_default(self) -> None:
        board = board_from_fen(STALEMATE)
        assert Rules.game_result(board, Team.BLACK) == GameResult.DRAW

    def test_stalemate_can_stay_open(self) -> None:
        board = board_from_fen(STALEMATE)
        result = Rules.game_result(board, Team.BLACK, stalemate_is_draw=False)
        assert result == GameResult.IN_PROGRESS


class TestGameResult:
    def test_missing_king_loses(self) -> None:
        board = board_from_fen("k7/8/8/8/8/8/8/R7")
        assert Rules.game_result(board, Team.WHITE) == GameResult.BLACK_WINS

    def test_missing_black_king(self) -> None:
        board = board_from_fen("8/8/8/8/8/8/8/K6r")
        assert Rules.game_result(board, Team.BLACK) == GameResult.WHITE_WINS


class TestMoveLookup:
    def test_find_legal_move(self) -> None:
        board = Board.initial()
        move = Rules.find_legal_move(board, E2, E4)
        assert move is not None and move.flag == MoveFlag.NORMAL

    def test_find_illegal_move(self) -> None:
        board = Board.initial()
        assert Rules.find_legal_move(board, E2, E5) is None
        assert Rules.find_legal_move(board, parse_square("e4"), E5) is None

    def test_find_castling_move(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K2R")
        move = Rules.find_legal_move(board, E1, G1)
        assert move is not None and move.flag == MoveFlag.CASTLE_KINGSIDE

    def test_is_move_valid(self) -> None:
        board = Board.initial()
        pawn = board[E2]
        assert pawn is not None
        assert Rules.is_move_valid(board, pawn, E4)
        assert not Rules.is_move_valid(board, pawn, E5)
