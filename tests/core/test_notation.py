"""Tests for FEN placement parsing and serialisation."""

import pytest

from crownchess.core.board import Board
from crownchess.core.enums import PieceType, Team
from crownchess.core.notation import STARTING_PLACEMENT, board_from_fen, board_to_fen
from crownchess.core.types import A1, E1, E8, H8, parse_square


class TestFenParsing:
    def test_starting_placement_matches_initial(self) -> None:
        assert board_from_fen(STARTING_PLACEMENT) == Board.initial()

    def test_kings(self) -> None:
        board = board_from_fen(STARTING_PLACEMENT)
        king = board[E1]
        assert king is not None
        assert king.piece_type == PieceType.KING and king.team == Team.WHITE
        black_king = board[E8]
        assert black_king is not None and black_king.team == Team.BLACK

    def test_trailing_fields_ignored(self) -> None:
        board = board_from_fen(STARTING_PLACEMENT + " w KQkq - 0 1")
        assert board == Board.initial()

    def test_sparse_board(self) -> None:
        board = board_from_fen("7k/8/8/8/8/8/8/R3K3")
        assert len(board.pieces()) == 3
        rook = board[A1]
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert board[H8] is not None

    def test_duplicate_files_get_unique_ids(self) -> None:
        board = board_from_fen("4k3/8/8/8/4P3/8/4P3/4K3")
        ids = {piece.id for piece in board}
        assert len(ids) == len(board.pieces())
        assert board.find("white-pawn-4") is not None

    def test_parsed_pieces_are_fresh(self) -> None:
        board = board_from_fen("4k3/8/8/8/4P3/8/8/4K3")
        pawn = board[parse_square("e4")]
        assert pawn is not None
        assert not pawn.has_moved
        assert pawn.stats.current_hp == pawn.stats.max_hp


class TestFenErrors:
    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8",
            "9/8/8/8/8/8/8/8",
            "rnbqkbnrr/8/8/8/8/8/8/8",
            "7/8/8/8/8/8/8/8",
            "x7/8/8/8/8/8/8/8",
        ],
    )
    def test_invalid_placement(self, fen: str) -> None:
        with pytest.raises(ValueError):
            board_from_fen(fen)


class TestFenSerialisation:
    def test_initial_round_trip(self) -> None:
        assert board_to_fen(Board.initial()) == STARTING_PLACEMENT

    def test_after_move(self) -> None:
        board = Board.initial()
        board.relocate(parse_square("e2"), parse_square("e4"))
        assert board_to_fen(board) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"

    def test_empty_board(self) -> None:
        assert board_to_fen(Board()) == "8/8/8/8/8/8/8/8"
