"""FEN-style placement strings for boards.

Only the piece-placement field is supported: turn order, castling and
combat state live in the game layer. Parsed pieces get default stats and
``has_moved=False``.
"""

from __future__ import annotations

from crownchess.core.board import Board
from crownchess.core.enums import PieceType, Team
from crownchess.core.piece import make_piece, piece_id
from crownchess.core.types import BOARD_SIZE, Position

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_CHAR_MAP: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}


def board_from_fen(fen: str) -> Board:
    """Parse the placement field of a FEN string into a :class:`Board`.

    Trailing FEN fields, if present, are ignored.
    """
    parts = fen.split()
    if not parts:
        raise ValueError("Empty FEN")

    ranks = parts[0].split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    used_ids: set[str] = set()
    # FEN lists rank 8 first, which is row y=0.
    for y, rank_text in enumerate(ranks):
        x = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                x += step
            else:
                if x >= BOARD_SIZE:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                piece_type = _CHAR_MAP.get(ch.lower())
                if piece_type is None:
                    raise ValueError(f"Invalid piece character: {ch!r}")
                team = Team.WHITE if ch.isupper() else Team.BLACK
                pid = piece_id(team, piece_type, x)
                if pid in used_ids:
                    pid = f"{pid}-{y}"
                used_ids.add(pid)
                board.place(make_piece(piece_type, team, Position(x, y), id=pid))
                x += 1
            if x > BOARD_SIZE:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if x != BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    return board


def board_to_fen(board: Board) -> str:
    """Serialise piece placement (rank 8 first)."""
    ranks: list[str] = []
    for y in range(BOARD_SIZE):
        empty = 0
        row = ""
        for x in range(BOARD_SIZE):
            piece = board[Position(x, y)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        ranks.append(row)
    return "/".join(ranks)
