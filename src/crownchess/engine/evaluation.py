"""Static board evaluation.

Scores are accumulated from White's point of view and flipped for Black,
so callers always receive "higher is better for *team*".
"""

from __future__ import annotations

from crownchess.core.board import Board
from crownchess.core.enums import PieceType, Team
from crownchess.core.move_generator import MoveGenerator
from crownchess.core.piece import Piece
from crownchess.core.types import BOARD_SIZE

MATE_SCORE = 50_000
KING_IN_CHECK_PENALTY = -50
KING_SAFE_BONUS = 10
DOUBLED_PAWN_PENALTY = 10
MOBILITY_WEIGHT = 2

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}

# ── Piece-square tables ─────────────────────────────────────────────────────
# White's view, row 0 = rank 8. Board rows use the same orientation, so a
# White piece reads ``table[y][x]`` and a Black piece ``table[7 - y][x]``.

# fmt: off
PAWN_TABLE: tuple[tuple[int, ...], ...] = (
    (  0,   0,   0,   0,   0,   0,   0,   0),
    ( 50,  50,  50,  50,  50,  50,  50,  50),
    ( 10,  10,  20,  30,  30,  20,  10,  10),
    (  5,   5,  10,  25,  25,  10,   5,   5),
    (  0,   0,   0,  20,  20,   0,   0,   0),
    (  5,  -5, -10,   0,   0, -10,  -5,   5),
    (  5,  10,  10, -20, -20,  10,  10,   5),
    (  0,   0,   0,   0,   0,   0,   0,   0),
)

KNIGHT_TABLE: tuple[tuple[int, ...], ...] = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20,   0,   0,   0,   0, -20, -40),
    (-30,   0,  10,  15,  15,  10,   0, -30),
    (-30,   5,  15,  20,  20,  15,   5, -30),
    (-30,   0,  15,  20,  20,  15,   0, -30),
    (-30,   5,  10,  15,  15,  10,   5, -30),
    (-40, -20,   0,   5,   5,   0, -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

BISHOP_TABLE: tuple[tuple[int, ...], ...] = (
    (-20, -10, -10, -10, -10, -10, -10, -20),
    (-10,   0,   0,   0,   0,   0,   0, -10),
    (-10,   0,   5,  10,  10,   5,   0, -10),
    (-10,   5,   5,  10,  10,   5,   5, -10),
    (-10,   0,  10,  10,  10,  10,   0, -10),
    (-10,  10,  10,  10,  10,  10,  10, -10),
    (-10,   5,   0,   0,   0,   0,   5, -10),
    (-20, -10, -10, -10, -10, -10, -10, -20),
)

ROOK_TABLE: tuple[tuple[int, ...], ...] = (
    (  0,   0,   0,   0,   0,   0,   0,   0),
    (  5,  10,  10,  10,  10,  10,  10,   5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    ( -5,   0,   0,   0,   0,   0,   0,  -5),
    (  0,   0,   0,   5,   5,   0,   0,   0),
)

QUEEN_TABLE: tuple[tuple[int, ...], ...] = (
    (-20, -10, -10,  -5,  -5, -10, -10, -20),
    (-10,   0,   0,   0,   0,   0,   0, -10),
    (-10,   0,   5,   5,   5,   5,   0, -10),
    ( -5,   0,   5,   5,   5,   5,   0,  -5),
    (  0,   0,   5,   5,   5,   5,   0,  -5),
    (-10,   5,   5,   5,   5,   5,   0, -10),
    (-10,   0,   5,   0,   0,   0,   0, -10),
    (-20, -10, -10,  -5,  -5, -10, -10, -20),
)

KING_TABLE: tuple[tuple[int, ...], ...] = (
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-20, -30, -30, -40, -40, -30, -30, -20),
    (-10, -20, -20, -20, -20, -20, -20, -10),
    ( 20,  20,   0,   0,   0,   0,  20,  20),
    ( 20,  30,  10,   0,   0,  10,  30,  20),
)
# fmt: on

PIECE_SQUARE_TABLES: dict[PieceType, tuple[tuple[int, ...], ...]] = {
    PieceType.PAWN: PAWN_TABLE,
    PieceType.KNIGHT: KNIGHT_TABLE,
    PieceType.BISHOP: BISHOP_TABLE,
    PieceType.ROOK: ROOK_TABLE,
    PieceType.QUEEN: QUEEN_TABLE,
    PieceType.KING: KING_TABLE,
}


def piece_square_bonus(piece: Piece) -> int:
    table = PIECE_SQUARE_TABLES[piece.piece_type]
    row = piece.position.y if piece.team == Team.WHITE else 7 - piece.position.y
    return table[row][piece.position.x]


def rpg_bonus(piece: Piece) -> float:
    """Combat strength scaled by remaining health."""
    return (piece.stats.attack_power + piece.stats.defense) * piece.stats.hp_ratio


def evaluate(board: Board, team: Team, to_move: Team | None = None) -> float:
    """Score *board* for *team*.

    *to_move* limits the stalemate/checkmate test to the side about to
    act; without it both sides are examined.
    """
    white = _evaluate_for_white(board, to_move)
    return white if team == Team.WHITE else -white


def _evaluate_for_white(board: Board, to_move: Team | None) -> float:
    for team in (Team.WHITE, Team.BLACK):
        if board.king_position(team) is None:
            return -MATE_SCORE if team == Team.WHITE else MATE_SCORE

    gen = MoveGenerator(board)
    mobility = {team: len(gen.all_legal_moves(team)) for team in Team}
    in_check = {team: gen.is_in_check(team) for team in Team}

    score = 0.0
    for team in (Team if to_move is None else (to_move,)):
        if mobility[team] == 0:
            if not in_check[team]:
                return 0.0
            score += -MATE_SCORE if team == Team.WHITE else MATE_SCORE

    pawn_files: dict[Team, list[int]] = {team: [0] * BOARD_SIZE for team in Team}
    for piece in board:
        value = PIECE_VALUES[piece.piece_type] + piece_square_bonus(piece)
        value += rpg_bonus(piece)
        score += value if piece.team == Team.WHITE else -value
        if piece.piece_type == PieceType.PAWN:
            pawn_files[piece.team][piece.position.x] += 1

    for team in Team:
        sign = 1 if team == Team.WHITE else -1
        safety = KING_IN_CHECK_PENALTY if in_check[team] else KING_SAFE_BONUS
        score += sign * safety
        doubled = sum(count - 1 for count in pawn_files[team] if count > 1)
        score -= sign * DOUBLED_PAWN_PENALTY * doubled

    score += MOBILITY_WEIGHT * (mobility[Team.WHITE] - mobility[Team.BLACK])
    return score
