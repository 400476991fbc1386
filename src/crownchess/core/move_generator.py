"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from crownchess.core.board import Board
from crownchess.core.enums import MoveFlag, PieceType, Team
from crownchess.core.move import Move
from crownchess.core.piece import Piece
from crownchess.core.types import Position

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

# White advances towards y=0, Black towards y=7.
_PAWN_DIRECTION: dict[Team, int] = {Team.WHITE: -1, Team.BLACK: 1}
_PAWN_START_ROW: dict[Team, int] = {Team.WHITE: 6, Team.BLACK: 1}

_KING_HOME_X = 4


class MoveGenerator:
    """Generates legal moves for pieces on a :class:`Board`.

    Legality is decided by applying each candidate with
    :meth:`Board.make_move` on a scratch copy and testing check; the
    wrapped board is never mutated.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, piece: Piece) -> list[Move]:
        """All strictly legal moves for *piece*."""
        if not piece.is_alive:
            return []
        return [
            move
            for move in self.pseudo_legal_moves(piece)
            if self._leaves_king_safe(move, piece.team)
        ]

    def legal_destinations(self, piece: Piece) -> set[Position]:
        return {move.to_pos for move in self.legal_moves(piece)}

    def all_legal_moves(self, team: Team) -> list[Move]:
        moves: list[Move] = []
        for piece in self._board.pieces(team):
            moves.extend(self.legal_moves(piece))
        return moves

    def has_legal_move(self, team: Team) -> bool:
        for piece in self._board.pieces(team):
            for move in self.pseudo_legal_moves(piece):
                if self._leaves_king_safe(move, team):
                    return True
        return False

    def pseudo_legal_moves(self, piece: Piece) -> list[Move]:
        """Template moves plus castling (may leave own king in check)."""
        moves = self.raw_moves(piece)
        if piece.piece_type == PieceType.KING:
            self._gen_castling(piece, moves)
        return moves

    def raw_moves(self, piece: Piece) -> list[Move]:
        """Movement template only: no castling, no self-check filtering."""
        moves: list[Move] = []
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(piece, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(piece, KNIGHT_OFFSETS, moves)
        elif pt == PieceType.KING:
            self._gen_steps(piece, KING_OFFSETS, moves)
        else:
            self._gen_sliding(piece, _SLIDING_DIRS[pt], moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, team: Team) -> bool:
        """Is *team*'s king attacked? A missing king is never in check."""
        king_pos = self._board.king_position(team)
        if king_pos is None:
            return False
        return self.is_square_attacked(king_pos, team.opposite)

    def is_square_attacked(self, pos: Position, by_team: Team) -> bool:
        """Would any *by_team* piece's raw template reach *pos*?"""
        board = self._board

        # Pawns strike diagonally forward, so look one row behind *pos*.
        behind = pos.y - _PAWN_DIRECTION[by_team]
        for dx in (-1, 1):
            p = board.piece_at(Position(pos.x + dx, behind))
            if p is not None and p.team == by_team and p.piece_type == PieceType.PAWN:
                return True

        for dx, dy in KNIGHT_OFFSETS:
            p = board.piece_at(pos.offset(dx, dy))
            if p is not None and p.team == by_team and p.piece_type == PieceType.KNIGHT:
                return True

        for dx, dy in KING_OFFSETS:
            p = board.piece_at(pos.offset(dx, dy))
            if p is not None and p.team == by_team and p.piece_type == PieceType.KING:
                return True

        for dirs, sliders in (
            (BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
            (ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
        ):
            for dx, dy in dirs:
                cur = pos.offset(dx, dy)
                while cur.is_valid:
                    p = board[cur]
                    if p is not None:
                        if p.team == by_team and p.piece_type in sliders:
                            return True
                        break
                    cur = cur.offset(dx, dy)

        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        pos = piece.position
        dy = _PAWN_DIRECTION[piece.team]

        one_step = pos.offset(0, dy)
        if one_step.is_valid and board.is_empty(one_step):
            moves.append(Move(pos, one_step))
            if pos.y == _PAWN_START_ROW[piece.team]:
                two_step = pos.offset(0, 2 * dy)
                if two_step.is_valid and board.is_empty(two_step):
                    moves.append(Move(pos, two_step))

        for dx in (-1, 1):
            target = board.piece_at(pos.offset(dx, dy))
            if target is not None and target.team != piece.team:
                moves.append(Move(pos, target.position))

    def _gen_steps(
        self,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        pos = piece.position
        for dx, dy in offsets:
            to_pos = pos.offset(dx, dy)
            if not to_pos.is_valid:
                continue
            target = board[to_pos]
            if target is None or target.team != piece.team:
                moves.append(Move(pos, to_pos))

    def _gen_sliding(
        self,
        piece: Piece,
        dirs: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        pos = piece.position
        for dx, dy in dirs:
            to_pos = pos.offset(dx, dy)
            while to_pos.is_valid:
                target = board[to_pos]
                if target is None:
                    moves.append(Move(pos, to_pos))
                    to_pos = to_pos.offset(dx, dy)
                    continue
                if target.team != piece.team:
                    moves.append(Move(pos, to_pos))
                break

    def _gen_castling(self, king: Piece, moves: list[Move]) -> None:
        if king.has_moved or king.position.x != _KING_HOME_X:
            return
        if self.is_in_check(king.team):
            return

        y = king.position.y
        # (rook file, squares that must be empty, squares the king crosses)
        sides = (
            (MoveFlag.CASTLE_KINGSIDE, 7, (5, 6), (5, 6), 6),
            (MoveFlag.CASTLE_QUEENSIDE, 0, (1, 2, 3), (3, 2), 2),
        )
        for flag, rook_x, between, transit, king_to_x in sides:
            rook = self._board.piece_at(Position(rook_x, y))
            if (
                rook is None
                or rook.team != king.team
                or rook.piece_type != PieceType.ROOK
                or rook.has_moved
            ):
                continue
            if any(not self._board.is_empty(Position(x, y)) for x in between):
                continue
            if any(self._attacked_if_king_on(king, Position(x, y)) for x in transit):
                continue
            moves.append(Move(king.position, Position(king_to_x, y), flag))

    # -- Legality helpers (private) -----------------------------------------

    def _attacked_if_king_on(self, king: Piece, pos: Position) -> bool:
        scratch = self._board.copy()
        scratch.remove(king.position)
        scratch.place(king.moved_to(pos))
        return MoveGenerator(scratch).is_in_check(king.team)

    def _leaves_king_safe(self, move: Move, team: Team) -> bool:
        scratch = self._board.copy()
        scratch.make_move(move)
        return not MoveGenerator(scratch).is_in_check(team)
