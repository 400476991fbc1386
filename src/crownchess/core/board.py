"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from crownchess.core.enums import PieceType, Team
from crownchess.core.move import Move, MoveOutcome, castling_rook_squares
from crownchess.core.piece import Piece, make_piece, strike_damage
from crownchess.core.types import BOARD_SIZE, Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(pos: Position) -> int:
    if not pos.is_valid:
        raise ValueError(f"Position off the board: {pos!r}")
    return pos.index


class Board:
    """Mutable 64-cell grid of immutable pieces.

    Every write keeps ``piece.position`` equal to the cell holding it.
    :meth:`copy` is shallow because pieces never change in place.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * (BOARD_SIZE * BOARD_SIZE)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._cells[_index(pos)]

    def piece_at(self, pos: Position) -> Piece | None:
        """Occupant of *pos*, or ``None`` when empty or off the board."""
        if not pos.is_valid:
            return None
        return self._cells[pos.index]

    def is_empty(self, pos: Position) -> bool:
        return self._cells[_index(pos)] is None

    def __iter__(self) -> Iterator[Piece]:
        """Occupants in row-major order (y, then x)."""
        return (piece for piece in self._cells if piece is not None)

    # -- Query helpers ------------------------------------------------------

    def pieces(self, team: Team | None = None) -> list[Piece]:
        """Living occupants, optionally restricted to *team*."""
        return [
            piece
            for piece in self._cells
            if piece is not None and (team is None or piece.team == team)
        ]

    def find(self, piece_id: str) -> Piece | None:
        for piece in self._cells:
            if piece is not None and piece.id == piece_id:
                return piece
        return None

    def king_position(self, team: Team) -> Position | None:
        """Square of *team*'s king, or ``None`` if it is gone."""
        for piece in self._cells:
            if (
                piece is not None
                and piece.team == team
                and piece.piece_type == PieceType.KING
            ):
                return piece.position
        return None

    # -- Mutation -----------------------------------------------------------

    def place(self, piece: Piece) -> None:
        """Put *piece* on the cell named by its own position."""
        self._cells[_index(piece.position)] = piece

    def replace(self, piece: Piece) -> None:
        """Swap in an updated snapshot of the piece already on that cell."""
        idx = _index(piece.position)
        current = self._cells[idx]
        if current is None or current.id != piece.id:
            raise ValueError(f"{piece.id} is not on {piece.position}")
        self._cells[idx] = piece

    def remove(self, pos: Position) -> Piece | None:
        idx = _index(pos)
        piece = self._cells[idx]
        self._cells[idx] = None
        return piece

    def relocate(self, from_pos: Position, to_pos: Position) -> Piece:
        """Move the occupant of *from_pos* onto *to_pos* (overwriting it)."""
        piece = self.remove(from_pos)
        if piece is None:
            raise ValueError(f"No piece on {from_pos}")
        moved = piece.moved_to(to_pos)
        self.place(moved)
        return moved

    def make_move(self, move: Move) -> MoveOutcome:
        """Apply *move*, resolving castling and combat captures.

        The caller is responsible for legality. A struck defender that
        survives keeps its cell; the attacker then stays put but counts
        as having moved.
        """
        piece = self[move.from_pos]
        if piece is None:
            raise ValueError(f"No piece on {move.from_pos}")

        if move.is_castling:
            rook_from, rook_to = castling_rook_squares(move)
            self.relocate(rook_from, rook_to)
            moved = self.relocate(move.from_pos, move.to_pos)
            return MoveOutcome(moved, castled=True)

        defender = self[move.to_pos]
        if defender is None:
            return MoveOutcome(self.relocate(move.from_pos, move.to_pos))

        damage = strike_damage(piece.stats.attack_power, defender.stats.defense)
        wounded = defender.with_stats(defender.stats.damaged(damage))
        if wounded.stats.current_hp <= 0:
            self.remove(move.to_pos)
            moved = self.relocate(move.from_pos, move.to_pos)
            return MoveOutcome(moved, captured=defender, damage=damage, killed=True)

        self.replace(wounded)
        stayed = piece.moved_to(move.from_pos)
        self.replace(stayed)
        return MoveOutcome(stayed, captured=defender, damage=damage)

    def copy(self) -> Board:
        b = Board()
        b._cells = self._cells.copy()
        return b

    def clear(self) -> None:
        self._cells = [None] * (BOARD_SIZE * BOARD_SIZE)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting layout with default stats and abilities."""
        b = cls()
        for x in range(BOARD_SIZE):
            b.place(make_piece(PieceType.PAWN, Team.BLACK, Position(x, 1)))
            b.place(make_piece(PieceType.PAWN, Team.WHITE, Position(x, 6)))
        for x, piece_type in enumerate(_BACK_RANK):
            b.place(make_piece(piece_type, Team.BLACK, Position(x, 0)))
            b.place(make_piece(piece_type, Team.WHITE, Position(x, 7)))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(BOARD_SIZE):
            row = []
            for x in range(BOARD_SIZE):
                p = self._cells[y * BOARD_SIZE + x]
                row.append(str(p) if p else ".")
            rows.append(f"{BOARD_SIZE - y} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
