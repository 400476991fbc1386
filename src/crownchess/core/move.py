"""Move value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from crownchess.core.enums import MoveFlag
from crownchess.core.types import Position

if TYPE_CHECKING:
    from crownchess.core.piece import Piece


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single board move."""

    from_pos: Position
    to_pos: Position
    flag: MoveFlag = MoveFlag.NORMAL

    def __str__(self) -> str:
        return f"{self.from_pos.name}{self.to_pos.name}"

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)


def castling_rook_squares(move: Move) -> tuple[Position, Position]:
    """(rook origin, rook destination) for a castling *move*."""
    y = move.from_pos.y
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        return Position(7, y), Position(5, y)
    if move.flag == MoveFlag.CASTLE_QUEENSIDE:
        return Position(0, y), Position(3, y)
    raise ValueError(f"Not a castling move: {move}")


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What :meth:`Board.make_move` did.

    ``captured`` is the defender as it was before the strike; ``damage`` is
    set whenever a defender was struck, whether or not it survived.
    """

    moved_piece: Piece
    captured: Piece | None = None
    damage: int | None = None
    killed: bool = False
    castled: bool = False

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
