"""Board coordinates and helpers.

Board layout (row 0 is Black's back rank)::

    y=0   a8 b8 c8 d8 e8 f8 g8 h8
    y=1   a7 ...
    ...
    y=6   a2 ... (White pawns)
    y=7   a1 b1 c1 d1 e1 f1 g1 h1

``x`` runs from file a (0) to file h (7).
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable board coordinate."""

    x: int
    y: int

    def __str__(self) -> str:
        return self.name

    @property
    def is_valid(self) -> bool:
        return 0 <= self.x < BOARD_SIZE and 0 <= self.y < BOARD_SIZE

    @property
    def index(self) -> int:
        """Flat 0–63 index used by :class:`~crownchess.core.board.Board`."""
        return self.y * BOARD_SIZE + self.x

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Position(4, 6)`` → ``'e2'``."""
        return chr(ord("a") + self.x) + str(BOARD_SIZE - self.y)

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def chebyshev_distance(self, other: Position) -> int:
        return max(abs(self.x - other.x), abs(self.y - other.y))


def position_from_index(index: int) -> Position:
    return Position(index % BOARD_SIZE, index // BOARD_SIZE)


def parse_square(name: str) -> Position:
    """Parse square name, e.g. 'e4' → ``Position(4, 4)``."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(ord(name[0]) - ord("a"), BOARD_SIZE - int(name[1]))


ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(x, y) for y in range(BOARD_SIZE) for x in range(BOARD_SIZE)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Position(x, 0) for x in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Position(x, 1) for x in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Position(x, 2) for x in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Position(x, 3) for x in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Position(x, 4) for x in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Position(x, 5) for x in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Position(x, 6) for x in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Position(x, 7) for x in range(8))
