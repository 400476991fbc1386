"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from crownchess.core.board import Board
    from crownchess.core.enums import Team
    from crownchess.core.move import Move

CancelCheck = Callable[[], bool]

DEFAULT_TIME_LIMIT_MS = 5000


class AIDifficulty(IntEnum):
    """Opponent strength; the value doubles as the maximum search depth."""

    EASY = 1
    MEDIUM = 3
    HARD = 5
    EXPERT = 7

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def plays_random_moves(self) -> bool:
        """Easier levels sometimes throw away the searched move."""
        return self <= AIDifficulty.MEDIUM


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 3
    time_limit_ms: int | None = DEFAULT_TIME_LIMIT_MS


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score`` is from the searching team's point of view.
    """

    best_move: Move | None
    score: float
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for engines used by the game layer."""

    def search(
        self,
        board: Board,
        team: Team,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
