"""Concrete player implementations."""

from __future__ import annotations

import logging
import random

from crownchess.core.board import Board
from crownchess.core.enums import Team
from crownchess.core.move import Move
from crownchess.core.rules import Rules
from crownchess.engine import DefaultEngine, IEngine
from crownchess.engine.search import (
    DEFAULT_TIME_LIMIT_MS,
    AIDifficulty,
    SearchLimits,
)
from crownchess.game.interfaces import IPlayer

_LOGGER = logging.getLogger(__name__)


class HumanPlayer(IPlayer):
    """A human participant; moves arrive through the controller commands."""

    __slots__ = ("_team", "_name")

    def __init__(self, team: Team, name: str = "") -> None:
        self._team = team
        self._name = name or f"Player ({team})"

    @property
    def team(self) -> Team:
        return self._team

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True


class AIController(IPlayer):
    """Computer opponent that picks moves with a search engine.

    Easier difficulties sometimes play a uniformly random legal move
    instead of the searched one. Pass a seeded ``random.Random`` as *rng*
    to make that choice reproducible.

    Args:
        team: Side the AI plays.
        difficulty: Strength; also the maximum search depth.
        engine: Search engine, ``DefaultEngine()`` when omitted.
        rng: Source of randomness for the random-move override.
        random_move_chance: Probability of the override at EASY/MEDIUM.
        time_limit_ms: Budget for one search.
    """

    __slots__ = (
        "_team",
        "_difficulty",
        "_engine",
        "_rng",
        "_random_move_chance",
        "_time_limit_ms",
    )

    def __init__(
        self,
        team: Team,
        difficulty: AIDifficulty = AIDifficulty.MEDIUM,
        *,
        engine: IEngine | None = None,
        rng: random.Random | None = None,
        random_move_chance: float = 0.3,
        time_limit_ms: int | None = DEFAULT_TIME_LIMIT_MS,
    ) -> None:
        self._team = team
        self._difficulty = difficulty
        self._engine: IEngine = engine if engine is not None else DefaultEngine()
        self._rng = rng or random.Random()
        self._random_move_chance = random_move_chance
        self._time_limit_ms = time_limit_ms

    @property
    def team(self) -> Team:
        return self._team

    @property
    def name(self) -> str:
        return f"AI ({self._difficulty.display_name})"

    @property
    def is_human(self) -> bool:
        return False

    @property
    def difficulty(self) -> AIDifficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, value: AIDifficulty) -> None:
        self._difficulty = value

    @property
    def limits(self) -> SearchLimits:
        return SearchLimits(
            max_depth=int(self._difficulty), time_limit_ms=self._time_limit_ms
        )

    def choose_move(self, board: Board) -> Move | None:
        """Pick a move for this AI's team, or ``None`` when it has none."""
        legal = Rules.all_legal_moves(board, self._team)
        if not legal:
            return None

        if (
            self._difficulty.plays_random_moves
            and self._rng.random() < self._random_move_chance
        ):
            move = self._rng.choice(legal)
            _LOGGER.debug("%s plays random move %s", self.name, move)
            return move

        result = self._engine.search(board, self._team, self.limits)
        _LOGGER.debug(
            "%s chose %s (score=%.1f depth=%d nodes=%d)",
            self.name,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )
        return result.best_move
