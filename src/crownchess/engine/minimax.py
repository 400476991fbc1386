"""Minimax search with alpha-beta pruning and iterative deepening."""

from __future__ import annotations

import logging
from time import perf_counter

from crownchess.core.board import Board
from crownchess.core.enums import Team
from crownchess.core.move import Move
from crownchess.core.move_generator import MoveGenerator
from crownchess.engine.evaluation import MATE_SCORE, PIECE_VALUES, evaluate
from crownchess.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = float("inf")


def _never_cancelled() -> bool:
    return False


class MinimaxEngine(IEngine):
    """Alpha-beta minimax where maximizing nodes belong to the searching team.

    Every child is produced with :meth:`Board.make_move` on a copy, the same
    entry point the game controller uses, so search and play agree on the
    rules. Depth 1 always completes; deeper iterations are bounded by the
    time limit and discarded if it runs out midway.
    """

    __slots__ = ("_cancel_check", "_deadline", "_nodes", "_stopped", "_enforce_limits")

    def __init__(self) -> None:
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled
        self._stopped = False
        self._enforce_limits = False

    def search(
        self,
        board: Board,
        team: Team,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._stopped = False
        self._enforce_limits = False
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

        root_gen = MoveGenerator(board)
        root_moves = root_gen.all_legal_moves(team)
        if not root_moves:
            if root_gen.is_in_check(team):
                return SearchResult(None, -MATE_SCORE, 0, self._nodes)
            return SearchResult(None, 0, 0, self._nodes)

        ordered_root = self._order_moves(board, root_moves)
        best_move = ordered_root[0]
        best_score = evaluate(board, team, to_move=team)
        completed_depth = 0

        for depth in range(1, limits.max_depth + 1):
            self._enforce_limits = depth > 1
            if self._should_stop():
                break

            score, move = self._search_root(board, team, ordered_root, depth)
            if self._stopped or move is None:
                break

            best_move = move
            best_score = score
            completed_depth = depth
            _LOGGER.debug(
                "depth %d: %s score=%.1f nodes=%d", depth, move, score, self._nodes
            )

            # Principal variation move first in the next iteration.
            ordered_root = [move] + [m for m in ordered_root if m != move]

        return SearchResult(best_move, best_score, completed_depth, self._nodes)

    def _search_root(
        self,
        board: Board,
        team: Team,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[float, Move | None]:
        best_score = -_INF_SCORE
        best_move: Move | None = None
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            child = board.copy()
            child.make_move(move)
            score = self._minimax(child, depth - 1, alpha, beta, team.opposite, team)
            if self._stopped:
                return best_score, None

            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        return best_score, best_move

    def _minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        side: Team,
        ai_team: Team,
    ) -> float:
        if self._should_stop():
            self._stopped = True
            return 0.0

        self._nodes += 1
        if depth <= 0:
            return evaluate(board, ai_team, to_move=side)

        maximizing = side == ai_team
        if board.king_position(side) is None:
            return -MATE_SCORE if maximizing else MATE_SCORE

        gen = MoveGenerator(board)
        moves = gen.all_legal_moves(side)
        if not moves:
            if not gen.is_in_check(side):
                return 0.0
            # Prefer the quickest mate and the slowest loss.
            return -(MATE_SCORE + depth) if maximizing else MATE_SCORE + depth

        best = -_INF_SCORE if maximizing else _INF_SCORE
        for move in self._order_moves(board, moves):
            child = board.copy()
            child.make_move(move)
            score = self._minimax(child, depth - 1, alpha, beta, side.opposite, ai_team)
            if self._stopped:
                return best

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if alpha >= beta:
                break
        return best

    def _should_stop(self) -> bool:
        if self._cancel_check():
            return True
        if not self._enforce_limits:
            return False
        return self._deadline is not None and perf_counter() >= self._deadline

    @staticmethod
    def _order_moves(board: Board, moves: list[Move]) -> list[Move]:
        """Captures first, most valuable victim / least valuable attacker."""

        def key(move: Move) -> int:
            victim = board.piece_at(move.to_pos)
            if victim is None:
                return 0
            attacker = board[move.from_pos]
            attacker_value = PIECE_VALUES[attacker.piece_type] if attacker else 0
            return -(PIECE_VALUES[victim.piece_type] * 10 - attacker_value // 100)

        return sorted(moves, key=key)
