"""Tests for player implementations."""

from __future__ import annotations

import random

from crownchess.core.board import Board
from crownchess.core.enums import Team
from crownchess.core.move import Move
from crownchess.core.move_generator import MoveGenerator
from crownchess.core.notation import board_from_fen
from crownchess.core.types import A1, A8
from crownchess.engine.search import AIDifficulty, CancelCheck, SearchLimits, SearchResult
from crownchess.game.player import AIController, HumanPlayer


class _RecordingEngine:
    def __init__(self, move: Move | None = None) -> None:
        self.move = move
        self.calls: list[tuple[Team, SearchLimits]] = []

    def search(
        self,
        board: Board,
        team: Team,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        self.calls.append((team, limits))
        move = self.move or MoveGenerator(board).all_legal_moves(team)[0]
        return SearchResult(move, 0.0, limits.max_depth, 1)


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Team.WHITE, "Alice")
        assert p.team == Team.WHITE
        assert p.name == "Alice"
        assert p.is_human

    def test_default_name(self) -> None:
        assert "black" in HumanPlayer(Team.BLACK).name


class TestAIController:
    def test_properties(self) -> None:
        ai = AIController(Team.BLACK, AIDifficulty.HARD, engine=_RecordingEngine())
        assert ai.team == Team.BLACK
        assert not ai.is_human
        assert ai.name == "AI (Hard)"
        assert ai.limits.max_depth == 5

    def test_uses_engine_with_difficulty_depth(self) -> None:
        engine = _RecordingEngine()
        ai = AIController(
            Team.WHITE, AIDifficulty.HARD, engine=engine, time_limit_ms=1234
        )
        move = ai.choose_move(Board.initial())
        assert move is not None
        assert engine.calls == [(Team.WHITE, SearchLimits(max_depth=5, time_limit_ms=1234))]

    def test_random_override_on_easy(self) -> None:
        engine = _RecordingEngine()
        board = Board.initial()
        ai = AIController(
            Team.WHITE,
            AIDifficulty.EASY,
            engine=engine,
            rng=random.Random(1),
            random_move_chance=1.0,
        )
        move = ai.choose_move(board)
        assert move in MoveGenerator(board).all_legal_moves(Team.WHITE)
        assert engine.calls == []

    def test_no_random_override_on_hard(self) -> None:
        engine = _RecordingEngine()
        ai = AIController(
            Team.WHITE,
            AIDifficulty.HARD,
            engine=engine,
            rng=random.Random(1),
            random_move_chance=1.0,
        )
        ai.choose_move(Board.initial())
        assert len(engine.calls) == 1

    def test_zero_chance_always_searches(self) -> None:
        engine = _RecordingEngine()
        ai = AIController(
            Team.WHITE, AIDifficulty.EASY, engine=engine, random_move_chance=0.0
        )
        for _ in range(5):
            ai.choose_move(Board.initial())
        assert len(engine.calls) == 5

    def test_seeded_rng_is_reproducible(self) -> None:
        board = Board.initial()
        picks = [
            AIController(
                Team.WHITE,
                AIDifficulty.MEDIUM,
                engine=_RecordingEngine(),
                rng=random.Random(42),
                random_move_chance=1.0,
            ).choose_move(board)
            for _ in range(2)
        ]
        assert picks[0] == picks[1]

    def test_no_legal_moves(self) -> None:
        engine = _RecordingEngine()
        ai = AIController(Team.WHITE, AIDifficulty.EASY, engine=engine)
        board = board_from_fen("k7/8/8/8/8/8/5PPP/r5K1")
        assert ai.choose_move(board) is None
        assert engine.calls == []

    def test_real_engine_finds_mate(self) -> None:
        ai = AIController(Team.WHITE, AIDifficulty.EASY, random_move_chance=0.0)
        board = board_from_fen("6k1/5ppp/8/8/8/8/8/R5K1")
        assert ai.choose_move(board) == Move(A1, A8)
