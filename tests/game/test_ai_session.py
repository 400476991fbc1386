"""Tests for AISession wiring between the controller and the worker thread."""

from __future__ import annotations

import logging
import weakref

import pytest
from PyQt6.QtTest import QTest

from crownchess.config import GameSettings
from crownchess.core.enums import Team
from crownchess.core.move import Move
from crownchess.core.types import E2, E4
from crownchess.engine.search import AIDifficulty
from crownchess.game.ai_session import AISession
from crownchess.game.controller import GameController

pytestmark = pytest.mark.usefixtures("qapp")

# Long enough that the dispatch timer never fires inside a test.
_NEVER_MS = 60_000


def _controller() -> GameController:
    return GameController(GameSettings(ai_random_move_chance=0.0))


def _pending_session(controller: GameController) -> AISession:
    """A started session holding the AI's opening request (AI plays white)."""
    session = AISession(controller, delay_ms=_NEVER_MS)
    session.setup()
    controller.start_ai_game(AIDifficulty.EASY, Team.WHITE)
    return session


class TestAISession:
    def test_shutdown_before_setup_is_noop(self) -> None:
        session = AISession(_controller())
        session.shutdown()
        assert session.is_started is False

    def test_setup_twice_keeps_started_state(self) -> None:
        session = AISession(_controller())
        session.setup()
        session.setup()
        assert session.is_started is True
        session.shutdown()
        assert session.is_started is False

    def test_setup_connects_slots_without_weakref_error(self) -> None:
        session = AISession(_controller())
        assert weakref.ref(session)() is session
        session.setup()
        session.shutdown()

    def test_delay_defaults_to_settings(self) -> None:
        controller = GameController(GameSettings(ai_move_delay_ms=250))
        session = AISession(controller)
        assert session._delay_ms == 250

    def test_ai_turn_is_dispatched_to_session(self) -> None:
        controller = _controller()
        session = _pending_session(controller)

        assert session.pending_request == 1
        assert controller.state.is_ai_thinking
        assert controller.state.move_history == []

        session.shutdown()

    def test_shutdown_releases_pending_turn(self) -> None:
        controller = _controller()
        session = _pending_session(controller)

        session.shutdown()

        assert session.pending_request is None
        assert not controller.state.is_ai_thinking

    def test_move_ready_applies_move(self) -> None:
        controller = _controller()
        session = _pending_session(controller)

        session._on_move_ready(1, Move(E2, E4))

        assert session.pending_request is None
        assert len(controller.state.move_history) == 1
        assert controller.state.current_turn == Team.BLACK
        session.shutdown()

    def test_stale_results_are_ignored(self) -> None:
        controller = _controller()
        session = _pending_session(controller)

        session._on_move_ready(99, Move(E2, E4))
        session._on_no_move(99)
        session._on_error(99, "boom")

        assert session.pending_request == 1
        assert controller.state.is_ai_thinking
        assert controller.state.move_history == []
        session.shutdown()

    def test_non_move_result_releases_turn(self) -> None:
        controller = _controller()
        session = _pending_session(controller)

        session._on_move_ready(1, "e2e4")

        assert session.pending_request is None
        assert not controller.state.is_ai_thinking
        assert controller.state.move_history == []
        session.shutdown()

    def test_error_is_logged_and_turn_released(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        controller = _controller()
        session = _pending_session(controller)

        with caplog.at_level(logging.ERROR, logger="crownchess.game.ai_session"):
            session._on_error(1, "boom")

        assert "AI search failed: boom" in caplog.text
        assert session.pending_request is None
        assert not controller.state.is_ai_thinking
        session.shutdown()

    def test_worker_thread_plays_the_ai_move(self) -> None:
        controller = _controller()
        session = AISession(controller, delay_ms=0)
        session.setup()
        try:
            controller.start_ai_game(AIDifficulty.EASY, Team.WHITE)
            for _ in range(100):
                if controller.state.move_history:
                    break
                QTest.qWait(50)
        finally:
            session.shutdown()

        assert len(controller.state.move_history) == 1
        assert controller.state.current_turn == Team.BLACK
        assert not controller.state.is_ai_thinking
