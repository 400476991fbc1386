"""Runs AI turns on a worker thread and hands moves back to the controller."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal

from crownchess.core.board import Board
from crownchess.core.move import Move
from crownchess.engine.qt_bridge import AIWorker
from crownchess.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class _AIRequestBus(QObject):
    """Signal bridge for issuing worker requests with queued delivery."""

    move_requested = pyqtSignal(object, object, int)


class AISession:
    """Owns the worker thread lifecycle for one :class:`GameController`.

    Once :meth:`setup` has run, the controller dispatches AI turns here.
    Each request waits ``ai_move_delay_ms`` before the search starts so a
    front end can finish animating the previous move. Results carrying an
    outdated request id are dropped.
    """

    __slots__ = (
        "__weakref__",
        "_controller",
        "_delay_ms",
        "_request_bus",
        "_dispatch_timer",
        "_thread",
        "_worker",
        "_request_id",
        "_pending_request",
        "_pending_board",
        "_is_started",
    )

    def __init__(
        self,
        controller: GameController,
        *,
        parent: QObject | None = None,
        delay_ms: int | None = None,
    ) -> None:
        self._controller = controller
        self._delay_ms = (
            controller.settings.ai_move_delay_ms if delay_ms is None else delay_ms
        )

        self._request_bus = _AIRequestBus(parent)
        self._dispatch_timer = QTimer(parent)
        self._dispatch_timer.setSingleShot(True)
        self._dispatch_timer.timeout.connect(self._emit_pending_request)

        self._thread = QThread(parent)
        self._worker = AIWorker()
        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_board: Board | None = None
        self._is_started = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    @property
    def pending_request(self) -> int | None:
        return self._pending_request

    def setup(self) -> None:
        """Start the worker thread and take over the controller's AI turns."""
        if self._is_started:
            return
        self._worker.moveToThread(self._thread)
        self._request_bus.move_requested.connect(self._worker.request_move)
        self._worker.move_ready.connect(self._on_move_ready)
        self._worker.search_no_move.connect(self._on_no_move)
        self._worker.search_error.connect(self._on_error)
        self._thread.start()
        self._controller.set_ai_dispatcher(self.request_ai_move)
        self._is_started = True

    def shutdown(self) -> None:
        """Stop dispatching and shut the worker thread down."""
        if not self._is_started:
            return
        self._controller.set_ai_dispatcher(None)
        self._dispatch_timer.stop()
        self._thread.quit()
        self._thread.wait(2000)
        if self._pending_request is not None:
            self._clear_pending_request()
            self._controller.complete_ai_move(None)
        self._is_started = False

    def request_ai_move(self, board: Board) -> None:
        """Queue a search on *board* after the configured delay."""
        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_board = board
        self._dispatch_timer.start(max(self._delay_ms, 0))

    def _emit_pending_request(self) -> None:
        request_id = self._pending_request
        board = self._pending_board
        ai = self._controller.ai
        if request_id is None or board is None:
            return
        if ai is None:
            self._clear_pending_request()
            self._controller.complete_ai_move(None)
            return
        self._request_bus.move_requested.emit(ai, board, request_id)

    def _on_move_ready(self, request_id: int, move_obj: object) -> None:
        if request_id != self._pending_request:
            return
        self._clear_pending_request()
        if not isinstance(move_obj, Move):
            _LOGGER.warning("AI worker returned %r instead of a move", move_obj)
            self._controller.complete_ai_move(None)
            return
        self._controller.complete_ai_move(move_obj)

    def _on_no_move(self, request_id: int) -> None:
        if request_id != self._pending_request:
            return
        self._clear_pending_request()
        self._controller.complete_ai_move(None)

    def _on_error(self, request_id: int, message: str) -> None:
        if request_id != self._pending_request:
            return
        _LOGGER.error("AI search failed: %s", message)
        self._clear_pending_request()
        self._controller.complete_ai_move(None)

    def _clear_pending_request(self) -> None:
        self._pending_request = None
        self._pending_board = None
