"""Qt bridge to run the AI opponent in a worker thread."""

from __future__ import annotations

from typing import Protocol

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from crownchess.core.board import Board
from crownchess.core.move import Move


class MoveChooser(Protocol):
    """Anything that can pick a move for a board (e.g. ``AIController``)."""

    def choose_move(self, board: Board) -> Move | None: ...


class AIWorker(QObject):
    """Thread-affine worker that computes AI moves on demand."""

    move_ready = pyqtSignal(int, object)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    @pyqtSlot(object, object, int)
    def request_move(self, chooser: object, board_obj: object, request_id: int) -> None:
        """Ask *chooser* for a move on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "AI received invalid board")
            return
        choose = getattr(chooser, "choose_move", None)
        if choose is None:
            self.search_error.emit(request_id, "AI received invalid controller")
            return

        try:
            move = choose(board_obj)
        except Exception as exc:
            self.search_error.emit(request_id, str(exc))
            return

        if move is None:
            self.search_no_move.emit(request_id)
            return
        self.move_ready.emit(request_id, move)
