"""High-level rules: check, checkmate, stalemate, game outcome."""

from __future__ import annotations

from crownchess.core.board import Board
from crownchess.core.enums import GameResult, Team
from crownchess.core.move import Move
from crownchess.core.move_generator import MoveGenerator
from crownchess.core.piece import Piece
from crownchess.core.types import Position


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def legal_moves(board: Board, piece: Piece) -> list[Move]:
        return MoveGenerator(board).legal_moves(piece)

    @staticmethod
    def all_legal_moves(board: Board, team: Team) -> list[Move]:
        return MoveGenerator(board).all_legal_moves(team)

    @staticmethod
    def find_legal_move(
        board: Board, from_pos: Position, to_pos: Position
    ) -> Move | None:
        """The legal move of the piece on *from_pos* landing on *to_pos*."""
        piece = board.piece_at(from_pos)
        if piece is None:
            return None
        for move in MoveGenerator(board).legal_moves(piece):
            if move.to_pos == to_pos:
                return move
        return None

    @staticmethod
    def is_move_valid(board: Board, piece: Piece, to_pos: Position) -> bool:
        return to_pos in MoveGenerator(board).legal_destinations(piece)

    @staticmethod
    def has_legal_move(board: Board, team: Team) -> bool:
        return MoveGenerator(board).has_legal_move(team)

    @staticmethod
    def is_in_check(board: Board, team: Team) -> bool:
        return MoveGenerator(board).is_in_check(team)

    @staticmethod
    def is_checkmate(board: Board, team: Team) -> bool:
        gen = MoveGenerator(board)
        return gen.is_in_check(team) and not gen.has_legal_move(team)

    @staticmethod
    def is_stalemate(board: Board, team: Team) -> bool:
        gen = MoveGenerator(board)
        return not gen.is_in_check(team) and not gen.has_legal_move(team)

    @staticmethod
    def game_result(
        board: Board, to_move: Team, *, stalemate_is_draw: bool = True
    ) -> GameResult:
        """Determine the result with *to_move* about to act.

        A side whose king has been killed by combat damage has lost.
        """
        for team in (Team.WHITE, Team.BLACK):
            if board.king_position(team) is None:
                return GameResult.win_for(team.opposite)

        gen = MoveGenerator(board)
        if gen.has_legal_move(to_move):
            return GameResult.IN_PROGRESS
        if gen.is_in_check(to_move):
            return GameResult.win_for(to_move.opposite)
        return GameResult.DRAW if stalemate_is_draw else GameResult.IN_PROGRESS

