"""Core domain layer: board, movement rules and combat, with zero external dependencies.

Quick start::

    from crownchess.core import Board, MoveGenerator, Team

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.all_legal_moves(Team.WHITE):
        print(move)
"""

from crownchess.core.abilities import (
    ABILITIES_BY_ID,
    PIECE_ABILITIES,
    Ability,
    Buff,
    Damage,
    Debuff,
    Effect,
    Heal,
    StatusEffect,
    Teleport,
)
from crownchess.core.board import Board
from crownchess.core.combat import AbilityResult, AbilitySystem, StatusTick, UseCheck
from crownchess.core.enums import (
    AbilityKind,
    EquipmentSlot,
    GameResult,
    MoveFlag,
    PieceType,
    Rarity,
    StatusKind,
    TargetType,
    Team,
)
from crownchess.core.equipment import EQUIPMENT, Equipment, can_equip, equip, unequip
from crownchess.core.move import Move, MoveOutcome
from crownchess.core.move_generator import MoveGenerator
from crownchess.core.notation import STARTING_PLACEMENT, board_from_fen, board_to_fen
from crownchess.core.piece import DEFAULT_PIECE_STATS, Piece, PieceStats, make_piece
from crownchess.core.rules import Rules
from crownchess.core.types import Position, parse_square

__all__ = [
    # Enums
    "AbilityKind",
    "EquipmentSlot",
    "GameResult",
    "MoveFlag",
    "PieceType",
    "Rarity",
    "StatusKind",
    "TargetType",
    "Team",
    # Types / helpers
    "Position",
    "parse_square",
    # Domain objects
    "Board",
    "DEFAULT_PIECE_STATS",
    "Move",
    "MoveGenerator",
    "MoveOutcome",
    "Piece",
    "PieceStats",
    "Rules",
    "make_piece",
    # Abilities / combat
    "ABILITIES_BY_ID",
    "PIECE_ABILITIES",
    "Ability",
    "AbilityResult",
    "AbilitySystem",
    "Buff",
    "Damage",
    "Debuff",
    "Effect",
    "Heal",
    "StatusEffect",
    "StatusTick",
    "Teleport",
    "UseCheck",
    # Equipment
    "EQUIPMENT",
    "Equipment",
    "can_equip",
    "equip",
    "unequip",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_fen",
    "board_to_fen",
]
