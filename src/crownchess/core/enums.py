"""Core enumerations for the board, combat and ability domains."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Team(IntEnum):
    """Side of the board."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Team:
        return Team(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


class PieceType(IntEnum):
    """Piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    CASTLE_KINGSIDE = 1
    CASTLE_QUEENSIDE = 2


class AbilityKind(StrEnum):
    """How an ability is triggered."""

    ACTIVE = "active"
    PASSIVE = "passive"
    ULTIMATE = "ultimate"


class TargetType(StrEnum):
    """Which squares an ability may be aimed at."""

    SELF = "self"
    ALLY = "ally"
    ENEMY = "enemy"
    EMPTY_SQUARE = "empty_square"
    ANY_SQUARE = "any_square"
    AOE = "aoe"


class StatusKind(StrEnum):
    """Timed modifier categories."""

    BUFF = "buff"
    DEBUFF = "debuff"
    DAMAGE_OVER_TIME = "dot"
    HEAL_OVER_TIME = "hot"


class EquipmentSlot(StrEnum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"


class Rarity(IntEnum):
    COMMON = 1
    UNCOMMON = 2
    RARE = 3
    EPIC = 4
    LEGENDARY = 5


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, team: Team) -> GameResult:
        return cls.WHITE_WINS if team == Team.WHITE else cls.BLACK_WINS
