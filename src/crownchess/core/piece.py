"""Piece and stat value objects.

Both are frozen: every change produces a new object, so copies of a
:class:`~crownchess.core.board.Board` can share untouched pieces.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from crownchess.core.abilities import PIECE_ABILITIES, Ability, StatusEffect
from crownchess.core.enums import EquipmentSlot, PieceType, Team
from crownchess.core.types import Position


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True, slots=True)
class PieceStats:
    """Resource and attribute bundle.

    Every helper returning a new bundle clamps hp and mana into
    ``[0, max]``.
    """

    max_hp: int
    current_hp: int
    max_mana: int
    current_mana: int
    attack_power: int
    defense: int
    speed: int
    magic_power: int
    critical_chance: int
    critical_damage: int
    temp_hp: int | None = None
    temp_hp_turns: int | None = None

    @property
    def hp_ratio(self) -> float:
        return self.current_hp / self.max_hp if self.max_hp > 0 else 0.0

    def with_hp(self, hp: int) -> PieceStats:
        return replace(self, current_hp=_clamp(hp, 0, self.max_hp))

    def with_mana(self, mana: int) -> PieceStats:
        return replace(self, current_mana=_clamp(mana, 0, self.max_mana))

    def damaged(self, amount: int) -> PieceStats:
        return self.with_hp(self.current_hp - amount)

    def healed(self, amount: int) -> PieceStats:
        return self.with_hp(self.current_hp + amount)

    def regenerated(self, mana: int) -> PieceStats:
        return self.with_mana(self.current_mana + mana)

    def tick_temp_hp(self) -> PieceStats:
        """Count down temporary hp, clearing it once it runs out."""
        if not self.temp_hp_turns or self.temp_hp_turns <= 0:
            return self
        remaining = self.temp_hp_turns - 1
        if remaining <= 0:
            return replace(self, temp_hp=None, temp_hp_turns=None)
        return replace(self, temp_hp_turns=remaining)


def _stats(
    hp: int, atk: int, dfn: int, speed: int, magic: int, crit: int, crit_dmg: int
) -> PieceStats:
    return PieceStats(
        max_hp=hp,
        current_hp=hp,
        max_mana=100,
        current_mana=100,
        attack_power=atk,
        defense=dfn,
        speed=speed,
        magic_power=magic,
        critical_chance=crit,
        critical_damage=crit_dmg,
    )


DEFAULT_PIECE_STATS: dict[PieceType, PieceStats] = {
    PieceType.PAWN: _stats(50, 20, 5, 3, 5, 5, 50),
    PieceType.KNIGHT: _stats(75, 30, 8, 6, 8, 15, 75),
    PieceType.BISHOP: _stats(70, 25, 6, 4, 20, 10, 60),
    PieceType.ROOK: _stats(100, 35, 12, 2, 5, 8, 80),
    PieceType.QUEEN: _stats(120, 40, 10, 5, 25, 20, 90),
    PieceType.KING: _stats(150, 30, 15, 3, 15, 12, 70),
}

_SYMBOLS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable snapshot of a piece on (or removed from) the board."""

    id: str
    piece_type: PieceType
    team: Team
    position: Position
    stats: PieceStats
    has_moved: bool = False
    is_alive: bool = True
    level: int = 1
    experience: int = 0
    experience_to_next_level: int = 100
    abilities: tuple[Ability, ...] = ()
    status_effects: tuple[StatusEffect, ...] = ()
    # (ability id, remaining turns) pairs; ready abilities are absent.
    cooldowns: tuple[tuple[str, int], ...] = ()
    # (slot, equipment id) pairs.
    equipment: tuple[tuple[EquipmentSlot, str], ...] = ()

    def __str__(self) -> str:
        """Board character: uppercase white, lowercase black."""
        char = _SYMBOLS[self.piece_type]
        return char.upper() if self.team == Team.WHITE else char

    # ── Copy-on-write helpers ────────────────────────────────────────────

    def moved_to(self, position: Position) -> Piece:
        return replace(self, position=position, has_moved=True)

    def with_stats(self, stats: PieceStats) -> Piece:
        return replace(self, stats=stats)

    def with_status_effects(self, effects: tuple[StatusEffect, ...]) -> Piece:
        return replace(self, status_effects=effects)

    def defeated(self) -> Piece:
        return replace(self, stats=self.stats.with_hp(0), is_alive=False)

    def cooldown(self, ability_id: str) -> int:
        """Remaining cooldown turns for *ability_id* (0 = ready)."""
        for key, turns in self.cooldowns:
            if key == ability_id:
                return turns
        return 0

    def with_cooldown(self, ability_id: str, turns: int) -> Piece:
        cooldowns = tuple(entry for entry in self.cooldowns if entry[0] != ability_id)
        if turns > 0:
            cooldowns += ((ability_id, turns),)
        return replace(self, cooldowns=cooldowns)

    def equipped(self, slot: EquipmentSlot) -> str | None:
        for key, item_id in self.equipment:
            if key == slot:
                return item_id
        return None

    def ability(self, ability_id: str) -> Ability | None:
        for ability in self.abilities:
            if ability.id == ability_id:
                return ability
        return None

    def has_status(self, status_id: str) -> bool:
        return any(effect.id == status_id for effect in self.status_effects)


def strike_damage(raw: int, defense: int) -> int:
    """Damage dealt after defense mitigation; never below 1."""
    return max(1, raw - defense)


def piece_id(team: Team, piece_type: PieceType, x: int) -> str:
    """Stable id derived from the starting file, e.g. ``white-pawn-4``."""
    return f"{team}-{piece_type}-{x}"


def make_piece(
    piece_type: PieceType,
    team: Team,
    position: Position,
    *,
    id: str | None = None,
    stats: PieceStats | None = None,
    level: int = 1,
) -> Piece:
    """Create a fresh piece with default stats and its type's ability kit."""
    return Piece(
        id=id or piece_id(team, piece_type, position.x),
        piece_type=piece_type,
        team=team,
        position=position,
        stats=stats or DEFAULT_PIECE_STATS[piece_type],
        level=level,
        abilities=PIECE_ABILITIES[piece_type],
    )
