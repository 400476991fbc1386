"""Ability definitions, effect variants and the per-piece-type catalogue.

Definitions are immutable and shared by every piece of a type; the
remaining cooldown of an ability is owned by the piece
(:attr:`crownchess.core.piece.Piece.cooldowns`).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, TypeAlias

from crownchess.core.enums import AbilityKind, PieceType, StatusKind, TargetType


@dataclass(frozen=True, slots=True)
class StatusEffect:
    """Timed modifier attached to a piece."""

    id: str
    name: str
    kind: StatusKind
    value: int
    duration: int
    stackable: bool = False
    description: str = ""

    def ticked(self) -> StatusEffect:
        """Copy with one turn less remaining."""
        return replace(self, duration=self.duration - 1)

    @property
    def expired(self) -> bool:
        return self.duration <= 0


# ── Effect variants ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Damage:
    tag: ClassVar[str] = "damage"

    value: int
    area: int = 0


@dataclass(frozen=True, slots=True)
class Heal:
    tag: ClassVar[str] = "heal"

    value: int
    area: int = 0


@dataclass(frozen=True, slots=True)
class Buff:
    tag: ClassVar[str] = "buff"

    status: StatusEffect
    area: int = 0


@dataclass(frozen=True, slots=True)
class Debuff:
    tag: ClassVar[str] = "debuff"

    status: StatusEffect
    area: int = 0


@dataclass(frozen=True, slots=True)
class Teleport:
    tag: ClassVar[str] = "teleport"


Effect: TypeAlias = Damage | Heal | Buff | Debuff | Teleport


@dataclass(frozen=True, slots=True)
class Ability:
    """Static ability definition."""

    id: str
    name: str
    description: str
    mana_cost: int
    cooldown: int
    range: int
    target_type: TargetType
    effects: tuple[Effect, ...]
    kind: AbilityKind = AbilityKind.ACTIVE
    level_requirement: int = 1

    @property
    def needs_target(self) -> bool:
        """Whether the caster must pick a square before resolving."""
        return self.target_type != TargetType.SELF

    @property
    def primary_tag(self) -> str:
        """Tag of the first effect, used to pick a presentation cue."""
        return self.effects[0].tag if self.effects else "ability"


# ── Catalogue ───────────────────────────────────────────────────────────────

SHIELD_WALL = Ability(
    id="pawn_charge",
    name="Shield Wall",
    description="Gain +2 Defense and immunity to ranged attacks for 3 turns",
    mana_cost=20,
    cooldown=5,
    range=0,
    target_type=TargetType.SELF,
    effects=(
        Buff(
            StatusEffect(
                "shield_wall",
                "Shield Wall",
                StatusKind.BUFF,
                value=2,
                duration=3,
                description="+2 Defense, immunity to ranged attacks",
            )
        ),
    ),
)

FIELD_MEDIC = Ability(
    id="pawn_heal",
    name="Field Medic",
    description="Heal an adjacent ally for 25 HP",
    mana_cost=15,
    cooldown=3,
    range=1,
    target_type=TargetType.ALLY,
    effects=(Heal(25),),
    level_requirement=3,
)

LIGHTNING_STRIKE = Ability(
    id="knight_leap",
    name="Lightning Strike",
    description="Teleport to target location and deal 40 damage to adjacent enemies",
    mana_cost=30,
    cooldown=4,
    range=5,
    target_type=TargetType.EMPTY_SQUARE,
    effects=(Teleport(), Damage(40, area=1)),
)

BATTLE_CRY = Ability(
    id="knight_rally",
    name="Battle Cry",
    description="Grant +5 Attack to all nearby allies for 4 turns",
    mana_cost=40,
    cooldown=6,
    range=2,
    target_type=TargetType.AOE,
    effects=(
        Buff(
            StatusEffect(
                "battle_cry",
                "Battle Cry",
                StatusKind.BUFF,
                value=5,
                duration=4,
                description="+5 Attack Power",
            ),
            area=2,
        ),
    ),
    level_requirement=5,
)

DIVINE_LIGHT = Ability(
    id="bishop_heal",
    name="Divine Light",
    description="Heal target ally for 50 HP",
    mana_cost=35,
    cooldown=4,
    range=8,
    target_type=TargetType.ALLY,
    effects=(Heal(50),),
)

HOLY_SMITE = Ability(
    id="bishop_smite",
    name="Holy Smite",
    description="Deal 60 magic damage to target enemy",
    mana_cost=45,
    cooldown=5,
    range=8,
    target_type=TargetType.ENEMY,
    effects=(Damage(60),),
    level_requirement=4,
)

ARTILLERY_BARRAGE = Ability(
    id="rook_barrage",
    name="Artillery Barrage",
    description="Deal 35 damage to the piece on the target square",
    mana_cost=40,
    cooldown=5,
    range=8,
    target_type=TargetType.ANY_SQUARE,
    effects=(Damage(35),),
)

MOBILE_FORTRESS = Ability(
    id="rook_fortress",
    name="Mobile Fortress",
    description="Become immobile but gain massive defense and ranged attacks",
    mana_cost=50,
    cooldown=8,
    range=0,
    target_type=TargetType.SELF,
    effects=(
        Buff(
            StatusEffect(
                "fortress_mode",
                "Fortress Mode",
                StatusKind.BUFF,
                value=10,
                duration=5,
                description="Immobile, +10 Defense, ranged attacks",
            )
        ),
    ),
    level_requirement=6,
)

ROYAL_DECREE = Ability(
    id="queen_teleport",
    name="Royal Decree",
    description="Teleport to an ally within range, swapping places with it",
    mana_cost=50,
    cooldown=6,
    range=8,
    target_type=TargetType.ALLY,
    effects=(Teleport(),),
)

MIND_CONTROL = Ability(
    id="queen_dominate",
    name="Mind Control",
    description="Take control of target enemy piece for 2 turns",
    mana_cost=80,
    cooldown=10,
    range=5,
    target_type=TargetType.ENEMY,
    effects=(
        Debuff(
            StatusEffect(
                "mind_control",
                "Mind Control",
                StatusKind.DEBUFF,
                value=0,
                duration=2,
                description="Controlled by enemy",
            )
        ),
    ),
    kind=AbilityKind.ULTIMATE,
    level_requirement=8,
)

ROYAL_INSPIRATION = Ability(
    id="king_inspire",
    name="Royal Inspiration",
    description="All allies gain +3 to all stats for 5 turns",
    mana_cost=60,
    cooldown=8,
    range=0,
    target_type=TargetType.AOE,
    effects=(
        Buff(
            StatusEffect(
                "royal_inspiration",
                "Royal Inspiration",
                StatusKind.BUFF,
                value=3,
                duration=5,
                description="+3 to all stats",
            ),
            area=8,
        ),
    ),
)

DIVINE_SANCTUARY = Ability(
    id="king_sanctuary",
    name="Divine Sanctuary",
    description="Create a 3x3 healing zone that lasts 6 turns",
    mana_cost=100,
    cooldown=12,
    range=3,
    target_type=TargetType.EMPTY_SQUARE,
    effects=(
        Buff(
            StatusEffect(
                "divine_sanctuary",
                "Divine Sanctuary",
                StatusKind.HEAL_OVER_TIME,
                value=15,
                duration=6,
                description="Recover 15 HP each turn",
            ),
            area=1,
        ),
    ),
    kind=AbilityKind.ULTIMATE,
    level_requirement=10,
)

PIECE_ABILITIES: dict[PieceType, tuple[Ability, ...]] = {
    PieceType.PAWN: (SHIELD_WALL, FIELD_MEDIC),
    PieceType.KNIGHT: (LIGHTNING_STRIKE, BATTLE_CRY),
    PieceType.BISHOP: (DIVINE_LIGHT, HOLY_SMITE),
    PieceType.ROOK: (ARTILLERY_BARRAGE, MOBILE_FORTRESS),
    PieceType.QUEEN: (ROYAL_DECREE, MIND_CONTROL),
    PieceType.KING: (ROYAL_INSPIRATION, DIVINE_SANCTUARY),
}

ABILITIES_BY_ID: dict[str, Ability] = {
    ability.id: ability
    for kit in PIECE_ABILITIES.values()
    for ability in kit
}
