"""Equipment catalogue and equip/unequip stat bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, replace

from crownchess.core.enums import EquipmentSlot, PieceType, Rarity
from crownchess.core.piece import Piece, PieceStats

# Stat fields an item may raise. Equipping ``max_hp``/``max_mana`` also
# lifts the current value by the same amount.
_BONUS_FIELDS: tuple[str, ...] = (
    "max_hp",
    "max_mana",
    "attack_power",
    "defense",
    "speed",
    "magic_power",
    "critical_chance",
    "critical_damage",
)


@dataclass(frozen=True, slots=True)
class Equipment:
    """Static item definition."""

    id: str
    name: str
    slot: EquipmentSlot
    rarity: Rarity
    bonuses: tuple[tuple[str, int], ...]
    level_requirement: int = 1
    piece_types: frozenset[PieceType] | None = None
    special_ability: str | None = None


def _item(
    id: str,
    name: str,
    slot: EquipmentSlot,
    rarity: Rarity,
    level: int,
    restrict: tuple[PieceType, ...] = (),
    special: str | None = None,
    **bonuses: int,
) -> Equipment:
    unknown = set(bonuses) - set(_BONUS_FIELDS)
    if unknown:
        raise ValueError(f"Unknown stat bonus: {sorted(unknown)}")
    return Equipment(
        id=id,
        name=name,
        slot=slot,
        rarity=rarity,
        bonuses=tuple(bonuses.items()),
        level_requirement=level,
        piece_types=frozenset(restrict) if restrict else None,
        special_ability=special,
    )


_W, _A, _X = EquipmentSlot.WEAPON, EquipmentSlot.ARMOR, EquipmentSlot.ACCESSORY

EQUIPMENT: dict[str, Equipment] = {
    item.id: item
    for item in (
        _item("iron_sword", "Iron Sword", _W, Rarity.COMMON, 1, attack_power=5),
        _item(
            "steel_sword", "Steel Sword", _W, Rarity.UNCOMMON, 3,
            attack_power=8, critical_chance=10,
        ),
        _item(
            "mithril_sword", "Mithril Sword", _W, Rarity.LEGENDARY, 8,
            special="mithril_strike",
            attack_power=20, critical_chance=25, critical_damage=50,
        ),
        _item(
            "holy_staff", "Holy Staff", _W, Rarity.RARE, 5,
            restrict=(PieceType.BISHOP, PieceType.QUEEN),
            magic_power=15, max_mana=20,
        ),
        _item(
            "war_hammer", "War Hammer", _W, Rarity.RARE, 6,
            restrict=(PieceType.ROOK, PieceType.KNIGHT),
            special="armor_crush",
            attack_power=15, critical_damage=30,
        ),
        _item(
            "leather_armor", "Leather Armor", _A, Rarity.COMMON, 1,
            defense=3, max_hp=10,
        ),
        _item(
            "chain_mail", "Chain Mail", _A, Rarity.UNCOMMON, 3,
            defense=6, max_hp=15, speed=2,
        ),
        _item(
            "plate_armor", "Plate Armor", _A, Rarity.RARE, 5,
            restrict=(PieceType.ROOK, PieceType.KNIGHT, PieceType.KING),
            defense=12, max_hp=30,
        ),
        _item(
            "dragon_scale_armor", "Dragon Scale Armor", _A, Rarity.LEGENDARY, 10,
            special="dragon_protection",
            defense=25, max_hp=50, magic_power=10,
        ),
        _item("health_ring", "Ring of Vitality", _X, Rarity.UNCOMMON, 2, max_hp=25),
        _item("mana_crystal", "Mana Crystal", _X, Rarity.UNCOMMON, 2, max_mana=30),
        _item("speed_boots", "Boots of Swiftness", _X, Rarity.RARE, 4, speed=5),
        _item(
            "crown_of_wisdom", "Crown of Wisdom", _X, Rarity.LEGENDARY, 12,
            restrict=(PieceType.KING, PieceType.QUEEN),
            special="royal_blessing",
            magic_power=20, max_mana=40, critical_chance=15,
        ),
    )
}


def can_equip(piece: Piece, item: Equipment) -> bool:
    if not piece.is_alive or piece.level < item.level_requirement:
        return False
    return item.piece_types is None or piece.piece_type in item.piece_types


def _apply_bonuses(stats: PieceStats, item: Equipment, sign: int) -> PieceStats:
    changes: dict[str, int] = {}
    for name, amount in item.bonuses:
        changes[name] = getattr(stats, name) + sign * amount
    updated = replace(stats, **changes)
    if sign < 0:
        # Losing an item only clamps; it never wounds the wearer.
        return updated.with_hp(stats.current_hp).with_mana(stats.current_mana)
    bonuses = dict(item.bonuses)
    return updated.with_hp(stats.current_hp + bonuses.get("max_hp", 0)).with_mana(
        stats.current_mana + bonuses.get("max_mana", 0)
    )


def unequip(piece: Piece, slot: EquipmentSlot) -> Piece:
    """Remove whatever sits in *slot*, dropping its stat bonuses."""
    item_id = piece.equipped(slot)
    if item_id is None:
        return piece
    stats = _apply_bonuses(piece.stats, EQUIPMENT[item_id], -1)
    remaining = tuple(entry for entry in piece.equipment if entry[0] != slot)
    return replace(piece, stats=stats, equipment=remaining)


def equip(piece: Piece, item: Equipment) -> Piece:
    """Put *item* in its slot, replacing the previous occupant.

    Raises:
        ValueError: if the piece does not meet the item's requirements.
    """
    if not can_equip(piece, item):
        raise ValueError(f"{piece.id} cannot equip {item.id}")
    bare = unequip(piece, item.slot)
    stats = _apply_bonuses(bare.stats, item, 1)
    return replace(bare, stats=stats, equipment=bare.equipment + ((item.slot, item.id),))
