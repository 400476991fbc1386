"""Ability eligibility, targeting and effect resolution.

:meth:`AbilitySystem.execute` works on a single copy of the board that is
threaded through every effect, so a cast either commits all of its effects
or, when eligibility fails, leaves the caller's board untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from crownchess.core.abilities import (
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
from crownchess.core.enums import StatusKind, TargetType
from crownchess.core.piece import Piece, strike_damage
from crownchess.core.types import ALL_POSITIONS, Position

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UseCheck:
    """Eligibility verdict; ``reason`` explains a refusal."""

    allowed: bool
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class AbilityResult:
    """Outcome of :meth:`AbilitySystem.execute`.

    On failure ``board`` is the board that was passed in.
    """

    success: bool
    board: Board
    messages: tuple[str, ...] = ()
    affected: tuple[Piece, ...] = ()


@dataclass(frozen=True, slots=True)
class StatusTick:
    """A piece after one turn of status processing."""

    piece: Piece
    messages: tuple[str, ...] = ()


@dataclass(slots=True)
class _Resolution:
    """Mutable scratch state while effects resolve."""

    board: Board
    caster_id: str
    target: Position
    messages: list[str] = field(default_factory=list)
    affected: list[Piece] = field(default_factory=list)

    @property
    def caster(self) -> Piece:
        piece = self.board.find(self.caster_id)
        assert piece is not None
        return piece

    def targets(self, area: int) -> list[Piece]:
        if area <= 0:
            piece = self.board.piece_at(self.target)
            return [piece] if piece is not None else []
        return [
            piece
            for piece in self.board
            if piece.position.chebyshev_distance(self.target) <= area
        ]


class AbilitySystem:
    """Static combat rules for abilities and status effects."""

    # ── Eligibility ──────────────────────────────────────────────────────

    @staticmethod
    def can_use(piece: Piece, ability: Ability) -> UseCheck:
        if not piece.is_alive:
            return UseCheck(False, "Piece is not alive")
        if piece.stats.current_mana < ability.mana_cost:
            return UseCheck(False, "Not enough mana")
        if piece.cooldown(ability.id) > 0:
            return UseCheck(False, "Ability is on cooldown")
        if piece.level < ability.level_requirement:
            return UseCheck(False, "Level requirement not met")
        return UseCheck(True)

    @staticmethod
    def available_abilities(piece: Piece) -> list[Ability]:
        return [a for a in piece.abilities if AbilitySystem.can_use(piece, a).allowed]

    # ── Targeting ────────────────────────────────────────────────────────

    @staticmethod
    def is_valid_target(
        caster: Piece, ability: Ability, target: Position, board: Board
    ) -> bool:
        if not target.is_valid:
            return False
        if caster.position.chebyshev_distance(target) > ability.range:
            return False

        occupant = board[target]
        tt = ability.target_type
        if tt == TargetType.SELF:
            return target == caster.position
        if tt == TargetType.ALLY:
            return (
                occupant is not None
                and occupant.team == caster.team
                and occupant.is_alive
            )
        if tt == TargetType.ENEMY:
            return (
                occupant is not None
                and occupant.team != caster.team
                and occupant.is_alive
            )
        if tt == TargetType.EMPTY_SQUARE:
            return occupant is None
        # ANY_SQUARE and AOE accept every square in range.
        return True

    @staticmethod
    def valid_targets(caster: Piece, ability: Ability, board: Board) -> list[Position]:
        return [
            pos
            for pos in ALL_POSITIONS
            if AbilitySystem.is_valid_target(caster, ability, pos, board)
        ]

    # ── Resolution ───────────────────────────────────────────────────────

    @staticmethod
    def execute(
        caster: Piece, ability: Ability, target: Position, board: Board
    ) -> AbilityResult:
        """Spend the caster's resources and apply every effect in order."""
        check = AbilitySystem.can_use(caster, ability)
        if not check.allowed:
            _LOGGER.debug("%s cannot use %s: %s", caster.id, ability.id, check.reason)
            return AbilityResult(False, board, (check.reason or "Cannot use ability",))
        if board.find(caster.id) is None:
            return AbilityResult(False, board, ("Caster is not on the board",))
        if not AbilitySystem.is_valid_target(caster, ability, target, board):
            _LOGGER.debug("%s: invalid target %s for %s", caster.id, target, ability.id)
            return AbilityResult(False, board, ("Invalid target",))

        new_board = board.copy()
        current = new_board.find(caster.id)
        assert current is not None
        spent = current.with_stats(
            current.stats.with_mana(current.stats.current_mana - ability.mana_cost)
        ).with_cooldown(ability.id, ability.cooldown)
        new_board.replace(spent)

        res = _Resolution(new_board, caster.id, target)
        for effect in ability.effects:
            _apply_effect(res, effect)

        res.messages.insert(0, f"{caster.piece_type} used {ability.name}!")
        return AbilityResult(True, new_board, tuple(res.messages), tuple(res.affected))

    # ── Turn upkeep ──────────────────────────────────────────────────────

    @staticmethod
    def process_status_effects(piece: Piece) -> StatusTick:
        """Apply one turn of DoT/HoT, then count every effect down."""
        messages: list[str] = []
        stats = piece.stats
        alive = piece.is_alive
        kept: list[StatusEffect] = []

        for effect in piece.status_effects:
            if effect.kind == StatusKind.DAMAGE_OVER_TIME:
                stats = stats.damaged(effect.value)
                messages.append(
                    f"{piece.piece_type} takes {effect.value} damage from {effect.name}!"
                )
                if alive and stats.current_hp <= 0:
                    alive = False
                    messages.append(f"{piece.piece_type} was defeated by {effect.name}!")
            elif effect.kind == StatusKind.HEAL_OVER_TIME:
                before = stats.current_hp
                stats = stats.healed(effect.value)
                if stats.current_hp > before:
                    messages.append(
                        f"{piece.piece_type} recovers {stats.current_hp - before} HP"
                        f" from {effect.name}!"
                    )

            effect = effect.ticked()
            if effect.expired:
                messages.append(f"{effect.name} has worn off from {piece.piece_type}!")
            else:
                kept.append(effect)

        updated = replace(
            piece, stats=stats, status_effects=tuple(kept), is_alive=alive
        )
        return StatusTick(updated, tuple(messages))

    @staticmethod
    def reduce_cooldowns(piece: Piece) -> Piece:
        cooldowns = tuple(
            (ability_id, turns - 1) for ability_id, turns in piece.cooldowns if turns > 1
        )
        if cooldowns == piece.cooldowns:
            return piece
        return replace(piece, cooldowns=cooldowns)


# ── Effect handlers ─────────────────────────────────────────────────────────


def _apply_effect(res: _Resolution, effect: Effect) -> None:
    if isinstance(effect, Damage):
        _apply_damage(res, effect)
    elif isinstance(effect, Heal):
        _apply_heal(res, effect)
    elif isinstance(effect, (Buff, Debuff)):
        _apply_status(res, effect)
    elif isinstance(effect, Teleport):
        _apply_teleport(res)


def _apply_damage(res: _Resolution, effect: Damage) -> None:
    team = res.caster.team
    for target in res.targets(effect.area):
        if target.team == team:
            continue
        dealt = strike_damage(effect.value, target.stats.defense)
        wounded = target.with_stats(target.stats.damaged(dealt))
        if wounded.stats.current_hp <= 0:
            res.board.remove(target.position)
            wounded = wounded.defeated()
            res.messages.append(f"{target.piece_type} was defeated!")
        else:
            res.board.replace(wounded)
            res.messages.append(f"{target.piece_type} took {dealt} damage!")
        res.affected.append(wounded)


def _apply_heal(res: _Resolution, effect: Heal) -> None:
    team = res.caster.team
    for target in res.targets(effect.area):
        if target.team != team:
            continue
        healed = target.with_stats(target.stats.healed(effect.value))
        amount = healed.stats.current_hp - target.stats.current_hp
        if amount > 0:
            res.board.replace(healed)
            res.messages.append(f"{target.piece_type} recovered {amount} HP!")
            res.affected.append(healed)


def _apply_status(res: _Resolution, effect: Buff | Debuff) -> None:
    team = res.caster.team
    wants_ally = isinstance(effect, Buff)
    status = effect.status
    for target in res.targets(effect.area):
        if (target.team == team) != wants_ally:
            continue
        existing = target.status_effects
        if not status.stackable:
            existing = tuple(se for se in existing if se.id != status.id)
        updated = target.with_status_effects(existing + (status,))
        res.board.replace(updated)
        res.messages.append(f"{target.piece_type} is affected by {status.name}!")
        res.affected.append(updated)


def _apply_teleport(res: _Resolution) -> None:
    caster = res.caster
    if caster.position == res.target:
        return
    occupant = res.board.piece_at(res.target)
    if occupant is not None and occupant.team != caster.team:
        res.messages.append(f"{caster.piece_type} could not teleport!")
        return

    origin = caster.position
    res.board.remove(origin)
    moved = replace(caster, position=res.target)
    if occupant is None:
        res.board.place(moved)
        res.messages.append(f"{caster.piece_type} teleported!")
        res.affected.append(moved)
        return

    # An ally on the target square trades places with the caster.
    res.board.remove(res.target)
    swapped = replace(occupant, position=origin)
    res.board.place(moved)
    res.board.place(swapped)
    res.messages.append(
        f"{caster.piece_type} swapped places with {occupant.piece_type}!"
    )
    res.affected.extend((moved, swapped))
