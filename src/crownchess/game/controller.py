"""GameController: the orchestrator of a Crown & Capture session.

Coordinates: GameState, Rules/MoveGenerator, AbilitySystem, AIController.
Emits events via simple callbacks so a UI, sound layer or test can
subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from crownchess.config import GameSettings
from crownchess.core.board import Board
from crownchess.core.combat import AbilityResult, AbilitySystem
from crownchess.core.enums import GameResult, TargetType, Team
from crownchess.core.move import Move
from crownchess.core.move_generator import MoveGenerator
from crownchess.core.rules import Rules
from crownchess.core.types import Position
from crownchess.engine.search import AIDifficulty, IEngine
from crownchess.game.interfaces import (
    GameMode,
    GamePhase,
    IGameController,
    IPlayer,
    can_transition,
)
from crownchess.game.player import AIController, HumanPlayer
from crownchess.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EffectCue:
    """Short-lived presentation hint (``capture``, ``teleport``, ``damage``...)."""

    effect: str
    origin: Position
    target: Position
    duration_ms: int


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
TeamCallback = Callable[[Team], None]
EffectCallback = Callable[[EffectCue], None]
MessageCallback = Callable[[str], None]
PhaseCallback = Callable[[GamePhase], None]
GameOverCallback = Callable[[Team | None], None]  # winner, None for a draw


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_capture: list[MoveCallback] = field(default_factory=list)
    on_check: list[TeamCallback] = field(default_factory=list)
    on_checkmate: list[TeamCallback] = field(default_factory=list)
    on_effect: list[EffectCallback] = field(default_factory=list)
    on_message: list[MessageCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


AIDispatcher = Callable[[Board], None]


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates commands, applies them to the board and runs turn upkeep.

    Thread-safety: every method is meant to be called from one thread.
    AI results computed elsewhere come back through
    :meth:`complete_ai_move` on that thread.
    """

    __slots__ = ("_state", "_settings", "_players", "_ai_dispatcher", "events")

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._state = GameState()
        self._players: dict[Team, IPlayer] = {}
        self._seat_players(None)
        self._ai_dispatcher: AIDispatcher | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def ai(self) -> AIController | None:
        return self._state.ai

    @property
    def current_player(self) -> IPlayer:
        return self._players[self._state.current_turn]

    def player(self, team: Team) -> IPlayer:
        return self._players[team]

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(
        self, mode: GameMode = GameMode.CLASSIC, board: Board | None = None
    ) -> None:
        self._seat_players(None)
        self._state.mode = mode
        self.reset_game(board)

    def start_ai_game(
        self,
        difficulty: AIDifficulty,
        team: Team = Team.BLACK,
        *,
        board: Board | None = None,
        engine: IEngine | None = None,
        rng: random.Random | None = None,
    ) -> AIController:
        """Start a game against the computer playing *team*."""
        ai = AIController(
            team,
            difficulty,
            engine=engine,
            rng=rng,
            random_move_chance=self._settings.ai_random_move_chance,
            time_limit_ms=self._settings.ai_time_limit_ms,
        )
        self._seat_players(ai)
        self.reset_game(board)
        return ai

    def reset_game(self, board: Board | None = None) -> None:
        self._state.reset(board)
        _LOGGER.info(
            "New %s game: %s vs %s",
            self._state.mode,
            self._players[Team.WHITE].name,
            self._players[Team.BLACK].name,
        )
        self._enter_phase(GamePhase.PLAYING)
        self._schedule_ai()

    def set_phase(self, phase: GamePhase) -> bool:
        current = self._state.phase
        if phase == GamePhase.GAME_OVER or not can_transition(current, phase):
            _LOGGER.debug("Rejected phase change %s -> %s", current.name, phase.name)
            return False
        if phase == current:
            return True
        if current == GamePhase.ABILITY_TARGETING:
            self._state.clear_selection()
        self._enter_phase(phase)
        if phase == GamePhase.PLAYING:
            self._schedule_ai()
        return True

    def set_mode(self, mode: GameMode) -> None:
        self._state.mode = mode

    def set_ai_dispatcher(self, dispatcher: AIDispatcher | None) -> None:
        """Route AI turns to *dispatcher* instead of searching inline.

        The dispatcher receives a copy of the board and must eventually
        call :meth:`complete_ai_move`.
        """
        self._ai_dispatcher = dispatcher

    # ── Player commands ──────────────────────────────────────────────────

    def select_piece(self, pos: Position) -> bool:
        state = self._state
        if state.phase != GamePhase.PLAYING or self._is_ai_turn():
            return False

        piece = state.board.piece_at(pos)
        if piece is None or piece.team != state.current_turn or not piece.is_alive:
            state.clear_selection()
            return False

        state.selected = pos
        state.highlighted = frozenset(MoveGenerator(state.board).legal_destinations(piece))
        return True

    def move_piece(self, from_pos: Position, to_pos: Position) -> bool:
        if self._is_ai_turn():
            _LOGGER.debug("Ignoring move %s%s during the AI turn", from_pos, to_pos)
            return False
        return self._play_move(from_pos, to_pos)

    def use_ability(
        self, piece_id: str, ability_id: str, target: Position | None = None
    ) -> AbilityResult | None:
        state = self._state
        if state.phase not in (GamePhase.PLAYING, GamePhase.ABILITY_TARGETING):
            return None
        if self._is_ai_turn():
            return None
        if (
            state.phase == GamePhase.ABILITY_TARGETING
            and state.pending_ability != (piece_id, ability_id)
        ):
            _LOGGER.debug(
                "Ability %s: %s is awaiting a target", ability_id, state.pending_ability
            )
            return None

        caster = state.board.find(piece_id)
        if caster is None or not caster.is_alive or caster.team != state.current_turn:
            _LOGGER.debug("Ability %s: %s cannot act now", ability_id, piece_id)
            return None
        ability = caster.ability(ability_id)
        if ability is None:
            _LOGGER.debug("%s has no ability %s", piece_id, ability_id)
            return None

        if target is None:
            if ability.target_type != TargetType.SELF:
                check = AbilitySystem.can_use(caster, ability)
                if not check.allowed:
                    reason = check.reason or "Cannot use ability"
                    self._emit_message(reason)
                    return AbilityResult(False, state.board, (reason,))
                state.pending_ability = (caster.id, ability.id)
                state.selected = caster.position
                state.highlighted = frozenset(
                    AbilitySystem.valid_targets(caster, ability, state.board)
                )
                self._enter_phase(GamePhase.ABILITY_TARGETING)
                return None
            target = caster.position

        result = AbilitySystem.execute(caster, ability, target, state.board)
        for message in result.messages:
            self._emit_message(message)
        if not result.success:
            return result

        state.board = result.board
        state.move_history.append(
            MoveRecord(caster.position, target, caster, ability_id=ability.id)
        )
        for effect in ability.effects:
            self._emit_effect(
                EffectCue(
                    effect.tag, caster.position, target, self._settings.ability_cue_ms
                )
            )

        state.clear_selection()
        if state.phase == GamePhase.ABILITY_TARGETING:
            self._enter_phase(GamePhase.PLAYING)
        if self._resolve_after_action(caster.team):
            return result

        if self._settings.ability_ends_turn:
            self._advance_turn()
            self._schedule_ai()
        return result

    def confirm_target(self, target: Position) -> AbilityResult | None:
        """Resolve the ability awaiting a target on *target*.

        An invalid square fails the cast and keeps targeting open.
        """
        pending = self._state.pending_ability
        if self._state.phase != GamePhase.ABILITY_TARGETING or pending is None:
            return None
        piece_id, ability_id = pending
        return self.use_ability(piece_id, ability_id, target)

    def cancel_targeting(self) -> bool:
        if self._state.phase != GamePhase.ABILITY_TARGETING:
            return False
        self._state.clear_selection()
        self._enter_phase(GamePhase.PLAYING)
        return True

    def end_turn(self) -> None:
        state = self._state
        if state.phase == GamePhase.ABILITY_TARGETING:
            self.cancel_targeting()
        if state.phase != GamePhase.PLAYING or state.is_ai_thinking:
            return
        self._advance_turn()
        self._schedule_ai()

    # ── AI turn ──────────────────────────────────────────────────────────

    def request_ai_move(self) -> bool:
        """Start the AI turn, inline or through the dispatcher."""
        if not self._ai_may_move():
            return False
        if self._ai_dispatcher is None:
            return self.make_ai_move()

        self._state.is_ai_thinking = True
        try:
            self._ai_dispatcher(self._state.board.copy())
        except Exception:
            _LOGGER.exception("Could not dispatch the AI move")
            self._state.is_ai_thinking = False
            return False
        return True

    def make_ai_move(self) -> bool:
        """Search and play the AI move synchronously."""
        if not self._ai_may_move():
            return False
        ai = self._state.ai
        assert ai is not None

        self._state.is_ai_thinking = True
        move: Move | None = None
        try:
            move = ai.choose_move(self._state.board.copy())
        except Exception:
            _LOGGER.exception("AI search failed")
        finally:
            self._state.is_ai_thinking = False
        return self._apply_ai_move(move)

    def complete_ai_move(self, move: Move | None) -> bool:
        """Apply a move computed by a dispatched search."""
        if not self._state.is_ai_thinking:
            _LOGGER.debug("Dropping AI move %s: no search pending", move)
            return False
        self._state.is_ai_thinking = False
        return self._apply_ai_move(move)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _seat_players(self, ai: AIController | None) -> None:
        self._state.ai = ai
        self._players = {
            team: ai if ai is not None and ai.team == team else HumanPlayer(team)
            for team in Team
        }

    def _is_ai_turn(self) -> bool:
        return not self.current_player.is_human

    def _ai_may_move(self) -> bool:
        state = self._state
        return (
            self._is_ai_turn()
            and state.phase == GamePhase.PLAYING
            and not state.is_ai_thinking
        )

    def _schedule_ai(self) -> None:
        if self._ai_may_move():
            self.request_ai_move()

    def _apply_ai_move(self, move: Move | None) -> bool:
        if move is None:
            _LOGGER.info("AI produced no move")
            return False
        if not self._is_ai_turn() or self._state.phase != GamePhase.PLAYING:
            return False
        return self._play_move(move.from_pos, move.to_pos)

    def _play_move(self, from_pos: Position, to_pos: Position) -> bool:
        state = self._state
        if state.phase != GamePhase.PLAYING:
            return False

        piece = state.board.piece_at(from_pos)
        if piece is None or piece.team != state.current_turn:
            _LOGGER.debug("No %s piece on %s", state.current_turn, from_pos)
            return False
        move = Rules.find_legal_move(state.board, from_pos, to_pos)
        if move is None:
            _LOGGER.debug("Illegal move %s%s", from_pos, to_pos)
            return False

        outcome = state.board.make_move(move)
        record = MoveRecord(
            from_pos,
            to_pos,
            piece,
            captured=outcome.captured,
            damage=outcome.damage,
        )
        state.move_history.append(record)
        state.clear_selection()

        self._emit_move(record)
        if outcome.castled:
            self._emit_effect(
                EffectCue("teleport", from_pos, to_pos, self._settings.castle_cue_ms)
            )
        if outcome.is_capture:
            self._emit_capture(record)
            self._emit_effect(
                EffectCue("capture", from_pos, to_pos, self._settings.capture_cue_ms)
            )

        if self._resolve_after_action(piece.team):
            return True
        self._advance_turn()
        self._schedule_ai()
        return True

    def _resolve_after_action(self, acting: Team) -> bool:
        """Check for a dead king, check and checkmate. True if the game ended."""
        board = self._state.board
        for team in (acting.opposite, acting):
            if board.king_position(team) is None:
                self._finish(team.opposite)
                return True

        opponent = acting.opposite
        gen = MoveGenerator(board)
        if not gen.is_in_check(opponent):
            return False
        if gen.has_legal_move(opponent):
            self._emit_check(opponent)
            return False
        self._emit_checkmate(acting)
        self._finish(acting)
        return True

    def _advance_turn(self) -> None:
        """Hand the turn over and run upkeep for the side about to act."""
        state = self._state
        board = state.board
        team = state.current_turn.opposite
        state.current_turn = team
        state.turn_count += 1
        state.clear_selection()

        regen = self._settings.mana_regen_per_turn
        for piece in list(board):
            stats = piece.stats.tick_temp_hp()
            if piece.team == team:
                stats = stats.regenerated(regen)
            updated = piece.with_stats(stats) if stats != piece.stats else piece

            if piece.team == team:
                tick = AbilitySystem.process_status_effects(updated)
                for message in tick.messages:
                    self._emit_message(message)
                updated = AbilitySystem.reduce_cooldowns(tick.piece)
                if not updated.is_alive:
                    board.remove(updated.position)
                    continue

            if updated is not piece:
                board.replace(updated)

        result = Rules.game_result(
            board, team, stalemate_is_draw=self._settings.stalemate_is_draw
        )
        if result == GameResult.IN_PROGRESS:
            return
        if result == GameResult.DRAW:
            self._finish(None)
            return

        winner = team.opposite
        if board.king_position(team) is not None:
            self._emit_checkmate(winner)
        self._finish(winner)

    def _finish(self, winner: Team | None) -> None:
        state = self._state
        state.winner = winner
        state.is_draw = winner is None
        state.clear_selection()
        if winner is None:
            _LOGGER.info("Game drawn on turn %d", state.turn_count)
        else:
            _LOGGER.info("%s wins on turn %d", winner, state.turn_count)
        self._enter_phase(GamePhase.GAME_OVER)
        self._emit_game_over(winner)

    def _enter_phase(self, phase: GamePhase) -> None:
        self._state.phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record)

    def _emit_capture(self, record: MoveRecord) -> None:
        for cb in self.events.on_capture:
            cb(record)

    def _emit_check(self, team: Team) -> None:
        for cb in self.events.on_check:
            cb(team)

    def _emit_checkmate(self, winner: Team) -> None:
        for cb in self.events.on_checkmate:
            cb(winner)

    def _emit_effect(self, cue: EffectCue) -> None:
        for cb in self.events.on_effect:
            cb(cue)

    def _emit_message(self, message: str) -> None:
        for cb in self.events.on_message:
            cb(message)

    def _emit_game_over(self, winner: Team | None) -> None:
        for cb in self.events.on_game_over:
            cb(winner)
