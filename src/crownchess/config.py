"""Tunable game settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GameSettings:
    """All tunable game-session settings."""

    # Turn upkeep
    mana_regen_per_turn: int = 10
    ability_ends_turn: bool = False

    # Rules
    # When False a stalemated side simply has no move and the game stays open.
    stalemate_is_draw: bool = True

    # AI
    ai_move_delay_ms: int = 1000
    ai_time_limit_ms: int = 5000
    ai_random_move_chance: float = 0.3

    # Presentation cues
    capture_cue_ms: int = 1500
    castle_cue_ms: int = 1500
    ability_cue_ms: int = 1500

