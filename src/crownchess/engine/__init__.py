"""AI engine package: evaluation, minimax search and the Qt worker bridge.

``crownchess.engine.qt_bridge`` pulls in PyQt6 and must be imported
explicitly.
"""

from crownchess.engine.evaluation import MATE_SCORE, PIECE_VALUES, evaluate
from crownchess.engine.minimax import MinimaxEngine
from crownchess.engine.search import (
    AIDifficulty,
    IEngine,
    SearchLimits,
    SearchResult,
)

DefaultEngine: type[IEngine] = MinimaxEngine

__all__ = [
    "AIDifficulty",
    "DefaultEngine",
    "IEngine",
    "MATE_SCORE",
    "MinimaxEngine",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "evaluate",
]
