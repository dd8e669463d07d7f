"""
象棋AI 探索パッケージ
"""

from .evaluator import evaluate, PIECE_VALUES, PAWN_ADVANCE_BONUS
from .minimax import MinimaxSearcher, choose_move, MATE_SCORE

__all__ = [
    'evaluate',
    'PIECE_VALUES',
    'PAWN_ADVANCE_BONUS',
    'MinimaxSearcher',
    'choose_move',
    'MATE_SCORE',
]
