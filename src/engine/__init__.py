"""
象棋のゲームエンジン - パッケージ初期化
"""

from .piece import Piece, Color, PieceType, PIECE_COUNTS, PIECE_LETTERS
from .board import Board, BOARD_ROWS, BOARD_COLS, RIVER_ROW
from .move import Move
from .rules import Rules, GameStatus, MoveOutcome
from .game import GameState

__all__ = [
    'Piece',
    'Color',
    'PieceType',
    'PIECE_COUNTS',
    'PIECE_LETTERS',
    'Board',
    'BOARD_ROWS',
    'BOARD_COLS',
    'RIVER_ROW',
    'Move',
    'Rules',
    'GameStatus',
    'MoveOutcome',
    'GameState',
]
