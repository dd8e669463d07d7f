"""
共通ユーティリティ（例外・ログ）
"""

from .exceptions import (
    XiangqiError,
    InvalidMoveError,
    MissingKingError,
    GameOverError,
    GameStateError,
)
from .logger import setup_logger, get_logger

__all__ = [
    'XiangqiError',
    'InvalidMoveError',
    'MissingKingError',
    'GameOverError',
    'GameStateError',
    'setup_logger',
    'get_logger',
]
