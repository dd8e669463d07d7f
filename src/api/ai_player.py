"""
ウェブAPI用 AI モジュール
ミニマックス探索で手を選ぶ
"""

from typing import Dict, Optional, Tuple

from ..engine.board import Board
from ..engine.move import Move
from ..engine.piece import Color
from ..search.evaluator import evaluate
from ..search.minimax import MinimaxSearcher
from ..utils.logger import get_logger

logger = get_logger('api.ai')


class XiangqiAI:
    """
    象棋AI - αβ枝刈り付きミニマックス

    難易度レベル:
    - easy: 深さ2
    - medium: 深さ3
    - hard: 深さ4
    """

    DIFFICULTY_SETTINGS = {
        'easy': {'depth': 2},
        'medium': {'depth': 3},
        'hard': {'depth': 4},
    }
    DEFAULT_DIFFICULTY = 'medium'

    def __init__(self):
        self.searcher = MinimaxSearcher()

    def resolve_depth(self, difficulty: str = DEFAULT_DIFFICULTY, depth: Optional[int] = None) -> int:
        """難易度ラベル（または明示的な深さ）から探索深さを決める"""
        if depth is not None:
            return depth
        settings = self.DIFFICULTY_SETTINGS.get(
            difficulty, self.DIFFICULTY_SETTINGS[self.DEFAULT_DIFFICULTY]
        )
        return settings['depth']

    def get_best_move(
        self,
        board: Board,
        current_player: Color,
        difficulty: str = DEFAULT_DIFFICULTY,
        depth: Optional[int] = None
    ) -> Tuple[Optional[Move], Optional[int]]:
        """
        最善手を取得

        Returns:
            (最善手, 探索による評価値)。合法手がなければ (None, None)
        """
        search_depth = self.resolve_depth(difficulty, depth)
        logger.info(
            "Searching for %s (difficulty=%s, depth=%d)",
            current_player.name, difficulty, search_depth
        )
        best_move = self.searcher.choose_move(board, current_player, search_depth)
        return best_move, self.searcher.last_value

    def evaluate_position(self, board: Board, current_player: Color) -> int:
        """
        局面の静的評価値

        Returns:
            正の値: 現在のプレイヤー有利
            負の値: 相手有利
        """
        return evaluate(board, current_player)

    def difficulty_levels(self) -> Dict[str, int]:
        return {name: s['depth'] for name, s in self.DIFFICULTY_SETTINGS.items()}


# シングルトンインスタンス
_ai_instance: Optional[XiangqiAI] = None


def get_ai() -> XiangqiAI:
    """AIインスタンスを取得（遅延初期化）"""
    global _ai_instance
    if _ai_instance is None:
        _ai_instance = XiangqiAI()
    return _ai_instance
