"""
αβ枝刈り付きミニマックス探索

一つの盤面を手の適用・巻き戻しで使い回す（盤面のコピーを作らない）。
評価は常に探索開始時の手番側から見た値で行う。
"""

import math
import time
from typing import Optional

from ..engine.board import Board
from ..engine.move import Move
from ..engine.piece import Color
from ..engine.rules import Rules
from ..utils.logger import get_logger
from .evaluator import evaluate

logger = get_logger('search.minimax')

# 詰みの評価値（どんな駒得よりも大きい）
MATE_SCORE = 100000


class MinimaxSearcher:
    """
    深さ固定のミニマックス探索

    choose_move ごとに独立した探索を行う。乱数は使わないので
    同じ (盤面, 手番, 深さ) からは常に同じ手が返る。
    """

    def __init__(self):
        self.root_color: Optional[Color] = None
        self.nodes_searched = 0
        self.last_value: Optional[int] = None

    def choose_move(self, board: Board, color: Color, depth: int) -> Optional[Move]:
        """
        最善手を返す（合法手がなければ None）

        評価値が同じ手は列挙順で先のものを採用する。
        """
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")

        self.root_color = color
        self.nodes_searched = 0
        self.last_value = None
        start = time.perf_counter()

        best_move = None
        best_value = -math.inf

        for move in Rules.get_legal_moves(board, color):
            with board.trial_move(move):
                value = self.minimax(board, depth - 1, -math.inf, math.inf, False)
            if value > best_value:
                best_value = value
                best_move = move

        if best_move is not None:
            self.last_value = best_value

        logger.debug(
            "depth=%d color=%s move=%s value=%s nodes=%d (%.3fs)",
            depth, color.name, best_move, self.last_value,
            self.nodes_searched, time.perf_counter() - start
        )
        return best_move

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool
    ) -> int:
        """
        αβ探索で局面の値を返す

        maximizing が True のノードでは探索開始側が手番。
        """
        self.nodes_searched += 1

        if depth == 0:
            return evaluate(board, self.root_color)

        color = self.root_color if maximizing else self.root_color.opponent
        moves = Rules.get_legal_moves(board, color)

        if not moves:
            # 詰みまたは困斃
            if Rules.is_check(board, color):
                return -MATE_SCORE if maximizing else MATE_SCORE
            return 0

        if maximizing:
            best_value = -math.inf
            for move in moves:
                with board.trial_move(move):
                    value = self.minimax(board, depth - 1, alpha, beta, False)
                best_value = max(best_value, value)
                alpha = max(alpha, best_value)
                if beta <= alpha:
                    break
            return best_value
        else:
            best_value = math.inf
            for move in moves:
                with board.trial_move(move):
                    value = self.minimax(board, depth - 1, alpha, beta, True)
                best_value = min(best_value, value)
                beta = min(beta, best_value)
                if beta <= alpha:
                    break
            return best_value


def choose_move(board: Board, color: Color, depth: int) -> Optional[Move]:
    """MinimaxSearcher.choose_move のショートカット"""
    return MinimaxSearcher().choose_move(board, color, depth)
