"""
静的評価関数（駒の価値 + 渡河した兵の加点）
"""

from ..engine.board import Board
from ..engine.piece import Color, PieceType

PIECE_VALUES = {
    PieceType.KING: 10000,
    PieceType.CHARIOT: 900,
    PieceType.HORSE: 400,
    PieceType.CANNON: 450,
    PieceType.ADVISOR: 20,
    PieceType.ELEPHANT: 20,
    PieceType.PAWN: 10,
}

# 河を渡った兵への加点
PAWN_ADVANCE_BONUS = 20


def evaluate(board: Board, perspective: Color) -> int:
    """
    perspective 側から見た局面の評価値

    自分の駒は加算、相手の駒は減算。先読みはしない。
    evaluate(b, RED) == -evaluate(b, BLACK) が常に成り立つ。
    """
    score = 0
    for pos, piece in board.pieces():
        value = PIECE_VALUES[piece.piece_type]
        if piece.piece_type == PieceType.PAWN and board.has_crossed_river(pos, piece.color):
            value += PAWN_ADVANCE_BONUS
        if piece.color == perspective:
            score += value
        else:
            score -= value
    return score
