"""
象棋のルール判定を行うモジュール
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .board import Board, BOARD_COLS, BOARD_ROWS, PALACE_COLS, RIVER_ROW
from .move import Move, Position
from .piece import Color, Piece, PieceType
from ..utils.exceptions import InvalidMoveError, MissingKingError


class GameStatus(Enum):
    """手番側から見た局面の状態"""
    IN_PROGRESS = auto()  # 対局中（王手なし、合法手あり）
    CHECK = auto()        # 王手されているが逃げられる
    CHECKMATE = auto()    # 詰み
    STALEMATE = auto()    # 王手なしで合法手なし（困斃）


@dataclass
class MoveOutcome:
    """attempt_move の結果"""
    move: Move
    captured: Optional[Piece]
    next_turn: Color


# 駒の種類ごとの移動候補（相対座標）
_ORTHOGONAL_STEPS = [(-1, 0), (1, 0), (0, -1), (0, 1)]
_DIAGONAL_STEPS = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
_ELEPHANT_STEPS = [(-2, -2), (-2, 2), (2, -2), (2, 2)]
_HORSE_STEPS = [
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
]


class Rules:
    """象棋のルールを管理するクラス"""

    # ------------------------------------------------------------------
    # 駒の動きの判定（自玉の王手は考慮しない）
    # ------------------------------------------------------------------

    @staticmethod
    def is_legal_piece_move(board: Board, from_pos: Position, to_pos: Position) -> bool:
        """
        駒の動きとして正しいか判定する

        自分の将が王手に晒されるかどうかは考慮しない（擬似合法手の判定）。
        """
        if not board.is_valid_position(from_pos) or not board.is_valid_position(to_pos):
            return False
        if from_pos == to_pos:
            return False

        fr, fc = from_pos
        tr, tc = to_pos
        piece = board.grid[fr][fc]
        if piece is None:
            return False

        target = board.grid[tr][tc]
        if target is not None and target.color == piece.color:
            return False

        dr = tr - fr
        dc = tc - fc
        abs_dr = abs(dr)
        abs_dc = abs(dc)
        piece_type = piece.piece_type

        if piece_type == PieceType.KING:
            # 九宮内で縦横に1マス
            if abs_dr + abs_dc != 1:
                return False
            return board.is_in_palace(to_pos, piece.color)

        elif piece_type == PieceType.ADVISOR:
            # 九宮内で斜めに1マス
            if abs_dr != 1 or abs_dc != 1:
                return False
            return board.is_in_palace(to_pos, piece.color)

        elif piece_type == PieceType.ELEPHANT:
            # 斜めに2マス、河を渡れない、象眼が塞がっていたら不可
            if abs_dr != 2 or abs_dc != 2:
                return False
            if not board.is_own_side(to_pos, piece.color):
                return False
            return board.grid[fr + dr // 2][fc + dc // 2] is None

        elif piece_type == PieceType.HORSE:
            # 日の字、長い方向の隣（馬脚）が塞がっていたら不可
            if abs_dr == 2 and abs_dc == 1:
                return board.grid[fr + dr // 2][fc] is None
            if abs_dr == 1 and abs_dc == 2:
                return board.grid[fr][fc + dc // 2] is None
            return False

        elif piece_type == PieceType.CHARIOT:
            if fr != tr and fc != tc:
                return False
            return board.count_pieces_between(from_pos, to_pos) == 0

        elif piece_type == PieceType.CANNON:
            # 移動は間に駒なし、取りはちょうど1枚（砲台）を挟む
            if fr != tr and fc != tc:
                return False
            between = board.count_pieces_between(from_pos, to_pos)
            if target is not None:
                return between == 1
            return between == 0

        elif piece_type == PieceType.PAWN:
            if abs_dr + abs_dc != 1:
                return False
            if piece.color == Color.RED:
                if tr > fr:
                    return False  # 後退不可
                if dr == 0 and fr >= RIVER_ROW:
                    return False  # 河を渡るまで横移動不可
            else:
                if tr < fr:
                    return False
                if dr == 0 and fr < RIVER_ROW:
                    return False
            return True

        return False

    @staticmethod
    def _candidate_destinations(from_pos: Position, piece: Piece) -> List[Position]:
        """
        駒の形から到達しうるマスを行優先の順で返す
        最終判定は is_legal_piece_move が行う
        """
        row, col = from_pos
        piece_type = piece.piece_type

        if piece_type in (PieceType.CHARIOT, PieceType.CANNON):
            candidates = [(row, c) for c in range(BOARD_COLS) if c != col]
            candidates += [(r, col) for r in range(BOARD_ROWS) if r != row]
        else:
            if piece_type in (PieceType.KING, PieceType.PAWN):
                steps = _ORTHOGONAL_STEPS
            elif piece_type == PieceType.ADVISOR:
                steps = _DIAGONAL_STEPS
            elif piece_type == PieceType.ELEPHANT:
                steps = _ELEPHANT_STEPS
            else:
                steps = _HORSE_STEPS
            candidates = [
                (row + dr, col + dc) for dr, dc in steps
                if Board.is_valid_position((row + dr, col + dc))
            ]

        return sorted(candidates)

    # ------------------------------------------------------------------
    # 王手判定
    # ------------------------------------------------------------------

    @staticmethod
    def generals_facing(board: Board) -> bool:
        """
        両将が同じ列（3-5列）で向かい合い、間に駒がないか確認（飛将）
        """
        red_king = board.get_king_position(Color.RED)
        black_king = board.get_king_position(Color.BLACK)
        if red_king is None or black_king is None:
            return False
        if red_king[1] != black_king[1] or red_king[1] not in PALACE_COLS:
            return False
        return board.count_pieces_between(red_king, black_king) == 0

    @staticmethod
    def is_check(board: Board, color: Color) -> bool:
        """
        指定陣営の将が王手されているか確認

        将が盤上にない場合は MissingKingError（合法な進行では起こらない）。
        """
        king_pos = board.get_king_position(color)
        if king_pos is None:
            raise MissingKingError(color.name)

        for pos, _ in board.pieces(color.opponent):
            if Rules.is_legal_piece_move(board, pos, king_pos):
                return True

        # 将同士が向かい合うのも王手として扱う（双方に対して成立）
        return Rules.generals_facing(board)

    @staticmethod
    def leaves_king_in_check(board: Board, move: Move, color: Color) -> bool:
        """この手を指した後、自分の将が王手に晒されるか"""
        with board.trial_move(move):
            return Rules.is_check(board, color)

    # ------------------------------------------------------------------
    # 合法手生成
    # ------------------------------------------------------------------

    @staticmethod
    def get_piece_legal_moves(board: Board, from_pos: Position, color: Color) -> List[Move]:
        """指定位置の駒の合法手を取得"""
        piece = board.get_piece(from_pos)
        if piece is None or piece.color != color:
            return []

        legal_moves = []
        for to_pos in Rules._candidate_destinations(from_pos, piece):
            if not Rules.is_legal_piece_move(board, from_pos, to_pos):
                continue
            move = Move(from_pos, to_pos)
            if not Rules.leaves_king_in_check(board, move, color):
                legal_moves.append(move)
        return legal_moves

    @staticmethod
    def get_legal_moves(board: Board, color: Color) -> List[Move]:
        """
        指定陣営の合法手をすべて取得
        駒は行優先、行き先も行優先の順に並ぶ
        """
        legal_moves = []
        for pos, _ in list(board.pieces(color)):
            legal_moves.extend(Rules.get_piece_legal_moves(board, pos, color))
        return legal_moves

    @staticmethod
    def has_legal_move(board: Board, color: Color) -> bool:
        """合法手が1つでもあるか（全列挙せずに打ち切る）"""
        for pos, piece in list(board.pieces(color)):
            for to_pos in Rules._candidate_destinations(pos, piece):
                if not Rules.is_legal_piece_move(board, pos, to_pos):
                    continue
                if not Rules.leaves_king_in_check(board, Move(pos, to_pos), color):
                    return True
        return False

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        """指定陣営が詰んでいるか確認"""
        return Rules.is_check(board, color) and not Rules.has_legal_move(board, color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        """指定陣営が困斃（王手なしで合法手なし）か確認"""
        return not Rules.is_check(board, color) and not Rules.has_legal_move(board, color)

    @staticmethod
    def get_status(board: Board, color: Color) -> GameStatus:
        """手番側の局面の状態を返す"""
        in_check = Rules.is_check(board, color)
        can_move = Rules.has_legal_move(board, color)

        if not can_move:
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        return GameStatus.CHECK if in_check else GameStatus.IN_PROGRESS

    # ------------------------------------------------------------------
    # 着手
    # ------------------------------------------------------------------

    @staticmethod
    def attempt_move(
        board: Board,
        from_pos: Position,
        to_pos: Position,
        color: Color
    ) -> MoveOutcome:
        """
        手を検証して盤面に適用する

        不正な手は InvalidMoveError を送出し、盤面は変更しない。
        """
        move = Move(from_pos, to_pos)

        if not board.is_valid_position(move.from_pos) or not board.is_valid_position(move.to_pos):
            raise InvalidMoveError(repr(move), "盤外の座標です")

        piece = board.get_piece(move.from_pos)
        if piece is None:
            raise InvalidMoveError(str(move), "移動元に駒がありません")
        if piece.color != color:
            raise InvalidMoveError(str(move), "相手の駒は動かせません")
        if not Rules.is_legal_piece_move(board, move.from_pos, move.to_pos):
            raise InvalidMoveError(str(move), "駒の動きとして不正です")
        if Rules.leaves_king_in_check(board, move, color):
            raise InvalidMoveError(str(move), "自分の将が王手に晒されます")

        captured = board.apply_move(move)
        return MoveOutcome(move=move, captured=captured, next_turn=color.opponent)
