"""
象棋の盤面を管理するモジュール
"""

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from .move import Move, Position
from .piece import Color, Piece, PieceType

# 盤面サイズ（10行 x 9列）
BOARD_ROWS = 10
BOARD_COLS = 9
# 河界: 0-4行が黒陣、5-9行が紅陣
RIVER_ROW = 5
# 九宮の列範囲
PALACE_COLS = range(3, 6)


class Board:
    """
    象棋のゲームボードを表すクラス

    グリッドが駒の位置の唯一の情報源。identity -> 位置 の索引と
    将の位置はグリッド更新のたびに同期される。
    """

    def __init__(self):
        self.grid: List[List[Optional[Piece]]] = [
            [None for _ in range(BOARD_COLS)]
            for _ in range(BOARD_ROWS)
        ]
        # 将の位置を記録
        self.king_positions: Dict[Color, Optional[Position]] = {
            Color.RED: None,
            Color.BLACK: None
        }
        self._positions: Dict[str, Position] = {}

    # ------------------------------------------------------------------
    # 参照
    # ------------------------------------------------------------------

    @staticmethod
    def is_valid_position(position: Position) -> bool:
        """位置が盤面内か確認"""
        row, col = position
        return 0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS

    def get_piece(self, position: Position) -> Optional[Piece]:
        """指定位置の駒を取得"""
        if not self.is_valid_position(position):
            raise ValueError(f"Invalid position: {position}")
        row, col = position
        return self.grid[row][col]

    def is_occupied(self, position: Position) -> bool:
        """指定位置に駒があるか確認"""
        return self.get_piece(position) is not None

    def get_king_position(self, color: Color) -> Optional[Position]:
        """指定陣営の将の位置を取得"""
        return self.king_positions[color]

    def position_of(self, identity: str) -> Optional[Position]:
        """identity から駒の現在位置を引く（盤上にない場合は None）"""
        return self._positions.get(identity)

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Position, Piece]]:
        """盤上の駒を行優先の順で列挙する"""
        for row in range(BOARD_ROWS):
            for col in range(BOARD_COLS):
                piece = self.grid[row][col]
                if piece is not None and (color is None or piece.color == color):
                    yield (row, col), piece

    # ------------------------------------------------------------------
    # 盤面の幾何
    # ------------------------------------------------------------------

    @staticmethod
    def is_in_palace(position: Position, color: Color) -> bool:
        """
        指定位置が指定陣営の九宮内か確認
        紅: 7-9行、黒: 0-2行、いずれも3-5列
        """
        row, col = position
        if col not in PALACE_COLS:
            return False
        if color == Color.RED:
            return 7 <= row <= 9
        return 0 <= row <= 2

    @staticmethod
    def is_own_side(position: Position, color: Color) -> bool:
        """指定位置が自陣（河を渡っていない側）か確認"""
        row = position[0]
        if color == Color.RED:
            return row >= RIVER_ROW
        return row < RIVER_ROW

    @staticmethod
    def has_crossed_river(position: Position, color: Color) -> bool:
        """指定位置が河を渡った先か確認（紅: 4行以下、黒: 5行以上）"""
        return not Board.is_own_side(position, color)

    def count_pieces_between(self, from_pos: Position, to_pos: Position) -> int:
        """
        同じ行または列にある2点の間（両端を除く）の駒数を数える
        同じ行・列にない場合は ValueError
        """
        r1, c1 = from_pos
        r2, c2 = to_pos
        count = 0
        if r1 == r2:
            for col in range(min(c1, c2) + 1, max(c1, c2)):
                if self.grid[r1][col] is not None:
                    count += 1
        elif c1 == c2:
            for row in range(min(r1, r2) + 1, max(r1, r2)):
                if self.grid[row][c1] is not None:
                    count += 1
        else:
            raise ValueError(f"Not on a line: {from_pos} -> {to_pos}")
        return count

    # ------------------------------------------------------------------
    # 配置と着手
    # ------------------------------------------------------------------

    def add_piece(self, position: Position, piece: Piece) -> bool:
        """
        指定位置に駒を配置
        返り値: 成功したらTrue（盤外・駒のあるマスは失敗）
        """
        if not self.is_valid_position(position) or self.is_occupied(position):
            return False
        self._place(position, piece)
        return True

    def remove_piece(self, position: Position) -> Optional[Piece]:
        """指定位置から駒を取り除いて返す"""
        piece = self.get_piece(position)
        if piece is not None:
            self._clear(position)
        return piece

    def apply_move(self, move: Move) -> Optional[Piece]:
        """
        手を盤面に適用し、取った駒を返す

        合法性は確認しない（呼び出し側で検証済みであること）。
        """
        fr, fc = move.from_pos
        tr, tc = move.to_pos
        piece = self.grid[fr][fc]
        captured = self.grid[tr][tc]

        if captured is not None:
            self._clear(move.to_pos)
        self._clear(move.from_pos)
        self._place(move.to_pos, piece)
        return captured

    def undo_move(self, move: Move, captured: Optional[Piece]) -> None:
        """apply_move の逆操作。取った駒を移動先に戻す"""
        piece = self.grid[move.to_pos[0]][move.to_pos[1]]
        self._clear(move.to_pos)
        self._place(move.from_pos, piece)
        if captured is not None:
            self._place(move.to_pos, captured)

    @contextmanager
    def trial_move(self, move: Move) -> Iterator[Optional[Piece]]:
        """
        手を仮に適用し、ブロックを抜けると必ず元に戻す

            with board.trial_move(move) as captured:
                ...
        """
        captured = self.apply_move(move)
        try:
            yield captured
        finally:
            self.undo_move(move, captured)

    def _place(self, position: Position, piece: Piece) -> None:
        row, col = position
        self.grid[row][col] = piece
        if piece.identity:
            self._positions[piece.identity] = position
        if piece.piece_type == PieceType.KING:
            self.king_positions[piece.color] = position

    def _clear(self, position: Position) -> None:
        row, col = position
        piece = self.grid[row][col]
        self.grid[row][col] = None
        if piece is None:
            return
        if piece.identity and self._positions.get(piece.identity) == position:
            del self._positions[piece.identity]
        if piece.piece_type == PieceType.KING and self.king_positions[piece.color] == position:
            self.king_positions[piece.color] = None

    # ------------------------------------------------------------------
    # 複製・変換
    # ------------------------------------------------------------------

    def copy(self) -> 'Board':
        """盤面のコピーを作成"""
        new_board = Board()
        for position, piece in self.pieces():
            new_board.add_piece(
                position, Piece(piece.piece_type, piece.color, piece.identity)
            )
        return new_board

    def to_grid(self) -> List[List[Optional[Tuple[PieceType, Color]]]]:
        """10x9 の (駒種, 陣営) 配列に変換"""
        return [
            [
                (piece.piece_type, piece.color) if piece is not None else None
                for piece in row
            ]
            for row in self.grid
        ]

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    __hash__ = None

    def __str__(self):
        """盤面の文字列表現を返す"""
        result = ["   " + " ".join(chr(ord('a') + col) for col in range(BOARD_COLS))]
        for row in range(BOARD_ROWS):
            if row == RIVER_ROW:
                result.append("   " + "~" * (BOARD_COLS * 2 - 1))
            cells = " ".join(
                piece.letter if piece is not None else "."
                for piece in self.grid[row]
            )
            result.append(f"{row}  {cells}")
        return "\n".join(result)

    def to_dict(self) -> dict:
        """盤面を辞書形式に変換（API用）"""
        return {
            "board": [
                [piece.to_dict() if piece is not None else None for piece in row]
                for row in self.grid
            ],
            "king_positions": {
                "RED": self.king_positions[Color.RED],
                "BLACK": self.king_positions[Color.BLACK]
            }
        }
