"""
象棋の駒の種類と陣営を定義するモジュール
"""

from enum import Enum, auto


class Color(Enum):
    """陣営の定義"""
    RED = 0    # 先手（紅）: 盤面下側 5-9行
    BLACK = 1  # 後手（黒）: 盤面上側 0-4行

    @property
    def opponent(self):
        """相手の陣営を返す"""
        return Color.BLACK if self == Color.RED else Color.RED


class PieceType(Enum):
    """駒の種類"""
    KING = auto()      # 帥/将
    ADVISOR = auto()   # 仕/士
    ELEPHANT = auto()  # 相/象
    HORSE = auto()     # 傌/馬
    CHARIOT = auto()   # 俥/車
    CANNON = auto()    # 炮/砲
    PAWN = auto()      # 兵/卒


# 盤面テキスト用の一文字表記（紅は大文字、黒は小文字）
PIECE_LETTERS = {
    PieceType.KING: 'K',
    PieceType.ADVISOR: 'A',
    PieceType.ELEPHANT: 'B',
    PieceType.HORSE: 'N',
    PieceType.CHARIOT: 'R',
    PieceType.CANNON: 'C',
    PieceType.PAWN: 'P',
}

# 各陣営の初期枚数
PIECE_COUNTS = {
    PieceType.KING: 1,
    PieceType.ADVISOR: 2,
    PieceType.ELEPHANT: 2,
    PieceType.HORSE: 2,
    PieceType.CHARIOT: 2,
    PieceType.CANNON: 2,
    PieceType.PAWN: 5,
}


class Piece:
    """
    象棋の駒を表すクラス

    位置は持たない（盤面のグリッドが唯一の情報源）。
    identity は対局中に変わらない識別子で、UI 側の同期などに使う。
    """

    def __init__(self, piece_type: PieceType, color: Color, identity: str = ""):
        self.piece_type = piece_type
        self.color = color
        self.identity = identity

    @property
    def letter(self) -> str:
        """一文字表記（例: 紅の車 'R'、黒の車 'r'）"""
        letter = PIECE_LETTERS[self.piece_type]
        return letter if self.color == Color.RED else letter.lower()

    def __str__(self):
        return self.letter

    def __repr__(self):
        return f"Piece({self.piece_type.name}, {self.color.name}, {self.identity!r})"

    def __eq__(self, other):
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.piece_type == other.piece_type
            and self.color == other.color
            and self.identity == other.identity
        )

    def __hash__(self):
        return hash((self.piece_type, self.color, self.identity))

    def to_dict(self) -> dict:
        """駒を辞書形式に変換（API用）"""
        return {
            "type": self.piece_type.name,
            "color": self.color.name,
            "id": self.identity,
        }
