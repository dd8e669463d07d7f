"""
象棋の手（Move）を表現するモジュール
"""

from typing import Tuple

Position = Tuple[int, int]


class Move:
    """象棋の一手を表すクラス（1駒の移動、取りは最大1枚）"""

    __slots__ = ('from_pos', 'to_pos')

    def __init__(self, from_pos: Position, to_pos: Position):
        self.from_pos = tuple(from_pos)
        self.to_pos = tuple(to_pos)

    def __str__(self):
        from .initial_setup import format_position
        return f"{format_position(*self.from_pos)}-{format_position(*self.to_pos)}"

    def __repr__(self):
        return f"Move(from={self.from_pos}, to={self.to_pos})"

    def __eq__(self, other):
        if not isinstance(other, Move):
            return NotImplemented
        return self.from_pos == other.from_pos and self.to_pos == other.to_pos

    def __hash__(self):
        return hash((self.from_pos, self.to_pos))

    def to_dict(self) -> dict:
        """手を辞書形式に変換（API用）"""
        return {
            "from_row": self.from_pos[0],
            "from_col": self.from_pos[1],
            "to_row": self.to_pos[0],
            "to_col": self.to_pos[1],
        }

    @staticmethod
    def from_dict(data: dict) -> 'Move':
        """辞書形式から手を復元（API用）"""
        return Move(
            from_pos=(data["from_row"], data["from_col"]),
            to_pos=(data["to_row"], data["to_col"]),
        )
