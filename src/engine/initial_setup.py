"""
初期盤面の設定とユーティリティ
"""

from typing import List, Optional, Sequence, Tuple

from .board import Board, BOARD_COLS, BOARD_ROWS
from .piece import Color, Piece, PieceType, PIECE_LETTERS

# 初期配置（上が黒=小文字、下が紅=大文字）
INITIAL_LAYOUT = [
    "rnbakabnr",  # 0: 黒の最下段
    ".........",
    ".c.....c.",  # 2: 黒の砲
    "p.p.p.p.p",  # 3: 黒の卒
    ".........",
    ".........",
    "P.P.P.P.P",  # 6: 紅の兵
    ".C.....C.",  # 7: 紅の炮
    ".........",
    "RNBAKABNR",  # 9: 紅の最下段
]

EMPTY_CHARS = ('.', ' ', '-')

_LETTER_TO_TYPE = {letter: piece_type for piece_type, letter in PIECE_LETTERS.items()}


def load_initial_board() -> Board:
    """
    初期盤面を作成する
    identity は行優先の順に piece-0, piece-1, ... を割り当てる
    """
    return load_board_from_rows(INITIAL_LAYOUT)


def load_board_from_rows(rows: Sequence[str]) -> Board:
    """
    10行 x 9文字のテキストから盤面を作成する

    文字は K A B N R C P（大文字=紅、小文字=黒）、'.' は空きマス。
    """
    if len(rows) != BOARD_ROWS:
        raise ValueError(f"Expected {BOARD_ROWS} rows, got {len(rows)}")

    board = Board()
    counter = 0
    for row, line in enumerate(rows):
        if len(line) != BOARD_COLS:
            raise ValueError(f"Row {row} must have {BOARD_COLS} cells: {line!r}")
        for col, char in enumerate(line):
            if char in EMPTY_CHARS:
                continue
            piece_type, color = parse_piece_from_text(char)
            board.add_piece((row, col), Piece(piece_type, color, f"piece-{counter}"))
            counter += 1
    return board


def board_from_grid(grid: Sequence[Sequence[Optional[Tuple[PieceType, Color]]]]) -> Board:
    """
    10x9 の (駒種, 陣営) 配列から盤面を作成する（テスト用フィクスチャ形式）
    """
    if len(grid) != BOARD_ROWS or any(len(row) != BOARD_COLS for row in grid):
        raise ValueError(f"Grid must be {BOARD_ROWS}x{BOARD_COLS}")

    board = Board()
    counter = 0
    for row in range(BOARD_ROWS):
        for col in range(BOARD_COLS):
            cell = grid[row][col]
            if cell is None:
                continue
            piece_type, color = cell
            board.add_piece((row, col), Piece(piece_type, color, f"piece-{counter}"))
            counter += 1
    return board


def board_to_rows(board: Board) -> List[str]:
    """盤面を load_board_from_rows 形式のテキストに変換"""
    return [
        "".join(piece.letter if piece is not None else "." for piece in row)
        for row in board.grid
    ]


def parse_piece_from_text(text: str) -> Tuple[PieceType, Color]:
    """
    一文字表記から駒の種類と陣営を解析
    例: 'R' -> (PieceType.CHARIOT, Color.RED), 'k' -> (PieceType.KING, Color.BLACK)
    """
    if len(text) != 1:
        raise ValueError(f"Invalid piece text: {text!r}")

    piece_type = _LETTER_TO_TYPE.get(text.upper())
    if piece_type is None:
        raise ValueError(f"Invalid piece character: {text!r}")

    color = Color.RED if text.isupper() else Color.BLACK
    return piece_type, color


def format_position(row: int, col: int) -> str:
    """
    盤面の位置を文字列に変換
    例: (0, 0) -> "a0", (9, 8) -> "i9"
    """
    return f"{chr(ord('a') + col)}{row}"


def parse_position(pos_str: str) -> Tuple[int, int]:
    """
    文字列を盤面の位置に変換
    例: "a0" -> (0, 0), "i9" -> (9, 8)
    """
    if len(pos_str) != 2:
        raise ValueError(f"Invalid position string: {pos_str}")

    col = ord(pos_str[0].lower()) - ord('a')
    row = int(pos_str[1])
    if not Board.is_valid_position((row, col)):
        raise ValueError(f"Position out of board: {pos_str}")
    return row, col
