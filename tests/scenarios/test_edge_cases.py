"""
シナリオテスト: エッジケースと境界条件
特殊な状況や境界値のテスト
"""

import pytest
from src.engine import Board, Color, PieceType, Piece, Rules, Move
from src.utils.exceptions import MissingKingError


def board_with_kings(red_king=(9, 5), black_king=(0, 3)):
    """向かい合わない位置に両将だけを置いた盤面"""
    board = Board()
    board.add_piece(red_king, Piece(PieceType.KING, Color.RED, "K"))
    board.add_piece(black_king, Piece(PieceType.KING, Color.BLACK, "k"))
    return board


class TestEdgeCases:
    """エッジケースのテストクラス"""

    def test_corner_chariot_movement(self):
        """盤の角の車は盤外に出ず、将の手前で止まる"""
        board = board_with_kings()
        board.add_piece((9, 0), Piece(PieceType.CHARIOT, Color.RED))

        legal_moves = Rules.get_piece_legal_moves(board, (9, 0), Color.RED)

        for move in legal_moves:
            assert board.is_valid_position(move.to_pos), f"盤外 {move.to_pos} への移動が含まれています"
        # 縦に9マス + 横に4マス（(9,5) の将まで）
        assert len(legal_moves) == 13

    def test_corner_horse_has_two_moves(self):
        board = board_with_kings()
        board.add_piece((0, 0), Piece(PieceType.HORSE, Color.BLACK))

        destinations = {m.to_pos for m in Rules.get_piece_legal_moves(board, (0, 0), Color.BLACK)}

        assert destinations == {(1, 2), (2, 1)}

    def test_pawn_on_last_rank_moves_sideways_only(self):
        """最奥の段の兵は横にしか動けない"""
        board = board_with_kings()
        board.add_piece((0, 0), Piece(PieceType.PAWN, Color.RED))

        destinations = {m.to_pos for m in Rules.get_piece_legal_moves(board, (0, 0), Color.RED)}

        assert destinations == {(0, 1)}

    def test_initial_elephants_have_two_moves(self, initial_board):
        destinations = {m.to_pos for m in Rules.get_piece_legal_moves(initial_board, (9, 2), Color.RED)}

        assert destinations == {(7, 0), (7, 4)}

    def test_king_captures_unprotected_attacker(self, board_from_rows):
        """守られていない王手駒は将で取れる"""
        board = board_from_rows([
            "....k....",
            "....R....",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            "...K.....",
        ])

        assert Move((0, 4), (1, 4)) in Rules.get_legal_moves(board, Color.BLACK)

    def test_king_cannot_capture_protected_attacker(self, board_from_rows):
        """馬に守られた車は将で取れない"""
        board = board_from_rows([
            "....k....",
            "....R....",
            ".........",
            ".....N...",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            "...K.....",
        ])

        assert Move((0, 4), (1, 4)) not in Rules.get_legal_moves(board, Color.BLACK)

    def test_blocker_between_kings_cannot_move(self, board_from_rows):
        """両将の間の唯一の駒は動くと将が向かい合うので動けない"""
        board = board_from_rows([
            "....k....",
            "....a....",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            ".........",
            "....K....",
        ])

        assert not Rules.generals_facing(board)
        assert Rules.get_piece_legal_moves(board, (1, 4), Color.BLACK) == []
        destinations = {m.to_pos for m in Rules.get_legal_moves(board, Color.BLACK)}
        assert destinations == {(0, 3), (0, 5)}

    def test_cannon_cannot_capture_own_piece_over_screen(self):
        board = board_with_kings()
        board.add_piece((7, 1), Piece(PieceType.CANNON, Color.RED))
        board.add_piece((5, 1), Piece(PieceType.PAWN, Color.BLACK))
        board.add_piece((2, 1), Piece(PieceType.HORSE, Color.RED))

        assert not Rules.is_legal_piece_move(board, (7, 1), (2, 1))

    def test_cannon_capture_across_river(self):
        """炮は河を越えて砲台越しに取れる"""
        board = board_with_kings()
        board.add_piece((7, 7), Piece(PieceType.CANNON, Color.RED))
        board.add_piece((6, 7), Piece(PieceType.PAWN, Color.RED))
        board.add_piece((0, 7), Piece(PieceType.HORSE, Color.BLACK))

        assert Move((7, 7), (0, 7)) in Rules.get_legal_moves(board, Color.RED)

    def test_horse_leg_at_board_edge(self):
        """盤端の馬は馬脚の方向だけが塞がれる"""
        board = board_with_kings()
        board.add_piece((9, 1), Piece(PieceType.HORSE, Color.RED))
        board.add_piece((8, 1), Piece(PieceType.PAWN, Color.RED))

        destinations = {m.to_pos for m in Rules.get_piece_legal_moves(board, (9, 1), Color.RED)}

        assert destinations == {(8, 3)}

    def test_only_kings_on_board(self):
        """将だけの盤面でも合法手があり、対局中と判定される"""
        board = board_with_kings()

        red_moves = Rules.get_legal_moves(board, Color.RED)

        assert len(red_moves) > 0
        assert not Rules.is_checkmate(board, Color.RED)
        assert not Rules.is_stalemate(board, Color.RED)

    def test_empty_board_has_no_legal_moves(self):
        """空の盤面では合法手がなく、状態判定は MissingKingError"""
        board = Board()

        assert Rules.get_legal_moves(board, Color.RED) == []
        with pytest.raises(MissingKingError):
            Rules.get_status(board, Color.RED)

    def test_move_generation_leaves_board_unchanged(self, initial_board):
        before = initial_board.copy()

        Rules.get_legal_moves(initial_board, Color.RED)
        Rules.get_legal_moves(initial_board, Color.BLACK)

        assert initial_board == before
        assert initial_board.king_positions == before.king_positions
