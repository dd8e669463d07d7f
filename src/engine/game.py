"""
対局セッション（盤面・手番・終局状態）を管理するモジュール
"""

from typing import List, Optional

from .board import Board
from .initial_setup import load_initial_board
from .move import Move, Position
from .piece import Color, Piece
from .rules import GameStatus, MoveOutcome, Rules
from ..utils.exceptions import GameOverError, GameStateError, InvalidMoveError
from ..utils.logger import get_logger

logger = get_logger('engine.game')


class GameState:
    """
    ゲームの状態を管理するクラス

    手番は着手が受理されるたびに交代する。詰み・困斃・投了で game_over が
    一度だけ立ち、以降の着手は GameOverError になる。
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        turn: Color = Color.RED,
        game_id: str = ""
    ):
        self.game_id = game_id
        self.board = board if board is not None else load_initial_board()
        self.turn = turn
        self.move_history: List[Move] = []
        self.captured_pieces: List[Piece] = []
        self.game_over = False
        self.winner: Optional[Color] = None
        self.status = GameStatus.IN_PROGRESS
        self._update_status()

    def reset(self):
        """初期盤面からやり直す"""
        self.__init__(game_id=self.game_id)

    def play(self, from_pos: Position, to_pos: Position) -> MoveOutcome:
        """
        手番側の手を適用する

        不正な手は InvalidMoveError（盤面・手番は変わらない）。
        """
        if self.game_over:
            raise GameOverError(self.status.name)

        try:
            outcome = Rules.attempt_move(self.board, from_pos, to_pos, self.turn)
        except InvalidMoveError as e:
            logger.info("Rejected move for %s: %s", self.turn.name, e)
            raise

        self.move_history.append(outcome.move)
        if outcome.captured is not None:
            self.captured_pieces.append(outcome.captured)
        logger.info(
            "%s played %s%s", self.turn.name, outcome.move,
            f" capturing {outcome.captured!r}" if outcome.captured else ""
        )

        self.turn = outcome.next_turn
        self._update_status()
        return outcome

    def resign(self):
        """手番側が投了する"""
        if self.game_over:
            raise GameStateError("resign", "ゲームは既に終了しています")
        self.game_over = True
        self.winner = self.turn.opponent
        logger.info("%s resigned, %s wins", self.turn.name, self.winner.name)

    def legal_moves(self) -> List[Move]:
        """手番側の合法手"""
        if self.game_over:
            return []
        return Rules.get_legal_moves(self.board, self.turn)

    def _update_status(self):
        self.status = Rules.get_status(self.board, self.turn)
        if self.status == GameStatus.CHECKMATE:
            self.game_over = True
            self.winner = self.turn.opponent
            logger.info("Checkmate: %s wins", self.winner.name)
        elif self.status == GameStatus.STALEMATE:
            self.game_over = True
            # 困斃は引き分け
            self.winner = None
            logger.info("Stalemate: no legal moves for %s", self.turn.name)

    def to_dict(self) -> dict:
        """ゲーム状態を辞書形式に変換"""
        return {
            "game_id": self.game_id,
            "board": self.board.to_dict(),
            "current_player": self.turn.name,
            "move_count": len(self.move_history),
            "status": self.status.name,
            "in_check": self.status in (GameStatus.CHECK, GameStatus.CHECKMATE),
            "game_over": self.game_over,
            "winner": self.winner.name if self.winner else None,
        }
