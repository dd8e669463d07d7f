"""
象棋エンジンの例外定義
"""


class XiangqiError(Exception):
    """
    象棋エンジンの基底例外

    全ての象棋関連の例外はこのクラスを継承する。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class InvalidMoveError(XiangqiError):
    """
    不正な手

    attempt_move が手を拒否したときに送出される。盤面は変更されない。
    """

    def __init__(self, move_str: str, reason: str = ""):
        message = f"不正な手: {move_str}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_MOVE")
        self.move_str = move_str
        self.reason = reason


class MissingKingError(XiangqiError):
    """
    将（帥）が盤上に存在しない

    合法な進行では起こりえないため、盤面の破損または呼び出し側のバグを示す。
    """

    def __init__(self, color_name: str):
        super().__init__(f"{color_name} の将が盤上にありません", "MISSING_KING")
        self.color_name = color_name


class GameOverError(XiangqiError):
    """終了したゲームに手が送られた"""

    def __init__(self, reason: str = ""):
        message = "ゲームは既に終了しています"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_OVER")
        self.reason = reason


class GameStateError(XiangqiError):
    """
    ゲーム状態の不整合

    セッションに対する矛盾したリクエストで送出される。
    """

    def __init__(self, state_description: str, reason: str = ""):
        message = f"ゲーム状態エラー: {state_description}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_STATE_ERROR")
        self.state_description = state_description
        self.reason = reason
