"""
象棋 FastAPI サーバ
ゲームの状態管理とAI探索のエンドポイントを提供
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Optional, List, Dict
import uuid

from ..engine import GameState, GameStatus, Rules
from ..engine.board import BOARD_COLS, BOARD_ROWS
from ..utils.exceptions import GameOverError, GameStateError, InvalidMoveError
from ..utils.logger import get_logger
from .ai_player import get_ai, XiangqiAI

logger = get_logger('api')

app = FastAPI(
    title="象棋 API",
    description="象棋（シャンチー）のルールエンジンとAI対局のバックエンドAPI",
    version="1.0.0"
)

# CORS設定（フロントエンドからのアクセスを許可）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ゲームの状態を保持する辞書
games: Dict[str, GameState] = {}


# Pydanticモデル（リクエスト/レスポンス用）

class NewGameResponse(BaseModel):
    game_id: str
    message: str
    game_state: dict


class MoveRequest(BaseModel):
    from_row: int = Field(ge=0, le=BOARD_ROWS - 1)
    from_col: int = Field(ge=0, le=BOARD_COLS - 1)
    to_row: int = Field(ge=0, le=BOARD_ROWS - 1)
    to_col: int = Field(ge=0, le=BOARD_COLS - 1)


class MoveResponse(BaseModel):
    success: bool
    message: str
    game_state: dict
    move: Optional[dict] = None
    captured: Optional[dict] = None
    legal_moves: Optional[List[dict]] = None


class PredictRequest(BaseModel):
    difficulty: str = XiangqiAI.DEFAULT_DIFFICULTY  # easy, medium, hard
    depth: Optional[int] = Field(default=None, ge=1, le=6)


class PredictResponse(BaseModel):
    move: Optional[dict]
    evaluation: Optional[int]
    game_state: dict
    ai_info: Optional[dict] = None


def _get_game(game_id: str) -> GameState:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="ゲームが見つかりません")
    return games[game_id]


def _legal_move_dicts(game_state: GameState) -> Optional[List[dict]]:
    if game_state.game_over:
        return None
    return [move.to_dict() for move in game_state.legal_moves()]


def _result_message(game_state: GameState) -> str:
    if game_state.status == GameStatus.CHECKMATE:
        return f"詰みです！{game_state.winner.name}の勝利です！"
    if game_state.status == GameStatus.STALEMATE:
        return "合法手がありません。引き分けです"
    if game_state.status == GameStatus.CHECK:
        return f"{game_state.turn.name}に王手！"
    return "手を適用しました"


# エンドポイント

@app.get("/api")
async def root():
    """APIルート"""
    return {
        "message": "象棋 API へようこそ",
        "version": "1.0.0",
        "endpoints": [
            "/new_game",
            "/apply_move/{game_id}",
            "/predict/{game_id}",
            "/ai_move/{game_id}",
            "/get_legal_moves/{game_id}",
            "/get_game/{game_id}",
            "/status/{game_id}",
            "/resign/{game_id}",
            "/delete_game/{game_id}",
        ]
    }


@app.post("/new_game", response_model=NewGameResponse)
async def new_game():
    """
    新しいゲームを開始する
    初期盤面・紅の手番から始まる
    """
    game_id = str(uuid.uuid4())
    game_state = GameState(game_id=game_id)
    games[game_id] = game_state
    logger.info("New game %s", game_id)

    return NewGameResponse(
        game_id=game_id,
        message="新しいゲームを開始しました",
        game_state=game_state.to_dict()
    )


@app.get("/get_game/{game_id}")
async def get_game(game_id: str):
    """ゲームの状態を取得"""
    return _get_game(game_id).to_dict()


@app.post("/apply_move/{game_id}", response_model=MoveResponse)
async def apply_move(game_id: str, move_request: MoveRequest):
    """
    手番側の手を適用する
    """
    game_state = _get_game(game_id)

    from_pos = (move_request.from_row, move_request.from_col)
    to_pos = (move_request.to_row, move_request.to_col)

    try:
        outcome = game_state.play(from_pos, to_pos)
    except GameOverError:
        raise HTTPException(status_code=400, detail="ゲームは既に終了しています")
    except InvalidMoveError as e:
        return MoveResponse(
            success=False,
            message=e.reason or "無効な手です",
            game_state=game_state.to_dict()
        )

    return MoveResponse(
        success=True,
        message=_result_message(game_state),
        game_state=game_state.to_dict(),
        move=outcome.move.to_dict(),
        captured=outcome.captured.to_dict() if outcome.captured else None,
        legal_moves=_legal_move_dicts(game_state)
    )


@app.get("/get_legal_moves/{game_id}")
async def get_legal_moves(game_id: str):
    """現在のプレイヤーの合法手を取得"""
    game_state = _get_game(game_id)

    if game_state.game_over:
        return {"legal_moves": [], "message": "ゲームは終了しています"}

    legal_moves = game_state.legal_moves()
    return {
        "legal_moves": [move.to_dict() for move in legal_moves],
        "count": len(legal_moves),
        "current_player": game_state.turn.name
    }


@app.get("/status/{game_id}")
async def get_status(game_id: str):
    """手番側から見た局面の状態（対局中・王手・詰み・困斃）"""
    game_state = _get_game(game_id)
    return {
        "status": Rules.get_status(game_state.board, game_state.turn).name,
        "current_player": game_state.turn.name,
        "game_over": game_state.game_over,
        "winner": game_state.winner.name if game_state.winner else None,
    }


@app.post("/predict/{game_id}", response_model=PredictResponse)
async def predict(game_id: str, request: PredictRequest):
    """
    AIが次の手を提案する（盤面は変更しない）

    difficulty: 'easy', 'medium', 'hard'（depth 指定があればそちらを優先）
    """
    game_state = _get_game(game_id)

    if game_state.game_over:
        raise HTTPException(status_code=400, detail="ゲームは終了しています")

    ai = get_ai()
    best_move, evaluation = ai.get_best_move(
        board=game_state.board,
        current_player=game_state.turn,
        difficulty=request.difficulty,
        depth=request.depth
    )

    if best_move is None:
        raise HTTPException(status_code=400, detail="合法手がありません")

    return PredictResponse(
        move=best_move.to_dict(),
        evaluation=evaluation,
        game_state=game_state.to_dict(),
        ai_info={
            "difficulty": request.difficulty,
            "depth": ai.resolve_depth(request.difficulty, request.depth),
            "nodes_searched": ai.searcher.nodes_searched,
        }
    )


@app.post("/ai_move/{game_id}", response_model=MoveResponse)
async def ai_move(game_id: str, request: PredictRequest):
    """
    AIが手番側の手を探索して適用する
    """
    game_state = _get_game(game_id)

    if game_state.game_over:
        raise HTTPException(status_code=400, detail="ゲームは終了しています")

    ai = get_ai()
    best_move, _ = ai.get_best_move(
        board=game_state.board,
        current_player=game_state.turn,
        difficulty=request.difficulty,
        depth=request.depth
    )

    if best_move is None:
        raise HTTPException(status_code=400, detail="合法手がありません")

    outcome = game_state.play(best_move.from_pos, best_move.to_pos)

    return MoveResponse(
        success=True,
        message=_result_message(game_state),
        game_state=game_state.to_dict(),
        move=outcome.move.to_dict(),
        captured=outcome.captured.to_dict() if outcome.captured else None,
        legal_moves=_legal_move_dicts(game_state)
    )


@app.post("/resign/{game_id}")
async def resign(game_id: str):
    """
    投了する
    現在のプレイヤーが投了し、相手の勝利となる
    """
    game_state = _get_game(game_id)

    try:
        game_state.resign()
    except GameStateError:
        raise HTTPException(status_code=400, detail="ゲームは既に終了しています")

    return {
        "message": f"{game_state.turn.name}が投了しました",
        "winner": game_state.winner.name,
        "game_state": game_state.to_dict()
    }


@app.delete("/delete_game/{game_id}")
async def delete_game(game_id: str):
    """ゲームを削除"""
    _get_game(game_id)
    del games[game_id]
    return {"message": "ゲームを削除しました"}


# AI管理エンドポイント

@app.get("/ai/status")
async def get_ai_status():
    """AIの設定を取得"""
    ai = get_ai()
    return {
        "algorithm": "minimax-alphabeta",
        "default_difficulty": ai.DEFAULT_DIFFICULTY,
        "difficulty_levels": ai.difficulty_levels(),
    }


@app.get("/ai/evaluate/{game_id}")
async def evaluate_position(game_id: str):
    """現在の局面を評価"""
    game_state = _get_game(game_id)
    evaluation = get_ai().evaluate_position(game_state.board, game_state.turn)

    return {
        "evaluation": evaluation,
        "current_player": game_state.turn.name,
        "interpretation": "有利" if evaluation > 0 else "不利" if evaluation < 0 else "互角"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
