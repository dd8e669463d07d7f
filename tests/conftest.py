"""
pytest共通設定とフィクスチャ
"""

import pytest
import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def empty_board():
    """空の盤面を提供するフィクスチャ"""
    from src.engine import Board
    return Board()


@pytest.fixture
def initial_board():
    """初期配置の盤面を提供するフィクスチャ"""
    from src.engine.initial_setup import load_initial_board
    return load_initial_board()


@pytest.fixture
def red_player():
    """紅プレイヤーを提供するフィクスチャ"""
    from src.engine import Color
    return Color.RED


@pytest.fixture
def black_player():
    """黒プレイヤーを提供するフィクスチャ"""
    from src.engine import Color
    return Color.BLACK


@pytest.fixture
def board_from_rows():
    """テキスト10行から盤面を作るヘルパーを提供するフィクスチャ"""
    from src.engine.initial_setup import load_board_from_rows
    return load_board_from_rows
