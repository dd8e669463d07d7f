#!/usr/bin/env python
"""
象棋 開発サーバ起動スクリプト
"""

import argparse
import sys
import os

# プロジェクトルートをパスに追加
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from src.api.main import app
from src.utils.logger import setup_logger
import uvicorn


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="象棋 (Xiangqi) 開発サーバ")
    parser.add_argument("--host", default="0.0.0.0", help="待ち受けアドレス")
    parser.add_argument("--port", type=int, default=8001, help="待ち受けポート")
    parser.add_argument(
        "--log-level", default="info",
        choices=["debug", "info", "warning", "error"],
        help="ログレベル"
    )
    parser.add_argument("--log-file", default=None, help="ログファイル名（logs/ 以下）")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    setup_logger(level=args.log_level, log_file=args.log_file)

    print("=" * 60)
    print("象棋 (Xiangqi) 開発サーバを起動します")
    print("=" * 60)
    print(f"APIサーバ: http://localhost:{args.port}")
    print(f"API ドキュメント: http://localhost:{args.port}/docs")
    print("=" * 60)
    print()

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        reload=False,
        log_level=args.log_level
    )
