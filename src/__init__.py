"""
象棋（シャンチー）エンジン
"""

__version__ = "1.0.0"
