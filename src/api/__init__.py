"""
象棋 API パッケージ
"""
