"""
象棋エンジンプロジェクトのセットアップスクリプト
"""

from setuptools import setup, find_packages

setup(
    name="xiangqi-engine",
    version="1.0.0",
    description="象棋（シャンチー）のルールエンジンとαβ探索AI",
    author="",
    packages=find_packages(include=["src", "src.*"]),
    package_dir={"": "."},
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.118.0",
        "uvicorn>=0.37.0",
        "pydantic>=2.11.10",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "hypothesis>=6.0.0",
            "httpx>=0.24.0",
        ],
    },
)
