"""
CLI Layer - 命令行接口层
"""

from version_sync.cli.app import app, run_check

__all__ = [
    "app",
    "run_check",
]
