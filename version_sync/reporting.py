"""
进度输出 - 每个检查位置打印一行状态

输出内容包含 TOML 表头（如 [dependencies]）和任意用户文本，
因此关闭 Rich 的 markup、emoji 和高亮，并且不自动换行。
"""

import logging

from rich.console import Console

logger = logging.getLogger(__name__)

console = Console(markup=False, emoji=False, highlight=False, soft_wrap=True)


def status(message: str) -> None:
    """打印一行进度信息"""
    logger.debug(message)
    console.print(message)
