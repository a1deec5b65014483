"""
Markdown 解析器模块 - 提取 fenced 代码块

使用 markdown-it-py 进行解析。只提取 ``` 或 ~~~ 围起来的代码块，
缩进式代码块不包含语言标识，不做处理。
"""

from dataclasses import dataclass
from typing import Callable, Optional

from markdown_it import MarkdownIt


@dataclass
class CodeBlock:
    """
    代码块数据模型

    Attributes:
        content: 两个 fence 之间的文本（块引用中的 ">" 已去除）
        first_line: 代码第一行的行号（fence 的下一行），从 1 开始
        language: fence 后面的语言标识行，没有时为空字符串
    """
    content: str
    first_line: int
    language: str = ""


def find_code_blocks(
    text: str,
    accept: Optional[Callable[[str], bool]] = None,
) -> list[CodeBlock]:
    """
    查找 Markdown 文本中的所有 fenced 代码块

    没有闭合的 fence 一直延续到文档末尾。

    Args:
        text: Markdown 内容
        accept: 按语言标识行过滤代码块，为 None 时全部保留

    Returns:
        CodeBlock 列表，按出现顺序排列
    """
    md = MarkdownIt()
    tokens = md.parse(text)

    blocks: list[CodeBlock] = []
    for token in tokens:
        if token.type != "fence":
            continue
        language = token.info or ""
        if accept is not None and not accept(language):
            continue
        # map[0] 是 fence 所在行（从 0 开始）
        fence_line = token.map[0] if token.map else 0
        blocks.append(CodeBlock(
            content=token.content,
            first_line=fence_line + 2,
            language=language,
        ))

    return blocks
