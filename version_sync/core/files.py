"""
文件读取工具
"""

from pathlib import Path
from typing import Union

from version_sync.core.errors import FileReadError

PathLike = Union[str, Path]


def read_text(path: PathLike) -> str:
    """
    读取整个文件

    "\\r\\n" 统一转换为 "\\n"，保证多行模式下 "^" 和 "$" 能匹配每一行。

    Raises:
        FileReadError: 文件不存在、无权限或不是 UTF-8 编码
    """
    try:
        data = Path(path).read_bytes()
    except OSError as err:
        raise FileReadError(f"could not read {path}: {err.strerror or err}") from err
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise FileReadError(f"could not read {path}: {err}") from err
    return text.replace("\r\n", "\n")


def indent(text: str) -> str:
    """每行缩进四个空格"""
    return "\n".join("    " + line for line in text.splitlines())
