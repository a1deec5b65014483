"""
子串检查模块 - 确认文件中原样写出了当前版本号
"""

from version_sync.core.errors import NotFoundError
from version_sync.core.files import PathLike, read_text
from version_sync.core.matcher import find_first_substring
from version_sync.core.template import ExpandMode, expand
from version_sync.reporting import status


def check_contains_substring(
    path: PathLike,
    template: str,
    pkg_name: str,
    pkg_version: str,
) -> None:
    """
    检查 path 中是否包含 template 展开后的子串

    模板中的 {name} 和 {version} 替换为 pkg_name 和 pkg_version，
    模板也可以不含任何占位符。

    Raises:
        FileReadError: 无法读取 path
        NotFoundError: 文件中没有展开后的子串
    """
    pattern = expand(template, pkg_name, pkg_version, ExpandMode.LITERAL)
    text = read_text(path)

    status(f'Searching for "{template}" in {path}...')
    record = find_first_substring(text, pattern)
    if record is None:
        raise NotFoundError(f'could not find "{pattern}" in {path}')
    status(f"{path} (line {record.line_number}) ... ok")
