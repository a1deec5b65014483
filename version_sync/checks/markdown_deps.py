"""
Markdown 依赖检查模块 - 检查 README 中 TOML 代码块里的依赖版本

查找 Markdown 文件中所有 TOML 代码块，确认其中对当前包的依赖
使用了兼容的版本号。

支持的依赖表：
- [dependencies] / [dev-dependencies]
- [tool.poetry.dependencies] / [tool.poetry.dev-dependencies]
- [tool.poetry.group.<name>.dependencies]
"""

import logging
import re
from typing import Any, Iterator, Optional

import semver

from version_sync.core.errors import (
    CheckFailed,
    NotFoundError,
    RequirementParseError,
    VersionSyncError,
)
from version_sync.core.files import PathLike, indent, read_text
from version_sync.core.parser import CodeBlock, find_code_blocks
from version_sync.core.versions import (
    parse_requirement,
    parse_version,
    version_matches_request,
)
from version_sync.reporting import status

# Handle tomllib/tomli for different Python versions
try:
    import tomllib
except ImportError:
    import tomli as tomllib

logger = logging.getLogger(__name__)

# 依次查找的依赖表，Cargo 风格在前，Poetry 在后
DEPENDENCY_TABLES: list[tuple[str, ...]] = [
    ("dependencies",),
    ("dev-dependencies",),
    ("tool", "poetry", "dependencies"),
    ("tool", "poetry", "dev-dependencies"),
]

_LANG_SEPARATOR_RE = re.compile(r"[^\w-]")


def is_toml_block(lang: str) -> bool:
    """
    判断代码块的语言标记是否表示 TOML

    语言标记按字母、数字、_ 和 - 以外的字符切分，
    出现 no_sync 时排除该代码块。
    """
    has_toml = False
    for token in _LANG_SEPARATOR_RE.split(lang):
        token = token.strip()
        if token == "no_sync":
            return False
        if token == "toml":
            has_toml = True
    return has_toml


def find_toml_blocks(text: str) -> list[CodeBlock]:
    """查找 Markdown 文本中所有 TOML 代码块"""
    return find_code_blocks(text, accept=is_toml_block)


def _dependency_tables(document: dict[str, Any]) -> Iterator[dict[str, Any]]:
    for keys in DEPENDENCY_TABLES:
        table: Any = document
        for key in keys:
            table = table.get(key) if isinstance(table, dict) else None
        if isinstance(table, dict):
            yield table

    groups: Any = document
    for key in ("tool", "poetry", "group"):
        groups = groups.get(key) if isinstance(groups, dict) else None
    if isinstance(groups, dict):
        for group in groups.values():
            if isinstance(group, dict) and isinstance(group.get("dependencies"), dict):
                yield group["dependencies"]


def _requirement_of(dep: Any) -> Optional[str]:
    if isinstance(dep, dict):
        # pkg_name = { version = "1.2.3" }
        if isinstance(dep.get("version"), str):
            return dep["version"]
        # pkg_name = { git = "..." }
        if "git" in dep:
            return "*"
        return None
    # pkg_name = "1.2.3"
    if isinstance(dep, str):
        return dep
    return None


def extract_dependency(pkg_name: str, block: str) -> str:
    """
    从 TOML 代码块中提取对 pkg_name 的版本要求

    git 依赖没有版本号，返回 "*"，即总是兼容。

    Args:
        pkg_name: 包名
        block: TOML 代码块内容

    Returns:
        版本要求字符串

    Raises:
        RequirementParseError: 代码块不是合法的 TOML
        NotFoundError: 代码块中没有对 pkg_name 的依赖
    """
    try:
        document = tomllib.loads(block)
    except tomllib.TOMLDecodeError as err:
        raise RequirementParseError(f"TOML parse error: {err}") from err

    for table in _dependency_tables(document):
        if pkg_name not in table:
            continue
        requirement = _requirement_of(table[pkg_name])
        if requirement is not None:
            return requirement
        logger.debug("dependency on %s has no version, skipping table", pkg_name)

    raise NotFoundError(f"no dependency on {pkg_name}")


def validate_dependency(requirement: str, version: semver.Version, pkg_name: str) -> None:
    """
    检查依赖的版本要求是否与包版本兼容

    Args:
        requirement: 依赖表中写出的版本要求
        version: 包的实际版本
        pkg_name: 依赖的包名，用于错误信息

    Raises:
        RequirementParseError: 版本要求无法解析
        VersionMismatch: 版本要求指向其它版本
    """
    try:
        request = parse_requirement(requirement)
    except RequirementParseError as err:
        raise RequirementParseError(f"could not parse dependency on {pkg_name}: {err}") from err
    logger.debug("dependency on %s requires %r", pkg_name, requirement)
    version_matches_request(version, request)


def check_markdown_deps(path: PathLike, pkg_name: str, pkg_version: str) -> None:
    """
    检查 Markdown 代码块中的依赖版本

    path 中每个 TOML 代码块都必须依赖 pkg_name，且版本要求与
    pkg_version 兼容。例如包 foo 的版本为 1.2.3 时，以下代码块通过::

        ```toml
        [dependencies]
        foo = "1.2.3"
        ```

    在语言标记中加上 no_sync 可跳过代码块，如 ```` ```toml,no_sync ````。
    不是合法 TOML 的代码块视为失败。所有代码块都报告完后才抛出异常。

    Raises:
        FileReadError: 无法读取 path
        VersionParseError: pkg_version 不是合法的版本号
        CheckFailed: 至少一个代码块检查失败
    """
    text = read_text(path)
    version = parse_version(pkg_version)

    status(f"Checking code blocks in {path}...")
    failures: list[str] = []
    for block in find_toml_blocks(text):
        try:
            validate_dependency(extract_dependency(pkg_name, block.content), version, pkg_name)
        except VersionSyncError as err:
            message = f"{path} (line {block.first_line}) ... {err} in"
            failures.append(message)
            status(message)
            status(indent(block.content) + "\n")
        else:
            status(f"{path} (line {block.first_line}) ... ok")

    if failures:
        raise CheckFailed(f"dependency errors in {path}", failures)
