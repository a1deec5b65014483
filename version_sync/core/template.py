"""
模板展开模块 - 替换模板中的 {name} 和 {version} 占位符

三种展开方式：
1. LITERAL：纯文本替换，用于子串搜索
2. PATTERN：先对包名和版本号做正则转义，再替换
3. GENERIC_VERSION：{version} 替换为匹配任意 SemVer 的子表达式，
   用于查找文件中所有（包括过时的）版本号

模板中可以不包含任何占位符。
"""

import re
from enum import Enum

NAME_PLACEHOLDER = "{name}"
VERSION_PLACEHOLDER = "{version}"

# 展开后的命名组都带有这个标记，不会与用户模板中的组名冲突
_GROUP_TAG = "_vsync_"

# 每个 {version} 展开后的外层命名组前缀：_vsync_version_0, _vsync_version_1, ...
VERSION_GROUP_PREFIX = f"{_GROUP_TAG}version_"

_VERSION_GROUP_RE = re.compile(rf"{VERSION_GROUP_PREFIX}(\d+)")

# 完整或部分的 SemVer 版本号，"@" 会被替换为组名后缀
_SEMVER_TEMPLATE = (
    r"(?P<major@>0|[1-9]\d*)"
    r"(?:\.(?P<minor@>0|[1-9]\d*)"
    r"(?:\.(?P<patch@>0|[1-9]\d*)"
    r"(?:-(?P<prerelease@>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata@>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
    r")?"  # patch, prerelease, buildmetadata
    r")?"  # minor
)


def semver_pattern(suffix: str = "") -> str:
    """
    返回匹配 SemVer 版本号的正则表达式

    Args:
        suffix: 追加到每个命名组名后的后缀，同一个模式中多次嵌入时用于区分

    Returns:
        带有 major、minor、patch、prerelease、buildmetadata 命名组的正则表达式
    """
    return _SEMVER_TEMPLATE.replace("@", suffix)


SEMVER_RE = semver_pattern()


def version_group(index: int) -> str:
    """第 index 个 {version} 对应的命名组名"""
    return f"{VERSION_GROUP_PREFIX}{index}"


def component_group(component: str, index: int) -> str:
    """第 index 个 {version} 中 major/minor/patch 等部分的命名组名"""
    return f"{component}{_GROUP_TAG}{index}"


def version_groups(regex: re.Pattern) -> list[str]:
    """
    按出现顺序返回 GENERIC_VERSION 展开生成的版本号命名组

    用户自己写的命名组（即使以 version_ 开头）不包括在内。
    """
    indexed = []
    for name in regex.groupindex:
        match = _VERSION_GROUP_RE.fullmatch(name)
        if match:
            indexed.append((int(match.group(1)), name))
    return [name for _, name in sorted(indexed)]


class ExpandMode(Enum):
    """占位符展开方式"""
    LITERAL = "literal"
    PATTERN = "pattern"
    GENERIC_VERSION = "generic-version"


def expand(
    template: str,
    name: str,
    version: str,
    mode: ExpandMode = ExpandMode.LITERAL,
) -> str:
    """
    展开模板中的占位符

    Args:
        template: 用户提供的模板
        name: 包名
        version: 包版本号（GENERIC_VERSION 模式下不使用）
        mode: 展开方式

    Returns:
        展开后的文本或正则表达式
    """
    if mode is ExpandMode.LITERAL:
        return template.replace(NAME_PLACEHOLDER, name).replace(VERSION_PLACEHOLDER, version)

    pattern = template.replace(NAME_PLACEHOLDER, re.escape(name))
    if mode is ExpandMode.PATTERN:
        return pattern.replace(VERSION_PLACEHOLDER, re.escape(version))

    # 每处 {version} 包在独立的命名组里，组名互不冲突
    pieces = pattern.split(VERSION_PLACEHOLDER)
    expanded = [pieces[0]]
    for index, piece in enumerate(pieces[1:]):
        suffix = f"{_GROUP_TAG}{index}"
        expanded.append(f"(?P<{version_group(index)}>{semver_pattern(suffix)})")
        expanded.append(piece)
    return "".join(expanded)
