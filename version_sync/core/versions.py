"""
版本兼容性模块 - 判断包版本是否满足文档中写出的版本范围

包版本使用 semver 库严格解析；版本范围使用 Cargo/Poetry 风格语法：
  ^1.2.3, ~1.2, =1.2.3, >=1.0, < 2.0, 1.*, 1.2.x, *
多个比较器之间用逗号分隔。

兼容性策略：
1. 比较器数量不等于 1 时无法验证，直接通过
2. 只检查 ~、^、= 和通配符，其它运算符直接通过
3. 比较器中省略的部分视为通配符
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import semver

from version_sync.core.errors import (
    RequirementParseError,
    VersionMismatch,
    VersionParseError,
)

logger = logging.getLogger(__name__)


class Op(str, Enum):
    """比较运算符"""
    EXACT = "="
    GREATER = ">"
    GREATER_EQ = ">="
    LESS = "<"
    LESS_EQ = "<="
    TILDE = "~"
    CARET = "^"
    WILDCARD = "*"


# 可以验证的运算符；>、>=、<、<= 只给出单侧边界，无法判断是否过时
CHECKED_OPS: frozenset[Op] = frozenset({Op.TILDE, Op.CARET, Op.EXACT, Op.WILDCARD})

WILDCARDS = ("*", "x", "X")

_OP_RE = re.compile(r"(>=|<=|=|>|<|~|\^)?\s*")
_IDENTIFIER_RE = re.compile(r"[0-9A-Za-z-]+")

_POSITIONS = ("major", "minor", "patch")


@dataclass(frozen=True)
class Comparator:
    """
    版本范围中的一个比较器

    Attributes:
        op: 运算符
        major: 主版本号
        minor: 次版本号，省略时为 None
        patch: 修订号，省略时为 None
        pre: 预发布标识符序列，只有写出 patch 时才可能非空
    """
    op: Op
    major: int
    minor: Optional[int] = None
    patch: Optional[int] = None
    pre: tuple[str, ...] = ()


@dataclass(frozen=True)
class VersionRequirement:
    """解析后的版本范围：比较器的有序序列"""
    comparators: tuple[Comparator, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.comparators)


def parse_version(text: str) -> semver.Version:
    """
    解析包声明的版本号

    Raises:
        VersionParseError: 版本号不是完整的 SemVer
    """
    try:
        return semver.Version.parse(text)
    except (ValueError, TypeError) as err:
        raise VersionParseError(f'bad package version "{text}": {err}') from err


def prerelease_identifiers(version: semver.Version) -> tuple[str, ...]:
    """返回版本的预发布标识符序列"""
    if not version.prerelease:
        return ()
    return tuple(version.prerelease.split("."))


def parse_requirement(text: str) -> VersionRequirement:
    """
    解析版本范围表达式

    单独的 "*" 表示任意版本，得到空的比较器序列。

    Args:
        text: 如 "1.2.3"、"^1.2"、">= 1.2.3, < 2.0"

    Returns:
        VersionRequirement 对象

    Raises:
        RequirementParseError: 表达式不合法
    """
    stripped = text.strip()
    if stripped in WILDCARDS:
        return VersionRequirement()

    comparators: list[Comparator] = []
    for part in stripped.split(","):
        comparator = _parse_comparator(part.strip())
        if comparator is not None:
            comparators.append(comparator)
    return VersionRequirement(tuple(comparators))


def _parse_comparator(text: str) -> Optional[Comparator]:
    match = _OP_RE.match(text)
    op_text = match.group(1)
    rest = text[match.end():]
    if not rest:
        raise RequirementParseError("unexpected end of input while parsing major version number")

    core, plus, build = rest.partition("+")
    core, dash, pre = core.partition("-")
    parts = core.split(".")
    if len(parts) > 3:
        raise RequirementParseError("unexpected character '.' after patch version number")

    numbers: list[Optional[int]] = []
    wildcard = False
    for position, part in zip(_POSITIONS, parts):
        if part in WILDCARDS:
            wildcard = True
            numbers.append(None)
        elif wildcard:
            raise RequirementParseError(
                f"unexpected character {part[:1]!r} after wildcard in {position} version number"
            )
        else:
            numbers.append(_parse_number(part, position))

    if numbers[0] is None:
        # "*" 出现在比较器列表中，匹配任意版本
        if op_text:
            raise RequirementParseError(f"unexpected wildcard after operator {op_text!r}")
        return None

    if dash:
        if len(numbers) < 3 or wildcard:
            raise RequirementParseError(
                f"unexpected character '-' after {_POSITIONS[len(numbers) - 1]} version number"
            )
        pre_ids = _parse_identifiers(pre, "pre-release")
    else:
        pre_ids = ()
    if plus:
        # 构建元数据不参与比较，只校验格式
        _parse_identifiers(build, "build metadata")

    if op_text:
        op = Op(op_text)
    elif wildcard:
        op = Op.WILDCARD
    else:
        op = Op.CARET

    numbers += [None] * (3 - len(numbers))
    return Comparator(
        op=op,
        major=numbers[0],
        minor=numbers[1],
        patch=numbers[2],
        pre=pre_ids,
    )


def _parse_number(text: str, position: str) -> int:
    if not text:
        raise RequirementParseError(f"unexpected end of input while parsing {position} version number")
    for ch in text:
        if not ch.isdigit() or not ch.isascii():
            raise RequirementParseError(
                f"unexpected character {ch!r} while parsing {position} version number"
            )
    if len(text) > 1 and text[0] == "0":
        raise RequirementParseError(f"invalid leading zero in {position} version number")
    return int(text)


def _parse_identifiers(text: str, what: str) -> tuple[str, ...]:
    identifiers = tuple(text.split("."))
    for identifier in identifiers:
        if not identifier:
            raise RequirementParseError(f"empty identifier segment in {what}")
        if not _IDENTIFIER_RE.fullmatch(identifier):
            bad = next(ch for ch in identifier if not _IDENTIFIER_RE.fullmatch(ch))
            raise RequirementParseError(f"unexpected character {bad!r} in {what}")
    return identifiers


def version_matches_request(version: semver.Version, request: VersionRequirement) -> None:
    """
    验证版本范围是否与包版本一致

    "expected" 指包的实际版本，"found" 指从文档中提取的版本范围。

    Args:
        version: 包的实际版本
        request: 文档中的版本范围

    Raises:
        VersionMismatch: major、minor、patch 或 pre-release 不一致
    """
    if len(request.comparators) != 1:
        # 只能处理简单的版本范围
        logger.debug("cannot verify %d comparators, accepting", len(request.comparators))
        return

    comparator = request.comparators[0]
    if comparator.op not in CHECKED_OPS:
        logger.debug("cannot verify operator %r, accepting", comparator.op.value)
        return

    if comparator.major != version.major:
        raise VersionMismatch("major", version.major, comparator.major)
    if comparator.minor is not None and comparator.minor != version.minor:
        raise VersionMismatch("minor", version.minor, comparator.minor)
    if comparator.patch is not None:
        if comparator.patch != version.patch:
            raise VersionMismatch("patch", version.patch, comparator.patch)
        expected_pre = prerelease_identifiers(version)
        if comparator.pre != expected_pre:
            raise VersionMismatch(
                "pre-release",
                ".".join(expected_pre),
                ".".join(comparator.pre),
            )
