"""
模式匹配模块 - 在文本中查找子串或正则表达式并计算行号

文本需已将 "\\r\\n" 规范化为 "\\n"。正则表达式统一以多行模式编译，
"^" 和 "$" 匹配每一行的开头和结尾。

三种查找方式：
1. find_first_substring：第一个子串出现的位置
2. find_first_regex：第一个正则匹配
3. find_all_and_validate：所有不重叠的匹配，逐个检查其中的版本号
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

import semver

from version_sync.core.errors import (
    ConfigurationError,
    RequirementParseError,
    VersionMismatch,
)
from version_sync.core.template import version_groups
from version_sync.core.versions import parse_requirement, version_matches_request

logger = logging.getLogger(__name__)


@dataclass
class MatchRecord:
    """
    单个匹配结果

    Attributes:
        text: 匹配到的文本（穷举模式下为其中的版本号）
        line_number: 匹配起点所在行号，从 1 开始
        error: 版本不兼容时的描述，兼容时为 None
    """
    text: str
    line_number: int
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ScanOutcome(Enum):
    """穷举检查的最终状态"""
    NO_MATCHES = "no_matches"
    ALL_COMPATIBLE = "all_compatible"
    SOME_INCOMPATIBLE = "some_incompatible"


@dataclass
class ScanResult:
    """
    穷举检查结果

    Attributes:
        matches: 模式匹配的次数
        records: 每个版本号的检查记录
    """
    matches: int = 0
    records: list[MatchRecord] = field(default_factory=list)

    @property
    def mismatches(self) -> int:
        return sum(1 for record in self.records if not record.ok)

    @property
    def outcome(self) -> ScanOutcome:
        if self.matches == 0:
            return ScanOutcome.NO_MATCHES
        if self.mismatches > 0:
            return ScanOutcome.SOME_INCOMPATIBLE
        return ScanOutcome.ALL_COMPATIBLE


def line_number_at(text: str, offset: int) -> int:
    """offset 之前的换行符数量加 1"""
    return text.count("\n", 0, offset) + 1


def compile_pattern(pattern: str) -> re.Pattern:
    """
    以多行模式编译正则表达式

    多行模式通过 flags 开启，错误信息中只会出现调用方写出的模式。
    错误信息附带展开后的模式，并用 ^ 标出出错位置。

    Raises:
        ConfigurationError: 正则表达式语法错误
    """
    try:
        return re.compile(pattern, re.MULTILINE)
    except re.error as err:
        raise ConfigurationError(f"could not parse template: {_describe_regex_error(err)}") from err


def _describe_regex_error(err: re.error) -> str:
    if err.pos is None or not isinstance(err.pattern, str):
        return str(err)
    line = err.pattern.split("\n")[err.lineno - 1]
    return f"{err.msg}\n    {line}\n    {' ' * (err.colno - 1)}^"


def find_first_substring(text: str, pattern: str) -> Optional[MatchRecord]:
    """查找第一个子串，未找到返回 None"""
    index = text.find(pattern)
    if index < 0:
        return None
    return MatchRecord(text=pattern, line_number=line_number_at(text, index))


def find_first_regex(text: str, pattern: Union[str, re.Pattern]) -> Optional[MatchRecord]:
    """查找第一个正则匹配，未找到返回 None"""
    regex = compile_pattern(pattern) if isinstance(pattern, str) else pattern
    match = regex.search(text)
    if match is None:
        return None
    return MatchRecord(text=match.group(0), line_number=line_number_at(text, match.start()))


def _embedded_versions(match: re.Match) -> list[str]:
    found = (match.group(name) for name in version_groups(match.re))
    return [text for text in found if text is not None]


def find_all_and_validate(
    text: str,
    pattern: Union[str, re.Pattern],
    version: semver.Version,
) -> ScanResult:
    """
    检查所有匹配中的版本号

    pattern 应由 ExpandMode.GENERIC_VERSION 展开得到，每个 {version}
    对应一个版本号命名组，用户模板中的其它命名组不参与检查。
    无法验证的版本范围视为兼容。

    Args:
        text: 文件内容
        pattern: 展开后的正则表达式
        version: 包的实际版本

    Returns:
        ScanResult 对象

    Raises:
        ConfigurationError: 正则表达式语法错误
        RequirementParseError: 匹配到的版本号无法解析
    """
    regex = compile_pattern(pattern) if isinstance(pattern, str) else pattern
    result = ScanResult()

    for match in regex.finditer(text):
        result.matches += 1
        line_number = line_number_at(text, match.start())

        for found in _embedded_versions(match):
            try:
                request = parse_requirement(found)
            except RequirementParseError as err:
                raise RequirementParseError(f"could not parse version: {err}") from err
            try:
                version_matches_request(version, request)
            except VersionMismatch as err:
                result.records.append(MatchRecord(found, line_number, str(err)))
            else:
                result.records.append(MatchRecord(found, line_number))

    logger.debug(
        "%d matches, %d mismatches for %s",
        result.matches, result.mismatches, regex.pattern,
    )
    return result
