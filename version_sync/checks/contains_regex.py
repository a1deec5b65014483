"""
正则检查模块 - 在文件中查找引用当前版本号的正则匹配

两种检查：
1. check_contains_regex：至少有一个匹配当前版本的位置
2. check_only_contains_regex：模板匹配到的所有版本号都必须兼容
"""

from version_sync.core.errors import CheckFailed, NotFoundError
from version_sync.core.files import PathLike, read_text
from version_sync.core.matcher import (
    ScanOutcome,
    compile_pattern,
    find_all_and_validate,
    find_first_regex,
)
from version_sync.core.template import ExpandMode, expand
from version_sync.core.versions import parse_version
from version_sync.reporting import status


def check_contains_regex(
    path: PathLike,
    template: str,
    pkg_name: str,
    pkg_version: str,
) -> None:
    """
    检查 path 中是否有正则表达式 template 的匹配

    {name} 和 {version} 替换为转义后的 pkg_name 和 pkg_version。
    以多行模式匹配，^ 和 $ 匹配每一行的开头和结尾。

    Raises:
        ConfigurationError: 展开后的模板不是合法的正则表达式
        FileReadError: 无法读取 path
        NotFoundError: 没有匹配
    """
    pattern = expand(template, pkg_name, pkg_version, ExpandMode.PATTERN)
    regex = compile_pattern(pattern)
    text = read_text(path)

    status(f'Searching for "{pattern}" in {path}...')
    record = find_first_regex(text, regex)
    if record is None:
        raise NotFoundError(f'could not find "{pattern}" in {path}')
    status(f"{path} (line {record.line_number}) ... ok")


def check_only_contains_regex(
    path: PathLike,
    template: str,
    pkg_name: str,
    pkg_version: str,
) -> None:
    """
    检查 path 中 template 的每个匹配是否都使用兼容的版本号

    {version} 替换为匹配任意完整或部分 SemVer 的子表达式，因此过时的
    引用也会被找到。找到的版本号逐个与 pkg_version 比较：版本为 1.2.3 时
    "foo/1.2/bar" 通过，"foo/1.1/bar" 不通过。

    所有匹配都报告完后才抛出异常，一个匹配都没有也视为失败。

    Raises:
        VersionParseError: pkg_version 不是合法的版本号
        ConfigurationError: 展开后的模板不是合法的正则表达式
        FileReadError: 无法读取 path
        RequirementParseError: 匹配到的版本号无法解析
        NotFoundError: 模板没有任何匹配
        CheckFailed: 至少一个匹配的版本号不兼容
    """
    version = parse_version(pkg_version)

    pattern = expand(template, pkg_name, pkg_version, ExpandMode.GENERIC_VERSION)
    regex = compile_pattern(pattern)
    text = read_text(path)

    status(f'Searching for "{template}" in {path}...')
    result = find_all_and_validate(text, regex, version)

    failures: list[str] = []
    for record in result.records:
        if record.ok:
            status(f"{path} (line {record.line_number}) ... ok")
        else:
            message = (
                f'{path} (line {record.line_number}) ... found "{record.text}", '
                f'which does not match version "{pkg_version}": {record.error}'
            )
            failures.append(message)
            status(message)

    if result.outcome is ScanOutcome.NO_MATCHES:
        raise NotFoundError(f'{path} ... found no matches for "{template}"')
    if result.outcome is ScanOutcome.SOME_INCOMPATIBLE:
        raise CheckFailed(f"{path} ... found {result.mismatches} errors", failures)
