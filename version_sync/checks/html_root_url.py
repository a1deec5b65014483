"""
文档地址检查模块 - 检查 __html_root_url__ 中的版本号

查找 Python 源文件中模块级的 __html_root_url__ 赋值，确认指向文档站点的
URL 使用了当前包名和兼容的版本号，例如：
    __html_root_url__ = "https://docs.rs/foo/1.2.3"
"""

import ast
import ipaddress
import logging
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urlsplit

import semver

from version_sync.core.errors import (
    CheckFailed,
    InvalidUrlError,
    RequirementParseError,
    SourceParseError,
    VersionSyncError,
)
from version_sync.core.files import PathLike, indent, read_text
from version_sync.core.versions import (
    parse_requirement,
    parse_version,
    version_matches_request,
)
from version_sync.reporting import status

logger = logging.getLogger(__name__)

ATTRIBUTE_NAME = "__html_root_url__"

# 唯一能识别 URL 结构的文档站点
DOCS_HOST = "docs.rs"


@dataclass
class RootUrlAttribute:
    """源文件中的一处 __html_root_url__ 赋值"""
    value: Optional[str]
    first_line: int
    last_line: int


def _assigned_name(node: ast.stmt) -> Optional[str]:
    if isinstance(node, ast.Assign):
        for target in node.targets:
            if isinstance(target, ast.Name):
                return target.id
    elif isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
        return node.target.id
    return None


def find_root_url_attributes(code: str, path: PathLike = "<string>") -> list[RootUrlAttribute]:
    """
    查找模块级的 __html_root_url__ 赋值

    只有类型注解、没有值的声明返回 value 为 None 的结果；
    值不是字符串字面量的赋值无法检查，直接跳过。

    Raises:
        SourceParseError: 代码不是合法的 Python
    """
    try:
        module = ast.parse(code, filename=str(path))
    except SyntaxError as err:
        raise SourceParseError(f"could not parse {path}: {err.msg} (line {err.lineno})") from err

    attributes: list[RootUrlAttribute] = []
    for node in module.body:
        if _assigned_name(node) != ATTRIBUTE_NAME:
            continue
        last_line = node.end_lineno or node.lineno
        if node.value is None:
            attributes.append(RootUrlAttribute(None, node.lineno, last_line))
        elif isinstance(node.value, ast.Constant) and isinstance(node.value.value, str):
            attributes.append(RootUrlAttribute(node.value.value, node.lineno, last_line))
        else:
            logger.debug("%s (line %d): %s is not a string literal, skipping", path, node.lineno, ATTRIBUTE_NAME)
    return attributes


def _domain(host: Optional[str]) -> Optional[str]:
    if not host:
        return None
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return host
    return None


def validate_url_parts(
    scheme: str,
    domain: Optional[str],
    path_segments: Iterable[str],
    pkg_name: str,
    version: semver.Version,
    docs_host: str = DOCS_HOST,
) -> None:
    """
    检查文档 URL 的各个部分

    其它站点的 URL 无法验证，直接通过。文档站点上前两段路径必须是
    包名和与 version 兼容的版本号；版本为 1.2.3 时 1 和 1.2 都可以。

    Raises:
        InvalidUrlError: scheme 不对，或路径段缺失、包名不对
        RequirementParseError: 版本号路径段无法解析
        VersionMismatch: 版本号路径段指向其它版本
    """
    if domain is not None and domain != docs_host:
        return

    # 文档站点会把 HTTP 重定向到 HTTPS
    if scheme != "https":
        raise InvalidUrlError(f'expected "https", found "{scheme}"')

    segments = iter(path_segments)
    name = next(segments, "")
    if not name:
        raise InvalidUrlError("missing package name")
    request = next(segments, "")
    if not request:
        raise InvalidUrlError("missing version number")

    if name != pkg_name:
        raise InvalidUrlError(f'expected package "{pkg_name}", found "{name}"')

    try:
        requirement = parse_requirement(request)
    except RequirementParseError as err:
        raise RequirementParseError(f"could not parse version in URL: {err}") from err
    version_matches_request(version, requirement)


def url_matches(
    value: str,
    pkg_name: str,
    version: semver.Version,
    docs_host: str = DOCS_HOST,
) -> None:
    """把 value 解析为 URL，再用 validate_url_parts 检查"""
    try:
        parts = urlsplit(value)
        host = parts.hostname
    except ValueError as err:
        raise InvalidUrlError(f"parse error: {err}") from err
    if not parts.scheme:
        raise InvalidUrlError("parse error: relative URL without a base")

    path = parts.path[1:] if parts.path.startswith("/") else parts.path
    validate_url_parts(
        parts.scheme,
        _domain(host),
        path.split("/"),
        pkg_name,
        version,
        docs_host,
    )


def check_html_root_url(
    path: PathLike,
    pkg_name: str,
    pkg_version: str,
    docs_host: str = DOCS_HOST,
) -> None:
    """
    检查 __html_root_url__ 中的版本号

    每处赋值都必须是合法的 URL，指向 docs_host 的 URL 必须是
    pkg_name 在 pkg_version 下的文档地址。遇到第一处失败即停止。

    Raises:
        FileReadError: 无法读取 path
        VersionParseError: pkg_version 不是合法的版本号
        SourceParseError: path 不是合法的 Python 代码
        CheckFailed: 某处赋值检查失败
    """
    code = read_text(path)
    version = parse_version(pkg_version)
    attributes = find_root_url_attributes(code, path)

    status(f"Checking doc attributes in {path}...")
    source_lines = code.splitlines()
    for attribute in attributes:
        try:
            if attribute.value is None:
                raise InvalidUrlError("html_root_url attribute without URL")
            url_matches(attribute.value, pkg_name, version, docs_host)
        except VersionSyncError as err:
            message = f"{path} (line {attribute.first_line}) ... {err} in"
            status(message)
            for line in source_lines[attribute.first_line - 1:attribute.last_line]:
                status(indent(line))
            raise CheckFailed(f"html_root_url errors in {path}", [message]) from err
        status(f"{path} (line {attribute.first_line}) ... ok")
