"""
Core Layer - 核心层

包含版本兼容性判断、模板展开、模式匹配、文件读取和 Markdown 解析。
"""

from version_sync.core.errors import (
    VersionSyncError,
    ConfigurationError,
    FileReadError,
    VersionParseError,
    RequirementParseError,
    PackageInfoError,
    NotFoundError,
    VersionMismatch,
    CheckFailed,
    SourceParseError,
    InvalidUrlError,
)
from version_sync.core.versions import (
    Op,
    Comparator,
    VersionRequirement,
    CHECKED_OPS,
    parse_version,
    parse_requirement,
    version_matches_request,
)
from version_sync.core.template import (
    SEMVER_RE,
    ExpandMode,
    expand,
    semver_pattern,
    version_group,
    version_groups,
)
from version_sync.core.matcher import (
    MatchRecord,
    ScanOutcome,
    ScanResult,
    compile_pattern,
    line_number_at,
    find_first_substring,
    find_first_regex,
    find_all_and_validate,
)
from version_sync.core.files import read_text, indent
from version_sync.core.parser import CodeBlock, find_code_blocks

__all__ = [
    # errors
    "VersionSyncError",
    "ConfigurationError",
    "FileReadError",
    "VersionParseError",
    "RequirementParseError",
    "PackageInfoError",
    "NotFoundError",
    "VersionMismatch",
    "CheckFailed",
    "SourceParseError",
    "InvalidUrlError",
    # versions
    "Op",
    "Comparator",
    "VersionRequirement",
    "CHECKED_OPS",
    "parse_version",
    "parse_requirement",
    "version_matches_request",
    # template
    "SEMVER_RE",
    "ExpandMode",
    "expand",
    "semver_pattern",
    "version_group",
    "version_groups",
    # matcher
    "MatchRecord",
    "ScanOutcome",
    "ScanResult",
    "compile_pattern",
    "line_number_at",
    "find_first_substring",
    "find_first_regex",
    "find_all_and_validate",
    # files
    "read_text",
    "indent",
    # parser
    "CodeBlock",
    "find_code_blocks",
]
