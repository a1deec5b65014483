"""
Checks Layer - 检查层

每个检查都是独立的函数，成功时返回 None，失败时抛出 VersionSyncError。
"""

from version_sync.checks.contains_substring import check_contains_substring
from version_sync.checks.contains_regex import check_contains_regex, check_only_contains_regex
from version_sync.checks.markdown_deps import check_markdown_deps
from version_sync.checks.html_root_url import check_html_root_url

__all__ = [
    "check_contains_substring",
    "check_contains_regex",
    "check_only_contains_regex",
    "check_markdown_deps",
    "check_html_root_url",
]
