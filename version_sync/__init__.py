"""
version-sync - 保持文档中的版本号与包版本一致

在测试中调用，检查：
- README 中 TOML 代码块的依赖版本
- Changelog 等文件是否提到当前版本
- 文件中的所有版本号引用是否兼容当前版本
- __html_root_url__ 属性是否指向当前版本的文档
"""

__version__ = "0.9.5"

from version_sync.checks import (
    check_contains_substring,
    check_contains_regex,
    check_only_contains_regex,
    check_markdown_deps,
    check_html_root_url,
)
from version_sync.assertions import (
    assert_contains_substring,
    assert_contains_regex,
    assert_only_contains_regex,
    assert_markdown_deps_updated,
    assert_html_root_url_updated,
)
from version_sync.config import PackageInfo, load_package_info, resolve_package_info
from version_sync.core.errors import VersionSyncError

__all__ = [
    "__version__",
    # checks
    "check_contains_substring",
    "check_contains_regex",
    "check_only_contains_regex",
    "check_markdown_deps",
    "check_html_root_url",
    # assertions
    "assert_contains_substring",
    "assert_contains_regex",
    "assert_only_contains_regex",
    "assert_markdown_deps_updated",
    "assert_html_root_url_updated",
    # config
    "PackageInfo",
    "load_package_info",
    "resolve_package_info",
    "VersionSyncError",
]
