"""
断言模块 - 在测试中调用检查

每个函数运行一项检查，失败时抛出 AssertionError，pytest 会把它报告为
测试失败。包名和版本号默认从 pyproject.toml 读取，也可以显式传入::

    def test_readme_deps():
        version_sync.assert_markdown_deps_updated("README.md")

    def test_changelog_mentions_version():
        version_sync.assert_contains_regex("CHANGELOG.md", r"^## Version {version}$")
"""

from typing import Callable, Optional

from version_sync.checks import (
    check_contains_regex,
    check_contains_substring,
    check_html_root_url,
    check_markdown_deps,
    check_only_contains_regex,
)
from version_sync.config import DEFAULT_PYPROJECT, resolve_package_info
from version_sync.core.errors import VersionSyncError
from version_sync.core.files import PathLike


def _run(
    check: Callable[..., None],
    *args: object,
    pkg_name: Optional[str],
    pkg_version: Optional[str],
    pyproject: PathLike,
    **kwargs: object,
) -> None:
    try:
        info = resolve_package_info(pkg_name, pkg_version, pyproject)
        check(*args, info.name, info.version, **kwargs)
    except VersionSyncError as err:
        raise AssertionError(str(err)) from err


def assert_contains_substring(
    path: PathLike,
    template: str,
    *,
    pkg_name: Optional[str] = None,
    pkg_version: Optional[str] = None,
    pyproject: PathLike = DEFAULT_PYPROJECT,
) -> None:
    """断言 path 中包含展开后的 template"""
    _run(check_contains_substring, path, template,
         pkg_name=pkg_name, pkg_version=pkg_version, pyproject=pyproject)


def assert_contains_regex(
    path: PathLike,
    template: str,
    *,
    pkg_name: Optional[str] = None,
    pkg_version: Optional[str] = None,
    pyproject: PathLike = DEFAULT_PYPROJECT,
) -> None:
    """断言 path 中有正则表达式 template 的匹配"""
    _run(check_contains_regex, path, template,
         pkg_name=pkg_name, pkg_version=pkg_version, pyproject=pyproject)


def assert_only_contains_regex(
    path: PathLike,
    template: str,
    *,
    pkg_name: Optional[str] = None,
    pkg_version: Optional[str] = None,
    pyproject: PathLike = DEFAULT_PYPROJECT,
) -> None:
    """断言 path 中 template 的每个匹配都使用兼容的版本号"""
    _run(check_only_contains_regex, path, template,
         pkg_name=pkg_name, pkg_version=pkg_version, pyproject=pyproject)


def assert_markdown_deps_updated(
    path: PathLike,
    *,
    pkg_name: Optional[str] = None,
    pkg_version: Optional[str] = None,
    pyproject: PathLike = DEFAULT_PYPROJECT,
) -> None:
    """断言 path 中的 TOML 代码块依赖当前版本"""
    _run(check_markdown_deps, path,
         pkg_name=pkg_name, pkg_version=pkg_version, pyproject=pyproject)


def assert_html_root_url_updated(
    path: PathLike,
    *,
    pkg_name: Optional[str] = None,
    pkg_version: Optional[str] = None,
    pyproject: PathLike = DEFAULT_PYPROJECT,
    docs_host: Optional[str] = None,
) -> None:
    """断言 path 中的 __html_root_url__ 指向当前版本"""
    kwargs = {"docs_host": docs_host} if docs_host is not None else {}
    _run(check_html_root_url, path,
         pkg_name=pkg_name, pkg_version=pkg_version, pyproject=pyproject, **kwargs)
