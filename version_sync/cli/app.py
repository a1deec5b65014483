"""
CLI 入口模块 - 使用 Typer 构建命令行界面

每个子命令对应一个检查：
1. 确定包名和版本号（命令行参数优先，其次是 pyproject.toml）
2. 执行检查，逐行输出结果
3. 失败时以退出码 1 结束
"""

from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from version_sync.checks import (
    check_contains_regex,
    check_contains_substring,
    check_html_root_url,
    check_markdown_deps,
    check_only_contains_regex,
)
from version_sync.checks.html_root_url import DOCS_HOST
from version_sync.config import DEFAULT_PYPROJECT, resolve_package_info
from version_sync.core.errors import VersionSyncError

# 创建 Typer 应用实例
app = typer.Typer(
    name="version-sync",
    help="version-sync: keep version numbers in docs in sync with your package.",
    add_completion=False,
)

# Rich Console 用于输出
console = Console()

NAME_OPTION = typer.Option(None, "--name", "-n", help="Package name (default: from pyproject.toml)")
VERSION_OPTION = typer.Option(None, "--version", "-V", help="Package version (default: from pyproject.toml)")
PYPROJECT_OPTION = typer.Option(Path(DEFAULT_PYPROJECT), "--pyproject", help="pyproject.toml to read the package from")


def run_check(
    check: Callable[..., None],
    *args: object,
    name: Optional[str],
    version: Optional[str],
    pyproject: Path,
    **kwargs: object,
) -> None:
    """执行检查，失败时打印错误并以退出码 1 结束"""
    try:
        info = resolve_package_info(name, version, pyproject)
        check(*args, info.name, info.version, **kwargs)
    except VersionSyncError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)


@app.command()
def substring(
    path: Path = typer.Argument(..., help="File to search"),
    template: str = typer.Argument(..., help="Text with optional {name} and {version} placeholders"),
    name: Optional[str] = NAME_OPTION,
    version: Optional[str] = VERSION_OPTION,
    pyproject: Path = PYPROJECT_OPTION,
) -> None:
    """
    Check that a file contains a substring.

    Examples:
        version-sync substring README.md "Version {version}"
    """
    run_check(check_contains_substring, path, template, name=name, version=version, pyproject=pyproject)


@app.command()
def regex(
    path: Path = typer.Argument(..., help="File to search"),
    template: str = typer.Argument(..., help="Regular expression with optional placeholders"),
    name: Optional[str] = NAME_OPTION,
    version: Optional[str] = VERSION_OPTION,
    pyproject: Path = PYPROJECT_OPTION,
) -> None:
    """
    Check that a file matches a regular expression.

    Examples:
        version-sync regex CHANGELOG.md "^## Version {version}"
    """
    run_check(check_contains_regex, path, template, name=name, version=version, pyproject=pyproject)


@app.command("only-regex")
def only_regex(
    path: Path = typer.Argument(..., help="File to search"),
    template: str = typer.Argument(..., help="Regular expression, {version} matches any version"),
    name: Optional[str] = NAME_OPTION,
    version: Optional[str] = VERSION_OPTION,
    pyproject: Path = PYPROJECT_OPTION,
) -> None:
    """
    Check that every match in a file uses a compatible version.

    Examples:
        version-sync only-regex README.md "docs.rs/{name}/{version}/"
    """
    run_check(check_only_contains_regex, path, template, name=name, version=version, pyproject=pyproject)


@app.command("markdown-deps")
def markdown_deps(
    path: Path = typer.Argument(Path("README.md"), help="Markdown file with TOML code blocks"),
    name: Optional[str] = NAME_OPTION,
    version: Optional[str] = VERSION_OPTION,
    pyproject: Path = PYPROJECT_OPTION,
) -> None:
    """
    Check dependencies in TOML code blocks of a Markdown file.

    Examples:
        version-sync markdown-deps
        version-sync markdown-deps docs/install.md --name foo --version 1.2.3
    """
    run_check(check_markdown_deps, path, name=name, version=version, pyproject=pyproject)


@app.command("html-root-url")
def html_root_url(
    path: Path = typer.Argument(..., help="Python source file with __html_root_url__"),
    docs_host: str = typer.Option(DOCS_HOST, "--docs-host", help="Documentation host to verify"),
    name: Optional[str] = NAME_OPTION,
    version: Optional[str] = VERSION_OPTION,
    pyproject: Path = PYPROJECT_OPTION,
) -> None:
    """
    Check the __html_root_url__ attribute of a Python module.

    Examples:
        version-sync html-root-url src/foo/__init__.py
    """
    run_check(check_html_root_url, path, name=name, version=version, pyproject=pyproject, docs_host=docs_host)


@app.command("version")
def show_version() -> None:
    """Show the version of version-sync."""
    from version_sync import __version__
    console.print(f"[bold]version-sync[/bold] v{__version__}")


if __name__ == "__main__":
    app()
