"""Tests for the command line interface."""

from typer.testing import CliRunner

from version_sync import __version__
from version_sync.cli.app import app

runner = CliRunner()


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_substring_success(write_file) -> None:
    path = write_file("Version 1.2.3\n")

    result = runner.invoke(app, ["substring", str(path), "Version {version}", "--name", "foo", "--version", "1.2.3"])

    assert result.exit_code == 0
    assert "(line 1) ... ok" in result.output


def test_regex_failure(write_file) -> None:
    path = write_file("Version 1.2.3\n")

    result = runner.invoke(app, ["regex", str(path), "^Version {version}$", "-n", "foo", "-V", "2.0.0"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "could not find" in result.output


def test_only_regex_reads_pyproject(tmp_path, write_file) -> None:
    pyproject = write_file('[project]\nname = "foo"\nversion = "1.2.3"\n', name="pyproject.toml")
    path = write_file("see docs.rs/foo/1.2/\n")

    result = runner.invoke(app, ["only-regex", str(path), "docs.rs/{name}/{version}/", "--pyproject", str(pyproject)])

    assert result.exit_code == 0


def test_markdown_deps_failure(write_file) -> None:
    path = write_file("```toml\n[dependencies]\nfoo = '0.9'\n```\n")

    result = runner.invoke(app, ["markdown-deps", str(path), "--name", "foo", "--version", "1.0.0"])

    assert result.exit_code == 1
    assert "expected major version 1, found 0" in result.output
    assert "[dependencies]" in result.output


def test_html_root_url_docs_host(write_file) -> None:
    path = write_file('__html_root_url__ = "https://docs.rs/foo/0.1.0"\n', name="lib.py")

    result = runner.invoke(
        app,
        ["html-root-url", str(path), "--docs-host", "docs.example.org", "--name", "foo", "--version", "1.0.0"],
    )

    assert result.exit_code == 0


def test_missing_pyproject(tmp_path, write_file) -> None:
    path = write_file("Version 1.2.3\n")

    result = runner.invoke(app, ["substring", str(path), "{version}", "--pyproject", str(tmp_path / "nope.toml")])

    assert result.exit_code == 1
    assert "could not read" in result.output
