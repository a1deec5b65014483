"""Tests for the documentation root URL check."""

from pathlib import Path

import pytest

from version_sync.checks.html_root_url import (
    check_html_root_url,
    find_root_url_attributes,
    url_matches,
    validate_url_parts,
)
from version_sync.core.errors import (
    CheckFailed,
    FileReadError,
    InvalidUrlError,
    RequirementParseError,
    SourceParseError,
    VersionMismatch,
    VersionParseError,
)
from version_sync.core.versions import parse_version

VERSION = parse_version("1.2.3")


# ============================================================
# url_matches
# ============================================================

@pytest.mark.parametrize(
    "url",
    [
        "https://docs.rs/foo/1.2.3",
        "https://docs.rs/foo/1.2.3/",
        "https://docs.rs/foo/1.2/",
        "https://docs.rs/foo/1/",
        "https://docs.rs/foo/1.2.3/foo/index.html",
    ],
)
def test_good_url(url: str) -> None:
    url_matches(url, "foo", VERSION)


def test_different_domain() -> None:
    url_matches("https://example.net/foo/", "bar", VERSION)


def test_different_domain_http() -> None:
    url_matches("http://example.net/foo/1.2.3", "foo", VERSION)


@pytest.mark.parametrize(
    ("url", "message"),
    [
        ("http://docs.rs/foo/1.2.3", 'expected "https", found "http"'),
        ("mailto:foo@example.net", 'expected "https", found "mailto"'),
        ("https://docs.rs", "missing package name"),
        ("https://docs.rs/", "missing package name"),
        ("https://docs.rs/foo", "missing version number"),
        ("https://docs.rs/foo/", "missing version number"),
        ("docs.rs/foo/bar", "parse error: relative URL without a base"),
    ],
)
def test_url_errors(url: str, message: str) -> None:
    with pytest.raises(InvalidUrlError) as excinfo:
        url_matches(url, "foo", VERSION)
    assert str(excinfo.value) == message


def test_bad_pkg_version() -> None:
    with pytest.raises(RequirementParseError) as excinfo:
        url_matches("https://docs.rs/foo/1.2.bad/", "foo", VERSION)
    assert str(excinfo.value) == (
        "could not parse version in URL: unexpected character 'b' while parsing patch version number"
    )


def test_wrong_pkg_name() -> None:
    with pytest.raises(InvalidUrlError) as excinfo:
        url_matches("https://docs.rs/foo/1.2.3/", "bar", VERSION)
    assert str(excinfo.value) == 'expected package "bar", found "foo"'


def test_wrong_version() -> None:
    with pytest.raises(VersionMismatch, match="expected minor version 2, found 1"):
        url_matches("https://docs.rs/foo/1.1.0/", "foo", VERSION)


def test_name_is_case_sensitive() -> None:
    with pytest.raises(InvalidUrlError, match='expected package "foo", found "Foo"'):
        url_matches("https://docs.rs/Foo/1.2.3", "foo", VERSION)


# ============================================================
# validate_url_parts
# ============================================================

def test_validate_url_parts_custom_host() -> None:
    validate_url_parts("https", "docs.example.org", ["foo", "1.2"], "foo", VERSION, docs_host="docs.example.org")
    validate_url_parts("http", "docs.rs", ["foo", "0.1"], "foo", VERSION, docs_host="docs.example.org")

    with pytest.raises(VersionMismatch):
        validate_url_parts("https", "docs.example.org", ["foo", "0.1"], "foo", VERSION, docs_host="docs.example.org")


def test_validate_url_parts_without_domain() -> None:
    with pytest.raises(InvalidUrlError, match='expected "https", found "file"'):
        validate_url_parts("file", None, ["foo", "1.2.3"], "foo", VERSION)


# ============================================================
# find_root_url_attributes
# ============================================================

SOURCE = '''\
"""Example module."""

__version__ = "1.2.3"
__html_root_url__ = "https://docs.rs/foo/1.2.3"
__html_root_url__: str = (
    "https://docs.rs/foo/1.2.3"
)
__html_root_url__: str
__html_root_url__ = BASE_URL


def helper():
    __html_root_url__ = "https://docs.rs/foo/0.1.0"
'''


def test_find_root_url_attributes() -> None:
    attributes = find_root_url_attributes(SOURCE)

    assert [(a.value, a.first_line, a.last_line) for a in attributes] == [
        ("https://docs.rs/foo/1.2.3", 4, 4),
        ("https://docs.rs/foo/1.2.3", 5, 7),
        (None, 8, 8),
    ]


def test_find_root_url_attributes_syntax_error() -> None:
    with pytest.raises(SourceParseError, match=r"^could not parse lib\.py: "):
        find_root_url_attributes("def broken(:\n", "lib.py")


# ============================================================
# check_html_root_url
# ============================================================

def test_check_html_root_url_success(write_file, capsys: pytest.CaptureFixture[str]) -> None:
    path = write_file('__html_root_url__ = "https://docs.rs/foo/1.2.3"\n', name="lib.py")

    check_html_root_url(path, "foo", "1.2.3")

    out = capsys.readouterr().out
    assert f"Checking doc attributes in {path}..." in out
    assert f"{path} (line 1) ... ok" in out


def test_check_html_root_url_failure(write_file, capsys: pytest.CaptureFixture[str]) -> None:
    path = write_file('"""Docs."""\n__html_root_url__ = "https://docs.rs/foo/1.1.0"\n', name="lib.py")

    with pytest.raises(CheckFailed) as excinfo:
        check_html_root_url(path, "foo", "1.2.3")
    assert str(excinfo.value) == f"html_root_url errors in {path}"

    out = capsys.readouterr().out
    assert f"{path} (line 2) ... expected minor version 2, found 1 in" in out
    assert '    __html_root_url__ = "https://docs.rs/foo/1.1.0"' in out


def test_check_html_root_url_without_url(write_file) -> None:
    path = write_file("__html_root_url__: str\n", name="lib.py")

    with pytest.raises(CheckFailed) as excinfo:
        check_html_root_url(path, "foo", "1.2.3")
    assert excinfo.value.failures == [f"{path} (line 1) ... html_root_url attribute without URL in"]


def test_check_html_root_url_stops_at_first_failure(write_file, capsys: pytest.CaptureFixture[str]) -> None:
    path = write_file(
        '__html_root_url__ = "https://docs.rs/bar/1.2.3"\n'
        '__html_root_url__ = "https://docs.rs/foo/1.2.3"\n',
        name="lib.py",
    )

    with pytest.raises(CheckFailed):
        check_html_root_url(path, "foo", "1.2.3")
    assert "(line 2)" not in capsys.readouterr().out


def test_check_html_root_url_no_attribute(write_file) -> None:
    path = write_file("x = 1\n", name="lib.py")
    check_html_root_url(path, "foo", "1.2.3")


def test_bad_path(tmp_path: Path) -> None:
    path = tmp_path / "no-such-file.py"

    with pytest.raises(FileReadError) as excinfo:
        check_html_root_url(path, "foobar", "1.2.3")
    assert str(excinfo.value) == f"could not read {path}: No such file or directory"


def test_bad_pkg_version(write_file) -> None:
    path = write_file("x = 1\n", name="lib.py")

    with pytest.raises(VersionParseError, match='^bad package version "1.2": '):
        check_html_root_url(path, "foobar", "1.2")
