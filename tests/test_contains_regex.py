"""Tests for the regex checks."""

import pytest

from version_sync.checks.contains_regex import check_contains_regex, check_only_contains_regex
from version_sync.core.errors import (
    CheckFailed,
    ConfigurationError,
    NotFoundError,
    VersionParseError,
)

DOCS_TEMPLATE = "docs.rs/{name}/{version}/{name}/"


# ============================================================
# check_contains_regex
# ============================================================

def test_bad_regex(write_file) -> None:
    path = write_file("Version 1.2.3\n")

    with pytest.raises(ConfigurationError) as excinfo:
        check_contains_regex(path, "Version {version} [ups", "foobar", "1.2.3")
    message = str(excinfo.value)
    assert message.startswith("could not parse template: unterminated character set")
    assert "\n    Version 1\\.2\\.3 [ups\n" in message
    assert "(?m)" not in message


def test_not_found(write_file) -> None:
    path = write_file("Version 1.2.3\n")

    with pytest.raises(NotFoundError) as excinfo:
        check_contains_regex(path, "should not be found", "foobar", "1.2.3")
    assert str(excinfo.value) == f'could not find "should not be found" in {path}'


def test_escaping(write_file) -> None:
    path = write_file("escaped: foo*bar-1.2.3, not escaped: foo*bar-1.2.3\n")
    template = "escaped: {name}-{version}, not escaped: foo*bar-1.2.3"

    with pytest.raises(NotFoundError) as excinfo:
        check_contains_regex(path, template, "foo*bar", "1.2.3")
    assert str(excinfo.value) == (
        r'could not find "escaped: foo\*bar-1\.2\.3, not escaped: foo*bar-1.2.3" in ' + str(path)
    )


def test_good_pattern(write_file, capsys: pytest.CaptureFixture[str]) -> None:
    path = write_file("# version-sync\n")

    check_contains_regex(path, "^# {name}$", "version-sync", "1.2.3")
    check_contains_regex(path, "{name}", "version-sync", "1.2.3")

    assert f"{path} (line 1) ... ok" in capsys.readouterr().out


@pytest.mark.parametrize(
    "content",
    [
        b"first line\r\nsecond line\r\nthird line\r\n",
        b"first line\nsecond line\nthird line\n",
    ],
)
def test_line_boundaries(write_file, content: bytes, capsys: pytest.CaptureFixture[str]) -> None:
    path = write_file(content)

    check_contains_regex(path, "^second line$", "", "")

    assert f"{path} (line 2) ... ok" in capsys.readouterr().out


def test_changelog_heading(write_file) -> None:
    path = write_file("# Changelog\n\n## Version 0.4.0 (2024-01-02)\n\n## Version 0.3.1\n")
    check_contains_regex(path, r"^## Version {version} \(20\d\d-\d\d-\d\d\)$", "foo", "0.4.0")


# ============================================================
# check_only_contains_regex
# ============================================================

def test_only_contains_success(write_file) -> None:
    path = write_file(
        "first:  docs.rs/foo/1.2.3/foo/fn.bar.html\n"
        "second: docs.rs/foo/1.2.3/foo/fn.baz.html\n"
    )
    check_only_contains_regex(path, DOCS_TEMPLATE, "foo", "1.2.3")


def test_only_contains_success_compatible(write_file) -> None:
    path = write_file(
        "first:  docs.rs/foo/1.2/foo/fn.bar.html\n"
        "second: docs.rs/foo/1/foo/fn.baz.html\n"
    )
    check_only_contains_regex(path, DOCS_TEMPLATE, "foo", "1.2.3")


def test_only_contains_failure(write_file, capsys: pytest.CaptureFixture[str]) -> None:
    path = write_file(
        "first:  docs.rs/foo/1.0.0/foo/ <- error\n"
        "second: docs.rs/foo/2.0.0/foo/ <- ok\n"
        "third:  docs.rs/foo/3.0.0/foo/ <- error\n"
    )

    with pytest.raises(CheckFailed) as excinfo:
        check_only_contains_regex(path, DOCS_TEMPLATE, "foo", "2.0.0")
    assert str(excinfo.value) == f"{path} ... found 2 errors"
    assert len(excinfo.value.failures) == 2

    out = capsys.readouterr().out
    assert f'Searching for "{DOCS_TEMPLATE}" in {path}...' in out
    assert (
        f'{path} (line 1) ... found "1.0.0", which does not match version "2.0.0": '
        "expected major version 2, found 1"
    ) in out
    assert f"{path} (line 2) ... ok" in out
    assert f'{path} (line 3) ... found "3.0.0"' in out


def test_only_contains_fails_if_no_match(write_file) -> None:
    path = write_file("not a match")

    with pytest.raises(NotFoundError) as excinfo:
        check_only_contains_regex(path, DOCS_TEMPLATE, "foo", "1.2.3")
    assert str(excinfo.value) == f'{path} ... found no matches for "docs.rs/{{name}}/{{version}}/{{name}}/"'


def test_only_contains_bad_pkg_version(write_file) -> None:
    path = write_file("docs.rs/foo/1.2.3/foo/")

    with pytest.raises(VersionParseError, match='bad package version "1.2"'):
        check_only_contains_regex(path, DOCS_TEMPLATE, "foo", "1.2")


def test_only_contains_bad_regex(write_file) -> None:
    path = write_file("docs.rs/foo/1.2.3/foo/")

    with pytest.raises(ConfigurationError) as excinfo:
        check_only_contains_regex(path, "({version}", "foo", "1.2.3")
    message = str(excinfo.value)
    assert message.startswith("could not parse template: missing ), unterminated subpattern\n")
    # the expanded pattern is reported, not the template
    assert "(?P<_vsync_version_0>" in message
    assert message.endswith("\n    ^")


def test_only_contains_user_named_group(write_file, capsys: pytest.CaptureFixture[str]) -> None:
    path = write_file("release v1.2.3\n")

    check_only_contains_regex(path, r"release (?P<version_tag>v){version}", "foo", "1.2.3")

    assert f"{path} (line 1) ... ok" in capsys.readouterr().out
