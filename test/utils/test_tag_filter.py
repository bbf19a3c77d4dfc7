import re

import pytest

from task_updates.utils.tag_filter import filter_tags, is_excluded, is_included

TAGS = ["v1.0.0", "v1.2.0", "latest", "v1.1.0-rc1", "v2.0.0-beta", "nightly", "1.3.0"]


def patterns(*sources):
    return tuple(re.compile(s) for s in sources)


def test_scenario_semver_include():
    tags = ["v1.0.0", "v1.2.0", "latest", "v1.1.0-rc1"]
    assert filter_tags(tags, patterns(r"^v\d+\.\d+\.\d+$"), ()) == ["v1.0.0", "v1.2.0"]


def test_empty_include_admits_everything():
    assert filter_tags(TAGS, (), ()) == TAGS


def test_empty_include_only_removes_excluded():
    exclude = patterns("rc", "beta", "^latest$")
    expected = [t for t in TAGS if not any(p.search(t) for p in exclude)]
    assert filter_tags(TAGS, (), exclude) == expected
    assert filter_tags(TAGS, (), exclude) == ["v1.0.0", "v1.2.0", "nightly", "1.3.0"]


def test_exclude_wins_over_include():
    include = patterns(r"^v\d")
    exclude = patterns(r"-rc\d+$")
    result = filter_tags(TAGS, include, exclude)
    assert "v1.1.0-rc1" not in result
    assert result == ["v1.0.0", "v1.2.0", "v2.0.0-beta"]


def test_any_include_pattern_is_enough():
    result = filter_tags(TAGS, patterns(r"^latest$", r"^\d"), ())
    assert result == ["latest", "1.3.0"]


@pytest.mark.parametrize("include,exclude", [
    ((), ()),
    (patterns(r"^v"), ()),
    ((), patterns("rc")),
    (patterns(r"\d"), patterns("beta", "rc")),
])
def test_filter_is_idempotent(include, exclude):
    once = filter_tags(TAGS, include, exclude)
    assert filter_tags(once, include, exclude) == once


def test_order_and_duplicates_preserved():
    tags = ["b", "a", "b", "c"]
    assert filter_tags(tags, patterns("[ab]"), ()) == ["b", "a", "b"]


def test_patterns_are_unanchored():
    assert is_included("v1.0.0-rc1", patterns("rc"))
    assert not is_included("v1.0.0", patterns("rc"))
    assert not is_excluded("v1.0.0", ())
