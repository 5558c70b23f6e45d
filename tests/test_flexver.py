import pytest

from modpackkit.flexver import (
    VersionListError,
    add_version,
    compare,
    dedupe_versions,
    is_sorted,
    less,
    remove_version,
    sort_versions,
)


@pytest.mark.parametrize(
    "lower, higher",
    [
        ("a1.2.6", "b1.7.3"),
        ("a1.7.3", "b1.2.6"),
        ("a1.1.2", "a1.1.2_01"),
        ("1.14.2-1.3.7", "1.16.5-0.00.5"),
        ("1.0.0", "1.0.0_01"),
        ("1.0.0_01", "1.0.1"),
        ("0.17.1-beta.1", "0.17.1"),
        ("0.17.1-beta.1", "0.17.1-beta.2"),
        ("14w16a", "18w40b"),
        ("18w40a", "18w40b"),
        ("1.4.5_01+fabric-1.17", "18w40b"),
        ("13w02a", "c0.3.0_01"),
        ("0.6.0-1.18.x", "0.9.beta-1.18.x"),
        ("1.9", "1.10"),
    ],
)
def test_ordering(lower, higher):
    assert compare(lower, higher) == -1
    assert compare(higher, lower) == 1
    assert less(lower, higher)
    assert not less(higher, lower)


@pytest.mark.parametrize(
    "a, b",
    [
        ("1.4.5_01", "1.4.5_01+fabric-1.17"),
        ("1.4.5_01", "1.4.5_01+fabric-1.17+ohgod"),
        ("1.0", "1.0"),
        ("1.01", "1.1"),
    ],
)
def test_equal(a, b):
    assert compare(a, b) == 0
    assert not less(a, b)


def test_empty_sorts_first():
    assert compare("", "") == 0
    assert less("", "1")


def test_sort_versions():
    assert sort_versions(["1.16.5", "1.16.3", "1.16.4"]) == ["1.16.3", "1.16.4", "1.16.5"]
    assert sort_versions(["1.10", "1.9", "1.2"]) == ["1.2", "1.9", "1.10"]


def test_sort_result_is_sorted():
    result = sort_versions(["1.18", "1.7.10", "1.12.2", "1.8.9"])
    assert is_sorted(result)
    assert sorted(result) == sorted(["1.18", "1.7.10", "1.12.2", "1.8.9"])


def test_is_sorted():
    assert is_sorted(["1.16.3", "1.16.4"])
    assert not is_sorted(["1.16.5", "1.16.3"])
    assert is_sorted(["1.16.5"])
    assert is_sorted([])


def test_dedupe_keeps_last_occurrence():
    assert dedupe_versions(["1.16.3", "1.16.4", "1.16.3"]) == ["1.16.4", "1.16.3"]
    assert dedupe_versions(["1.16.5"]) == ["1.16.5"]


def test_add_version():
    assert add_version(["1.16.5", "1.16.3"], "1.16.4") == ["1.16.3", "1.16.4", "1.16.5"]


def test_add_existing_version_raises():
    with pytest.raises(VersionListError):
        add_version(["1.16.3"], "1.16.3")


def test_remove_version():
    assert remove_version(["1.16.5", "1.16.3", "1.16.4"], "1.16.4") == ["1.16.3", "1.16.5"]


def test_remove_missing_version_raises():
    with pytest.raises(VersionListError):
        remove_version(["1.16.3"], "1.16.4")


def test_add_then_remove_round_trip():
    base = ["1.16.3", "1.16.5"]
    assert remove_version(add_version(base, "1.16.4"), "1.16.4") == base