import pytest

from modpackkit.cfversions import (
    get_curseforge_version,
    get_curseforge_versions,
    map_dep_override,
)


@pytest.mark.parametrize(
    "version, expected",
    [
        ("1.18.2-pre1", "1.18.2-Snapshot"),
        ("1.20 Pre-Release 1", "1.20-Snapshot"),
        ("1.16 Pre-release 3", "1.16-Snapshot"),
        ("1.19-rc1", "1.19-Snapshot"),
    ],
)
def test_prerelease_names(version, expected):
    assert get_curseforge_version(version) == expected


@pytest.mark.parametrize(
    "version, expected",
    [
        ("22w11a", "1.19-Snapshot"),
        ("21w37a", "1.18-Snapshot"),
        ("20w45a", "1.17-Snapshot"),
        ("21w20a", "1.17-Snapshot"),
        ("Snapshot 20w06a", "1.16-Snapshot"),
        ("19w34a", "1.15-Snapshot"),
        ("18w43a", "1.14-Snapshot"),
        ("18w31a", "1.13.1-Snapshot"),
        ("17w31a", "1.12.1-Snapshot"),
        ("16w50a", "1.11.1-Snapshot"),
        ("15w31a", "1.9-Snapshot"),
        ("13w47a", "1.7.4-Snapshot"),
        ("11w47a", "1.1-Snapshot"),
        ("12w01a", "1.1-Snapshot"),
    ],
)
def test_weekly_snapshots(version, expected):
    assert get_curseforge_version(version) == expected


@pytest.mark.parametrize("version", ["1.16.5", "1.20.1", "", "17w20a", "10w01a"])
def test_unmapped_versions_pass_through(version):
    assert get_curseforge_version(version) == version


def test_versions_list_keeps_order_and_length():
    inputs = ["1.16.5", "22w11a", "1.18.2-pre1"]
    result = get_curseforge_versions(inputs)
    assert result == [get_curseforge_version(v) for v in inputs]
    assert result[0] == "1.16.5"


def test_versions_list_empty():
    assert get_curseforge_versions([]) == []


def test_fabric_api_mapped_on_quilt():
    assert map_dep_override(306612, True, "1.18.2") == 634179


def test_fabric_api_untouched_without_quilt():
    assert map_dep_override(306612, False, "1.18.2") == 306612


@pytest.mark.parametrize(
    "mc_version, expected",
    [("1.19.2", 720410), ("1.20.1", 720410), ("1.19.1", 308769), ("1.18.2", 308769)],
)
def test_kotlin_mapping_depends_on_version(mc_version, expected):
    assert map_dep_override(308769, True, mc_version) == expected


def test_other_ids_untouched():
    assert map_dep_override(12345, True, "1.19.2") == 12345