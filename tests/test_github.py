import hashlib

import pytest

from modpackkit.github import (
    DEFAULT_ASSET_PATTERN,
    Asset,
    AssetSelectionError,
    Release,
    Repo,
    UpdateData,
    match_assets,
    parse_repo_slug,
    pick_update_asset,
    select_asset,
    select_asset as _select,
    select_latest_release,
    sha256_hex,
)


def _asset(name):
    return Asset(url="u/" + name, browser_download_url="d/" + name, name=name)


def test_parse_repo_slug_from_url():
    assert parse_repo_slug("https://github.com/owner/repo") == "owner/repo"
    assert parse_repo_slug("http://www.github.com/owner/repo/releases") == "owner/repo"


def test_parse_repo_slug_plain():
    assert parse_repo_slug("owner/repo") == "owner/repo"
    assert parse_repo_slug("https://gitlab.com/owner/repo") == "https://gitlab.com/owner/repo"


def test_repo_from_json():
    repo = Repo.from_json({"id": 7, "name": "hello_world", "full_name": "owner/hello_world"})
    assert repo == Repo(7, "hello_world", "owner/hello_world")


def test_repo_from_json_requires_full_name():
    with pytest.raises(ValueError):
        Repo.from_json({"id": 7, "name": "x"})


def test_release_from_json():
    rel = Release.from_json(
        {
            "tag_name": "v1",
            "target_commitish": "main",
            "assets": [{"name": "a.jar", "browser_download_url": "d"}],
        }
    )
    assert rel.tag_name == "v1"
    assert rel.target_commitish == "main"
    assert rel.assets == (Asset(url="", browser_download_url="d", name="a.jar"),)


def test_release_from_json_bad_type():
    with pytest.raises(TypeError):
        Release.from_json({"tag_name": 5})


def test_update_data_round_trip():
    data = UpdateData("owner/repo", "v2", "main", DEFAULT_ASSET_PATTERN)
    assert UpdateData.from_map(data.to_map()) == data
    assert set(data.to_map()) == {"slug", "tag", "branch", "regex"}


def test_update_data_missing_keys():
    assert UpdateData.from_map({"slug": "a/b"}) == UpdateData(slug="a/b")


def test_select_latest_release_first():
    releases = [Release(tag_name="v2"), Release(tag_name="v1")]
    assert select_latest_release(releases, "").tag_name == "v2"


def test_select_latest_release_branch():
    releases = [
        Release(tag_name="v3", target_commitish="dev"),
        Release(tag_name="v2", target_commitish="main"),
        Release(tag_name="v1", target_commitish="main"),
    ]
    assert select_latest_release(releases, "main").tag_name == "v2"


def test_select_latest_release_missing_branch():
    with pytest.raises(LookupError):
        select_latest_release([Release(target_commitish="main")], "other")
    with pytest.raises(LookupError):
        select_latest_release([], "")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("mod-1.0.jar", True),
        ("mod-1.0-api.jar", False),
        ("mod-1.0-dev.jar", False),
        ("mod-1.0-dev-preshadow.jar", False),
        ("mod-1.0-sources.jar", False),
        ("mod-1.0.zip", False),
    ],
)
def test_default_pattern(name, expected):
    assert (match_assets([_asset(name)]) == [_asset(name)]) is expected


def test_select_asset_default():
    assets = [_asset("mod-1.0-sources.jar"), _asset("mod-1.0.jar"), _asset("mod-1.0-dev.jar")]
    assert select_asset(assets).name == "mod-1.0.jar"


def test_select_asset_errors():
    with pytest.raises(AssetSelectionError, match="any assets attached"):
        select_asset([])
    with pytest.raises(AssetSelectionError, match="matching regex"):
        select_asset([_asset("readme.txt")])
    with pytest.raises(AssetSelectionError, match="more than one"):
        _select([_asset("a.jar"), _asset("b.jar")])


def test_select_asset_custom_pattern():
    assets = [_asset("a-fabric.jar"), _asset("a-forge.jar")]
    assert select_asset(assets, "forge").name == "a-forge.jar"


def test_invalid_pattern():
    with pytest.raises(AssetSelectionError):
        match_assets([_asset("a.jar")], "(")


def test_pick_update_asset():
    assets = [_asset("notes.txt"), _asset("a.jar"), _asset("b.jar")]
    assert pick_update_asset(assets).name == "b.jar"
    assert pick_update_asset([_asset("x.zip"), _asset("y.zip")]).name == "x.zip"
    with pytest.raises(AssetSelectionError):
        pick_update_asset([])


def test_sha256_hex():
    assert sha256_hex(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    assert sha256_hex(b"jar bytes") == hashlib.sha256(b"jar bytes").hexdigest()