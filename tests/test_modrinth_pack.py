import json

import pytest

from modpackkit.modrinth_pack import FileEnv, Pack, PackFile


def _sample_pack(summary=""):
    file = PackFile(
        path="mods/sodium.jar",
        hashes={"sha512": "bb", "sha1": "aa"},
        env=FileEnv(client="required", server="unsupported"),
        downloads=["https://cdn.modrinth.com/data/x/sodium.jar"],
        file_size=1024,
    )
    return Pack(
        version_id="1.0.0",
        name="Example Pack",
        summary=summary,
        files=[file],
        dependencies={"minecraft": "1.20.1", "fabric-loader": "0.14.21"},
    )


def test_pack_key_order_and_defaults():
    data = _sample_pack().to_json()
    assert list(data) == ["formatVersion", "game", "versionId", "name", "files", "dependencies"]
    assert data["formatVersion"] == 1
    assert data["game"] == "minecraft"


def test_summary_included_when_set():
    data = _sample_pack(summary="A pack").to_json()
    assert data["summary"] == "A pack"
    assert list(data).index("summary") == 4


def test_file_json_fields():
    data = _sample_pack().to_json()["files"][0]
    assert list(data) == ["path", "hashes", "env", "downloads", "fileSize"]
    assert data["env"] == {"client": "required", "server": "unsupported"}
    assert data["fileSize"] == 1024


def test_missing_env_is_null():
    assert PackFile(path="a.jar").to_json()["env"] is None


def test_maps_are_sorted():
    data = _sample_pack().to_json()
    assert list(data["dependencies"]) == sorted(data["dependencies"])
    assert list(data["files"][0]["hashes"]) == ["sha1", "sha512"]


def test_dumps_round_trip():
    pack = _sample_pack(summary="A pack")
    text = pack.dumps()
    assert json.loads(text) == pack.to_json()


def test_dumps_uses_four_space_indent_and_newline():
    text = _sample_pack().dumps()
    assert text.endswith("}\n")
    assert '\n    "formatVersion": 1,' in text


def test_dumps_escapes_html_characters():
    text = Pack(version_id="1", name="<a&b>").dumps()
    assert "\\u003ca\\u0026b\\u003e" in text
    assert json.loads(text)["name"] == "<a&b>"


def test_empty_collections_serialise():
    data = json.loads(Pack(version_id="1", name="n").dumps())
    assert data["files"] == []
    assert data["dependencies"] == {}


@pytest.mark.parametrize("size", [-1, 2**32])
def test_file_size_out_of_range(size):
    with pytest.raises(ValueError):
        PackFile(path="a.jar", file_size=size)