# modpackkit

A library of building blocks for tools that manage Minecraft modpacks. It
covers the parts of modpack management that can be done without a network
connection or a command-line front end: version ordering, file fingerprints,
reference parsing, release and version selection, and reading and writing pack
manifests.

## Modules

- `modpackkit.flexver` - compare and sort version strings, and maintain a
  pack's list of acceptable game versions (`compare`, `less`, `sort_versions`,
  `dedupe_versions`, `is_sorted`, `add_version`, `remove_version`).
- `modpackkit.murmur2` - the whitespace-stripping MurmurHash2 fingerprint
  CurseForge uses to identify files (`murmur_hash2`, `normalize`,
  `fingerprint`, and the hash object `Murmur2CF`).
- `modpackkit.cfversions` - map Minecraft snapshot and pre-release names to
  CurseForge version labels (`get_curseforge_version`,
  `get_curseforge_versions`) and swap Fabric library dependencies for their
  Quilt counterparts (`map_dep_override`).
- `modpackkit.curseforge` - parse CurseForge URLs and slugs
  (`parse_slug_or_url`, giving a `ParsedReference`), choose where a metadata
  file is stored (`get_path_for_file`), convert update and export tables
  (`UpdateData`, `ExportData`), and render the `modlist.html` of an exported
  pack (`create_modlist`, `ModlistEntry`, `project_url`).
- `modpackkit.packinterop` - read CurseForge `manifest.json` and
  `minecraftinstance.json` metadata from a folder (`DiskPackSource`) or a zip
  (`ZipPackSource`) with `read_metadata`, list their mods and override files,
  and write a CurseForge manifest with `write_manifest`.
- `modpackkit.modrinth` - parse Modrinth URLs and slugs, choose the latest
  suitable `Version`, pick the folder, side and hash of a project file, and
  convert update tables.
- `modpackkit.modrinth_pack` - build the `modrinth.index.json` manifest of an
  `.mrpack` file (`Pack`, `PackFile`, `FileEnv`).
- `modpackkit.github` - read release data (`Repo`, `Release`, `Asset`), pick
  the release and asset to install or update to, and convert update tables.

## Installation

```
pip install modpackkit
```

Python 3.10 or newer is required.

## Examples

Sorting acceptable game versions:

```python
from modpackkit import flexver

flexver.sort_versions(["1.16.5", "1.16.3", "1.16.4"])
# ['1.16.3', '1.16.4', '1.16.5']

flexver.add_version(["1.16.5", "1.16.3"], "1.16.4")
# ['1.16.3', '1.16.4', '1.16.5']
```

Computing a CurseForge fingerprint:

```python
from pathlib import Path
from modpackkit.murmur2 import Murmur2CF, fingerprint

data = Path("mods/example.jar").read_bytes()
value = fingerprint(data)

hasher = Murmur2CF()
hasher.update(data)
assert hasher.intdigest() == value
hasher.digest()          # the same value as four big-endian bytes
```

Mapping snapshots to CurseForge version labels:

```python
from modpackkit.cfversions import get_curseforge_version

get_curseforge_version("1.18.2-pre1")   # '1.18.2-Snapshot'
get_curseforge_version("21w37a")        # '1.18-Snapshot'
```

Parsing a CurseForge reference and deciding where its metadata goes:

```python
from modpackkit.curseforge import get_path_for_file, parse_slug_or_url

ref = parse_slug_or_url("https://www.curseforge.com/minecraft/mc-mods/jei/files/123456")
# ParsedReference(game='minecraft', category='mc-mods', slug='jei', file_id=123456)

get_path_for_file(432, 6, 0, "jei")    # 'mods/jei.pw.toml' (with the platform's separator)
```

Reading a CurseForge pack from a zip and writing a manifest back out:

```python
import io
import zipfile
from modpackkit.packinterop import ZipPackSource, read_metadata, write_manifest

with zipfile.ZipFile("pack.zip") as archive:
    meta = read_metadata(ZipPackSource(archive.getinfo("manifest.json"), archive))
    versions = meta.versions()     # e.g. {'minecraft': '1.20.1', 'forge': '47.2.0'}
    refs = meta.mods()
    overrides = meta.get_files()   # files under the overrides folder

out = io.StringIO()
write_manifest(versions, "My Pack", "1.0.0", "someone", refs, 0, out)
```

For a pack unpacked on disk, use
`DiskPackSource(open("manifest.json", "rb"), "manifest.json", "pack-folder")`.

Writing a Modrinth manifest:

```python
from modpackkit.modrinth_pack import FileEnv, Pack, PackFile

pack = Pack(
    version_id="1.0.0",
    name="My Pack",
    files=[PackFile("mods/a.jar", {"sha1": "..."}, FileEnv("required", "required"),
                    ["https://cdn.modrinth.com/data/..."], 1024)],
    dependencies={"minecraft": "1.20.1", "fabric-loader": "0.15.0"},
)
text = pack.dumps()   # four-space indented JSON with a final newline
```

Choosing a GitHub release asset:

```python
from modpackkit.github import Release, select_asset, select_latest_release

releases = [Release.from_json(item) for item in releases_json]
release = select_latest_release(releases, branch="")
asset = select_asset(release.assets)   # default pattern: a .jar that is not -api/-dev/-sources
```

Modrinth hashes, sides and folders:

```python
from modpackkit.modrinth import get_best_hash, get_project_type_folder, get_side

get_best_hash({"sha1": "abc", "sha512": "def"})        # ('sha512', 'def')
get_side("required", "optional")                       # 'both'
get_project_type_folder("mod", ["fabric"], ["fabric"]) # 'mods'
```

## Errors

Functions raise exceptions instead of returning status values:

- `flexver.VersionListError` when a version is added twice or removed while
  absent;
- `packinterop.MetadataError` for unreadable or wrongly shaped pack metadata,
  and `FileNotFoundError` from `ZipPackSource.get_file` for a missing entry;
- `github.AssetSelectionError` when a release has no single matching asset
  (or the pattern is invalid), and `LookupError` from `select_latest_release`
  when no release fits;
- `ValueError` (and `TypeError` for fields of the wrong type) for malformed
  input such as an unknown project type or an out-of-range file ID.

## What this package does not do

modpackkit is a library only. It has no command-line program, does not talk
to the CurseForge, Modrinth or GitHub APIs, does not download files, and does
not read or write `pack.toml`, index or `.pw.toml` metadata files. Callers
fetch API data and files themselves and pass them in; the package decides what
to do with them and produces manifests, paths and update tables.

## Running the tests

```
pip install -e ".[test]"
pytest
```