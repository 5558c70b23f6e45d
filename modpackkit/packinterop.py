"""Reading and writing CurseForge modpack metadata: manifests, installed instances, sources."""

from __future__ import annotations

import io
import json
import os
import zipfile
from dataclasses import dataclass, field
from typing import IO, Any, Iterable, Iterator, Mapping, Optional, Protocol, Union

MANIFEST_TYPE = "minecraftModpack"
OVERRIDES_FOLDER = "overrides"

_UINT32_MAX = 0xFFFFFFFF

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class MetadataError(ValueError):
    """Raised when pack metadata cannot be read or has the wrong shape."""


class _PackFile(Protocol):
    name: str

    def open(self) -> IO[bytes]: ...


class _PackSource(Protocol):
    def get_file(self, path: str) -> _PackFile: ...

    def get_file_list(self) -> list[_PackFile]: ...

    def get_pack_file(self) -> _PackFile: ...


@dataclass(frozen=True)
class AddonFileReference:
    """A single file on CurseForge, by project and file ID."""

    project_id: int
    file_id: int
    # True if the file is optional and turned off.
    optional_disabled: bool = False


# --- file handles -----------------------------------------------------------


@dataclass(frozen=True)
class DiskFile:
    """A pack file stored on disk, named relative to the pack folder."""

    name: str
    path: str

    def open(self) -> IO[bytes]:
        """Open the file for binary reading."""
        return open(self.path, "rb")


@dataclass(frozen=True)
class _StreamFile:
    name: str
    stream: IO[bytes] = field(repr=False, compare=False)

    def open(self) -> IO[bytes]:
        return io.BytesIO(self.stream.read())


@dataclass(frozen=True)
class _ZipEntryFile:
    name: str
    archive: zipfile.ZipFile = field(repr=False, compare=False)
    info: zipfile.ZipInfo = field(repr=False, compare=False)

    def open(self) -> IO[bytes]:
        return self.archive.open(self.info)


@dataclass(frozen=True)
class _RenamedFile:
    name: str
    inner: _PackFile = field(repr=False, compare=False)

    def open(self) -> IO[bytes]:
        return self.inner.open()


# --- sources ----------------------------------------------------------------


def _walk_files(directory: str) -> Iterator[str]:
    """Yield file paths below a directory in lexical, depth-first order."""
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_files(entry.path)
        else:
            yield entry.path


class DiskPackSource:
    """Pack files in a folder on disk, with the metadata file already opened."""

    def __init__(self, meta_source: IO[bytes], meta_name: str, base_path: str) -> None:
        self.meta_source = meta_source
        self.meta_name = meta_name
        self.base_path = base_path

    def get_file(self, path: str) -> DiskFile:
        """Return the file at a slash-separated path relative to the pack folder."""
        return DiskFile(path, os.path.join(self.base_path, path.replace("/", os.sep)))

    def get_file_list(self) -> list[DiskFile]:
        """Return every file below the pack folder."""
        return [
            DiskFile(os.path.relpath(p, self.base_path).replace(os.sep, "/"), p)
            for p in _walk_files(self.base_path)
        ]

    def get_pack_file(self) -> _StreamFile:
        """Return the metadata file."""
        return _StreamFile(self.meta_name, self.meta_source)


class ZipPackSource:
    """Pack files inside a zip archive."""

    def __init__(self, meta_file: zipfile.ZipInfo, archive: zipfile.ZipFile) -> None:
        self.meta_file = meta_file
        self.archive = archive
        self._files: list[_ZipEntryFile] = [
            _ZipEntryFile(info.filename, archive, info)
            for info in archive.infolist()
            if not info.is_dir()
        ]

    def get_file(self, path: str) -> _ZipEntryFile:
        """Return the entry with the given name; raise FileNotFoundError if absent."""
        for entry in self._files:
            if entry.name == path:
                return entry
        raise FileNotFoundError("file not found in zip")

    def get_file_list(self) -> list[_ZipEntryFile]:
        """Return every non-directory entry of the archive."""
        return list(self._files)

    def get_pack_file(self) -> _ZipEntryFile:
        """Return the metadata entry."""
        return _ZipEntryFile(self.meta_file.filename, self.archive, self.meta_file)


# --- JSON field access ------------------------------------------------------


def _field(obj: Mapping[str, Any], key: str) -> Any:
    if key in obj:
        return obj[key]
    folded = key.lower()
    for k, v in obj.items():
        if k.lower() == folded:
            return v
    return None


def _str(obj: Mapping[str, Any], key: str) -> str:
    value = _field(obj, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MetadataError(f"field {key!r}: expected a string")
    return value


def _uint32(obj: Mapping[str, Any], key: str) -> int:
    value = _field(obj, key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise MetadataError(f"field {key!r}: expected an unsigned integer")
    if not 0 <= value <= _UINT32_MAX:
        raise MetadataError(f"field {key!r}: {value} out of range")
    return value


def _bool(obj: Mapping[str, Any], key: str) -> bool:
    value = _field(obj, key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise MetadataError(f"field {key!r}: expected a boolean")
    return value


def _list(obj: Mapping[str, Any], key: str) -> list[Any]:
    value = _field(obj, key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MetadataError(f"field {key!r}: expected an array")
    return value


def _obj(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MetadataError(f"{what}: expected an object")
    return value


# --- metadata formats -------------------------------------------------------


@dataclass(frozen=True)
class _ModLoaderDef:
    id: str
    primary: bool = False


@dataclass(frozen=True)
class _ManifestFile:
    project_id: int
    file_id: int
    required: bool


@dataclass
class CursePackMeta:
    """A CurseForge pack manifest (manifest.json)."""

    minecraft_version: str = ""
    mod_loaders: list[_ModLoaderDef] = field(default_factory=list)
    manifest_type: str = ""
    manifest_version: int = 0
    name: str = ""
    version: str = ""
    author: str = ""
    project_id: int = 0
    files: list[_ManifestFile] = field(default_factory=list)
    overrides: str = ""
    source: Optional[_PackSource] = field(default=None, repr=False, compare=False)

    def versions(self) -> dict[str, str]:
        """Return the Minecraft and loader versions the pack asks for."""
        vers = {"minecraft": self.minecraft_version}
        for loader in self.mod_loaders:
            parts = loader.id.split("-", 1)
            if len(parts) == 2:
                vers[parts[0]] = parts[1]
        if "forge" in vers:
            vers["forge"] = vers["forge"].removeprefix(self.minecraft_version + "-")
        return vers

    def mods(self) -> list[AddonFileReference]:
        """Return the CurseForge files the pack lists."""
        return [
            AddonFileReference(f.project_id, f.file_id, not f.required)
            for f in self.files
        ]

    def get_files(self) -> list[_PackFile]:
        """Return the override files, named relative to the overrides folder."""
        if not self.overrides:
            return []
        if self.source is None:
            raise MetadataError("pack has no source to read files from")
        prefix = self.overrides if self.overrides.endswith("/") else self.overrides + "/"
        return [
            _RenamedFile(f.name[len(prefix):], f)
            for f in self.source.get_file_list()
            if f.name.startswith(prefix)
        ]

    def _to_json(self) -> dict[str, Any]:
        return {
            "minecraft": {
                "version": self.minecraft_version,
                "modLoaders": [{"id": m.id, "primary": m.primary} for m in self.mod_loaders],
            },
            "manifestType": self.manifest_type,
            "manifestVersion": self.manifest_version,
            "name": self.name,
            "version": self.version,
            "author": self.author,
            "projectID": self.project_id,
            "files": [
                {"projectID": f.project_id, "fileID": f.file_id, "required": f.required}
                for f in self.files
            ],
            "overrides": self.overrides,
        }


@dataclass(frozen=True)
class _InstalledAddon:
    project_id: int
    file_id: int
    file_name_on_disk: str = ""


@dataclass
class TwitchInstalledPackMeta:
    """An installed launcher instance (minecraftinstance.json)."""

    name: str = ""
    install_path: str = ""
    mc_version: str = ""
    modloader_name: str = ""
    modloader_maven_version: str = ""
    modpack_overrides: list[str] = field(default_factory=list)
    addons: list[_InstalledAddon] = field(default_factory=list)
    is_unlocked: bool = False
    source: Optional[_PackSource] = field(default=None, repr=False, compare=False)
    author: str = ""
    version: str = ""

    def versions(self) -> dict[str, str]:
        """Return the Minecraft and loader versions of the instance."""
        vers = {"minecraft": self.mc_version}
        maven = self.modloader_maven_version
        if self.modloader_name.startswith("forge"):
            if maven:
                forge = maven.removeprefix("net.minecraftforge:forge:")
            else:
                forge = self.modloader_name.removeprefix("forge-")
            vers["forge"] = forge.removeprefix(self.mc_version + "-")
        elif self.modloader_name.startswith("fabric"):
            if maven:
                fabric = maven.removeprefix("net.fabricmc:fabric-loader:")
            else:
                fabric = self.modloader_name.removeprefix("fabric-")
            vers["fabric"] = fabric.removesuffix(self.mc_version + "-")
        return vers

    def mods(self) -> list[AddonFileReference]:
        """Return the installed CurseForge files; '.disabled' files are optional-disabled."""
        return [
            AddonFileReference(
                a.project_id, a.file_id, a.file_name_on_disk.endswith(".disabled")
            )
            for a in self.addons
        ]

    def get_files(self) -> list[_PackFile]:
        """Return every file of an unlocked instance, or just its modpack overrides."""
        if self.source is None:
            raise MetadataError("pack has no source to read files from")
        if self.is_unlocked:
            return list(self.source.get_file_list())
        return [
            self.source.get_file(path.replace(os.sep, "/"))
            for path in self.modpack_overrides
        ]


PackMetadata = Union[CursePackMeta, TwitchInstalledPackMeta]


def _parse_curse(data: Mapping[str, Any], source: _PackSource) -> CursePackMeta:
    minecraft = _obj(_field(data, "minecraft"), "minecraft")
    loaders = [
        _ModLoaderDef(_str(m, "id"), _bool(m, "primary"))
        for m in (_obj(x, "modLoaders") for x in _list(minecraft, "modLoaders"))
    ]
    files = [
        _ManifestFile(_uint32(f, "projectID"), _uint32(f, "fileID"), _bool(f, "required"))
        for f in (_obj(x, "files") for x in _list(data, "files"))
    ]
    return CursePackMeta(
        minecraft_version=_str(minecraft, "version"),
        mod_loaders=loaders,
        manifest_type=_str(data, "manifestType"),
        manifest_version=_uint32(data, "manifestVersion"),
        name=_str(data, "name"),
        version=_str(data, "version"),
        author=_str(data, "author"),
        project_id=_uint32(data, "projectID"),
        files=files,
        overrides=_str(data, "overrides"),
        source=source,
    )


def _parse_twitch(data: Mapping[str, Any], source: _PackSource) -> TwitchInstalledPackMeta:
    loader = _obj(_field(data, "baseModLoader"), "baseModLoader")
    addons = []
    for raw in _list(data, "installedAddons"):
        addon = _obj(raw, "installedAddons")
        installed = _obj(_field(addon, "installedFile"), "installedFile")
        addons.append(
            _InstalledAddon(
                _uint32(addon, "addonID"),
                _uint32(installed, "id"),
                _str(installed, "FileNameOnDisk"),
            )
        )
    overrides = []
    for item in _list(data, "modpackOverrides"):
        if not isinstance(item, str):
            raise MetadataError("modpackOverrides: expected strings")
        overrides.append(item)
    return TwitchInstalledPackMeta(
        name=_str(data, "name"),
        install_path=_str(data, "installPath"),
        mc_version=_str(data, "gameVersion"),
        modloader_name=_str(loader, "name"),
        modloader_maven_version=_str(loader, "mavenVersionString"),
        modpack_overrides=overrides,
        addons=addons,
        is_unlocked=_bool(data, "isUnlocked"),
        source=source,
    )


def _loads(data: bytes) -> Mapping[str, Any]:
    try:
        parsed = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MetadataError(f"Error parsing JSON: {exc}") from exc
    return _obj(parsed, "pack metadata")


def read_metadata(source: _PackSource) -> PackMetadata:
    """Read the metadata file of a source as a manifest or an installed instance."""
    handle = source.get_pack_file().open()
    try:
        data = handle.read()
    finally:
        handle.close()

    parsed = _loads(data)
    manifest_type = parsed.get("manifestType")
    if manifest_type is not None and not isinstance(manifest_type, str):
        raise MetadataError("manifestType: expected a string")
    if manifest_type == MANIFEST_TYPE:
        return _parse_curse(parsed, source)
    data = data.replace(b"FileNameOnDisk", b"fileNameOnDisk")
    return _parse_twitch(_loads(data), source)


def write_manifest(
    versions: Mapping[str, str],
    name: str,
    version: str,
    author: str,
    file_refs: Iterable[AddonFileReference],
    project_id: int,
    out: IO[Any],
) -> None:
    """Write a CurseForge manifest.json for a pack to a text or binary stream."""
    loaders: list[_ModLoaderDef] = []
    for loader in ("fabric", "forge", "neoforge", "quilt"):
        if loader in versions:
            loaders.append(_ModLoaderDef(f"{loader}-{versions[loader]}", True))
            break

    manifest = CursePackMeta(
        minecraft_version=versions.get("minecraft", ""),
        mod_loaders=loaders,
        manifest_type=MANIFEST_TYPE,
        manifest_version=1,
        name=name,
        version=version,
        author=author,
        project_id=project_id,
        files=[
            _ManifestFile(ref.project_id, ref.file_id, not ref.optional_disabled)
            for ref in file_refs
        ],
        overrides=OVERRIDES_FOLDER,
    )
    text = json.dumps(manifest._to_json(), indent=2, ensure_ascii=False)
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    text += "\n"
    if isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
        out.write(text.encode("utf-8"))
    else:
        out.write(text)