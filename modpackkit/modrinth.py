"""Modrinth project handling: URL parsing, version selection, folders, sides and hashes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence
from urllib.parse import unquote

from modpackkit import flexver

UNIVERSAL_SIDE = "both"
SERVER_SIDE = "server"
CLIENT_SIDE = "client"

# "Loaders" accepted whatever mod loaders the pack uses.
DEFAULT_MR_LOADERS = ("canvas", "iris", "optifine", "vanilla", "minecraft")
WITH_DATAPACK_PATH_MR_LOADERS = DEFAULT_MR_LOADERS + ("datapack",)

LOADER_FOLDERS: dict[str, str] = {
    "quilt": "mods",
    "fabric": "mods",
    "forge": "mods",
    "neoforge": "mods",
    "liteloader": "mods",
    "modloader": "mods",
    "rift": "mods",
    "bukkit": "plugins",
    "spigot": "plugins",
    "paper": "plugins",
    "purpur": "plugins",
    "sponge": "plugins",
    "bungeecord": "plugins",
    "waterfall": "plugins",
    "velocity": "plugins",
    "canvas": "resourcepacks",
    "iris": "shaderpacks",
    "optifine": "shaderpacks",
    "vanilla": "resourcepacks",
}

# Loaders from most to least preferred, for files of otherwise equal versions.
LOADER_PREFERENCE_LIST = (
    "quilt",
    "fabric",
    "neoforge",
    "forge",
    "liteloader",
    "modloader",
    "rift",
    "sponge",
    "purpur",
    "paper",
    "spigot",
    "bukkit",
    "velocity",
    "waterfall",
    "bungeecord",
    "canvas",
    "iris",
    "optifine",
    "vanilla",
    "datapack",
    "minecraft",
)

# Support for the key loader in both lists makes its group compare as equal.
LOADER_COMPAT_GROUPS: dict[str, tuple[str, ...]] = {
    "fabric": ("quilt",),
    "forge": ("neoforge",),
    "bukkit": ("purpur", "paper", "spigot"),
    "bungeecord": ("waterfall",),
}

URL_CATEGORIES = ("mod", "plugin", "datapack", "shader", "resourcepack", "modpack")

_SLUG_CHARS = r"[a-zA-Z0-9!@$()`.+,_\"-]"
_URL_PATTERNS = (
    re.compile(
        r"^https?://(www.)?modrinth\.com/(?P<urlCategory>[^/]+)/(?P<slug>"
        + _SLUG_CHARS
        + r"{3,64})(?:/version/(?P<version>"
        + _SLUG_CHARS
        + r"{1,32}))?",
        re.ASCII,
    ),
    re.compile(
        r"^https?://cdn\.modrinth\.com/data/(?P<slug>[a-zA-Z0-9]+)/versions/"
        r"(?P<versionID>[a-zA-Z0-9]+)/(?P<filename>[^/]+)\Z",
        re.ASCII,
    ),
    re.compile(r"^(?P<slug>" + _SLUG_CHARS + r"{3,64})\Z", re.ASCII),
)
_SLUG_PATTERN_INDEX = 2

_BAD_ESCAPE = re.compile(r"%(?![0-9a-fA-F]{2})")

_PREFERRED_HASHES = ("sha512", "sha256", "sha1", "murmur2")

FABRIC_API_IDS = ("P7dR8mSH", "fabric-api")
QUILTED_FABRIC_API_ID = "qvIfYCYJ"
FABRIC_LANGUAGE_KOTLIN_IDS = ("Ha28R6CL", "fabric-language-kotlin")
QUILT_KOTLIN_LIBRARIES_ID = "lwVhp9o5"


@dataclass(frozen=True)
class ParsedInput:
    """What could be read from a Modrinth URL or slug; empty fields were absent."""

    slug: str = ""
    version: str = ""
    version_id: str = ""
    filename: str = ""
    parsed_slug: bool = False


@dataclass
class Version:
    """The parts of a Modrinth version used to choose the latest one."""

    id: str = ""
    project_id: str = ""
    version_number: str = ""
    game_versions: list[str] = field(default_factory=list)
    loaders: list[str] = field(default_factory=list)
    date_published: Optional[datetime] = None


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"'{key}' expected a string, got {type(value).__name__}")
    return value


@dataclass
class UpdateData:
    """The [update.modrinth] table of a metadata file."""

    project_id: str = ""
    installed_version: str = ""

    def to_map(self) -> dict[str, str]:
        return {"mod-id": self.project_id, "version": self.installed_version}

    @classmethod
    def from_map(cls, data: Mapping[str, Any]) -> "UpdateData":
        """Read update data; missing keys are empty, unknown keys are ignored."""
        return cls(
            project_id=_str(data, "mod-id"),
            installed_version=_str(data, "version"),
        )


def _preference_index(loader: str) -> int:
    try:
        return LOADER_PREFERENCE_LIST.index(loader)
    except ValueError:
        return -1


def _best_loader_folder(loaders: Iterable[str]) -> Optional[str]:
    indexes = [i for i in map(_preference_index, loaders) if i != -1]
    if not indexes:
        return None
    return LOADER_FOLDERS.get(LOADER_PREFERENCE_LIST[min(indexes)], "")


def get_project_type_folder(
    project_type: str,
    file_loaders: Sequence[str],
    pack_loaders: Sequence[str],
    datapack_folder: str = "",
) -> str:
    """Return the folder a project's files belong in."""
    if project_type == "modpack":
        raise ValueError(
            "this command should not be used to add Modrinth modpacks, "
            "and importing of Modrinth modpacks is not yet supported"
        )
    if project_type == "resourcepack":
        return "resourcepacks"
    if project_type == "shader":
        folder = _best_loader_folder(file_loaders)
        return "shaderpacks" if folder is None else folder
    if project_type == "mod":
        folder = _best_loader_folder(l for l in file_loaders if l in pack_loaders)
        if folder is not None:
            return folder
        if "datapack" in file_loaders:
            if datapack_folder:
                return datapack_folder
            raise ValueError("set the datapack-folder option to use datapacks")
        return "mods"
    raise ValueError(f"unknown project type {project_type}")


def _path_unescape(text: str) -> str:
    if _BAD_ESCAPE.search(text):
        raise ValueError(f"invalid URL escape in {text!r}")
    return unquote(text)


def parse_slug_or_url(text: str) -> ParsedInput:
    """Read slug, version, version ID and file name from a Modrinth URL or slug.

    Input matching none of the known forms gives an empty result.
    """
    for index, pattern in enumerate(_URL_PATTERNS):
        match = pattern.search(text)
        if match is None:
            continue
        groups = {k: (v or "") for k, v in match.groupdict().items()}
        if "urlCategory" in groups and groups["urlCategory"] not in URL_CATEGORIES:
            raise ValueError("unknown project type: " + groups["urlCategory"])
        filename = groups.get("filename", "")
        if "filename" in groups:
            filename = _path_unescape(filename)
        return ParsedInput(
            slug=groups.get("slug", ""),
            version=groups.get("version", ""),
            version_id=groups.get("versionID", ""),
            filename=filename,
            parsed_slug=index == _SLUG_PATTERN_INDEX,
        )
    return ParsedInput()


def compare_loader_lists(a: Sequence[str], b: Sequence[str]) -> int:
    """Return 1 if ``b`` has more preferable loaders, -1 if ``a`` has, else 0."""
    compat: set[str] = set()
    for key, group in LOADER_COMPAT_GROUPS.items():
        if key in a and key in b:
            compat.update(group)

    best_a = min(
        (i for i in map(_preference_index, (l for l in a if l not in compat)) if i != -1),
        default=None,
    )
    best_b: Optional[int] = None
    for loader in b:
        if loader in compat:
            continue
        idx = _preference_index(loader)
        # Unknown loaders in b (index -1) count as more preferable.
        if best_a is None or idx < best_a:
            return 1
        if idx != -1 and (best_b is None or idx < best_b):
            best_b = idx
    if best_a is not None and (best_b is None or best_a < best_b):
        return -1
    return 0


def _highest_slice_index(slice_: Sequence[str], values: Iterable[str]) -> int:
    indexes = [i for i, v in enumerate(slice_) if v in set(values)]
    return max(indexes, default=-1)


def find_latest_version(
    versions: Sequence[Version], game_versions: Sequence[str], use_flexver: bool
) -> Version:
    """Pick the best version: by version number (optionally), game version, loader, date."""
    if not versions:
        raise ValueError("no versions to choose from")
    latest = versions[0]
    best_game = _highest_slice_index(game_versions, latest.game_versions)
    for candidate in versions[1:]:
        game_idx = _highest_slice_index(game_versions, candidate.game_versions)
        result = 0
        if use_flexver:
            result = flexver.compare(candidate.version_number, latest.version_number)
        if result == 0:
            result = game_idx - best_game
        if result == 0:
            result = compare_loader_lists(latest.loaders, candidate.loaders)
        if result == 0:
            if (
                candidate.date_published is not None
                and latest.date_published is not None
                and candidate.date_published > latest.date_published
            ):
                result = 1
        if result > 0:
            latest = candidate
            best_game = game_idx
    return latest


def should_download_on_side(side: str) -> bool:
    """Return True if a project is required or optional on the given side."""
    return side in ("required", "optional")


def get_side(server_side: str, client_side: str) -> str:
    """Return the pack side of a project, or "" if it runs on neither."""
    server = should_download_on_side(server_side)
    client = should_download_on_side(client_side)
    if server and client:
        return UNIVERSAL_SIDE
    if server:
        return SERVER_SIDE
    if client:
        return CLIENT_SIDE
    return ""


def get_best_hash(hashes: Mapping[str, str]) -> tuple[str, str]:
    """Return the preferred (algorithm, hash) pair, or ("", "") if there is none."""
    for algorithm in _PREFERRED_HASHES:
        if algorithm in hashes:
            return algorithm, hashes[algorithm]
    for algorithm, value in hashes.items():
        return algorithm, value
    return "", ""


def map_dep_override(dep_id: str, is_quilt: bool, mc_version: str) -> str:
    """Swap Fabric library dependencies for their Quilt counterparts."""
    if is_quilt and dep_id in FABRIC_API_IDS:
        return QUILTED_FABRIC_API_ID
    if is_quilt and dep_id in FABRIC_LANGUAGE_KOTLIN_IDS:
        if flexver.less("1.19.1", mc_version) and flexver.less(mc_version, "2.0.0"):
            return QUILT_KOTLIN_LIBRARIES_ID
    return dep_id