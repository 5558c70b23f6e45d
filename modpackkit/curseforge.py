"""CurseForge references, update metadata, metadata paths and export mod lists."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

META_EXTENSION = ".pw.toml"
PROJECT_URL_BASE = "https://www.curseforge.com/projects/"
MINECRAFT_GAME_ID = 432

_UINT32_MAX = 0xFFFFFFFF

_URL_PATTERNS = (
    re.compile(
        r"^https?://(?P<game>minecraft)\.curseforge\.com/projects/(?P<slug>[^/]+)"
        r"(?:/(?:files|download)/(?P<fileID>\d+))?",
        re.ASCII,
    ),
    re.compile(
        r"^https?://(?:www\.|beta\.|legacy\.)?curseforge\.com/(?P<game>[^/]+)/"
        r"(?P<category>[^/]+)/(?P<slug>[^/]+)(?:/(?:files|download)/(?P<fileID>\d+))?",
        re.ASCII,
    ),
    re.compile(r"^(?P<slug>[a-z][\da-z\-_]{0,127})\Z", re.ASCII),
)

# Folders that files of a given class (or category) go to, keyed by game ID.
DEFAULT_FOLDERS: dict[int, dict[int, str]] = {
    MINECRAFT_GAME_ID: {
        5: "plugins",
        12: "resourcepacks",
        6: "mods",
        17: "saves",
    },
}


@dataclass(frozen=True)
class ParsedReference:
    """What could be read from a CurseForge URL or slug; empty fields were absent."""

    game: str = ""
    category: str = ""
    slug: str = ""
    file_id: int = 0


def _decode_uint32(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' expected an unsigned integer, got {type(value).__name__}")
    number = int(value)
    if number < 0:
        raise ValueError(f"'{key}': cannot parse, {value} overflows uint32")
    if number > _UINT32_MAX:
        raise ValueError(f"'{key}': {value} overflows uint32")
    return number


@dataclass
class UpdateData:
    """The [update.curseforge] table of a metadata file."""

    project_id: int = 0
    file_id: int = 0

    def to_map(self) -> dict[str, int]:
        return {"project-id": self.project_id, "file-id": self.file_id}

    @classmethod
    def from_map(cls, data: Mapping[str, Any]) -> "UpdateData":
        """Read update data; missing keys are zero, unknown keys are ignored."""
        return cls(
            project_id=_decode_uint32(data, "project-id"),
            file_id=_decode_uint32(data, "file-id"),
        )


@dataclass
class ExportData:
    """The [export.curseforge] table of a pack file."""

    project_id: int = 0

    def to_map(self) -> dict[str, int]:
        return {"project-id": self.project_id}

    @classmethod
    def from_map(cls, data: Mapping[str, Any]) -> "ExportData":
        return cls(project_id=_decode_uint32(data, "project-id"))


@dataclass(frozen=True)
class ModlistEntry:
    """A mod as listed in an exported modlist.html; no project ID means no link."""

    name: str
    project_id: Optional[int] = None


def parse_slug_or_url(url: str) -> ParsedReference:
    """Read the game, category, slug and file ID from a CurseForge URL or a bare slug.

    Input matching none of the known forms gives an empty reference.
    """
    for pattern in _URL_PATTERNS:
        match = pattern.search(url)
        if match is None:
            continue
        groups = {k: (v or "") for k, v in match.groupdict().items()}
        file_id = 0
        raw_id = groups.get("fileID", "")
        if raw_id:
            file_id = int(raw_id)
            if file_id > _UINT32_MAX:
                raise ValueError(f"file ID {raw_id} out of range")
        return ParsedReference(
            game=groups.get("game", ""),
            category=groups.get("category", ""),
            slug=groups.get("slug", ""),
            file_id=file_id,
        )
    return ParsedReference()


def _join(*parts: str) -> str:
    present = [p for p in parts if p]
    if not present:
        return ""
    return os.path.normpath(os.path.join(*present))


def get_path_for_file(
    game_id: int,
    class_id: int,
    category_id: int,
    slug: str,
    meta_folder: str = "",
    meta_folder_base: str = "",
) -> str:
    """Return where the metadata file for a project is stored.

    An explicit meta folder wins; otherwise the game's default folder for
    the class or category is used, falling back to the base folder itself.
    """
    file_name = slug + META_EXTENSION
    if not meta_folder:
        folders = DEFAULT_FOLDERS.get(game_id)
        if folders is not None:
            folder = folders.get(class_id)
            if folder is None:
                folder = folders.get(category_id)
            if folder is not None:
                return _join(meta_folder_base, folder, file_name)
        meta_folder = "."
    return _join(meta_folder_base, meta_folder, file_name)


def project_url(project_id: int) -> str:
    """Return the CurseForge web page of a project."""
    return f"{PROJECT_URL_BASE}{project_id}"


def create_modlist(entries: Iterable[ModlistEntry]) -> str:
    """Render the modlist.html placed in a CurseForge export."""
    lines = ["<ul>\r\n"]
    for entry in entries:
        if entry.project_id is None:
            lines.append(f"<li>{entry.name}</li>\r\n")
        else:
            lines.append(
                f'<li><a href="{project_url(entry.project_id)}">{entry.name}</a></li>\r\n'
            )
    lines.append("</ul>\r\n")
    return "".join(lines)