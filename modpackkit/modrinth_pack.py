"""The modrinth.index.json manifest written into .mrpack files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

_UINT32_MAX = 0xFFFFFFFF

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _sorted_map(mapping: dict[str, str]) -> dict[str, str]:
    return {key: mapping[key] for key in sorted(mapping)}


@dataclass
class FileEnv:
    """Whether a file is required, optional or unsupported on each side."""

    client: str
    server: str

    def to_json(self) -> dict[str, Any]:
        return {"client": self.client, "server": self.server}


@dataclass
class PackFile:
    """One downloadable file listed in the manifest."""

    path: str
    hashes: dict[str, str] = field(default_factory=dict)
    env: Optional[FileEnv] = None
    downloads: list[str] = field(default_factory=list)
    file_size: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.file_size <= _UINT32_MAX:
            raise ValueError(f"file size out of range: {self.file_size}")

    def to_json(self) -> dict[str, Any]:
        """Return the file as a JSON-ready dict in manifest field order."""
        return {
            "path": self.path,
            "hashes": _sorted_map(self.hashes),
            "env": self.env.to_json() if self.env is not None else None,
            "downloads": list(self.downloads),
            "fileSize": self.file_size,
        }


@dataclass
class Pack:
    """The whole manifest of a Modrinth modpack."""

    version_id: str
    name: str
    format_version: int = 1
    game: str = "minecraft"
    summary: str = ""
    files: list[PackFile] = field(default_factory=list)
    dependencies: dict[str, str] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        """Return the manifest as a JSON-ready dict; an empty summary is left out."""
        data: dict[str, Any] = {
            "formatVersion": self.format_version,
            "game": self.game,
            "versionId": self.version_id,
            "name": self.name,
        }
        if self.summary:
            data["summary"] = self.summary
        data["files"] = [f.to_json() for f in self.files]
        data["dependencies"] = _sorted_map(self.dependencies)
        return data

    def dumps(self) -> str:
        """Serialise the manifest with four-space indentation and a final newline."""
        text = json.dumps(self.to_json(), indent=4, ensure_ascii=False)
        for char, escaped in _HTML_ESCAPES.items():
            text = text.replace(char, escaped)
        return text + "\n"