"""GitHub release data, release and asset selection, and update metadata."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

import regex

API_SERVER = "api.github.com"

# Matches any .jar asset whose name does not end in -api, -dev,
# -dev-preshadow or -sources before the extension.
DEFAULT_ASSET_PATTERN = r"^.+(?<!-api|-dev|-dev-preshadow|-sources)\.jar$"

_REPO_URL_RE = re.compile(r"^https?://(?:www\.)?github\.com/([^/]+/[^/]+)")


class AssetSelectionError(ValueError):
    """Raised when a release does not yield exactly one usable asset."""


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r}: expected a string, got {type(value).__name__}")
    return value


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {key!r}: expected an integer, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Repo:
    """A GitHub repository."""

    id: int = 0
    name: str = ""
    full_name: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Repo":
        """Build a repository from an API response; a missing full name is an error."""
        repo = cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            full_name=_str(data, "full_name"),
        )
        if not repo.full_name:
            raise ValueError("invalid json while fetching project")
        return repo


@dataclass(frozen=True)
class Asset:
    """A file attached to a release."""

    url: str = ""
    browser_download_url: str = ""
    name: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Asset":
        return cls(
            url=_str(data, "url"),
            browser_download_url=_str(data, "browser_download_url"),
            name=_str(data, "name"),
        )


@dataclass(frozen=True)
class Release:
    """A GitHub release and its assets."""

    url: str = ""
    tag_name: str = ""
    target_commitish: str = ""
    name: str = ""
    created_at: str = ""
    assets: tuple[Asset, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Release":
        raw_assets = data.get("assets")
        if raw_assets is None:
            raw_assets = []
        if not isinstance(raw_assets, list):
            raise TypeError("field 'assets': expected an array")
        return cls(
            url=_str(data, "url"),
            tag_name=_str(data, "tag_name"),
            target_commitish=_str(data, "target_commitish"),
            name=_str(data, "name"),
            created_at=_str(data, "created_at"),
            assets=tuple(Asset.from_json(a) for a in raw_assets),
        )


@dataclass
class UpdateData:
    """The [update.github] table of a metadata file."""

    slug: str = ""
    tag: str = ""
    branch: str = ""
    regex: str = ""

    def to_map(self) -> dict[str, str]:
        return {
            "slug": self.slug,
            "tag": self.tag,
            "branch": self.branch,
            "regex": self.regex,
        }

    @classmethod
    def from_map(cls, data: Mapping[str, Any]) -> "UpdateData":
        """Read update data; missing keys are empty, unknown keys are ignored."""
        return cls(
            slug=_str(data, "slug"),
            tag=_str(data, "tag"),
            branch=_str(data, "branch"),
            regex=_str(data, "regex"),
        )


def parse_repo_slug(arg: str) -> str:
    """Return the owner/name slug from a repository URL, or the argument itself."""
    match = _REPO_URL_RE.match(arg)
    if match is not None:
        return match.group(1)
    return arg


def select_latest_release(releases: Sequence[Release], branch: str = "") -> Release:
    """Return the newest release, or the newest one built from ``branch``."""
    if branch:
        for release in releases:
            if release.target_commitish == branch:
                return release
        raise LookupError(f"failed to find release for branch {branch}")
    if not releases:
        raise LookupError("no releases found")
    return releases[0]


def _compile(pattern: str) -> "regex.Pattern[str]":
    try:
        return regex.compile(pattern)
    except regex.error as exc:
        raise AssetSelectionError(f"invalid asset pattern {pattern!r}: {exc}") from exc


def match_assets(assets: Iterable[Asset], pattern: str = DEFAULT_ASSET_PATTERN) -> list[Asset]:
    """Return the assets whose names match the pattern, in order."""
    compiled = _compile(pattern)
    return [a for a in assets if compiled.search(a.name) is not None]


def select_asset(assets: Sequence[Asset], pattern: str = DEFAULT_ASSET_PATTERN) -> Asset:
    """Return the single asset matching the pattern."""
    if not assets:
        raise AssetSelectionError("release doesn't have any assets attached")
    matches = match_assets(assets, pattern)
    if not matches:
        raise AssetSelectionError("release doesn't have any assets matching regex")
    if len(matches) > 1:
        names = ", ".join(a.name for a in matches)
        raise AssetSelectionError(
            f"release has more than one asset matching regex: {names}"
        )
    return matches[0]


def pick_update_asset(assets: Sequence[Asset]) -> Asset:
    """Return the last .jar asset, or the first asset if none is a .jar."""
    if not assets:
        raise AssetSelectionError("release doesn't have any assets")
    chosen: Optional[Asset] = None
    for asset in assets:
        if asset.name.endswith(".jar"):
            chosen = asset
    return chosen if chosen is not None else assets[0]


def sha256_hex(data: bytes) -> str:
    """Return the lowercase hex SHA-256 of the data."""
    return hashlib.sha256(bytes(data)).hexdigest()