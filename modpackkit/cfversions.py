"""Mapping of Minecraft versions to the names CurseForge files them under."""

from __future__ import annotations

import re
from typing import Iterable

from modpackkit.flexver import less

_SNAPSHOT_RE = re.compile(r"(?:Snapshot )?(\d+)w0?(0|[1-9]\d*)([a-z])", re.ASCII)

_SNAPSHOT_NAMES = ("-pre", " Pre-Release ", " Pre-release ", "-rc")

_INT64_MAX = 2**63 - 1

FABRIC_API_ID = 306612
QUILTED_FABRIC_API_ID = 634179
FABRIC_LANGUAGE_KOTLIN_ID = 308769
QUILT_KOTLIN_LIBRARIES_ID = 720410


def _snapshot_group(year: int, week: int) -> str | None:
    """Return the release a weekly snapshot belongs to, if known."""
    if year >= 22 and week >= 11:
        return "1.19"
    if (year == 21 and week >= 37) or year >= 22:
        return "1.18"
    if (year == 20 and week >= 45) or (year == 21 and week <= 20):
        return "1.17"
    if year == 20 and week >= 6:
        return "1.16"
    if year == 19 and week >= 34:
        return "1.15"
    if (year == 18 and week >= 43) or (year == 19 and week <= 14):
        return "1.14"
    if year == 18 and 30 <= week <= 33:
        return "1.13.1"
    if (year == 17 and week >= 43) or (year == 18 and week <= 22):
        return "1.13"
    if year == 17 and week == 31:
        return "1.12.1"
    if year == 17 and 6 <= week <= 18:
        return "1.12"
    if year == 16 and week == 50:
        return "1.11.1"
    if year == 16 and 32 <= week <= 44:
        return "1.11"
    if year == 16 and 20 <= week <= 21:
        return "1.10"
    if year == 16 and 14 <= week <= 15:
        return "1.9.3"
    if (year == 15 and week >= 31) or (year == 16 and week <= 7):
        return "1.9"
    if year == 14 and 2 <= week <= 34:
        return "1.8"
    if year == 13 and 47 <= week <= 49:
        return "1.7.4"
    if year == 13 and 36 <= week <= 43:
        return "1.7.2"
    if year == 13 and 16 <= week <= 26:
        return "1.6"
    if year == 13 and 11 <= week <= 12:
        return "1.5.1"
    if year == 13 and 1 <= week <= 10:
        return "1.5"
    if year == 12 and 49 <= week <= 50:
        return "1.4.6"
    if year == 12 and 32 <= week <= 42:
        return "1.4.2"
    if year == 12 and 15 <= week <= 30:
        return "1.3.1"
    if year == 12 and 3 <= week <= 8:
        return "1.2.1"
    if (year == 11 and week >= 47) or (year == 12 and week <= 1):
        return "1.1"
    return None


def get_curseforge_version(mc_version: str) -> str:
    """Return the CurseForge game version name for a Minecraft version."""
    for name in _SNAPSHOT_NAMES:
        index = mc_version.find(name)
        if index > -1:
            return mc_version[:index] + "-Snapshot"

    match = _SNAPSHOT_RE.search(mc_version)
    if match is None:
        return mc_version
    year = int(match.group(1))
    week = int(match.group(2))
    if year > _INT64_MAX or week > _INT64_MAX:
        return mc_version

    group = _snapshot_group(year, week)
    if group is None:
        return mc_version
    return group + "-Snapshot"


def get_curseforge_versions(mc_versions: Iterable[str]) -> list[str]:
    """Map each Minecraft version to its CurseForge name, keeping order."""
    return [get_curseforge_version(v) for v in mc_versions]


def map_dep_override(dep_id: int, is_quilt: bool, mc_version: str) -> int:
    """Swap Fabric library dependencies for their Quilt counterparts."""
    if is_quilt and dep_id == FABRIC_API_ID:
        return QUILTED_FABRIC_API_ID
    if is_quilt and dep_id == FABRIC_LANGUAGE_KOTLIN_ID:
        if less("1.19.1", mc_version) and less(mc_version, "2.0.0"):
            return QUILT_KOTLIN_LIBRARIES_ID
    return dep_id