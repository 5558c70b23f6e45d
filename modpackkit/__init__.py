"""Building blocks for managing Minecraft modpacks: versions, fingerprints, CurseForge, Modrinth and GitHub metadata."""

__version__ = "0.1.0"

__all__ = [
    "cfversions",
    "curseforge",
    "flexver",
    "github",
    "modrinth",
    "modrinth_pack",
    "murmur2",
    "packinterop",
]