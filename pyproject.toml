[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "modpackkit"
version = "0.1.0"
description = "Building blocks for managing Minecraft modpacks: CurseForge, Modrinth and GitHub metadata, pack manifests and version ordering"
requires-python = ">=3.10"
dependencies = [
    "regex",
]
keywords = [
    "minecraft",
    "modpack",
    "curseforge",
    "modrinth",
    "mrpack",
    "murmur2",
    "flexver",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["modpackkit"]

[tool.hatch.build.targets.sdist]
include = [
    "modpackkit",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
