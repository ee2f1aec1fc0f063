"""Project detection for react-extras.

Inspects the target directory (lockfiles, config files, package.json) to
decide which package manager, framework and lint tooling the project uses.
Every detector returns a Detection; ``inferred=True`` marks a fallback.
"""

import json
import subprocess
from pathlib import Path

from react_extras.context import Context, Detection, Framework, PackageManager, Tooling

MANIFEST_NAME = "package.json"

# Checked in order, first hit wins
LOCK_FILE_MAP = {
    "bun.lock": PackageManager.BUN,
    "bun.lockb": PackageManager.BUN,
    "pnpm-lock.yaml": PackageManager.PNPM,
    "yarn.lock": PackageManager.YARN,
    "package-lock.json": PackageManager.NPM,
}

NEXTJS_CONFIG_FILES = [
    "next.config.ts",
    "next.config.js",
    "next.config.cjs",
    "next.config.mjs",
]

BIOME_CONFIG_FILES = ["biome.json", "biome.jsonc"]

INSTALL_COMMANDS = {
    PackageManager.BUN: ["bun", "add", "-D"],
    PackageManager.PNPM: ["pnpm", "add", "-D"],
    PackageManager.YARN: ["yarn", "add", "-D"],
    PackageManager.NPM: ["npm", "install", "-D"],
}

DEFAULT_NODE_VERSION = "22"


def detect_package_manager(path: Path) -> Detection[PackageManager]:
    """Detect package manager from the first lockfile present."""
    for lock_file, pm in LOCK_FILE_MAP.items():
        if (path / lock_file).exists():
            return Detection(pm)
    return Detection(PackageManager.NPM, inferred=True)


def detect_framework(path: Path) -> Detection[Framework]:
    """Detect Next.js by config file or dependency, else Vite + TanStack Router."""
    if get_next_config_path(path) is not None:
        return Detection(Framework.NEXTJS)

    deps = _read_all_deps(path)
    if "next" in deps:
        return Detection(Framework.NEXTJS)

    if "vite" in deps and "@tanstack/react-router" in deps:
        return Detection(Framework.VITE_TANSTACK_ROUTER)

    return Detection(Framework.VITE_TANSTACK_ROUTER, inferred=True)


def detect_tooling(path: Path) -> Detection[Tooling]:
    """Detect Biome by config file or dependency, else ESLint + Prettier."""
    if any((path / name).exists() for name in BIOME_CONFIG_FILES):
        return Detection(Tooling.BIOME)

    deps = _read_all_deps(path)
    if "@biomejs/biome" in deps:
        return Detection(Tooling.BIOME)

    if "eslint" in deps or "prettier" in deps:
        return Detection(Tooling.ESLINT_PRETTIER)

    return Detection(Tooling.ESLINT_PRETTIER, inferred=True)


def detect_node_version() -> Detection[str]:
    """Detect the local Node.js major version via ``node --version``."""
    try:
        result = subprocess.run(
            ["node", "--version"], capture_output=True, text=True, timeout=10, check=False
        )
    except (OSError, subprocess.TimeoutExpired):
        return Detection(DEFAULT_NODE_VERSION, inferred=True)

    major = result.stdout.strip().lstrip("v").split(".")[0]
    if result.returncode != 0 or not major.isdigit():
        return Detection(DEFAULT_NODE_VERSION, inferred=True)

    return Detection(major)


def get_next_config_path(path: Path) -> Path | None:
    """Return the first existing next.config.* file, if any."""
    for config_file in NEXTJS_CONFIG_FILES:
        candidate = path / config_file
        if candidate.exists():
            return candidate
    return None


def get_install_command(pm: PackageManager, packages: list[str]) -> list[str]:
    """Build the argv that installs *packages* as dev dependencies."""
    return [*INSTALL_COMMANDS[pm], *packages]


def build_context(
    path: Path,
    package_manager: Detection[PackageManager],
    framework: Detection[Framework],
    tooling: Detection[Tooling],
    node_version: Detection[str],
) -> Context:
    """Bundle detection results into the Context used for resolution."""
    return Context(
        cwd=path,
        package_manager=package_manager.value,
        tooling=tooling.value,
        framework=framework.value,
        node_version=node_version.value,
    )


def _read_all_deps(path: Path) -> set[str]:
    """Names from dependencies + devDependencies; empty if unreadable."""
    package_json = path / MANIFEST_NAME
    if not package_json.exists():
        return set()

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return set()  # Unreadable manifest -> no evidence, don't crash

    if not isinstance(data, dict):
        return set()

    deps: set[str] = set()
    for section in ("dependencies", "devDependencies"):
        entries = data.get(section) or {}
        if isinstance(entries, dict):
            deps.update(entries.keys())
    return deps
