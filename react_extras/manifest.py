"""package.json read/patch/write for react-extras.

Patching is additive only: a script or top-level key that already exists is
never touched, whatever its value. Running the same patch twice changes
nothing the second time.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

from react_extras.detectors import MANIFEST_NAME
from react_extras.errors import ManifestError, ManifestNotFound
from react_extras.resolver import ResolvedManifestMods


@dataclass
class PatchResult:
    """Human-readable descriptors of what was added, e.g. 'prepare script'."""

    added: list[str] = field(default_factory=list)


def manifest_path(cwd: Path) -> Path:
    return cwd / MANIFEST_NAME


def read_manifest(cwd: Path) -> dict:
    """Load package.json from *cwd*.

    Raises ManifestNotFound if it is missing and ManifestError if it is not
    a JSON object.
    """
    path = manifest_path(cwd)
    if not path.is_file():
        raise ManifestNotFound(f"No {MANIFEST_NAME} found in {cwd}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    return data


def write_manifest(cwd: Path, data: dict) -> None:
    """Write package.json with two-space indentation and a trailing newline."""
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    manifest_path(cwd).write_text(content, encoding="utf-8")


def patch_manifest(cwd: Path, mods: ResolvedManifestMods) -> PatchResult:
    """Add the proposed scripts and top-level config keys that are absent."""
    data = read_manifest(cwd)
    result = PatchResult()

    if mods.scripts:
        scripts = data.get("scripts")
        if scripts is None:
            scripts = {}
        elif not isinstance(scripts, dict):
            raise ManifestError(f"'scripts' in {MANIFEST_NAME} must be an object")

        for key, value in mods.scripts.items():
            if key not in scripts:
                scripts[key] = value
                result.added.append(f"{key} script")

        if scripts:
            data["scripts"] = scripts

    for key, value in mods.config.items():
        if key not in data:
            data[key] = value
            result.added.append(f"{key} config")

    if result.added:
        write_manifest(cwd, data)

    return result
