"""Per-tooling preset data loaded from presets/tooling.yaml."""

from pathlib import Path

import yaml

from react_extras.context import Tooling
from react_extras.errors import AssetNotFound

PACKAGE_DIR = Path(__file__).parent.resolve()
PRESETS_DIR = PACKAGE_DIR / "presets"
TOOLING_PRESETS = PRESETS_DIR / "tooling.yaml"

REQUIRED_KEYS = ("check_script", "lint_staged", "vscode_extensions")


def load_tooling_presets(path: Path = TOOLING_PRESETS) -> dict:
    """Read the whole tooling preset file."""
    if not path.exists():
        raise AssetNotFound(f"Preset file '{path}' is missing from the installation")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data or {}


def get_tooling_preset(tooling: Tooling, path: Path = TOOLING_PRESETS) -> dict:
    """Return the preset for one toolchain.

    Raises AssetNotFound if the toolchain has no entry or the entry lacks a
    required key; both mean the installed package is broken.
    """
    presets = load_tooling_presets(path)
    preset = presets.get(tooling.value)
    if not isinstance(preset, dict):
        available = ", ".join(sorted(presets))
        raise AssetNotFound(f"No preset for tooling '{tooling.value}' (available: {available})")

    missing = [key for key in REQUIRED_KEYS if key not in preset]
    if missing:
        raise AssetNotFound(
            f"Preset '{tooling.value}' is missing {', '.join(missing)} in {path.name}"
        )

    return preset
