"""Install dev dependencies with the project's package manager."""

import shlex
import subprocess
from pathlib import Path

from react_extras.context import PackageManager
from react_extras.detectors import get_install_command

INSTALL_TIMEOUT = 600


def format_command(argv: list[str]) -> str:
    """Shell-ready form of *argv* for "run manually" hints."""
    return shlex.join(argv)


def install_dev_dependencies(cwd: Path, pm: PackageManager, packages: list[str]) -> bool:
    """Run the install command in *cwd*. Returns False on any failure."""
    if not packages:
        return True

    argv = get_install_command(pm, packages)
    try:
        result = subprocess.run(
            argv,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=INSTALL_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired):
        return False

    return result.returncode == 0
