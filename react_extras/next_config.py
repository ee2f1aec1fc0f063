"""Ensure a Next.js project builds with ``output: "standalone"``.

The generated Dockerfile copies ``.next/standalone``, which only exists when
the Next.js config asks for it. The config file is patched textually; when
no safe insertion point is found the user is asked to edit it by hand.
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from react_extras.detectors import get_next_config_path

STANDALONE_CONFIG = """\
import type { NextConfig } from "next";

const nextConfig: NextConfig = {
    output: "standalone",
};

export default nextConfig;
"""

STANDALONE_LINE = '\n    output: "standalone",'

# Tried in order; the first one that matches is patched
INSERTION_PATTERNS = [
    re.compile(r"(const\s+\w+:\s*NextConfig\s*=\s*\{)"),
    re.compile(r"(module\.exports\s*=\s*\{)"),
    re.compile(r"(export\s+default\s*\{)"),
]


class NextConfigStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    ALREADY_CONFIGURED = "already-configured"
    MANUAL_REQUIRED = "manual-required"


@dataclass(frozen=True)
class NextConfigResult:
    status: NextConfigStatus
    path: Path
    message: str


def _io_failure(path: Path, error: Exception) -> NextConfigResult:
    return NextConfigResult(
        NextConfigStatus.MANUAL_REQUIRED,
        path,
        f"Could not update {path.name} ({error})"
        " - please add output: 'standalone' manually",
    )


def ensure_standalone_output(cwd: Path) -> NextConfigResult:
    """Create or patch next.config.* so that it sets standalone output.

    I/O and decoding failures are reported as MANUAL_REQUIRED, never raised.
    """
    existing_path = get_next_config_path(cwd)

    if existing_path is None:
        new_path = cwd / "next.config.ts"
        try:
            new_path.write_text(STANDALONE_CONFIG, encoding="utf-8")
        except OSError as e:
            return _io_failure(new_path, e)
        return NextConfigResult(
            NextConfigStatus.CREATED, new_path, "Created next.config.ts with standalone output"
        )

    try:
        content = existing_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return _io_failure(existing_path, e)

    if '"standalone"' in content or "'standalone'" in content:
        return NextConfigResult(
            NextConfigStatus.ALREADY_CONFIGURED,
            existing_path,
            f"{existing_path.name} already has standalone output",
        )

    if "output:" in content or '"output"' in content:
        return NextConfigResult(
            NextConfigStatus.MANUAL_REQUIRED,
            existing_path,
            f"{existing_path.name} has a different output setting"
            " - please update it manually to output: 'standalone'",
        )

    for pattern in INSERTION_PATTERNS:
        updated, count = pattern.subn(lambda m: m.group(1) + STANDALONE_LINE, content, count=1)
        if count:
            try:
                existing_path.write_text(updated, encoding="utf-8")
            except OSError as e:
                return _io_failure(existing_path, e)
            return NextConfigResult(
                NextConfigStatus.UPDATED,
                existing_path,
                f"Added standalone output to {existing_path.name}",
            )

    return NextConfigResult(
        NextConfigStatus.MANUAL_REQUIRED,
        existing_path,
        f"Could not update {existing_path.name} automatically"
        " - please add output: 'standalone' manually",
    )
