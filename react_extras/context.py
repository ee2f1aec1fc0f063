"""Detected environment facts shared by every resolution and generator call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

T = TypeVar("T")


class PackageManager(str, Enum):
    """Package managers with a recognizable lockfile."""

    BUN = "bun"
    PNPM = "pnpm"
    YARN = "yarn"
    NPM = "npm"

    @property
    def label(self) -> str:
        return self.value


class Framework(str, Enum):
    """Supported web frameworks."""

    NEXTJS = "nextjs"
    VITE_TANSTACK_ROUTER = "vite-tanstack-router"

    @property
    def label(self) -> str:
        labels: dict[Framework, str] = {
            Framework.NEXTJS: "Next.js",
            Framework.VITE_TANSTACK_ROUTER: "Vite + TanStack Router",
        }
        return labels[self]


class Tooling(str, Enum):
    """Lint/format toolchains."""

    BIOME = "biome"
    ESLINT_PRETTIER = "eslint-prettier"

    @property
    def label(self) -> str:
        labels: dict[Tooling, str] = {
            Tooling.BIOME: "Biome",
            Tooling.ESLINT_PRETTIER: "ESLint + Prettier",
        }
        return labels[self]


@dataclass(frozen=True)
class Detection(Generic[T]):
    """A detection result; ``inferred`` means no positive evidence was found."""

    value: T
    inferred: bool = False


@dataclass(frozen=True)
class Context:
    """Immutable bundle of facts about the target project for a single run."""

    cwd: Path
    package_manager: PackageManager
    tooling: Tooling
    framework: Framework
    node_version: str = "22"
