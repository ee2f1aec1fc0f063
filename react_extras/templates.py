"""Template registry for react-extras.

Declares every file the tool can write, grouped the way they are offered
to the user. Definitions are static; anything that depends on the target
project is expressed as a Computed value or a ``when`` predicate and is
evaluated later against a Context by the resolver.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, TypeVar

from react_extras.context import Context, Framework, Tooling
from react_extras.errors import AssetNotFound
from react_extras.generators import (
    check_script,
    generate_config_ts,
    generate_deploy_yml,
    generate_dockerfile,
    generate_extensions_json,
    generate_pre_commit_hook,
    lint_staged_config,
)

PACKAGE_DIR = Path(__file__).parent.resolve()
TEMPLATES_DIR = PACKAGE_DIR / "templates"

T = TypeVar("T")

Predicate = Callable[[Context], bool]


@dataclass(frozen=True)
class Computed(Generic[T]):
    """A field value derived from the Context at resolution time."""

    fn: Callable[[Context], T]


def evaluate(value: Any, ctx: Context) -> Any:
    """Single evaluation point: Computed values are called, literals pass through."""
    if isinstance(value, Computed):
        return value.fn(ctx)
    return value


@dataclass(frozen=True)
class StaticContent:
    """File bytes come from a bundled asset under templates/."""

    asset_name: str


@dataclass(frozen=True)
class DynamicContent:
    """File bytes come from a generator called with the Context."""

    generate: Callable[[Context], str]


ContentResolver = StaticContent | DynamicContent


def read_asset(asset_name: str, templates_dir: Path = TEMPLATES_DIR) -> str:
    """Read a bundled template asset."""
    asset = templates_dir / asset_name
    if not asset.is_file():
        raise AssetNotFound(f"Template asset '{asset_name}' is missing from {templates_dir}")
    return asset.read_text(encoding="utf-8")


def render_content(content: ContentResolver, ctx: Context) -> str:
    """Produce the text for *content*; the two resolver kinds are the only ones."""
    if isinstance(content, StaticContent):
        return read_asset(content.asset_name)
    if isinstance(content, DynamicContent):
        return content.generate(ctx)
    raise TypeError(f"Unknown content resolver: {content!r}")


@dataclass(frozen=True)
class ManifestMods:
    """Proposed additions to package.json.

    ``scripts`` go under the manifest's ``scripts`` map, ``config`` entries
    are top-level keys. Values may be Computed. A ``when`` predicate gates
    the whole proposal.
    """

    scripts: Mapping[str, str | Computed[str]] = field(default_factory=dict)
    config: Mapping[str, Any] = field(default_factory=dict)
    when: Predicate | None = None

    def applies(self, ctx: Context) -> bool:
        return self.when is None or self.when(ctx)


@dataclass(frozen=True)
class TemplateDefinition:
    """One potential output file."""

    target_path: str | Computed[str]
    label: str
    content: ContentResolver
    when: Predicate | None = None
    packages: tuple[str, ...] = ()
    manifest_mods: tuple[ManifestMods, ...] = ()

    def applies(self, ctx: Context) -> bool:
        return self.when is None or self.when(ctx)


@dataclass(frozen=True)
class TemplateGroup:
    """A user-selectable bundle of definitions sharing a label."""

    label: str
    files: tuple[TemplateDefinition, ...]
    packages: tuple[str, ...] = ()
    manifest_mods: tuple[ManifestMods, ...] = ()


def _under_src(relative: str) -> Computed[str]:
    """Place *relative* under src/ when the project has a src directory."""

    def resolve(ctx: Context) -> str:
        if (ctx.cwd / "src").is_dir():
            return f"src/{relative}"
        return relative

    return Computed(resolve)


def _not_nextjs(ctx: Context) -> bool:
    return ctx.framework != Framework.NEXTJS


def _uses_biome(ctx: Context) -> bool:
    return ctx.tooling == Tooling.BIOME


TEMPLATE_GROUPS: tuple[TemplateGroup, ...] = (
    TemplateGroup(
        label="Deployment + CI/CD",
        files=(
            TemplateDefinition(
                target_path="Dockerfile",
                label="Dockerfile",
                content=DynamicContent(generate_dockerfile),
            ),
            TemplateDefinition(
                target_path=".github/workflows/deploy.yml",
                label="GitHub Actions workflow",
                content=DynamicContent(generate_deploy_yml),
            ),
            TemplateDefinition(
                target_path="nginx.conf",
                label="Nginx config",
                content=StaticContent("nginx.conf"),
                when=_not_nextjs,
            ),
        ),
        manifest_mods=(
            ManifestMods(
                scripts={
                    "check": Computed(check_script),
                    "typecheck": "tsc --noEmit",
                }
            ),
        ),
    ),
    TemplateGroup(
        label="Editor Setup",
        files=(
            TemplateDefinition(
                target_path=".editorconfig",
                label="EditorConfig",
                content=StaticContent("editorconfig"),
            ),
            TemplateDefinition(
                target_path=".vscode/extensions.json",
                label="VS Code extensions",
                content=DynamicContent(generate_extensions_json),
            ),
            TemplateDefinition(
                target_path=".zed/settings.json",
                label="Zed settings",
                content=StaticContent("zed-settings.json"),
                when=_uses_biome,
            ),
        ),
    ),
    TemplateGroup(
        label="Pre-commit Hook",
        files=(
            TemplateDefinition(
                target_path=".husky/pre-commit",
                label="Husky pre-commit hook",
                content=DynamicContent(generate_pre_commit_hook),
            ),
        ),
        packages=("husky", "lint-staged"),
        manifest_mods=(
            ManifestMods(
                scripts={"prepare": "husky"},
                config={"lint-staged": Computed(lint_staged_config)},
            ),
        ),
    ),
    TemplateGroup(
        label="API Client",
        files=(
            TemplateDefinition(
                target_path=_under_src("lib/api-client.ts"),
                label="API client",
                content=StaticContent("lib/api-client.ts"),
            ),
            TemplateDefinition(
                target_path=_under_src("lib/config.ts"),
                label="API config",
                content=DynamicContent(generate_config_ts),
            ),
        ),
    ),
)
