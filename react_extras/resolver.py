"""Resolve the template registry against a Context.

Filters definitions by their ``when`` predicates, evaluates computed target
paths, and aggregates the dev dependencies and package.json changes that a
selection of files requires.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from typing import Any

from react_extras.context import Context
from react_extras.templates import (
    TEMPLATE_GROUPS,
    ContentResolver,
    ManifestMods,
    TemplateDefinition,
    TemplateGroup,
    evaluate,
)


@dataclass(frozen=True)
class ResolvedFile:
    """A definition evaluated against a Context.

    ``order`` is (group index, file index) in the registry.
    """

    target_path: str
    label: str
    content: ContentResolver
    definition: TemplateDefinition
    order: tuple[int, ...]


@dataclass(frozen=True)
class ResolvedGroup:
    label: str
    hint: str
    files: tuple[ResolvedFile, ...]
    packages: tuple[str, ...]
    manifest_mods: tuple[ManifestMods, ...]
    order: tuple[int, ...]

    @property
    def target_paths(self) -> list[str]:
        return [f.target_path for f in self.files]

    def without(self, paths: Iterable[str]) -> ResolvedGroup:
        """Copy of this group minus files whose target path is in *paths*."""
        skipped = set(paths)
        files = tuple(f for f in self.files if f.target_path not in skipped)
        return replace(self, files=files, hint=_hint(files))


@dataclass
class ResolvedManifestMods:
    scripts: dict[str, str] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.scripts or self.config)


@dataclass
class Requirements:
    """What a selection needs beyond writing its files."""

    dependencies: list[str] = field(default_factory=list)
    manifest_mods: ResolvedManifestMods = field(default_factory=ResolvedManifestMods)


def _hint(files: Iterable[ResolvedFile]) -> str:
    return ", ".join(f.target_path for f in files)


def _resolve_group_files(
    ctx: Context, group: TemplateGroup, group_index: int
) -> tuple[ResolvedFile, ...]:
    resolved = []
    for file_index, definition in enumerate(group.files):
        if not definition.applies(ctx):
            continue
        resolved.append(
            ResolvedFile(
                target_path=evaluate(definition.target_path, ctx),
                label=definition.label,
                content=definition.content,
                definition=definition,
                order=(group_index, file_index),
            )
        )
    return tuple(resolved)


def resolve_files(
    ctx: Context, registry: Iterable[TemplateGroup] = TEMPLATE_GROUPS
) -> list[ResolvedFile]:
    """Flat list of every file that applies to *ctx*, in registry order."""
    files: list[ResolvedFile] = []
    for group_index, group in enumerate(registry):
        files.extend(_resolve_group_files(ctx, group, group_index))
    return files


def resolve_groups(
    ctx: Context, registry: Iterable[TemplateGroup] = TEMPLATE_GROUPS
) -> list[ResolvedGroup]:
    """Groups that apply to *ctx*, in registry order.

    Groups whose every file is filtered out are dropped so they are never
    offered as a choice that does nothing.
    """
    groups: list[ResolvedGroup] = []
    for group_index, group in enumerate(registry):
        files = _resolve_group_files(ctx, group, group_index)
        if not files:
            continue
        groups.append(
            ResolvedGroup(
                label=group.label,
                hint=_hint(files),
                files=files,
                packages=group.packages,
                manifest_mods=group.manifest_mods,
                order=(group_index,),
            )
        )
    return groups


def _proposals(
    item: ResolvedGroup | ResolvedFile,
) -> Iterator[tuple[tuple[str, ...], tuple[ManifestMods, ...]]]:
    """(packages, manifest mods) pairs contributed by *item*, group level first."""
    if isinstance(item, ResolvedGroup):
        yield item.packages, item.manifest_mods
        for resolved_file in item.files:
            yield from _proposals(resolved_file)
    else:
        yield item.definition.packages, item.definition.manifest_mods


def aggregate(selected: Iterable[ResolvedGroup | ResolvedFile], ctx: Context) -> Requirements:
    """Merge dependencies and package.json changes for a selection.

    Items are walked in registry order whatever order they were passed in.
    The first registered proposal for a script or config key wins; later
    proposals for the same key are ignored.
    """
    requirements = Requirements()
    mods = requirements.manifest_mods

    for item in sorted(selected, key=lambda i: i.order):
        for packages, manifest_mods in _proposals(item):
            for package in packages:
                if package not in requirements.dependencies:
                    requirements.dependencies.append(package)

            for proposal in manifest_mods:
                if not proposal.applies(ctx):
                    continue
                for key, value in proposal.scripts.items():
                    if key not in mods.scripts:
                        mods.scripts[key] = evaluate(value, ctx)
                for key, value in proposal.config.items():
                    if key not in mods.config:
                        mods.config[key] = evaluate(value, ctx)

    return requirements
