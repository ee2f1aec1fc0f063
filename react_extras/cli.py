"""CLI entry point for react-extras."""

import argparse
import sys
from pathlib import Path

from react_extras import __version__
from react_extras.context import Context, Detection, Framework, PackageManager, Tooling
from react_extras.errors import Cancelled, ExtrasError, WriteError


def _print_detection(name: str, detection: Detection, label: str) -> None:
    suffix = " (inferred)" if detection.inferred else ""
    print(f"  {name:16s} {label}{suffix}")


def _detect(target: Path, args: argparse.Namespace) -> tuple[Context, list[str]]:
    """Run detection, apply command-line overrides, return context + warnings."""
    from react_extras.detectors import (
        build_context,
        detect_framework,
        detect_node_version,
        detect_package_manager,
        detect_tooling,
    )

    pm = detect_package_manager(target)
    if args.package_manager:
        pm = Detection(PackageManager(args.package_manager))
    framework = detect_framework(target)
    if args.framework:
        framework = Detection(Framework(args.framework))
    tooling = detect_tooling(target)
    if args.tooling:
        tooling = Detection(Tooling(args.tooling))
    node_version = detect_node_version()

    print(f"\n=== Project: {target} ===\n")
    _print_detection("Package manager:", pm, pm.value.label)
    _print_detection("Framework:", framework, framework.value.label)
    _print_detection("Tooling:", tooling, tooling.value.label)
    _print_detection("Node version:", node_version, node_version.value)
    print()

    warnings = []
    if pm.inferred:
        warnings.append(f"No lockfile found, assuming {pm.value.label}")
    if framework.inferred:
        warnings.append(f"Framework not detected, assuming {framework.value.label}")
    if tooling.inferred:
        warnings.append(f"Lint tooling not detected, assuming {tooling.value.label}")
    if node_version.inferred:
        warnings.append(f"Node.js not found, using version {node_version.value} in images")

    return build_context(target, pm, framework, tooling, node_version), warnings


def _check_target(directory: str) -> Path:
    """Resolve the project directory and require a readable package.json."""
    from react_extras.manifest import read_manifest

    target = Path(directory).resolve()
    if not target.is_dir():
        raise ExtrasError(f"'{target}' is not a directory.")

    # Parsed up front so a broken manifest aborts before anything else runs
    read_manifest(target)
    return target


def _select_groups(groups, args: argparse.Namespace):
    from react_extras.prompts import prompt_groups

    if args.yes:
        return list(groups)
    return prompt_groups(groups)


def _select_skipped(selected, target: Path, args: argparse.Namespace) -> set[str]:
    """Decide which existing files to leave alone. Returns their target paths."""
    from react_extras.copier import existing_files
    from react_extras.prompts import prompt_overwrite

    files = [f for group in selected for f in group.files]
    existing = existing_files(target, files)
    if not existing or args.force:
        return set()

    if args.yes:
        return {f.target_path for f in existing}

    overwrite = {f.target_path for f in prompt_overwrite(existing)}
    return {f.target_path for f in existing if f.target_path not in overwrite}


def _print_plan(ctx: Context, groups, skipped: set[str], requirements) -> None:
    print("  Files to write:")
    for group in groups:
        for f in group.files:
            action = "OVERWRITE" if (ctx.cwd / f.target_path).exists() else "CREATE"
            print(f"    {action}: {f.target_path}")
    for path in sorted(skipped):
        print(f"    SKIP (exists): {path}")

    if ctx.framework == Framework.NEXTJS:
        print("    UPDATE: next.config (standalone output)")

    mods = requirements.manifest_mods
    if mods:
        print("  package.json additions (existing keys are kept):")
        for key in mods.scripts:
            print(f"    {key} script")
        for key in mods.config:
            print(f"    {key} config")

    if requirements.dependencies:
        print("  Dev dependencies to install:")
        for package in requirements.dependencies:
            print(f"    {package}")
    print()


def _confirm_setup(args: argparse.Namespace) -> bool:
    from react_extras.prompts import prompt_proceed

    if args.yes:
        return True
    return prompt_proceed()


def _configure_next(ctx: Context) -> None:
    from react_extras.next_config import NextConfigStatus, ensure_standalone_output

    result = ensure_standalone_output(ctx.cwd)
    if result.status == NextConfigStatus.MANUAL_REQUIRED:
        print(f"  WARN: {result.message}")
    else:
        print(f"  NEXT: {result.message}")


def _write_files(ctx: Context, groups) -> list[str]:
    """Write every selected file; one failure does not stop the others."""
    from react_extras.copier import materialize

    failed = []
    for group in groups:
        for f in group.files:
            action = "OVERWRITE" if (ctx.cwd / f.target_path).exists() else "CREATE"
            try:
                materialize(ctx, f)
            except WriteError as e:
                print(f"  ERROR: {e}")
                failed.append(f.target_path)
                continue
            print(f"  {action}: {f.target_path}")
    return failed


def _patch_manifest(ctx: Context, requirements) -> None:
    from react_extras.manifest import patch_manifest

    if not requirements.manifest_mods:
        return

    result = patch_manifest(ctx.cwd, requirements.manifest_mods)
    if result.added:
        print(f"  UPDATE: package.json (added {', '.join(result.added)})")
    else:
        print("  SKIP: package.json already configured")


def _install(ctx: Context, requirements, args: argparse.Namespace) -> None:
    from react_extras.detectors import get_install_command
    from react_extras.installer import format_command, install_dev_dependencies

    if not requirements.dependencies:
        return

    command = format_command(get_install_command(ctx.package_manager, requirements.dependencies))
    if args.skip_install:
        print(f"  SKIP: install (run manually: {command})")
        return

    print(f"  INSTALL: {', '.join(requirements.dependencies)}")
    if install_dev_dependencies(ctx.cwd, ctx.package_manager, requirements.dependencies):
        print("  Dependencies installed.")
    else:
        print(f"  WARN: Failed to install dependencies. Run manually: {command}")


def cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    from react_extras.resolver import aggregate, resolve_groups

    target = _check_target(args.directory)
    ctx, warnings = _detect(target, args)
    for warning in warnings:
        print(f"  WARN: {warning}")

    groups = resolve_groups(ctx)
    selected = _select_groups(groups, args)
    if not selected:
        print("  Nothing selected.")
        return 0

    skipped = _select_skipped(selected, target, args)
    selected = [group.without(skipped) for group in selected]
    selected = [group for group in selected if group.files]

    requirements = aggregate(selected, ctx)
    _print_plan(ctx, selected, skipped, requirements)

    # next.config still needs standalone output when every file was kept
    if not selected and ctx.framework != Framework.NEXTJS:
        print("  Nothing to do: every selected file already exists.")
        return 0

    if args.dry_run:
        print("  Dry run: no files written.\n")
        return 0

    if not _confirm_setup(args):
        print("  Cancelled.")
        return 0

    print(f"\n=== Setting up {target} ===\n")

    if ctx.framework == Framework.NEXTJS:
        _configure_next(ctx)

    failed = _write_files(ctx, selected)
    _patch_manifest(ctx, requirements)
    _install(ctx, requirements, args)

    if failed:
        print(f"\n  Done with errors: could not write {', '.join(failed)}\n")
        return 1

    print("\n  Done! Next steps:")
    print("    1. Review the created files")
    print("    2. Update .github/workflows/deploy.yml with your settings")
    print("    3. Make a commit to test the pre-commit hook\n")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    """Handle the info subcommand."""
    from react_extras.resolver import aggregate, resolve_groups

    target = _check_target(args.directory)
    ctx, warnings = _detect(target, args)
    for warning in warnings:
        print(f"  WARN: {warning}")

    groups = resolve_groups(ctx)
    print("\n  Available groups:\n")
    for group in groups:
        print(f"  {group.label:20s} - {group.hint}")

    requirements = aggregate(groups, ctx)
    if requirements.dependencies:
        print(f"\n  Dev dependencies: {', '.join(requirements.dependencies)}")
    print()
    return 0


def _add_detection_overrides(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--package-manager",
        choices=[pm.value for pm in PackageManager],
        default=None,
        help="Override detected package manager",
    )
    parser.add_argument(
        "--framework",
        choices=[fw.value for fw in Framework],
        default=None,
        help="Override detected framework",
    )
    parser.add_argument(
        "--tooling",
        choices=[t.value for t in Tooling],
        default=None,
        help="Override detected lint/format tooling",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="react-extras",
        description="Add deployment, editor and pre-commit setup to a React project",
    )
    parser.add_argument("--version", action="version", version=f"react-extras {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    p_init = subparsers.add_parser("init", help="Generate config files in a project")
    p_init.add_argument("directory", nargs="?", default=".", help="Project directory (default: .)")
    p_init.add_argument(
        "--yes", "-y", action="store_true", help="Select everything and skip prompts"
    )
    p_init.add_argument("--force", action="store_true", help="Overwrite existing files")
    p_init.add_argument("--dry-run", action="store_true", help="Preview without writing files")
    p_init.add_argument(
        "--skip-install",
        action="store_true",
        help="Print the install command instead of running it",
    )
    _add_detection_overrides(p_init)

    # info
    p_info = subparsers.add_parser("info", help="Show detected setup (no writes)")
    p_info.add_argument("directory", nargs="?", default=".", help="Project directory (default: .)")
    _add_detection_overrides(p_info)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    commands = {
        "init": cmd_init,
        "info": cmd_info,
    }

    handler = commands[args.command]
    try:
        code = handler(args)
    except Cancelled:
        print("\n  Cancelled.")
        code = 0
    except ExtrasError as e:
        print(f"Error: {e}")
        code = 1
    sys.exit(code)
