"""File writing for react-extras."""

from pathlib import Path

from react_extras.context import Context
from react_extras.errors import WriteError
from react_extras.resolver import ResolvedFile
from react_extras.templates import render_content

# Files under these directories must be executable
EXECUTABLE_DIRS = (".husky/",)

EXECUTABLE_MODE = 0o755


def existing_files(cwd: Path, files: list[ResolvedFile]) -> list[ResolvedFile]:
    """Return the files whose target already exists in *cwd*."""
    return [f for f in files if (cwd / f.target_path).exists()]


def write_file(cwd: Path, target_path: str, content: str) -> Path:
    """Write *content* to *target_path* under *cwd*, creating parent dirs.

    Existing files are overwritten; callers decide beforehand whether that
    is wanted.
    """
    dest_path = cwd / target_path

    # Path traversal protection
    if not dest_path.resolve().is_relative_to(cwd.resolve()):
        raise WriteError(f"Refusing to write outside the project: {target_path}")

    try:
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise WriteError(f"Could not write {target_path}: {e}") from e

    if target_path.startswith(EXECUTABLE_DIRS):
        try:
            dest_path.chmod(EXECUTABLE_MODE)
        except OSError:
            # Some filesystems have no POSIX permission bits
            print(f"  WARN: Could not mark {target_path} executable; run: chmod +x {target_path}")

    return dest_path


def materialize(ctx: Context, resolved_file: ResolvedFile) -> Path:
    """Render a resolved file's content and write it into the project."""
    content = render_content(resolved_file.content, ctx)
    return write_file(ctx.cwd, resolved_file.target_path, content)
