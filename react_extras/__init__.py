"""react-extras: add deployment, editor and pre-commit setup to React projects."""

from react_extras.context import Context, Detection, Framework, PackageManager, Tooling

__version__ = "0.3.0"

__all__ = [
    "Context",
    "Detection",
    "Framework",
    "PackageManager",
    "Tooling",
    "__version__",
]
