"""Exceptions raised by react-extras."""


class ExtrasError(Exception):
    """Base class for errors reported to the user."""


class ManifestNotFound(ExtrasError):
    """No package.json in the target directory."""


class ManifestError(ExtrasError):
    """package.json exists but cannot be used (invalid JSON, wrong shape)."""


class AssetNotFound(ExtrasError):
    """A bundled template or preset is missing from the installation."""


class WriteError(ExtrasError):
    """A generated file could not be written."""


class Cancelled(ExtrasError):
    """The user aborted an interactive prompt."""
