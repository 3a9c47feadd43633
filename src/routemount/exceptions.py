"""Custom exceptions for routemount."""

from pathlib import Path


class RouteMountError(Exception):
    """Base exception for routemount."""


class ManifestError(RouteMountError):
    """A package's routes manifest exists but cannot be loaded."""

    def __init__(self, package_dir: Path, detail: str):
        self.package_dir = package_dir
        self.detail = detail
        super().__init__(f"Invalid routes manifest in {package_dir}: {detail}")


class ConfigError(RouteMountError):
    """Workspace configuration file is invalid or malformed."""


class HostNotFoundError(RouteMountError):
    """Host application directory does not exist."""


class StubPathError(RouteMountError):
    """A planned stub would be written outside the output root."""

    def __init__(self, path: Path, output_root: Path):
        self.path = path
        self.output_root = output_root
        super().__init__(f"Refusing to write stub outside {output_root}: {path}")
