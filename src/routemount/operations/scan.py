"""Workspace scanning and registry building."""

from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path

from routemount.files.discover import discover_packages
from routemount.files.discover import discover_route_files
from routemount.files.manifest import load_manifest
from routemount.files.manifest import read_package_name
from routemount.models import Diagnostic
from routemount.models import DiagnosticKind
from routemount.models import Manifest
from routemount.models import Package
from routemount.models import RegistryItem
from routemount.models import path_segments
from routemount.registry import Registry


def find_packages(workspace_dir: Path, host: Package) -> list[Package]:
    """Find every package in the workspace.

    The host's app/ tree is not scanned, and the host is always included
    even when it has no package.json.

    Args:
        workspace_dir: Workspace root
        host: The host application package

    Returns:
        Packages sorted by directory
    """
    packages = []
    for package_dir in discover_packages(workspace_dir, exclude=[host.app_dir]):
        if package_dir == host.package_dir:
            packages.append(host)
        else:
            name = read_package_name(package_dir) or package_dir.name
            packages.append(Package(name=name, package_dir=package_dir))

    if host not in packages:
        packages.append(host)

    return sorted(packages, key=lambda p: str(p.package_dir))


def load_manifests(packages: list[Package]) -> dict[Package, Manifest]:
    """Load each package's manifest exactly once for a run.

    Returns:
        Manifests keyed by package, in the given order. Packages without a
        manifest are left out.

    Raises:
        ManifestError: If any package's manifest is malformed
    """
    manifests = {}
    for package in packages:
        manifest = load_manifest(package.package_dir)
        if manifest is not None:
            manifests[package] = manifest
    return manifests


def build_registry(
    manifests: Mapping[Package, Manifest], exclude: Iterable[Path] = ()
) -> tuple[Registry, list[Diagnostic]]:
    """Build the registry from every package's exposeRoutes.

    Args:
        manifests: Loaded manifests in scan order
        exclude: Directories never scanned for route files (generated output)

    Returns:
        The registry and any non-fatal diagnostics. A duplicate key keeps
        the last package scanned.
    """
    exclude = list(exclude)
    registry = Registry()
    diagnostics: list[Diagnostic] = []

    for package, manifest in manifests.items():
        if not package.app_dir.is_dir():
            continue

        for entry in manifest.expose_routes:
            internal_dir = package.app_dir.joinpath(*path_segments(entry.internal_path))
            if not internal_dir.is_dir():
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.MISSING_INTERNAL_PATH,
                        package=package.name,
                        message=(
                            f"'{entry.name}' skipped: {internal_dir} is not a directory"
                        ),
                    )
                )
                continue

            existing = registry.get(entry.name)
            if existing is not None:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.DUPLICATE_REGISTRY_KEY,
                        package=package.name,
                        message=(
                            f"'{entry.name}' already exposed by "
                            f"{existing.provider_id}; overriding"
                        ),
                    )
                )

            registry.items[entry.name] = RegistryItem(
                provider_id=package.name,
                internal_path=entry.internal_path,
                route_files=discover_route_files(internal_dir, exclude),
                description=entry.description,
            )

    return registry, diagnostics
