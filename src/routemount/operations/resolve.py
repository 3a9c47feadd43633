"""Mount resolution.

Packages are visited once: the host first, then every other package in
lexical order of its directory. Each mount a consumer declares is placed
under every prefix at which that consumer has been mounted so far, and the
resulting prefix is recorded against the provider. A provider that is also
a consumer and is visited later therefore fans its own mounts out under all
of those prefixes.
"""

from collections.abc import Mapping

from routemount.models import Diagnostic
from routemount.models import DiagnosticKind
from routemount.models import Manifest
from routemount.models import Package
from routemount.models import ResolvedMount
from routemount.models import path_segments
from routemount.registry import Registry

ROOT_PREFIX: tuple[str, ...] = ()


def order_packages(packages: list[Package], host: Package) -> list[Package]:
    """Order packages for resolution: host first, then by directory path."""
    others = sorted(
        (p for p in packages if p.package_dir != host.package_dir),
        key=lambda p: str(p.package_dir),
    )
    return [host, *others]


def _record(
    index: dict[str, list[tuple[str, ...]]], package: str, prefix: tuple[str, ...]
) -> None:
    prefixes = index.setdefault(package, [])
    if prefix not in prefixes:
        prefixes.append(prefix)


def resolve_mounts(
    manifests: Mapping[Package, Manifest], registry: Registry, host: Package
) -> tuple[list[ResolvedMount], list[Diagnostic]]:
    """Resolve every mount declaration into host-tree prefixes.

    Args:
        manifests: Loaded manifests of all workspace packages
        registry: Registry built from the same manifests
        host: The host application package

    Returns:
        Resolved mounts in resolution order, and diagnostics for mounts of
        unknown registry keys (those mounts are skipped)
    """
    # package name -> prefixes it is mounted at, root-relative
    index: dict[str, list[tuple[str, ...]]] = {host.name: [ROOT_PREFIX]}
    mounts: list[ResolvedMount] = []
    diagnostics: list[Diagnostic] = []

    for package in order_packages(list(manifests), host):
        manifest = manifests.get(package)
        if manifest is None or not manifest.mount_routes:
            continue

        # Not mounted by anyone visited so far: mount at the root
        consumer_prefixes = list(index.get(package.name) or [ROOT_PREFIX])

        for group in manifest.mount_routes:
            base = path_segments(group.base_route)
            for key, slug in group.features.items():
                item = registry.get(key)
                if item is None:
                    diagnostics.append(
                        Diagnostic(
                            kind=DiagnosticKind.UNKNOWN_REGISTRY_KEY,
                            package=package.name,
                            message=(
                                f"mount group '{group.name}' references unknown "
                                f"registry key '{key}'"
                            ),
                        )
                    )
                    continue

                for consumer_prefix in consumer_prefixes:
                    mount_prefix = consumer_prefix + base + path_segments(slug)
                    mounts.append(
                        ResolvedMount(
                            provider_id=item.provider_id,
                            registry_key=key,
                            internal_path=item.internal_path,
                            route_files=item.route_files,
                            mount_prefix=mount_prefix,
                        )
                    )
                    _record(index, item.provider_id, mount_prefix)

    return mounts, diagnostics
