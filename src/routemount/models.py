"""Data models for routemount."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from enum import auto
from pathlib import Path
from pathlib import PurePosixPath
from typing import TYPE_CHECKING
from typing import Self

if TYPE_CHECKING:
    from routemount.registry import Registry

STUB_TEMPLATE = "export {{ default }} from '{spec}';\nexport * from '{spec}';\n"


def path_segments(value: str | None) -> tuple[str, ...]:
    """Split a route path into segments, dropping empty and "." parts.

    Args:
        value: Slash-separated path such as "team/[teamId]/" or "."

    Returns:
        Tuple of non-empty segments (empty for the root)

    Raises:
        ValueError: If any segment is ".."
    """
    if not value:
        return ()
    normalized = value.replace("\\", "/")
    segments = tuple(part for part in normalized.split("/") if part not in ("", "."))
    if ".." in segments:
        raise ValueError(f"'..' is not allowed in route path '{value}'")
    return segments


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass
class ExposeEntry:
    """A named group of route files a package makes available to others."""

    name: str  # Registry key consumers reference
    internal_path: str = "."  # Relative to the package's app/ directory
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from a manifest ``exposeRoutes`` entry.

        Raises:
            KeyError: If ``name`` is missing
            TypeError: If a field has the wrong type
            ValueError: If ``internalPath`` leaves the app/ directory
        """
        if not isinstance(data, dict):
            raise TypeError("exposeRoutes entries must be objects")
        internal_path = _optional_str(data, "internalPath") or "."
        path_segments(internal_path)
        return cls(
            name=_require_str(data, "name"),
            internal_path=internal_path,
            description=_optional_str(data, "description"),
        )


@dataclass
class MountGroup:
    """Where, under a consumer's tree, providers' route groups appear."""

    name: str
    base_route: str = "."
    features: dict[str, str] = field(default_factory=dict)  # key -> slug
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from a manifest ``mountRoutes`` entry.

        Raises:
            KeyError: If ``name`` or ``features`` is missing
            TypeError: If a field has the wrong type
            ValueError: If ``baseRoute`` or a slug climbs out with ".."
        """
        if not isinstance(data, dict):
            raise TypeError("mountRoutes entries must be objects")
        features = data["features"]
        if not isinstance(features, dict) or not all(
            isinstance(slug, str) for slug in features.values()
        ):
            raise TypeError("'features' must map registry keys to slug strings")
        base_route = _optional_str(data, "baseRoute") or "."
        path_segments(base_route)
        for slug in features.values():
            path_segments(slug)
        return cls(
            name=_require_str(data, "name"),
            base_route=base_route,
            features=dict(features),
            description=_optional_str(data, "description"),
        )


@dataclass
class Manifest:
    """A package's routes.config.json contents."""

    expose_routes: list[ExposeEntry] = field(default_factory=list)
    mount_routes: list[MountGroup] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from the parsed manifest object."""
        if not isinstance(data, dict):
            raise TypeError("manifest must be a JSON object")
        expose = data.get("exposeRoutes")
        mount = data.get("mountRoutes")
        if expose is None:
            expose = []
        if mount is None:
            mount = []
        if not isinstance(expose, list):
            raise TypeError("'exposeRoutes' must be a list")
        if not isinstance(mount, list):
            raise TypeError("'mountRoutes' must be a list")
        return cls(
            expose_routes=[ExposeEntry.from_dict(entry) for entry in expose],
            mount_routes=[MountGroup.from_dict(group) for group in mount],
        )


@dataclass(frozen=True)
class Package:
    """A workspace package that may expose or mount routes."""

    name: str  # From package.json, falls back to the directory name
    package_dir: Path  # Absolute

    @property
    def app_dir(self) -> Path:
        return self.package_dir / "app"


@dataclass
class RegistryItem:
    """Route files owned by one registry key."""

    provider_id: str
    internal_path: str
    route_files: list[str]  # POSIX paths relative to app/<internal_path>
    description: str | None = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        data = {
            "providerId": self.provider_id,
            "internalPath": self.internal_path,
            "routeFiles": list(self.route_files),
        }
        if self.description is not None:
            data["description"] = self.description
        return data


@dataclass
class ResolvedMount:
    """One provider group placed at one prefix of the host tree."""

    provider_id: str
    registry_key: str
    internal_path: str
    route_files: list[str]
    mount_prefix: tuple[str, ...]

    @property
    def url_path(self) -> str:
        """Mount prefix as a URL-style path, "/" for the root."""
        return "/" + "/".join(self.mount_prefix)

    def import_specifier(self, route_file: str) -> str:
        """Module specifier the stub for route_file re-exports from.

        The suffix is stripped and separators are normalized to "/".
        """
        rel = str(PurePosixPath(route_file.replace("\\", "/")).with_suffix(""))
        parts = (self.provider_id, "app", *path_segments(self.internal_path), rel)
        return "/".join(parts)


class DiagnosticKind(Enum):
    """Non-fatal problems found while building or resolving."""

    UNKNOWN_REGISTRY_KEY = auto()
    MISSING_INTERNAL_PATH = auto()
    DUPLICATE_REGISTRY_KEY = auto()


@dataclass
class Diagnostic:
    """A non-fatal problem attributed to one package."""

    kind: DiagnosticKind
    package: str
    message: str


@dataclass
class Stub:
    """A generated re-export file."""

    path: Path  # Absolute location inside the output root
    import_specifier: str

    @property
    def content(self) -> str:
        return STUB_TEMPLATE.format(spec=self.import_specifier)


@dataclass
class GenerationPlan:
    """Plan for what a generation run would write."""

    host: Package
    output_root: Path
    declaration_path: Path | None
    registry: "Registry"
    mounts: list[ResolvedMount]
    stubs: list[Stub]
    diagnostics: list[Diagnostic]

