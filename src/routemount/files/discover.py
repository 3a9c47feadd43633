"""File and package discovery operations."""

from collections.abc import Iterable
from pathlib import Path

ROUTE_FILE_STEMS = frozenset(
    {"page", "layout", "loading", "error", "head", "not-found", "template", "route"}
)
ROUTE_FILE_SUFFIXES = frozenset({".js", ".jsx", ".ts", ".tsx"})

PACKAGE_FILE = "package.json"
_SKIPPED_DIRS = frozenset({"node_modules"})


def is_route_file(name: str) -> bool:
    """Check if a filename is a recognized route file (e.g. page.tsx)."""
    path = Path(name)
    return path.stem in ROUTE_FILE_STEMS and path.suffix in ROUTE_FILE_SUFFIXES


def discover_route_files(root_dir: Path, exclude: Iterable[Path] = ()) -> list[str]:
    """Discover route files below a directory.

    Args:
        root_dir: Directory to scan
        exclude: Directories whose subtrees are not scanned

    Returns:
        Forward-slash paths relative to root_dir, sorted so plans are stable.
        Empty if root_dir does not exist.
    """
    if not root_dir.is_dir():
        return []

    excluded = {path.resolve() for path in exclude}
    files = []
    for dirpath, dirnames, filenames in root_dir.walk():
        if excluded:
            dirnames[:] = [
                name for name in dirnames if (dirpath / name).resolve() not in excluded
            ]
        for filename in filenames:
            if is_route_file(filename):
                rel_path = (dirpath / filename).relative_to(root_dir)
                files.append(rel_path.as_posix())

    return sorted(files)


def discover_packages(workspace_dir: Path, exclude: Iterable[Path] = ()) -> list[Path]:
    """Discover package directories (those holding a package.json).

    Args:
        workspace_dir: Workspace root to scan
        exclude: Directories whose subtrees are not scanned

    Returns:
        Sorted list of absolute package directories. node_modules and hidden
        directories are never entered.
    """
    excluded = {path.resolve() for path in exclude}
    packages = []
    for dirpath, dirnames, filenames in workspace_dir.resolve().walk():
        # Prune in place so walk() skips these subtrees
        dirnames[:] = [
            name
            for name in dirnames
            if name not in _SKIPPED_DIRS
            and not name.startswith(".")
            and (dirpath / name) not in excluded
        ]
        if PACKAGE_FILE in filenames:
            packages.append(dirpath)

    return sorted(packages)
