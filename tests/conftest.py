"""Shared fixtures for building throwaway workspaces."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def workspace(tmp_path):
    """Workspace root directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    (root / "package.json").write_text(json.dumps({"name": "monorepo"}))
    return root


@pytest.fixture
def make_package(workspace):
    """Factory creating a package with package.json, manifest and app files.

    Usage: make_package("features/docs", manifest={...}, routes=["page.tsx"])
    """

    def _make(
        rel_dir: str,
        name: str | None = None,
        manifest: dict | None = None,
        routes: tuple[str, ...] | list[str] = (),
    ) -> Path:
        package_dir = workspace / rel_dir
        package_dir.mkdir(parents=True, exist_ok=True)
        (package_dir / "package.json").write_text(
            json.dumps({"name": name or package_dir.name})
        )
        if manifest is not None:
            (package_dir / "routes.config.json").write_text(json.dumps(manifest))
        for route in routes:
            route_path = package_dir / "app" / route
            route_path.parent.mkdir(parents=True, exist_ok=True)
            route_path.write_text("export default function Page() { return null; }\n")
        return package_dir

    return _make
