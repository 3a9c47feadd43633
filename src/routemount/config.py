"""Host application selection.

The host is chosen by, in order: an explicit override, the
``ROUTEMOUNT_HOST_APP`` environment variable, ``hostApp`` in the workspace's
``routemount.config.json``, and finally ``apps/web``.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from routemount.exceptions import ConfigError
from routemount.exceptions import HostNotFoundError
from routemount.files.manifest import read_package_name
from routemount.models import Package

HOST_ENV_VAR = "ROUTEMOUNT_HOST_APP"
CONFIG_FILE = "routemount.config.json"
DEFAULT_HOST_APP = "apps/web"
OUTPUT_GROUP = "(feature-routes)"
DECLARATION_FILE = "route-registry.d.ts"


@dataclass(frozen=True)
class HostConfig:
    """Where generation reads from and writes to. Immutable after creation."""

    workspace_dir: Path
    host: Package

    @property
    def output_root(self) -> Path:
        return self.host.app_dir / OUTPUT_GROUP

    @property
    def declaration_path(self) -> Path:
        return self.host.package_dir / DECLARATION_FILE


def read_config_file(workspace_dir: Path) -> dict:
    """Read the workspace config file.

    Returns:
        Parsed config, or an empty dict if the file does not exist

    Raises:
        ConfigError: If the file is not a valid JSON object
    """
    path = workspace_dir / CONFIG_FILE
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return data


def select_host_app(
    workspace_dir: Path,
    override: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> str | Path:
    """Pick the host application path by precedence, without validating it."""
    if override:
        return override

    if environ is None:
        environ = os.environ
    if environ.get(HOST_ENV_VAR):
        return environ[HOST_ENV_VAR]

    host_app = read_config_file(workspace_dir).get("hostApp")
    if host_app is not None:
        if not isinstance(host_app, str) or not host_app:
            raise ConfigError(f"'hostApp' in {CONFIG_FILE} must be a non-empty string")
        return host_app

    return DEFAULT_HOST_APP


def resolve_host_dir(
    workspace_dir: Path,
    override: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Resolve the host application directory to an absolute path.

    Relative selections are taken relative to workspace_dir.

    Raises:
        ConfigError: If the workspace config file is malformed
        HostNotFoundError: If the selected directory does not exist
    """
    workspace_dir = workspace_dir.resolve()
    host_app = select_host_app(workspace_dir, override, environ)
    host_dir = (workspace_dir / host_app).resolve()
    if not host_dir.is_dir():
        raise HostNotFoundError(
            f"Host application directory does not exist: {host_dir}"
        )
    return host_dir


def load_host_config(
    workspace_dir: Path,
    override: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> HostConfig:
    """Build the HostConfig for a workspace.

    Raises:
        FileNotFoundError: If workspace_dir does not exist
        NotADirectoryError: If workspace_dir is not a directory
        ConfigError: If the workspace config file is malformed
        HostNotFoundError: If the host application directory is missing
    """
    workspace_dir = workspace_dir.resolve()
    if not workspace_dir.exists():
        raise FileNotFoundError(f"Workspace directory does not exist: {workspace_dir}")
    if not workspace_dir.is_dir():
        raise NotADirectoryError(f"Workspace path is not a directory: {workspace_dir}")

    host_dir = resolve_host_dir(workspace_dir, override, environ)
    host_name = read_package_name(host_dir) or host_dir.name
    return HostConfig(
        workspace_dir=workspace_dir,
        host=Package(name=host_name, package_dir=host_dir),
    )
