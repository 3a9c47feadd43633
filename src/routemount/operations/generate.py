"""High-level operations for route stub generation."""

from collections.abc import Mapping
from pathlib import Path

from routemount.config import load_host_config
from routemount.exceptions import StubPathError
from routemount.files.declarations import write_declarations
from routemount.files.stubs import clear_output_root
from routemount.files.stubs import write_stub
from routemount.models import GenerationPlan
from routemount.models import ResolvedMount
from routemount.models import Stub
from routemount.operations.resolve import resolve_mounts
from routemount.operations.scan import build_registry
from routemount.operations.scan import find_packages
from routemount.operations.scan import load_manifests


def plan_stubs(mounts: list[ResolvedMount], output_root: Path) -> list[Stub]:
    """Compute one stub per route file per resolved mount.

    Two mounts landing on the same path keep the later one.

    Raises:
        StubPathError: If a stub path falls outside output_root
    """
    root = output_root.resolve()
    stubs: dict[Path, Stub] = {}
    for mount in mounts:
        mount_dir = output_root.joinpath(*mount.mount_prefix)
        for route_file in mount.route_files:
            path = mount_dir.joinpath(*route_file.split("/"))
            if not path.resolve().is_relative_to(root):
                raise StubPathError(path, output_root)
            stubs[path] = Stub(
                path=path, import_specifier=mount.import_specifier(route_file)
            )
    return list(stubs.values())


def compute_generation_plan(
    workspace_dir: Path,
    host: str | Path | None = None,
    declarations: bool = True,
    environ: Mapping[str, str] | None = None,
) -> GenerationPlan:
    """Compute a plan for regenerating the host's route stubs.

    Reads the filesystem only; nothing is written.

    Args:
        workspace_dir: Workspace root holding all packages
        host: Explicit host application path (overrides env and config)
        declarations: If False, the plan has no declaration file
        environ: Environment used for host selection (default: os.environ)

    Returns:
        GenerationPlan with the registry, resolved mounts, stubs and any
        non-fatal diagnostics

    Raises:
        FileNotFoundError: If workspace_dir does not exist
        NotADirectoryError: If workspace_dir is not a directory
        ConfigError: If the workspace config file is malformed
        HostNotFoundError: If the host application directory is missing
        ManifestError: If any package's manifest is malformed
    """
    config = load_host_config(workspace_dir, host, environ)

    packages = find_packages(config.workspace_dir, config.host)
    manifests = load_manifests(packages)
    registry, diagnostics = build_registry(manifests, exclude=[config.output_root])
    mounts, resolve_diagnostics = resolve_mounts(manifests, registry, config.host)

    return GenerationPlan(
        host=config.host,
        output_root=config.output_root,
        declaration_path=config.declaration_path if declarations else None,
        registry=registry,
        mounts=mounts,
        stubs=plan_stubs(mounts, config.output_root),
        diagnostics=diagnostics + resolve_diagnostics,
    )


def execute_generation_plan(
    plan: GenerationPlan, snapshot_path: Path | None = None
) -> None:
    """Execute a generation plan: wipe the output root, then write everything.

    Args:
        plan: GenerationPlan to execute
        snapshot_path: If given, also write the registry debug snapshot here

    Raises:
        OSError: If any file or directory cannot be removed or written
    """
    clear_output_root(plan.output_root)

    for stub in plan.stubs:
        write_stub(stub)

    if plan.declaration_path is not None:
        write_declarations(plan.registry, plan.declaration_path)

    if snapshot_path is not None:
        plan.registry.save(snapshot_path)
