"""Command-line interface for routemount."""

from pathlib import Path
from typing import Annotated

import typer

from routemount import __version__
from routemount.exceptions import ConfigError
from routemount.exceptions import HostNotFoundError
from routemount.exceptions import ManifestError
from routemount.exceptions import RouteMountError
from routemount.operations import compute_generation_plan
from routemount.operations import execute_generation_plan
from routemount.output import print_diagnostics
from routemount.output import print_generation_plan
from routemount.output import print_manifest_error
from routemount.output import print_registry
from routemount.registry import Registry

app = typer.Typer(help="Mount workspace packages' routes into a host app")

WorkspaceOption = Annotated[
    Path,
    typer.Option(
        "--workspace", "-w", help="Workspace root holding all packages (default: .)"
    ),
]
HostOption = Annotated[
    str | None,
    typer.Option(
        "--host",
        help="Host application path, relative to the workspace "
        "(default: $ROUTEMOUNT_HOST_APP, then routemount.config.json, then apps/web)",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"routemount {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = None,
) -> None:
    """Mount workspace packages' routes into a host app."""
    pass


@app.command()
def generate(
    workspace: WorkspaceOption = Path("."),
    host: HostOption = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Show what would be done")
    ] = False,
    declarations: Annotated[
        bool,
        typer.Option(
            "--declarations/--no-declarations",
            help="Write the route registry type declarations",
        ),
    ] = True,
    snapshot: Annotated[
        Path | None,
        typer.Option(
            help="Write a JSON snapshot of the registry here "
            "(also enabled by $ROUTEMOUNT_DEBUG_SNAPSHOT)",
        ),
    ] = None,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only print warnings and summary")
    ] = False,
) -> None:
    """Regenerate the host's route stubs from every package's manifest."""
    if snapshot is None and Registry.snapshot_enabled():
        snapshot = Registry.snapshot_path()

    try:
        plan = compute_generation_plan(workspace, host, declarations=declarations)
        print_generation_plan(plan, dry_run=dry_run, quiet=quiet)

        if not dry_run:
            execute_generation_plan(plan, snapshot_path=snapshot)
            if snapshot is not None:
                typer.secho(
                    f"Registry snapshot written to {snapshot}",
                    fg=typer.colors.BRIGHT_BLACK,
                )
    except ManifestError as e:
        print_manifest_error(e)
        raise typer.Exit(1) from None
    except (ConfigError, HostNotFoundError) as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(1) from None
    except PermissionError as e:
        typer.secho(
            f"✗ Permission denied: {e}", fg=typer.colors.RED, bold=True, err=True
        )
        raise typer.Exit(1) from None
    except OSError as e:
        typer.secho(
            f"✗ Filesystem error: {e}", fg=typer.colors.RED, bold=True, err=True
        )
        typer.secho(
            "   Warning: Output may be partially generated. Re-run once the "
            "problem is fixed.",
            err=True,
        )
        raise typer.Exit(1) from None
    except RouteMountError as e:
        typer.secho(f"✗ Error: {e}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(1) from None


@app.command()
def registry(
    workspace: WorkspaceOption = Path("."),
    host: HostOption = None,
) -> None:
    """List every exposed registry key."""
    try:
        plan = compute_generation_plan(workspace, host, declarations=False)
    except ManifestError as e:
        print_manifest_error(e)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.secho(
            f"✗ Filesystem error: {e}", fg=typer.colors.RED, bold=True, err=True
        )
        raise typer.Exit(1) from None
    except RouteMountError as e:
        typer.secho(f"✗ Error: {e}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(1) from None

    print_registry(plan.registry)
    print_diagnostics(plan.diagnostics)


def main() -> None:
    """Main entry point for the routemount CLI."""
    app()


if __name__ == "__main__":
    main()
