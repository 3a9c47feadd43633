"""Output formatting for routemount operations."""

from pathlib import Path

import typer

from routemount.exceptions import ManifestError
from routemount.models import Diagnostic
from routemount.models import GenerationPlan
from routemount.registry import Registry


def print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    """Print non-fatal diagnostics to stderr, one per line."""
    for diagnostic in diagnostics:
        kind = diagnostic.kind.name.replace("_", " ").lower()
        typer.secho(
            f"⚠ [{diagnostic.package}] {kind}: {diagnostic.message}",
            fg=typer.colors.YELLOW,
            err=True,
        )


def print_generation_plan(
    plan: GenerationPlan, dry_run: bool = False, quiet: bool = False
) -> None:
    """Print generation plan to stdout.

    Args:
        plan: GenerationPlan to print
        dry_run: If True, use "Would" language instead of present tense
        quiet: If True, only print diagnostics and the summary line
    """
    action_verb = "Would write" if dry_run else "Writing"

    if plan.mounts and not quiet:
        typer.secho("Mounts:", fg=typer.colors.BRIGHT_BLACK)
        for mount in plan.mounts:
            typer.secho(
                f"  {mount.url_path} <- {mount.registry_key} ({mount.provider_id})",
                fg=typer.colors.BRIGHT_BLACK,
            )

    if plan.stubs and not quiet:
        typer.secho(f"{action_verb} stubs:", fg=typer.colors.BRIGHT_BLACK)
        for stub in plan.stubs:
            stub_display = _display_path(stub.path, plan.output_root)
            typer.secho(
                f"  {stub_display} -> {stub.import_specifier}",
                fg=typer.colors.BRIGHT_BLACK,
            )

    print_diagnostics(plan.diagnostics)

    # Summary line
    num_stubs = len(plan.stubs)
    num_mounts = len(plan.mounts)
    parts = [
        f"{num_stubs} stub{'s' if num_stubs != 1 else ''}",
        f"{num_mounts} mount{'s' if num_mounts != 1 else ''}",
    ]
    if plan.diagnostics:
        num_warnings = len(plan.diagnostics)
        parts.append(f"{num_warnings} warning{'s' if num_warnings != 1 else ''}")

    action = "Would generate" if dry_run else "Generated"
    typer.secho(
        f"✓ {action} routes for {plan.host.name} ({', '.join(parts)})",
        fg=typer.colors.GREEN,
        bold=True,
    )


def print_registry(registry: Registry) -> None:
    """Print every registry key with its provider and file count."""
    if not registry.items:
        typer.secho("No exposed routes found", fg=typer.colors.BRIGHT_BLACK)
        return

    for key, item in registry.items.items():
        num_files = len(item.route_files)
        typer.secho(f"{key}", bold=True, nl=False)
        typer.secho(
            f"  {item.provider_id}:{item.internal_path} "
            f"({num_files} file{'s' if num_files != 1 else ''})",
            fg=typer.colors.BRIGHT_BLACK,
        )
        if item.description:
            typer.secho(f"    {item.description}", fg=typer.colors.BRIGHT_BLACK)


def print_manifest_error(error: ManifestError) -> None:
    """Print a fatal manifest error to stderr."""
    typer.secho(
        f"✗ Invalid routes manifest: {error.package_dir}",
        fg=typer.colors.RED,
        bold=True,
        err=True,
    )
    typer.secho(f"  {error.detail}", err=True)


def _display_path(path: Path, root: Path) -> str:
    """Format path for display relative to root.

    Args:
        path: Path to format
        root: Directory to show the path relative to

    Returns:
        POSIX relative path if path is under root, else the path as-is
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)
