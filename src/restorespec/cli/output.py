"""Rich output formatting helpers for the restorespec CLI.

Provides consistent terminal output for package listings and dependency
specification summaries. Auto-referenced packages are dimmed; centrally
managed versions are marked with ``(central)`` and floating ranges with
``(floating)``.
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from restorespec.core.packages import PackageReference, ProjectPackages
from restorespec.core.spec import DependencySpecification

console = Console()


def reference_to_dict(ref: PackageReference) -> dict[str, Any]:
    """JSON-ready view of a package reference."""
    version = ref.identity.version
    return {
        "id": ref.identity.id,
        "version": str(version) if version is not None else None,
        "framework": ref.framework.short_folder_name,
        "allowedVersions": str(ref.allowed_versions),
        "autoReferenced": ref.auto_referenced,
    }


def packages_to_dict(packages: ProjectPackages) -> dict[str, Any]:
    return {
        "installed": [reference_to_dict(r) for r in packages.installed],
        "transitive": [reference_to_dict(r) for r in packages.transitive],
    }


def _package_table(title: str, references: Sequence[PackageReference]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Resolved")
    table.add_column("Requested", style="dim")
    table.add_column("Framework", style="cyan")
    for ref in references:
        version = ref.identity.version
        resolved = Text(str(version)) if version is not None else Text("any", style="yellow")
        name = Text(ref.identity.id, style="dim" if ref.auto_referenced else "")
        table.add_row(name, resolved, Text(str(ref.allowed_versions)), ref.framework.short_folder_name)
    return table


def print_packages(packages: ProjectPackages) -> None:
    """Print installed and transitive package tables.

    Args:
        packages: Result of a package listing query.
    """
    if packages.installed:
        console.print(_package_table("Installed Packages", packages.installed))
    else:
        console.print("[dim]No installed packages.[/dim]")

    if packages.transitive:
        console.print(_package_table("Transitive Packages", packages.transitive))
    else:
        console.print("[dim]No transitive packages.[/dim]")

    console.print(
        f"[bold]{len(packages.installed)}[/bold] installed | "
        f"[bold]{len(packages.transitive)}[/bold] transitive"
    )


def print_spec_summary(spec: DependencySpecification) -> None:
    """Print a summary of a dependency specification.

    Args:
        spec: The specification to summarize.
    """
    meta = spec.restore_metadata
    header = Text.assemble(
        ("Project: ", "bold"), (spec.name, ""),
        ("  Version: ", "bold"), (str(spec.version), "dim"),
    )
    console.print(Panel(header, title="Dependency Specification"))
    console.print(f"  Output path:    {meta.output_path or '[red]<not set>[/red]'}")
    console.print(f"  Packages path:  {meta.packages_path}")
    console.print(f"  Sources:        {', '.join(meta.sources) or '[dim]none[/dim]'}")
    console.print(f"  Fallback dirs:  {', '.join(meta.fallback_folders) or '[dim]none[/dim]'}")
    if meta.lock_properties.is_enabled:
        locked = " (locked mode)" if meta.lock_properties.restore_locked_mode else ""
        console.print(f"  Lock file:      enabled{locked}")

    for info in spec.target_frameworks:
        table = Table(title=f"Dependencies ({info.framework})", show_header=True)
        table.add_column("Package", style="bold")
        table.add_column("Version Range")
        table.add_column("Private Assets", style="dim")
        for dep in info.dependencies:
            version = str(dep.allowed_versions)
            if dep.allowed_versions.is_floating:
                version += " (floating)"
            if dep.version_centrally_managed:
                version += " (central)"
            table.add_row(dep.id, Text(version), dep.private_assets)
        console.print(table)
        if info.imports:
            kind = "AssetTargetFallback" if info.asset_target_fallback else "PackageTargetFallback"
            names = ", ".join(str(f) for f in info.imports)
            console.print(f"  {kind}: {names}")

