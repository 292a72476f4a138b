"""``restorespec packages <manifest>`` — List installed and transitive packages.

Builds the project's declarations, reads the lock artifact (assets file)
from the project's output path when present, and prints the direct
packages and the packages that only the last restore pulled in.

Exit Codes:
    0 — Listing printed.
    1 — Manifest, configuration or parse error.
"""

from __future__ import annotations

import json

import click

from restorespec.cli._common import HANDLED_ERRORS, fail, open_builder, run_async
from restorespec.cli.output import packages_to_dict, print_packages


@click.command("packages")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables.")
def packages_command(manifest: str, as_json: bool) -> None:
    """List installed and transitive packages of the project in MANIFEST."""
    builder = open_builder(manifest)
    try:
        packages = run_async(builder.get_installed_and_transitive_packages())
    except HANDLED_ERRORS as exc:
        fail(exc)

    if as_json:
        click.echo(json.dumps(packages_to_dict(packages), indent=2))
    else:
        print_packages(packages)
