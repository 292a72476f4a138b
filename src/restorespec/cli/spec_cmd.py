"""``restorespec spec <manifest>`` — Build the dependency specification.

Exit Codes:
    0 — Specification printed (or written with ``--output``).
    1 — Manifest, configuration or parse error.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from restorespec.cli._common import HANDLED_ERRORS, fail, open_builder, run_async
from restorespec.cli.output import print_spec_summary
from restorespec.config import load_settings


@click.command("spec")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--settings", "-s",
    "settings_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings YAML file (sources, global packages folder).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the specification as JSON.")
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the JSON specification to this file.",
)
@click.option(
    "--allow-missing-output",
    is_flag=True,
    help="Do not fail when the project has no output path.",
)
def spec_command(
    manifest: str,
    settings_path: str | None,
    as_json: bool,
    output: str | None,
    allow_missing_output: bool,
) -> None:
    """Build the dependency specification of the project in MANIFEST."""
    builder = open_builder(manifest)
    try:
        settings = load_settings(Path(settings_path) if settings_path else None)
        spec = run_async(builder.build(settings, should_raise=not allow_missing_output))
    except HANDLED_ERRORS as exc:
        fail(exc)

    data = spec.to_dict()
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        click.echo(f"Specification written to: {out_path}")
    elif as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        print_spec_summary(spec)
