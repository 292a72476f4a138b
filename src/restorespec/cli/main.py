"""restorespec CLI — inspect what a project hands to the restore engine.

Entry point for the ``restorespec`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    packages — List installed and transitive packages of a project.
    spec     — Build and show the project's dependency specification.

Usage::

    restorespec packages ./MyApp.yaml
    restorespec packages ./MyApp.yaml --json
    restorespec spec ./MyApp.yaml --settings ./restorespec.yaml
"""

from __future__ import annotations

import click

from restorespec import __version__
from restorespec.cli.packages_cmd import packages_command
from restorespec.cli.spec_cmd import spec_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """restorespec: Build dependency specifications for package restore.

    Reads a project manifest, applies central package versions and
    framework fallbacks, and reports the direct and transitive packages
    recorded by the last restore.
    """


cli.add_command(packages_command)
cli.add_command(spec_command)
