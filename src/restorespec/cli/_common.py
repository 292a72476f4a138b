"""Helpers shared by restorespec subcommands."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Awaitable, NoReturn, TypeVar

import click

from restorespec.core.spec import SpecificationBuilder
from restorespec.exceptions import ConfigurationError, ParseError
from restorespec.project import YamlProjectAdapter

T = TypeVar("T")


def run_async(coro: Awaitable[T]) -> T:
    """Run an async coroutine in a synchronous context."""
    return asyncio.run(coro)  # type: ignore[arg-type]


def open_builder(manifest: str) -> SpecificationBuilder:
    """Create a specification builder for a project manifest.

    Exits with code 1 if the manifest cannot be read.
    """
    try:
        adapter = YamlProjectAdapter(Path(manifest))
    except ConfigurationError as exc:
        fail(exc)
    return SpecificationBuilder(adapter)


def fail(exc: Any) -> NoReturn:
    """Report a configuration or parse error and exit with code 1."""
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


HANDLED_ERRORS = (ConfigurationError, ParseError)
