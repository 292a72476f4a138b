"""Central package version management.

When a project opts into central version management, ``PackageVersion``
items supply one version range per package id and those ranges override
the ranges on the project's package references. The override table is
built once per specification build and keyed by lower-cased id only.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable

from restorespec.core.packages.models import (
    BuildItem,
    CentralVersionOverride,
    DependencyDeclaration,
)
from restorespec.core.versioning import VersionRange
from restorespec.exceptions import ParseError

logger = logging.getLogger(__name__)


class CentralVersionRegistry:
    """Builds and applies central version overrides."""

    @staticmethod
    def build(raw_pairs: Iterable[tuple[str, str | None]]) -> dict[str, CentralVersionOverride]:
        """Build the override table from ``(package_id, version)`` pairs.

        An empty version means any version. When an id appears more than
        once (ignoring case) the first pair wins; which pair that is depends
        only on the order the project reports its items in.

        Args:
            raw_pairs: Package id and raw version range pairs.

        Returns:
            Mapping of lower-cased package id to its override.

        Raises:
            ParseError: If an id is empty or a version range is malformed.
        """
        table: dict[str, CentralVersionOverride] = {}
        for package_id, version in raw_pairs:
            if not package_id or not package_id.strip():
                raise ParseError("Central package version has an empty id")
            override = CentralVersionOverride(
                id=package_id.strip(),
                version_range=VersionRange.parse(version),
            )
            if override.key in table:
                logger.debug("Ignoring duplicate central version for %s", override.id)
                continue
            table[override.key] = override
        return table

    @classmethod
    def from_items(cls, items: Iterable[BuildItem]) -> dict[str, CentralVersionOverride]:
        """Build the table from ``PackageVersion`` project items."""
        return cls.build((item.item_id, item.get("Version")) for item in items)

    @staticmethod
    def apply(
        declarations: Iterable[DependencyDeclaration],
        overrides: dict[str, CentralVersionOverride],
    ) -> tuple[DependencyDeclaration, ...]:
        """Merge central ranges into declarations.

        The central range replaces whatever range the declaration carried.
        Implicitly defined references are left alone, as are ids without an
        override.

        Returns:
            New declarations; the inputs are not modified.
        """
        merged: list[DependencyDeclaration] = []
        for declaration in declarations:
            override = overrides.get(declaration.key)
            if override is None or declaration.auto_referenced:
                merged.append(declaration)
                continue
            merged.append(
                dataclasses.replace(
                    declaration,
                    version_range=override.version_range,
                    version_centrally_managed=True,
                )
            )
        return tuple(merged)
