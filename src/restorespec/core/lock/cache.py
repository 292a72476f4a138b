"""Lock artifact cache: staleness-aware installed/transitive package queries.

One cache belongs to one project. It remembers the last-write time of the
lock artifact it last loaded and the installed/transitive memo tables
derived from it. On every query:

1. The artifact is absent: installed comes from declarations alone,
   transitive is empty, and the cache is left untouched.
2. The artifact is not newer than the recorded time: the memo tables are
   reused and the artifact is not read.
3. Otherwise the artifact is loaded, then both tables are cleared and the
   new time recorded in one step with no suspension point in between.

An artifact that is corrupt, or whose metadata cannot be read, is logged
and degrades the query to empty transitive data; the recorded time is not
advanced, so the next query retries.

Refreshes are serialized with an ``asyncio.Lock``. A caller arriving while
another refresh is in flight waits for it, and never sees a half-cleared
table. Cancelling a query while the artifact is being read leaves the cache
exactly as it was. The lock is created on first use in each event loop, so
one cache can serve successive ``asyncio.run`` calls; queries are only
serialized against others on the same loop.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Mapping, Sequence

from restorespec.core.frameworks import Framework
from restorespec.core.lock.loader import JsonLockArtifactLoader, LockArtifactLoader
from restorespec.core.packages import (
    DependencyDeclaration,
    PackageReferenceMerger,
    ProjectPackages,
)
from restorespec.core.packages.merger import InstalledTable, TransitiveTable
from restorespec.exceptions import LockArtifactError

logger = logging.getLogger(__name__)


class LockArtifactCache:
    """Per-project cache of package lists derived from the lock artifact.

    Args:
        loader: Lock artifact loader; defaults to the JSON assets-file loader.
        merger: Reference merger; defaults to one using ``compare_frameworks``.
        log: Logger that receives degraded-artifact warnings.
    """

    def __init__(
        self,
        loader: LockArtifactLoader | None = None,
        merger: PackageReferenceMerger | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._loader = loader or JsonLockArtifactLoader()
        self._merger = merger or PackageReferenceMerger()
        self._log = log or logger
        self._installed: InstalledTable = {}
        self._transitive: TransitiveTable = {}
        self._last_write_time: int | None = None
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    def _get_lock(self) -> asyncio.Lock:
        # An asyncio.Lock is bound to one loop; hosts may call from several.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    @property
    def last_write_time(self) -> int | None:
        """Last-write time (ns) of the artifact behind the cached tables."""
        return self._last_write_time

    @property
    def transitive_count(self) -> int:
        return len(self._transitive)

    def clear(self) -> None:
        """Drop every cached entry and forget the recorded time."""
        self._installed.clear()
        self._transitive.clear()
        self._last_write_time = None

    async def get_installed_and_transitive(
        self,
        declarations: Mapping[Framework, Sequence[DependencyDeclaration]],
        artifact_path: Path | None,
    ) -> ProjectPackages:
        """Return installed and transitive packages for *declarations*.

        Args:
            declarations: Live direct declarations per target framework.
            artifact_path: Path of the lock artifact; None when the project
                has no known artifact location.

        Returns:
            ``ProjectPackages``; installed always reflects *declarations*.
        """
        async with self._get_lock():
            if artifact_path is None:
                return self._merger.merge(declarations)

            try:
                modified = await self._loader.last_write_time(artifact_path)
                if modified is None:
                    self._log.debug("No lock artifact at %s", artifact_path)
                    return self._merger.merge(declarations)

                if self._last_write_time is not None and modified <= self._last_write_time:
                    self._log.debug("Lock artifact unchanged, reusing cached packages")
                    return self._merger.merge(
                        declarations,
                        installed_table=self._installed,
                        transitive_table=self._transitive,
                    )

                snapshot = await self._loader.load(artifact_path)
            except LockArtifactError:
                self._log.warning(
                    "Failed to read lock artifact: %s", artifact_path, exc_info=True
                )
                return self._merger.merge(declarations)

            if snapshot is None:
                return self._merger.merge(declarations)

            # Dependencies may have been removed; the tables cannot be patched.
            self._installed.clear()
            self._transitive.clear()
            self._last_write_time = modified
            self._log.debug(
                "Reloaded lock artifact %s (%d targets)",
                artifact_path,
                len(snapshot.targets),
            )

            return self._merger.merge(
                declarations,
                snapshot=snapshot,
                installed_table=self._installed,
                transitive_table=self._transitive,
            )
