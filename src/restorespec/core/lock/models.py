"""Lock artifact data models.

The lock artifact (the assets file written by the last restore) lists, per
target, every library the restore engine resolved. These models are a
read-only snapshot of that content; nothing in restorespec writes them.
"""

from __future__ import annotations

from dataclasses import dataclass

from restorespec.core.frameworks import Framework
from restorespec.core.versioning import PackageVersion, VersionRange

PACKAGE_TYPE = "package"


@dataclass(frozen=True)
class LockLibrary:
    """One resolved library inside a lock target.

    Attributes:
        id: Library id as written in the artifact.
        version: Resolved version.
        type: ``package`` or ``project``.
        dependencies: ``(id, range)`` edges to other libraries.
    """

    id: str
    version: PackageVersion
    type: str = PACKAGE_TYPE
    dependencies: tuple[tuple[str, VersionRange], ...] = ()

    @property
    def key(self) -> str:
        return self.id.lower()

    @property
    def is_package(self) -> bool:
        return self.type.lower() == PACKAGE_TYPE


@dataclass(frozen=True)
class LockTarget:
    """All libraries resolved for one framework (and optional runtime)."""

    framework: Framework
    runtime_identifier: str = ""
    libraries: tuple[LockLibrary, ...] = ()

    def find_library(self, key: str) -> LockLibrary | None:
        """Return the library with lower-cased id *key*, if present."""
        for library in self.libraries:
            if library.key == key:
                return library
        return None


@dataclass(frozen=True)
class LockArtifactSnapshot:
    """An ordered, read-only view of a lock artifact's targets."""

    version: int
    targets: tuple[LockTarget, ...] = ()

    def targets_for(self, framework: Framework) -> list[LockTarget]:
        """Return every target for *framework*, runtime-specific ones included."""
        return [t for t in self.targets if t.framework == framework]

    def find_library(self, framework: Framework, key: str) -> LockLibrary | None:
        """Find the resolved library *key* under *framework*."""
        for target in self.targets_for(framework):
            library = target.find_library(key)
            if library is not None:
                return library
        return None
