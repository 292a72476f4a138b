"""Package reference merging.

Fuses the per-framework direct declarations of a project with the resolved
libraries of a lock artifact into two lists: installed (direct) and
transitive packages. Each list holds one entry per package id; when an id
appears under several frameworks the entry under the preferred framework
(lowest according to the injected comparer) represents it.

Two memo tables make repeated queries cheap:

- the installed table remembers the resolved version per id together with
  the range it was resolved for, so an unchanged declaration keeps its
  resolved version between artifact reloads;
- the transitive table holds one representative reference per id, filled
  whenever a fresh snapshot is merged and replayed while the artifact is
  unchanged.

Both tables belong to the caller (the lock artifact cache), which decides
when to clear them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from restorespec.core.frameworks import (
    Framework,
    FrameworkComparer,
    compare_frameworks,
    framework_sort_key,
)
from restorespec.core.packages.models import (
    DependencyDeclaration,
    PackageIdentity,
    PackageReference,
    ProjectPackages,
)
from restorespec.core.versioning import VersionRange

if TYPE_CHECKING:
    from restorespec.core.lock.models import LockArtifactSnapshot


@dataclass(frozen=True)
class InstalledEntry:
    """Memoized resolution of one installed package id."""

    allowed_versions: VersionRange
    identity: PackageIdentity


InstalledTable = dict[str, InstalledEntry]
TransitiveTable = dict[str, PackageReference]


class PackageReferenceMerger:
    """Computes installed and transitive package lists.

    Args:
        comparer: Framework ordering used to choose one representative per
            package id. Defaults to ``compare_frameworks``.
    """

    def __init__(self, comparer: FrameworkComparer = compare_frameworks) -> None:
        self._sort_key = framework_sort_key(comparer)

    def merge(
        self,
        declarations: Mapping[Framework, Sequence[DependencyDeclaration]],
        snapshot: LockArtifactSnapshot | None = None,
        installed_table: InstalledTable | None = None,
        transitive_table: TransitiveTable | None = None,
    ) -> ProjectPackages:
        """Merge declarations with lock artifact data.

        Args:
            declarations: Direct declarations per target framework.
            snapshot: A freshly loaded snapshot, or None when the artifact
                was not (re)loaded for this query.
            installed_table: Installed memo table; None disables memoization.
            transitive_table: Transitive memo table; None means no
                transitive data is available for this query.

        Returns:
            ``ProjectPackages`` with installed and transitive references.
            No id appears in both lists.
        """
        installed_refs: list[PackageReference] = []
        installed_by_framework: dict[Framework, set[str]] = {}

        for framework, framework_declarations in declarations.items():
            keys = installed_by_framework.setdefault(framework, set())
            for declaration in framework_declarations:
                installed_refs.append(
                    self._installed_reference(declaration, framework, snapshot, installed_table)
                )
                keys.add(declaration.key)

        installed = self._pick(installed_refs)
        installed_keys = {ref.key for ref in installed}

        if transitive_table is None:
            return ProjectPackages(installed=installed, transitive=())

        if snapshot is not None:
            candidates = self._transitive_candidates(declarations.keys(), snapshot)
            for ref in self._pick(candidates):
                transitive_table.setdefault(ref.key, ref)

        transitive = tuple(
            ref
            for ref in transitive_table.values()
            if ref.key not in installed_keys
            and ref.key not in installed_by_framework.get(ref.framework, ())
        )
        return ProjectPackages(installed=installed, transitive=transitive)

    def _installed_reference(
        self,
        declaration: DependencyDeclaration,
        framework: Framework,
        snapshot: LockArtifactSnapshot | None,
        table: InstalledTable | None,
    ) -> PackageReference:
        allowed = declaration.allowed_versions
        version = None
        cached = table.get(declaration.key) if table is not None else None

        if snapshot is not None:
            library = snapshot.find_library(framework, declaration.key)
            # An artifact older than an edited range does not pin the version.
            if library is not None and allowed.satisfies(library.version):
                version = library.version
        elif cached is not None and cached.allowed_versions == allowed:
            version = cached.identity.version

        if version is None:
            version = allowed.min_version

        identity = PackageIdentity(declaration.id, version)
        if table is not None:
            table[declaration.key] = InstalledEntry(allowed, identity)

        return PackageReference(
            identity=identity,
            framework=framework,
            allowed_versions=allowed,
            auto_referenced=declaration.auto_referenced,
        )

    @staticmethod
    def _transitive_candidates(
        frameworks: Iterable[Framework],
        snapshot: LockArtifactSnapshot,
    ) -> list[PackageReference]:
        candidates: list[PackageReference] = []
        for framework in frameworks:
            for target in snapshot.targets_for(framework):
                for library in target.libraries:
                    if not library.is_package:
                        continue
                    exact = VersionRange(library.version, library.version, True, True)
                    candidates.append(
                        PackageReference(
                            identity=PackageIdentity(library.id, library.version),
                            framework=framework,
                            allowed_versions=exact,
                        )
                    )
        return candidates

    def _pick(self, references: Iterable[PackageReference]) -> tuple[PackageReference, ...]:
        """One reference per id, under the preferred framework; first-seen id order."""
        groups: dict[str, list[PackageReference]] = {}
        for ref in references:
            groups.setdefault(ref.key, []).append(ref)
        return tuple(
            min(group, key=lambda r: self._sort_key(r.framework))
            for group in groups.values()
        )
