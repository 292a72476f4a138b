"""Package data models.

Pure data holders (frozen dataclasses) shared by the central version
registry, the reference merger and the specification builder. Package ids
are case-insensitive everywhere: each model exposes a lower-cased ``key``
that maps and comparisons use instead of the authored id.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping

from restorespec.core.frameworks import Framework
from restorespec.core.versioning import PackageVersion, VersionRange
from restorespec.exceptions import ParseError

_LOG_CODE_RE = re.compile(r"^NU\d{4}$", re.IGNORECASE)

DEFAULT_PRIVATE_ASSETS = "contentfiles;analyzers;build"


def split_list(value: str | None) -> list[str]:
    """Split a ``;``-separated property value, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(";") if part.strip()]


def parse_log_codes(value: str | None) -> frozenset[str]:
    """Parse ``NU1603;NU1605`` style warning codes, ignoring anything else."""
    if not value:
        return frozenset()
    codes = (c.strip() for c in re.split(r"[;,]", value))
    return frozenset(c.upper() for c in codes if _LOG_CODE_RE.match(c))


def is_true(value: str | None) -> bool:
    """Boolean project property semantics: only ``true`` (any case) is true."""
    return (value or "").strip().lower() == "true"


@dataclass(frozen=True)
class BuildItem:
    """A raw project item: an id plus string metadata (``Version`` etc.)."""

    item_id: str
    metadata: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str) -> str:
        """Case-insensitive metadata lookup; missing metadata reads as ``""``."""
        for key, value in self.metadata.items():
            if key.lower() == name.lower():
                return value or ""
        return ""


@dataclass(frozen=True, eq=False)
class PackageIdentity:
    """A package id plus its resolved version.

    ``version`` is None when nothing has resolved it yet (the declaration
    accepts any version and no lock artifact pins it).
    """

    id: str
    version: PackageVersion | None = None

    @property
    def key(self) -> str:
        return self.id.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.key == other.key and self.version == other.version

    def __hash__(self) -> int:
        return hash((self.key, self.version))

    def __str__(self) -> str:
        return f"{self.id}@{self.version if self.version is not None else 'any'}"


@dataclass(frozen=True)
class DependencyDeclaration:
    """A direct package dependency as authored in the project.

    Attributes:
        id: Package id as authored.
        version_range: Declared range; None when the project left it empty.
        framework: Target framework the declaration belongs to.
        include_assets: ``IncludeAssets`` flags.
        exclude_assets: ``ExcludeAssets`` flags.
        private_assets: ``PrivateAssets`` flags (suppress-parent).
        auto_referenced: True for implicitly defined references that the
            SDK adds on the project's behalf.
        version_centrally_managed: True once a central override set the range.
        no_warn: Warning codes suppressed for this dependency.
    """

    id: str
    version_range: VersionRange | None = None
    framework: Framework | None = None
    include_assets: str = "all"
    exclude_assets: str = "none"
    private_assets: str = DEFAULT_PRIVATE_ASSETS
    auto_referenced: bool = False
    version_centrally_managed: bool = False
    no_warn: frozenset[str] = frozenset()

    @property
    def key(self) -> str:
        return self.id.lower()

    @property
    def allowed_versions(self) -> VersionRange:
        """The declared range, or any version when none was declared."""
        return self.version_range if self.version_range is not None else VersionRange.ALL

    @classmethod
    def from_item(cls, item: BuildItem, framework: Framework | None = None) -> DependencyDeclaration:
        """Build a declaration from a ``PackageReference`` project item.

        An empty ``Version`` is not an error: it means any version.

        Raises:
            ParseError: If the id is empty or the version range is malformed.
        """
        if not item.item_id or not item.item_id.strip():
            raise ParseError("Package reference has an empty id")
        raw_version = item.get("Version").strip()
        return cls(
            id=item.item_id.strip(),
            version_range=VersionRange.parse(raw_version) if raw_version else None,
            framework=framework,
            include_assets=item.get("IncludeAssets") or "all",
            exclude_assets=item.get("ExcludeAssets") or "none",
            private_assets=item.get("PrivateAssets") or DEFAULT_PRIVATE_ASSETS,
            auto_referenced=is_true(item.get("IsImplicitlyDefined")),
            no_warn=parse_log_codes(item.get("NoWarn")),
        )


@dataclass(frozen=True)
class CentralVersionOverride:
    """A project-wide version range for one package id."""

    id: str
    version_range: VersionRange

    @property
    def key(self) -> str:
        return self.id.lower()


@dataclass(frozen=True)
class PackageReference:
    """A package as seen by listing consumers: identity under a framework."""

    identity: PackageIdentity
    framework: Framework
    allowed_versions: VersionRange = VersionRange.ALL
    auto_referenced: bool = False

    @property
    def key(self) -> str:
        return self.identity.key


@dataclass(frozen=True)
class ProjectPackages:
    """Installed (direct) and transitive package references of a project."""

    installed: tuple[PackageReference, ...] = ()
    transitive: tuple[PackageReference, ...] = ()
