"""Package versions and version ranges.

A ``PackageVersion`` is a release of 1-4 numeric parts with an optional
pre-release label and build metadata (``1.2.3.4-beta.2+sha.abc``). Build
metadata never affects precedence and a pre-release sorts below its release.

A ``VersionRange`` uses interval notation:

- ``1.0``        minimum, inclusive (``[1.0.0, )``)
- ``[1.0]``      exact match
- ``[1.0,2.0)``  inclusive minimum, exclusive maximum
- ``(,2.0]``     maximum only
- ``1.*``        floating; lowest match is ``1.0.0``
- ``*`` or ``""`` any version (``VersionRange.ALL``)

Range resolution against a feed is the restore engine's job; this module
only parses, normalizes and answers ``satisfies`` queries.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar

from restorespec.exceptions import ParseError

_VERSION_RE = re.compile(
    r"^(?P<release>\d+(?:\.\d+){0,3})"
    r"(?:-(?P<pre>[0-9A-Za-z\-.]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z\-.]+))?$"
)


def _label_key(label: str) -> tuple[tuple[int, int | str], ...]:
    """Sort key for a dotted pre-release label (numeric parts sort first)."""
    parts: list[tuple[int, int | str]] = []
    for part in label.split("."):
        if part.isdigit():
            parts.append((0, int(part)))
        else:
            parts.append((1, part.lower()))
    return tuple(parts)


@total_ordering
@dataclass(frozen=True, eq=False)
class PackageVersion:
    """A parsed package version.

    Attributes:
        release: Four release parts (major, minor, patch, revision).
        prerelease: Pre-release label without the leading ``-``.
        metadata: Build metadata without the leading ``+``.
    """

    release: tuple[int, int, int, int]
    prerelease: str = ""
    metadata: str = ""

    @classmethod
    def parse(cls, text: str) -> PackageVersion:
        """Parse a version string.

        Raises:
            ParseError: If *text* is not a valid version.
        """
        m = _VERSION_RE.match(text.strip())
        if not m:
            raise ParseError(f"Invalid package version: {text!r}")
        parts = [int(p) for p in m.group("release").split(".")]
        parts.extend([0] * (4 - len(parts)))
        return cls(
            release=(parts[0], parts[1], parts[2], parts[3]),
            prerelease=m.group("pre") or "",
            metadata=m.group("build") or "",
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _key(self) -> tuple:
        if self.prerelease:
            return (self.release, 0, _label_key(self.prerelease))
        return (self.release, 1, ())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: PackageVersion) -> bool:
        if not isinstance(other, PackageVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        major, minor, patch, revision = self.release
        text = f"{major}.{minor}.{patch}"
        if revision:
            text += f".{revision}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        return text

    def __repr__(self) -> str:
        return f"PackageVersion({str(self)!r})"


@dataclass(frozen=True)
class VersionRange:
    """An allowed set of package versions.

    A range with neither bound accepts every version. ``float_pattern``
    keeps the authored floating pattern (``1.*``) so it survives
    normalization; its ``min_version`` is the lowest version it can match.
    """

    min_version: PackageVersion | None = None
    max_version: PackageVersion | None = None
    include_min: bool = True
    include_max: bool = False
    float_pattern: str | None = None

    ALL: ClassVar[VersionRange]

    @classmethod
    def parse(cls, text: str | None) -> VersionRange:
        """Parse a range string; empty or ``*`` means any version.

        Raises:
            ParseError: If *text* is not a valid range.
        """
        stripped = (text or "").strip()
        if stripped in ("", "*"):
            return cls.ALL
        if stripped[0] in "[(":
            return cls._parse_interval(stripped)
        if stripped.endswith("*"):
            return cls._parse_floating(stripped)
        return cls(min_version=PackageVersion.parse(stripped), include_min=True)

    @classmethod
    def _parse_interval(cls, text: str) -> VersionRange:
        if text[-1] not in "])":
            raise ParseError(f"Invalid version range: {text!r}")
        include_min = text[0] == "["
        include_max = text[-1] == "]"
        inner = text[1:-1]

        if "," not in inner:
            if not (include_min and include_max) or not inner.strip():
                raise ParseError(f"Invalid version range: {text!r}")
            exact = PackageVersion.parse(inner)
            return cls(exact, exact, include_min=True, include_max=True)

        pieces = inner.split(",")
        if len(pieces) != 2:
            raise ParseError(f"Invalid version range: {text!r}")
        low, high = (p.strip() for p in pieces)
        if not low and not high:
            raise ParseError(f"Version range has no bounds: {text!r}")

        min_version = PackageVersion.parse(low) if low else None
        max_version = PackageVersion.parse(high) if high else None
        if min_version is not None and max_version is not None:
            if min_version > max_version or (
                min_version == max_version and not (include_min and include_max)
            ):
                raise ParseError(f"Version range is empty: {text!r}")

        return cls(
            min_version=min_version,
            max_version=max_version,
            include_min=include_min and min_version is not None,
            include_max=include_max and max_version is not None,
        )

    @classmethod
    def _parse_floating(cls, text: str) -> VersionRange:
        if text.endswith("-*"):
            base = PackageVersion.parse(text[:-2])
            lowest = PackageVersion(base.release, prerelease="0")
        elif text.endswith(".*"):
            lowest = PackageVersion.parse(text[:-2])
        else:
            raise ParseError(f"Invalid floating version range: {text!r}")
        return cls(min_version=lowest, include_min=True, float_pattern=text)

    @property
    def is_all(self) -> bool:
        return self.min_version is None and self.max_version is None

    @property
    def is_floating(self) -> bool:
        return self.float_pattern is not None

    def satisfies(self, version: PackageVersion) -> bool:
        """Check whether *version* lies inside this range."""
        if self.min_version is not None:
            if self.include_min:
                if version < self.min_version:
                    return False
            elif version <= self.min_version:
                return False
        if self.max_version is not None:
            if self.include_max:
                if version > self.max_version:
                    return False
            elif version >= self.max_version:
                return False
        return True

    def __str__(self) -> str:
        if self.float_pattern is not None:
            return self.float_pattern
        if (
            self.min_version is not None
            and self.min_version == self.max_version
            and self.include_min
            and self.include_max
        ):
            return f"[{self.min_version}]"
        low = str(self.min_version) if self.min_version is not None else ""
        high = str(self.max_version) if self.max_version is not None else ""
        opening = "[" if self.include_min else "("
        closing = "]" if self.include_max else ")"
        return f"{opening}{low}, {high}{closing}"


VersionRange.ALL = VersionRange(include_min=False)
