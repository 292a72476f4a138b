"""Package versions and version ranges.

All public names are re-exported here so callers can write
``from restorespec.core.versioning import VersionRange``.
"""

from restorespec.core.versioning.versions import PackageVersion, VersionRange

__all__ = [
    "PackageVersion",
    "VersionRange",
]
