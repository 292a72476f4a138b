"""Package declarations, central version overrides and reference merging.

All public names are re-exported here so that callers can write
``from restorespec.core.packages import PackageReferenceMerger``.
"""

from restorespec.core.packages.central import CentralVersionRegistry
from restorespec.core.packages.merger import (
    InstalledEntry,
    PackageReferenceMerger,
)
from restorespec.core.packages.models import (
    BuildItem,
    CentralVersionOverride,
    DependencyDeclaration,
    PackageIdentity,
    PackageReference,
    ProjectPackages,
    is_true,
    parse_log_codes,
    split_list,
)

__all__ = [
    "BuildItem",
    "CentralVersionOverride",
    "CentralVersionRegistry",
    "DependencyDeclaration",
    "InstalledEntry",
    "PackageIdentity",
    "PackageReference",
    "PackageReferenceMerger",
    "ProjectPackages",
    "is_true",
    "parse_log_codes",
    "split_list",
]
