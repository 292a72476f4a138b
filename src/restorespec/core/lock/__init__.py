"""Lock artifact snapshot models, loading, and the staleness-aware cache.

The package is split into focused submodules:

- ``models``: read-only snapshot data classes (``LockArtifactSnapshot``,
  ``LockTarget``, ``LockLibrary``).
- ``loader``: the ``LockArtifactLoader`` interface and the JSON assets-file
  implementation.
- ``cache``: ``LockArtifactCache``, which decides when the artifact has to
  be reloaded and owns the installed/transitive memo tables.
"""

from restorespec.core.lock.cache import LockArtifactCache
from restorespec.core.lock.loader import (
    JsonLockArtifactLoader,
    LockArtifactLoader,
    snapshot_from_dict,
)
from restorespec.core.lock.models import (
    LockArtifactSnapshot,
    LockLibrary,
    LockTarget,
)

__all__ = [
    "JsonLockArtifactLoader",
    "LockArtifactCache",
    "LockArtifactLoader",
    "LockArtifactSnapshot",
    "LockLibrary",
    "LockTarget",
    "snapshot_from_dict",
]
