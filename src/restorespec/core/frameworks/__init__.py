"""Target framework monikers and framework precedence ordering."""

from restorespec.core.frameworks.comparer import (
    FrameworkComparer,
    compare_frameworks,
    framework_sort_key,
)
from restorespec.core.frameworks.models import (
    NET_CORE_APP,
    NET_FRAMEWORK,
    NET_PORTABLE,
    NET_STANDARD,
    Framework,
)

__all__ = [
    "Framework",
    "FrameworkComparer",
    "compare_frameworks",
    "framework_sort_key",
    "NET_CORE_APP",
    "NET_FRAMEWORK",
    "NET_PORTABLE",
    "NET_STANDARD",
]
