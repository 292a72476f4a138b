"""Framework precedence ordering.

The merger needs one deterministic total order over frameworks to pick a
single representative when a package id appears under several target
frameworks. The order is a plain comparator so that callers can inject a
different strategy and tests can exercise ordering without parsing.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable

from restorespec.core.frameworks.models import Framework

FrameworkComparer = Callable[[Framework, Framework], int]


def _cmp(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def compare_frameworks(left: Framework, right: Framework) -> int:
    """Default ordering: identifier, version, profile, platform, platform version.

    Identifiers compare case-insensitively. Lower sorts first and is the
    preferred framework.
    """
    for a, b in (
        (left.identifier.casefold(), right.identifier.casefold()),
        (left.version, right.version),
        (left.profile, right.profile),
        (left.platform, right.platform),
        (left.platform_version, right.platform_version),
    ):
        result = _cmp(a, b)
        if result:
            return result
    return 0


def framework_sort_key(comparer: FrameworkComparer = compare_frameworks) -> Callable[[Framework], Any]:
    """Adapt a comparator into a ``sorted(key=...)`` key function."""
    return cmp_to_key(comparer)
