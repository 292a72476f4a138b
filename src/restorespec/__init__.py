"""restorespec: Build-time dependency specification resolver for package restore."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
