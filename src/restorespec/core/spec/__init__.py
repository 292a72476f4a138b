"""Dependency specification: models, collaborator interfaces and the builder.

The package is split into focused submodules:

- ``models``: the immutable ``DependencySpecification`` and its parts.
- ``adapter``: ``ProjectAdapter``, ``SettingsProvider`` and execution
  contexts.
- ``fallback``: framework fallback chain resolution.
- ``restore``: packages path, source and fallback-folder rules.
- ``builder``: ``SpecificationBuilder``, the per-project orchestrator.
"""

from restorespec.core.spec.adapter import (
    EventLoopExecutionContext,
    ExecutionContext,
    InlineExecutionContext,
    LockFileProperties,
    NullSettings,
    PackageSource,
    ProjectAdapter,
    ProjectRestoreProperties,
    SettingsProvider,
)
from restorespec.core.spec.builder import SpecificationBuilder
from restorespec.core.spec.fallback import (
    AssetTargetFallbackResolver,
    CompatibilityResolver,
    FallbackResolution,
    FrameworkFallbackResolver,
)
from restorespec.core.spec.models import (
    DependencyGraphCacheContext,
    DependencySpecification,
    EffectiveFrameworkInfo,
    RestoreLockProperties,
    RestoreMetadata,
    RuntimeGraph,
    WarningProperties,
)

__all__ = [
    "AssetTargetFallbackResolver",
    "CompatibilityResolver",
    "DependencyGraphCacheContext",
    "DependencySpecification",
    "EffectiveFrameworkInfo",
    "EventLoopExecutionContext",
    "ExecutionContext",
    "FallbackResolution",
    "FrameworkFallbackResolver",
    "InlineExecutionContext",
    "LockFileProperties",
    "NullSettings",
    "PackageSource",
    "ProjectAdapter",
    "ProjectRestoreProperties",
    "RestoreLockProperties",
    "RestoreMetadata",
    "RuntimeGraph",
    "SettingsProvider",
    "SpecificationBuilder",
    "WarningProperties",
]
