"""File-backed project adapters."""

from restorespec.project.manifest import YamlProjectAdapter

__all__ = ["YamlProjectAdapter"]
