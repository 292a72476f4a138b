"""Lock artifact loading.

``LockArtifactLoader`` is the collaborator the cache talks to. The JSON
implementation reads an assets file of the form::

    {
      "version": 3,
      "targets": {
        "net472": {
          "PkgA/1.0.0": {"type": "package", "dependencies": {"PkgC": "2.0.0"}},
          "PkgC/2.0.0": {"type": "package"}
        },
        "net472/win-x64": { ... }
      }
    }

Target keys are framework monikers, optionally followed by ``/<runtime>``.
A missing file is not an error (``load`` returns None); malformed content
raises ``LockArtifactError``.
"""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from restorespec.core.frameworks import Framework
from restorespec.core.lock.models import (
    PACKAGE_TYPE,
    LockArtifactSnapshot,
    LockLibrary,
    LockTarget,
)
from restorespec.core.versioning import PackageVersion, VersionRange
from restorespec.exceptions import LockArtifactError, ParseError

SUPPORTED_VERSIONS = (1, 2, 3)


class LockArtifactLoader(ABC):
    """Reads lock artifacts and their last-write times."""

    @abstractmethod
    async def last_write_time(self, path: Path) -> int | None:
        """Return the artifact's last-write time in nanoseconds, or None if absent.

        Raises:
            LockArtifactError: If the file's metadata cannot be read.
        """

    @abstractmethod
    async def load(self, path: Path) -> LockArtifactSnapshot | None:
        """Load the artifact at *path*.

        Returns:
            The parsed snapshot, or None if the file does not exist.

        Raises:
            LockArtifactError: If the file exists but cannot be read or parsed.
        """


def snapshot_from_dict(data: Any) -> LockArtifactSnapshot:
    """Build a snapshot from parsed assets-file JSON.

    Raises:
        LockArtifactError: If the structure, a moniker or a version is invalid.
    """
    if not isinstance(data, dict):
        raise LockArtifactError("Lock artifact root must be an object")

    version = data.get("version")
    if not isinstance(version, int) or isinstance(version, bool) or version not in SUPPORTED_VERSIONS:
        raise LockArtifactError(f"Unsupported lock artifact version: {version!r}")

    targets_data = data.get("targets", {})
    if not isinstance(targets_data, dict):
        raise LockArtifactError("Lock artifact 'targets' must be an object")

    targets: list[LockTarget] = []
    try:
        for target_key, libraries_data in targets_data.items():
            targets.append(_target_from_entry(target_key, libraries_data))
    except ParseError as exc:
        raise LockArtifactError(f"Invalid lock artifact content: {exc}") from exc

    return LockArtifactSnapshot(version=version, targets=tuple(targets))


def _target_from_entry(target_key: str, libraries_data: Any) -> LockTarget:
    if not isinstance(libraries_data, dict):
        raise LockArtifactError(f"Target {target_key!r} must be an object")

    moniker, _, runtime = target_key.partition("/")
    framework = Framework.parse(moniker)

    libraries: list[LockLibrary] = []
    for library_key, entry in libraries_data.items():
        name, sep, raw_version = library_key.partition("/")
        if not sep or not name or not raw_version:
            raise LockArtifactError(f"Invalid library key {library_key!r} in {target_key!r}")
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise LockArtifactError(f"Library {library_key!r} must be an object")

        deps_data = entry.get("dependencies", {}) or {}
        if not isinstance(deps_data, dict):
            raise LockArtifactError(f"Dependencies of {library_key!r} must be an object")

        libraries.append(
            LockLibrary(
                id=name,
                version=PackageVersion.parse(raw_version),
                type=str(entry.get("type", PACKAGE_TYPE)),
                dependencies=tuple(
                    (dep_id, VersionRange.parse(str(dep_range)))
                    for dep_id, dep_range in deps_data.items()
                ),
            )
        )

    return LockTarget(framework=framework, runtime_identifier=runtime, libraries=tuple(libraries))


class JsonLockArtifactLoader(LockArtifactLoader):
    """Loads JSON assets files from disk, off the event loop.

    A path whose parent is a regular file counts as absent, like a missing
    file. Any other filesystem error raises ``LockArtifactError``.
    """

    async def last_write_time(self, path: Path) -> int | None:
        return await asyncio.to_thread(self._stat, Path(path))

    async def load(self, path: Path) -> LockArtifactSnapshot | None:
        return await asyncio.to_thread(self._read, Path(path))

    @staticmethod
    def _stat(path: Path) -> int | None:
        try:
            return path.stat().st_mtime_ns
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as exc:
            raise LockArtifactError(f"Cannot stat lock artifact {path}: {exc}") from exc

    @staticmethod
    def _read(path: Path) -> LockArtifactSnapshot | None:
        try:
            text = path.read_text(encoding="utf-8")
        except (FileNotFoundError, NotADirectoryError):
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise LockArtifactError(f"Cannot read lock artifact {path}: {exc}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LockArtifactError(f"Lock artifact {path} is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise LockArtifactError(f"Lock artifact {path} is nested too deeply") from exc
        return snapshot_from_dict(data)
