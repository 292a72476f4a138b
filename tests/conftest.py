"""Shared fixtures for restorespec tests.

Provides an in-memory project adapter, an in-memory lock artifact loader,
and a helper for writing JSON assets files to disk.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Callable

import pytest

from restorespec.core.lock import LockArtifactLoader, LockArtifactSnapshot, snapshot_from_dict
from restorespec.core.packages import BuildItem
from restorespec.core.spec import LockFileProperties, ProjectAdapter, ProjectRestoreProperties
from restorespec.exceptions import LockArtifactError


class FakeProjectAdapter(ProjectAdapter):
    """Project adapter backed by plain attributes; records reads and threads."""

    def __init__(
        self,
        project_dir: Path,
        *,
        name: str = "MyApp",
        framework: str = "net472",
        references: dict[str, str] | list[BuildItem] | None = None,
        central_versions: dict[str, str] | None = None,
        central_enabled: bool = False,
        package_id: str | None = None,
        assembly_name: str | None = None,
        version: str | None = None,
        runtimes: list[str] | None = None,
        supports: list[str] | None = None,
        package_target_fallback: str | None = None,
        asset_target_fallback: str | None = None,
        extensions_path: str | None = "obj",
        project_references: list[str] | None = None,
        restore_properties: ProjectRestoreProperties | None = None,
        lock_properties: LockFileProperties | None = None,
        loaded: bool = True,
    ) -> None:
        self.project_dir = project_dir
        self.name = name
        self.framework = framework
        if isinstance(references, dict) or references is None:
            self.references = [
                BuildItem(pid, {"Version": ver}) for pid, ver in (references or {}).items()
            ]
        else:
            self.references = list(references)
        self.central_versions = central_versions or {}
        self.central_enabled = central_enabled
        self.package_id = package_id
        self.assembly_name = assembly_name
        self.version = version
        self.runtimes = runtimes or []
        self.supports = supports or []
        self.package_target_fallback = package_target_fallback
        self.asset_target_fallback = asset_target_fallback
        self.extensions_path = extensions_path
        self.project_references = project_references or []
        self.restore_properties = restore_properties or ProjectRestoreProperties()
        self.lock_properties = lock_properties or LockFileProperties()
        self.loaded = loaded
        self.calls: list[str] = []
        self.threads: set[int] = set()

    @property
    def project_name(self) -> str:
        return self.name

    @property
    def unique_name(self) -> str:
        return f"{self.name}.csproj"

    @property
    def full_project_path(self) -> str:
        return str(self.project_dir / f"{self.name}.csproj")

    @property
    def is_loaded(self) -> bool:
        return self.loaded

    async def get_target_framework(self) -> str:
        self.calls.append("get_target_framework")
        self.threads.add(threading.get_ident())
        return self.framework

    async def get_package_references(self) -> list[BuildItem]:
        self.calls.append("get_package_references")
        return list(self.references)

    async def get_central_package_versions(self) -> list[BuildItem]:
        self.calls.append("get_central_package_versions")
        return [BuildItem(pid, {"Version": ver}) for pid, ver in self.central_versions.items()]

    async def is_central_package_management_enabled(self) -> bool:
        return self.central_enabled

    async def get_package_id(self) -> str | None:
        return self.package_id

    async def get_assembly_name(self) -> str | None:
        return self.assembly_name

    async def get_version(self) -> str | None:
        return self.version

    async def get_runtime_identifiers(self) -> list[str]:
        return list(self.runtimes)

    async def get_runtime_supports(self) -> list[str]:
        return list(self.supports)

    async def get_package_target_fallback(self) -> str | None:
        return self.package_target_fallback

    async def get_asset_target_fallback(self) -> str | None:
        return self.asset_target_fallback

    async def get_project_extensions_path(self) -> str | None:
        return self.extensions_path

    async def get_project_references(self) -> list[str]:
        return list(self.project_references)

    async def get_restore_properties(self) -> ProjectRestoreProperties:
        return self.restore_properties

    async def get_lock_file_properties(self) -> LockFileProperties:
        return self.lock_properties


class FakeLockArtifactLoader(LockArtifactLoader):
    """In-memory loader: a settable timestamp and payload, with a load counter."""

    def __init__(self) -> None:
        self.modified: int | None = None
        self.payload: dict[str, Any] | None = None
        self.error: str | None = None
        self.stat_error: str | None = None
        self.load_count = 0

    def publish(self, payload: dict[str, Any], modified: int) -> None:
        self.payload = payload
        self.modified = modified
        self.error = None
        self.stat_error = None

    async def last_write_time(self, path: Path) -> int | None:
        if self.stat_error is not None:
            raise LockArtifactError(self.stat_error)
        return self.modified

    async def load(self, path: Path) -> LockArtifactSnapshot | None:
        self.load_count += 1
        if self.error is not None:
            raise LockArtifactError(self.error)
        if self.payload is None:
            return None
        return snapshot_from_dict(self.payload)


def assets_payload(targets: dict[str, dict[str, dict[str, str]]]) -> dict[str, Any]:
    """Build assets JSON from ``{framework: {"Id/Version": {dep: range}}}``."""
    return {
        "version": 3,
        "targets": {
            framework: {
                key: {"type": "package", "dependencies": deps}
                for key, deps in libraries.items()
            }
            for framework, libraries in targets.items()
        },
    }


@pytest.fixture
def make_adapter(tmp_path: Path) -> Callable[..., FakeProjectAdapter]:
    """Factory for in-memory project adapters rooted in a temp directory."""

    def _make(**kwargs: Any) -> FakeProjectAdapter:
        return FakeProjectAdapter(tmp_path, **kwargs)

    return _make


@pytest.fixture
def fake_loader() -> FakeLockArtifactLoader:
    return FakeLockArtifactLoader()


@pytest.fixture
def make_assets() -> Callable[..., dict[str, Any]]:
    """Factory for assets-file payloads."""
    return assets_payload


@pytest.fixture
def write_assets(tmp_path: Path) -> Callable[..., Path]:
    """Write an assets file under ``<tmp>/obj`` and return its path."""

    def _write(payload: dict[str, Any] | str, name: str = "project.assets.json") -> Path:
        obj = tmp_path / "obj"
        obj.mkdir(exist_ok=True)
        path = obj / name
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
