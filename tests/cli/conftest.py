"""Shared fixtures for CLI tests.

Provides temporary project manifests, with and without a restored assets
file, and a settings file.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def project_manifest(tmp_path: Path) -> Path:
    """A project declaring PkgA 1.0.0 and PkgB (any version), not restored."""
    path = tmp_path / "MyApp.yaml"
    path.write_text(
        "name: MyApp\n"
        "targetFramework: net472\n"
        "properties:\n"
        "  MSBuildProjectExtensionsPath: obj\n"
        "  WarningsAsErrors: NU1605\n"
        "packageReferences:\n"
        "  - id: PkgA\n"
        "    version: 1.0.0\n"
        "  - id: PkgB\n"
    )
    return path


@pytest.fixture
def restored_manifest(project_manifest: Path) -> Path:
    """The same project with an assets file listing PkgC under PkgA."""
    obj = project_manifest.parent / "obj"
    obj.mkdir()
    (obj / "project.assets.json").write_text(json.dumps({
        "version": 3,
        "targets": {
            "net472": {
                "PkgA/1.0.0": {"type": "package", "dependencies": {"PkgC": "2.0.0"}},
                "PkgB/3.1.0": {"type": "package"},
                "PkgC/2.0.0": {"type": "package"},
            },
        },
    }))
    return project_manifest


@pytest.fixture
def no_output_manifest(tmp_path: Path) -> Path:
    """A project without an extensions (output) path."""
    path = tmp_path / "NoOutput.yaml"
    path.write_text("targetFramework: net472\npackageReferences:\n  PkgA: 1.0.0\n")
    return path


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "restorespec.yaml"
    path.write_text(
        "globalPackagesFolder: /cache/packages\n"
        "packageSources:\n"
        "  - name: main\n"
        "    source: https://packages.example.com/v3/index.json\n"
    )
    return path
