"""Package settings loaded from YAML.

A settings file looks like::

    globalPackagesFolder: ~/.restorespec/packages
    packageSources:
      - name: main
        source: https://packages.example.com/v3/index.json
      - name: local
        source: ./feed
        enabled: false
    fallbackPackageFolders:
      - /opt/shared/packages

Relative local paths resolve against the settings file's directory. The
``RESTORESPEC_PACKAGES`` environment variable overrides the global packages
folder.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from restorespec.core.spec import NullSettings, PackageSource, SettingsProvider
from restorespec.core.spec.adapter import DEFAULT_GLOBAL_PACKAGES_FOLDER
from restorespec.core.spec.restore import resolve_path
from restorespec.exceptions import ManifestError

PACKAGES_ENV_VAR = "RESTORESPEC_PACKAGES"


def read_yaml_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML file whose root must be a mapping (an empty file is ``{}``).

    Raises:
        ManifestError: If the file cannot be read or parsed.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ManifestError(f"Cannot read {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a mapping at the top level")
    return data


class YamlSettings(SettingsProvider):
    """Settings read from a YAML file.

    Args:
        path: Settings file path.
        environ: Environment used for overrides; ``os.environ`` by default.
    """

    def __init__(self, path: Path, environ: Mapping[str, str] | None = None) -> None:
        self._path = Path(path)
        self._environ = os.environ if environ is None else environ
        self._data = read_yaml_mapping(self._path)
        self._base = str(self._path.resolve().parent)

    def _resolve(self, value: str) -> str:
        return resolve_path(self._base, value)

    def get_global_packages_folder(self) -> str:
        override = self._environ.get(PACKAGES_ENV_VAR, "").strip()
        if override:
            return self._resolve(override)
        configured = str(self._data.get("globalPackagesFolder") or "").strip()
        return self._resolve(configured or DEFAULT_GLOBAL_PACKAGES_FOLDER)

    def get_enabled_sources(self) -> list[PackageSource]:
        entries = self._data.get("packageSources") or []
        if not isinstance(entries, list):
            raise ManifestError(f"{self._path}: 'packageSources' must be a list")

        sources: list[PackageSource] = []
        for entry in entries:
            if isinstance(entry, str):
                entry = {"name": entry, "source": entry}
            if not isinstance(entry, dict) or not entry.get("source"):
                raise ManifestError(f"{self._path}: invalid package source {entry!r}")
            source = PackageSource(
                name=str(entry.get("name") or entry["source"]),
                source=self._resolve(str(entry["source"])),
                is_enabled=entry.get("enabled", True) is not False,
            )
            if source.is_enabled:
                sources.append(source)
        return sources

    def get_fallback_package_folders(self) -> list[str]:
        folders = self._data.get("fallbackPackageFolders") or []
        if not isinstance(folders, list):
            raise ManifestError(f"{self._path}: 'fallbackPackageFolders' must be a list")
        return [self._resolve(str(f)) for f in folders]

    def get_config_file_paths(self) -> list[str]:
        return [str(self._path.resolve())]


def load_settings(path: Path | None = None) -> SettingsProvider:
    """YAML settings from *path*, or null settings when no path is given."""
    if path is None:
        return NullSettings()
    return YamlSettings(path)
