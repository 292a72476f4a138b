"""YAML project manifests.

A manifest stands in for a host project model and is what the CLI reads::

    name: MyApp
    targetFramework: net472
    properties:
      MSBuildProjectExtensionsPath: obj
      ManagePackageVersionsCentrally: "true"
      AssetTargetFallback: net461;net462
    packageReferences:
      - id: PkgA
        version: 1.0.0
      - id: PkgB
        privateAssets: all
    packageVersions:
      PkgB: "[2.0.0, 3.0.0)"
    projectReferences:
      - ../Lib/Lib.yaml

``packageReferences`` and ``packageVersions`` accept either a list of
mappings (``id`` plus metadata) or a mapping of id to version. Property
names are case-insensitive.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from restorespec.config import read_yaml_mapping
from restorespec.core.packages import BuildItem, is_true, split_list
from restorespec.core.spec import (
    LockFileProperties,
    ProjectAdapter,
    ProjectRestoreProperties,
)
from restorespec.core.spec.restore import resolve_path
from restorespec.exceptions import ManifestError

# Item keys in the manifest and the project metadata names they map to.
_METADATA_NAMES = {
    "version": "Version",
    "includeassets": "IncludeAssets",
    "excludeassets": "ExcludeAssets",
    "privateassets": "PrivateAssets",
    "isimplicitlydefined": "IsImplicitlyDefined",
    "nowarn": "NoWarn",
}


def _to_items(raw: Any, section: str, path: Path) -> list[BuildItem]:
    if raw is None:
        return []
    if isinstance(raw, dict):
        return [
            BuildItem(str(item_id), {"Version": "" if version is None else str(version)})
            for item_id, version in raw.items()
        ]
    if not isinstance(raw, list):
        raise ManifestError(f"{path}: {section!r} must be a list or a mapping")

    items: list[BuildItem] = []
    for entry in raw:
        if isinstance(entry, str):
            items.append(BuildItem(entry))
            continue
        if not isinstance(entry, dict) or not entry.get("id"):
            raise ManifestError(f"{path}: every {section!r} entry needs an 'id'")
        metadata: dict[str, str] = {}
        for key, value in entry.items():
            if key == "id" or value is None:
                continue
            name = _METADATA_NAMES.get(key.lower(), key)
            metadata[name] = str(value).lower() if isinstance(value, bool) else str(value)
        items.append(BuildItem(str(entry["id"]), metadata))
    return items


class YamlProjectAdapter(ProjectAdapter):
    """Project adapter backed by a YAML manifest file.

    The manifest is read once, at construction.

    Args:
        path: Manifest file path.

    Raises:
        ManifestError: If the manifest cannot be read or is malformed.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path).resolve()
        self._data = read_yaml_mapping(self._path)
        properties = self._data.get("properties") or {}
        if not isinstance(properties, dict):
            raise ManifestError(f"{self._path}: 'properties' must be a mapping")
        self._properties = {str(k).lower(): v for k, v in properties.items()}

    def _property(self, name: str) -> str:
        value = self._properties.get(name.lower())
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, list):
            return ";".join(str(v) for v in value)
        return str(value)

    # -- Identity -----------------------------------------------------------

    @property
    def project_name(self) -> str:
        return str(self._data.get("name") or self._path.stem)

    @property
    def unique_name(self) -> str:
        return str(self._path)

    @property
    def full_project_path(self) -> str:
        return str(self._path)

    # -- Reads --------------------------------------------------------------

    async def get_target_framework(self) -> str:
        framework = self._data.get("targetFramework") or self._property("TargetFramework")
        if not framework:
            raise ManifestError(f"{self._path}: 'targetFramework' is required")
        return str(framework)

    async def get_package_references(self) -> list[BuildItem]:
        return _to_items(self._data.get("packageReferences"), "packageReferences", self._path)

    async def get_central_package_versions(self) -> list[BuildItem]:
        return _to_items(self._data.get("packageVersions"), "packageVersions", self._path)

    async def is_central_package_management_enabled(self) -> bool:
        return is_true(self._property("ManagePackageVersionsCentrally"))

    async def get_package_id(self) -> str | None:
        return self._property("PackageId") or None

    async def get_assembly_name(self) -> str | None:
        return self._property("AssemblyName") or None

    async def get_version(self) -> str | None:
        return self._property("Version") or None

    async def get_runtime_identifiers(self) -> list[str]:
        runtimes = split_list(self._property("RuntimeIdentifiers"))
        single = self._property("RuntimeIdentifier").strip()
        if single and single not in runtimes:
            runtimes.append(single)
        return runtimes

    async def get_runtime_supports(self) -> list[str]:
        return split_list(self._property("RuntimeSupports"))

    async def get_package_target_fallback(self) -> str | None:
        return self._property("PackageTargetFallback") or None

    async def get_asset_target_fallback(self) -> str | None:
        return self._property("AssetTargetFallback") or None

    async def get_project_extensions_path(self) -> str | None:
        return self._property("MSBuildProjectExtensionsPath") or None

    async def get_project_references(self) -> list[str]:
        references = self._data.get("projectReferences") or []
        if not isinstance(references, list):
            raise ManifestError(f"{self._path}: 'projectReferences' must be a list")
        directory = str(self._path.parent)
        return [resolve_path(directory, str(r)) for r in references]

    async def get_restore_properties(self) -> ProjectRestoreProperties:
        return ProjectRestoreProperties(
            packages_path=self._property("RestorePackagesPath"),
            sources=self._property("RestoreSources"),
            additional_sources=self._property("RestoreAdditionalProjectSources"),
            fallback_folders=self._property("RestoreFallbackFolders"),
            additional_fallback_folders=self._property("RestoreAdditionalProjectFallbackFolders"),
            treat_warnings_as_errors=self._property("TreatWarningsAsErrors"),
            no_warn=self._property("NoWarn"),
            warnings_as_errors=self._property("WarningsAsErrors"),
        )

    async def get_lock_file_properties(self) -> LockFileProperties:
        return LockFileProperties(
            restore_packages_with_lock_file=self._property("RestorePackagesWithLockFile"),
            lock_file_path=self._property("NuGetLockFilePath"),
            restore_locked_mode=is_true(self._property("RestoreLockedMode")),
        )
