from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from detach.core.result import Err, Ok, Result
from detach.core.structured import StrDict, as_str_dict
from detach.platform.files import atomic_write_text
from detach.services.errors import ManifestError

__all__ = [
    "DEPENDENCIES",
    "REACT_NATIVE",
    "PackageManifest",
    "dump_manifest",
    "load_manifest",
    "save_manifest",
    "set_dependency_version",
]

DEPENDENCIES = "dependencies"
REACT_NATIVE = "react-native"


@dataclass(frozen=True, slots=True)
class PackageManifest:
    """A parsed package.json; ``data`` keeps the file's key order."""

    path: Path
    data: StrDict

    def dependency_version(self, package: str) -> str | None:
        deps = as_str_dict(self.data.get(DEPENDENCIES))
        if deps is None:
            return None
        value = deps.get(package)
        return value if isinstance(value, str) else None


def load_manifest(path: Path) -> Result[PackageManifest, ManifestError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            ManifestError(
                path=path,
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ManifestError(
                path=path,
                message=f"failed to parse {path.name}: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ManifestError(
                path=path,
                message=f"invalid JSON root in {path.name}",
                hint="expected an object",
            )
        )

    return Ok(PackageManifest(path=path, data=data))


def set_dependency_version(
    manifest: PackageManifest,
    package: str,
    version: str,
) -> Result[PackageManifest, ManifestError]:
    """Return a copy of the manifest with ``dependencies[package] = version``.

    The package entry is updated in place when present, so its position in
    ``dependencies`` is kept; a missing entry is appended.
    """
    if DEPENDENCIES not in manifest.data:
        return Err(
            ManifestError(
                path=manifest.path,
                message=f"missing {DEPENDENCIES} in {manifest.path.name}",
            )
        )

    deps = as_str_dict(manifest.data[DEPENDENCIES])
    if deps is None:
        return Err(
            ManifestError(
                path=manifest.path,
                message=f"failed to parse {DEPENDENCIES} from {manifest.path.name}",
                hint="expected an object",
            )
        )

    new_deps: StrDict = dict(deps)
    new_deps[package] = version

    data: StrDict = dict(manifest.data)
    data[DEPENDENCIES] = new_deps
    return Ok(PackageManifest(path=manifest.path, data=data))


def dump_manifest(manifest: PackageManifest) -> str:
    return json.dumps(manifest.data, indent=2, ensure_ascii=False) + "\n"


def save_manifest(manifest: PackageManifest) -> Result[None, ManifestError]:
    try:
        atomic_write_text(manifest.path, dump_manifest(manifest), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        return Err(
            ManifestError(
                path=manifest.path,
                message=f"failed to write modified {manifest.path.name}: {e}",
                hint=str(manifest.path),
            )
        )
    return Ok(None)
