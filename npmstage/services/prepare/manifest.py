"""package.json read/write.

Manifests are kept as plain dicts so unknown fields and their order survive
a load/dump cycle untouched.
"""

from __future__ import annotations

import json
from pathlib import Path

from npmstage.core.result import Err, Ok, Result
from npmstage.core.structured import StrDict, as_str_dict
from npmstage.platform.files import atomic_write_text
from npmstage.services.prepare.errors import FilesystemError

MANIFEST_FILENAME = "package.json"
OPTIONAL_DEPENDENCIES = "optionalDependencies"


def load_manifest(path: Path) -> Result[StrDict, str]:
    """Read a manifest; the error is a human-readable reason."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err("file not found")
    except (OSError, UnicodeDecodeError) as e:
        return Err(f"cannot read: {e}")

    try:
        data_obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(f"invalid JSON: {e}")

    data = as_str_dict(data_obj)
    if data is None:
        return Err("manifest root must be a JSON object")
    return Ok(data)


def dump_manifest(manifest: StrDict) -> str:
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def write_manifest(path: Path, manifest: StrDict) -> Result[None, FilesystemError]:
    try:
        atomic_write_text(path, dump_manifest(manifest))
    except OSError as e:
        return Err(FilesystemError(path=path, operation="write", reason=str(e)))
    return Ok(None)


def stamp_version(manifest: StrDict, version: str) -> StrDict:
    """Return a copy of manifest with its version replaced.

    An existing ``version`` key keeps its position; a missing one is appended.
    """
    out = dict(manifest)
    out["version"] = version
    return out


def manifest_name(manifest: StrDict, default: str) -> str:
    name = manifest.get("name")
    return name if isinstance(name, str) and name else default
