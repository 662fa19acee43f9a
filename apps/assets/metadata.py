from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from apps.assets import conf

log = logging.getLogger("assets.metadata")

# <handle>.asset.json is written by the dependency extraction step of the build,
# <handle>.chunks.json by the chunk index template.
ASSET_SUFFIX = ".asset.json"
CHUNKS_SUFFIX = ".chunks.json"


@dataclass(frozen=True)
class AssetMetadata:
    version: str
    dependencies: Tuple[str, ...] = field(default_factory=tuple)
    js: Tuple[str, ...] = field(default_factory=tuple)
    css: Tuple[str, ...] = field(default_factory=tuple)
    chunks: Tuple[str, ...] = field(default_factory=tuple)


def _ensure_tuple(v: Any) -> Tuple[str, ...]:
    # Only strings are handles; anything else in a manifest is dropped.
    if isinstance(v, str):
        return (v,) if v else ()
    if isinstance(v, (list, tuple)):
        return tuple(x for x in v if isinstance(x, str) and x)
    return ()


def _read_manifest(path: Path) -> Dict[str, Any]:
    """
    Missing manifest => empty record. Unreadable or malformed => empty record
    plus a warning, so one broken build artefact never blocks the page.
    """
    if not path.is_file():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError):
        log.warning("Unreadable asset manifest %s", path, exc_info=True)
        return {}
    if not isinstance(payload, dict):
        log.warning("Asset manifest %s is not an object (got %s)", path, type(payload).__name__)
        return {}
    return payload


def resolve_metadata(
    handle: str,
    *,
    base_dir: Optional[Path] = None,
    fallback_version: Optional[str] = None,
) -> AssetMetadata:
    directory = Path(base_dir) if base_dir is not None else conf.base_dir() / conf.script_subdir()
    asset = _read_manifest(directory / f"{handle}{ASSET_SUFFIX}")
    chunks = _read_manifest(directory / f"{handle}{CHUNKS_SUFFIX}")

    # Content hash of the entry bundle; falls back to the project version.
    version = asset.get("version")
    if not isinstance(version, str) or not version:
        version = fallback_version or conf.fallback_version()

    return AssetMetadata(
        version=version,
        dependencies=_ensure_tuple(asset.get("dependencies")),
        js=_ensure_tuple(chunks.get("js")),
        css=_ensure_tuple(chunks.get("css")),
        chunks=_ensure_tuple(chunks.get("chunks")),
    )
