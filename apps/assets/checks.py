from __future__ import annotations

from django.conf import settings
from django.core.checks import Error, Warning, register

from . import conf


@register()
def assets_dir_check(app_configs, **kwargs):
    # Not blocking: pages still render, every handle just gets default metadata.
    path = conf.base_dir() / conf.script_subdir()
    if not path.is_dir():
        return [Warning(
            f"Build output directory not found: {path}",
            hint="Run the front-end build or point ASSETS_BASE_DIR at its output.",
            id="assets.W001",
        )]
    return []


@register()
def fallback_version_check(app_configs, **kwargs):
    raw = getattr(settings, "ASSETS_VERSION", conf.DEFAULT_VERSION)
    if not isinstance(raw, str) or not raw.strip():
        return [Error(
            f"Invalid ASSETS_VERSION: {raw!r}",
            hint="Must be a non-empty string; it is used when a manifest has no version.",
            id="assets.E001",
        )]
    return []
