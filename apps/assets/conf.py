"""Runtime helpers for the build-asset settings."""

from __future__ import annotations

from pathlib import Path

from django.conf import settings

DEFAULT_VERSION = "1.0.0"
DEFAULT_TEXT_DOMAIN = "stories"
DEFAULT_I18N_GLOBAL = "storiesI18n"

SCRIPT_SUBDIR = "js/"
STYLE_SUBDIR = "css/"


def _project_dir() -> Path:
    return Path(getattr(settings, "BASE_DIR", Path(__file__).resolve().parents[2]))


def base_dir() -> Path:
    raw = getattr(settings, "ASSETS_BASE_DIR", None)
    if not raw:
        return _project_dir() / "assets"
    return Path(raw)


def base_url() -> str:
    raw = getattr(settings, "ASSETS_BASE_URL", None)
    if not raw:
        static_url = getattr(settings, "STATIC_URL", None) or "/static/"
        raw = f"{static_url.rstrip('/')}/assets/"
    raw = str(raw)
    return raw if raw.endswith("/") else f"{raw}/"


def fallback_version() -> str:
    raw = getattr(settings, "ASSETS_VERSION", DEFAULT_VERSION)
    if not isinstance(raw, str) or not raw.strip():
        return DEFAULT_VERSION
    return raw.strip()


def text_domain() -> str:
    raw = getattr(settings, "ASSETS_TEXT_DOMAIN", DEFAULT_TEXT_DOMAIN)
    return str(raw or DEFAULT_TEXT_DOMAIN).strip() or DEFAULT_TEXT_DOMAIN


def languages_dir() -> Path:
    raw = getattr(settings, "ASSETS_LANGUAGES_DIR", None)
    if not raw:
        return _project_dir() / "languages"
    return Path(raw)


def i18n_global() -> str:
    raw = getattr(settings, "ASSETS_I18N_GLOBAL", DEFAULT_I18N_GLOBAL)
    return str(raw or DEFAULT_I18N_GLOBAL).strip() or DEFAULT_I18N_GLOBAL


def script_subdir() -> str:
    return SCRIPT_SUBDIR


def style_subdir() -> str:
    return STYLE_SUBDIR
