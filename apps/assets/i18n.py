from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from django.utils import translation

from apps.assets import conf

log = logging.getLogger("assets.i18n")


def is_rtl() -> bool:
    return bool(translation.get_language_bidi())


def _candidate_locales(locale: Optional[str]) -> Iterable[str]:
    language = locale or translation.get_language() or ""
    if not language:
        return []
    full = translation.to_locale(language)
    candidates: List[str] = [full]
    base = full.split("_", 1)[0]
    if base and base not in candidates:
        candidates.append(base)
    return candidates


def _translation_path(handle: str, domain: str, locale: str) -> Path:
    return conf.languages_dir() / f"{domain}-{locale}-{handle}.json"


def load_script_textdomain(handle: str, domain: str, locale: Optional[str] = None) -> Optional[str]:
    """
    Raw JSON translation payload for a script handle, or None.

    Looks up `<domain>-<locale>-<handle>.json`, then the bare language
    (`fr_CA` -> `fr`).
    """
    for candidate in _candidate_locales(locale):
        path = _translation_path(handle, domain, candidate)
        if not path.is_file():
            continue
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, ValueError):
            log.warning("Failed to read translations %s", path, exc_info=True)
            return None
    return None


def print_translations(handle: str, domain: str, locale: Optional[str] = None) -> str:
    payload = load_script_textdomain(handle, domain, locale)
    if not payload:
        return ""
    try:
        json.loads(payload)
    except (ValueError, RecursionError):
        log.warning("Not printing malformed translations for %r", handle, exc_info=True)
        return ""
    return (
        "( function( domain, translations ) {\n"
        "\tvar localeData = translations.locale_data[ domain ] || translations.locale_data.messages;\n"
        "\tlocaleData[\"\"].domain = domain;\n"
        f"\twindow.{conf.i18n_global()}.setLocaleData( localeData, domain );\n"
        f"}} )( {json.dumps(domain)}, {payload} );"
    )
