from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any, Optional

from django.test import override_settings


class BuildOutputMixin:
    """Temporary build output + languages dir wired into the ASSETS_* settings."""

    version = "9.9.9"

    def setUp(self) -> None:
        super().setUp()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)
        self.js_dir = self.root / "assets" / "js"
        self.css_dir = self.root / "assets" / "css"
        self.languages_dir = self.root / "languages"
        for directory in (self.js_dir, self.css_dir, self.languages_dir):
            directory.mkdir(parents=True)

        overrides = override_settings(
            ASSETS_BASE_DIR=self.root / "assets",
            ASSETS_BASE_URL="/static/assets/",
            ASSETS_LANGUAGES_DIR=self.languages_dir,
            ASSETS_VERSION=self.version,
            ASSETS_TEXT_DOMAIN="stories",
            ASSETS_I18N_GLOBAL="storiesI18n",
        )
        overrides.enable()
        self.addCleanup(overrides.disable)

    def write_manifest(self, handle: str, asset: Optional[dict] = None, chunks: Optional[dict] = None) -> None:
        if asset is not None:
            (self.js_dir / f"{handle}.asset.json").write_text(json.dumps(asset), encoding="utf-8")
        if chunks is not None:
            (self.js_dir / f"{handle}.chunks.json").write_text(json.dumps(chunks), encoding="utf-8")

    def write_translations(self, handle: str, locale: str, payload: Any) -> Path:
        path = self.languages_dir / f"stories-{locale}-{handle}.json"
        raw = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(raw, encoding="utf-8")
        return path
